"""Custom exceptions for oracle-sentry.

The detection pipeline itself raises almost nothing: negative readings are
clamped, zero prices are skipped and short windows simply do not fire.
What remains are configuration and transport faults.
"""


class SentryError(Exception):
    """Base exception for all oracle-sentry errors."""


class InvalidThresholdError(SentryError, ValueError):
    """Raised when a spike evaluator is built with a non-positive threshold."""


class CodecError(SentryError, ValueError):
    """Raised when an encoded sample or context payload cannot be decoded."""


class FeedUnavailableError(SentryError):
    """Raised when a feed source returns no usable price."""
