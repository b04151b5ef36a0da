"""Reading normalization: signed feed values to unsigned fixed-point prices.

Feeds are expected to share one fixed-point scale. That is a caller
precondition; ``normalize_reading`` does no rescaling.
"""

from decimal import ROUND_DOWN, Decimal


def normalize_reading(raw_value: int) -> int:
    """Clamp a signed feed reading to an unsigned price.

    Negative readings become 0 rather than raising. A zero price marks the
    sample as no-data for the divergence evaluator.

    Args:
        raw_value: Signed integer reading from a feed.

    Returns:
        ``raw_value`` if non-negative, else 0.
    """
    if raw_value < 0:
        return 0
    return raw_value


def to_fixed_point(value: Decimal | str | float | int, decimals: int = 18) -> int:
    """Scale a decimal price to a signed fixed-point integer.

    Floats are routed through ``str`` so that 0.1 scales to exactly
    10**17 at 18 decimals. Fractional remainders below the scale are
    truncated toward zero.

    Args:
        value: Price as returned by an upstream API.
        decimals: Number of fixed-point decimal places (default 18, i.e. 1e18).

    Returns:
        Signed integer reading; negative input stays negative.
    """
    scaled = Decimal(str(value)) * (Decimal(10) ** decimals)
    return int(scaled.to_integral_value(rounding=ROUND_DOWN))
