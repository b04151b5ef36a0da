"""Anomaly detection over redundant oracle price feeds.

Collects normalized price samples from one or two feeds, keeps a bounded
window of them, and evaluates divergence or spike predicates to decide
whether a response should fire.
"""

__version__ = "0.1.0"
