"""Status report for configured latency-measurement orders."""

__version__ = "0.1.0"
