"""NonZero - streak and resilience analytics for daily habits."""

__version__ = "0.1.0"
