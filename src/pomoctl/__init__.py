"""pomoctl — countdown-based work/break session scheduler."""

__version__ = "0.1.0"
