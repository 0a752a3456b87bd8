"""Family tree tracking with health metadata and cultural health reference content."""

__version__ = "0.1.0"
