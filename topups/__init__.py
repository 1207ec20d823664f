"""Company token top-up reporting."""

__version__ = "0.1.0"
