"""Document field detection and placeholder substitution service."""

__version__ = "0.1.0"
