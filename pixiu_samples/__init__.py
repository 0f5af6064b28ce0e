"""In-memory sample providers and small HTTP sample servers for API gateway experiments."""

__version__ = "1.0.0"