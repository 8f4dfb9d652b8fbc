"""URL shortening: configuration, PostgreSQL storage, Redis caching and a Flask API."""

__version__ = "0.1.0"
__all__ = ["__version__"]