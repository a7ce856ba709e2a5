"""Counter-based URL shortener backed by Redis."""

__version__ = '0.1.0'
