"""CookBook: browse, filter and share recipes."""

__version__ = "0.1.0"
