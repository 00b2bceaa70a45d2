"""book-vault: a personal book catalog with validation and regex search."""

__version__ = "0.1.0"
