"""Utility modules for book-vault."""

from book_vault.utils.fileops import atomic_write_text, secure_mkdir
from book_vault.utils.output import (
    console,
    error,
    info,
    success,
    warning,
)

__all__ = [
    "atomic_write_text",
    "console",
    "error",
    "info",
    "secure_mkdir",
    "success",
    "warning",
]
