"""BookVault: REST backend for user accounts and a book catalogue."""

__version__ = "0.1.0"
