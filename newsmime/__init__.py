"""Helpers for Internet mail and Usenet news: addresses, return receipts, multipart and binary parsing."""

__version__ = "0.1.0"
__all__ = ["util", "types", "mdn", "parsers"]