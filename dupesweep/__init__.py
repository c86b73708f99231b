"""Find duplicate files by size, quick hash and full XXH64 hash, and optionally delete them."""

__version__ = "1.0.0"
__all__ = ["__version__"]