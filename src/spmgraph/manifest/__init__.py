"""Package description reading."""

from .reader import ManifestReader

__all__ = ["ManifestReader"]
