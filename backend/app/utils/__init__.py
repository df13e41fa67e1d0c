"""Utility modules for the dubbing QA backend."""

from .text import safe_truncate

__all__ = ["safe_truncate"]
