"""Utility exports."""
from .validation import join_within_root

__all__ = ["join_within_root"]
