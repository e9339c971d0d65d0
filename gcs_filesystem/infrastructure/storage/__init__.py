"""
Storage Infrastructure Module

Provides object storage adapters exposing a filesystem-style interface.
"""

from . import object_storage

__all__ = [
    'object_storage'
]
