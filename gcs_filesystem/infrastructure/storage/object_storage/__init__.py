"""
Object Storage Infrastructure Module

Filesystem-style adapters for Google Cloud Storage buckets.
"""

from .base import (
    DirectoryAttributes,
    FileAttributes,
    FilesystemAdapterInterface,
    StorageConfig,
    Visibility,
)
from .path_prefixer import PathPrefixer
from .gcs_adapter import GoogleCloudStorageAdapter
from .legacy_adapter import LegacyGoogleStorageAdapter
from .factory import StorageFactory

__all__ = [
    'FilesystemAdapterInterface',
    'StorageConfig',
    'Visibility',
    'FileAttributes',
    'DirectoryAttributes',
    'PathPrefixer',
    'GoogleCloudStorageAdapter',
    'LegacyGoogleStorageAdapter',
    'StorageFactory'
]
