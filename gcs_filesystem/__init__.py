"""
Google Cloud Storage filesystem adapter.
"""

__version__ = "0.1.0"
