"""
Path prefix handling shared by the storage adapters.
"""

from typing import Optional

from gcs_filesystem.core.constants import PATH_SEPARATOR


class PathPrefixer:
    """
    Applies the adapter's path prefix before every storage client call and
    strips it from every key the storage client returns.
    """

    def __init__(self, prefix: Optional[str] = None, separator: str = PATH_SEPARATOR):
        self.separator = separator
        self.prefix = ""
        self.set_prefix(prefix)

    def set_prefix(self, prefix: Optional[str]) -> None:
        """Set the prefix, normalised to end with exactly one separator."""
        prefix = prefix or ""
        if prefix == "":
            self.prefix = ""
            return
        self.prefix = prefix.rstrip(self.separator) + self.separator

    def get_prefix(self) -> str:
        return self.prefix

    def apply(self, path: str) -> str:
        return self.prefix + path.lstrip(self.separator)

    def remove(self, key: str) -> str:
        # keys handed to us were always produced by apply()
        return key[len(self.prefix):]
