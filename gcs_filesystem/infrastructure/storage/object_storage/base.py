"""
Object Storage Abstract Base Classes

Defines the filesystem-style contract implemented on top of Google Cloud
Storage, together with the configuration and attribute containers shared
by every adapter version.
"""

from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Dict, List, Optional, Union
from dataclasses import dataclass
from datetime import datetime, timedelta

from gcs_filesystem.core.constants import (
    STORAGE_API_URI_DEFAULT,
    VISIBILITY_PRIVATE,
    VISIBILITY_PUBLIC,
)


class Visibility:
    """Visibility values understood by the adapters"""
    PUBLIC = VISIBILITY_PUBLIC
    PRIVATE = VISIBILITY_PRIVATE

    @classmethod
    def values(cls) -> tuple:
        return (cls.PUBLIC, cls.PRIVATE)


@dataclass
class StorageConfig:
    """Configuration for the Google Cloud Storage adapters"""
    bucket: str
    project_id: Optional[str] = None
    key_file_path: Optional[str] = None

    # Adapter behaviour
    path_prefix: Optional[str] = None
    storage_api_uri: str = STORAGE_API_URI_DEFAULT
    acl_strategy: str = "visibility"
    supports_streams: bool = True


@dataclass
class FileAttributes:
    """File attributes returned by the current adapter contract"""
    path: str
    file_size: Optional[int] = None
    visibility: Optional[str] = None
    last_modified: Optional[int] = None
    mime_type: Optional[str] = None

    type = "file"

    def is_file(self) -> bool:
        return True

    def is_dir(self) -> bool:
        return False

    @classmethod
    def from_entry(cls, entry: Dict[str, Any]) -> "FileAttributes":
        return cls(
            path=entry["path"],
            file_size=entry.get("size"),
            last_modified=entry.get("timestamp"),
            mime_type=entry.get("mimetype")
        )


@dataclass
class DirectoryAttributes:
    """Directory attributes returned by the current adapter contract"""
    path: str
    visibility: Optional[str] = None
    last_modified: Optional[int] = None

    type = "dir"

    def is_file(self) -> bool:
        return False

    def is_dir(self) -> bool:
        return True

    @classmethod
    def from_entry(cls, entry: Dict[str, Any]) -> "DirectoryAttributes":
        # emulated directories carry no timestamp
        return cls(path=entry["path"], last_modified=entry.get("timestamp"))


StorageAttributes = Union[FileAttributes, DirectoryAttributes]


class FilesystemAdapterInterface(ABC):
    """
    Abstract interface for filesystem-style operations on object storage

    Paths are always relative to the adapter's path prefix. Operations
    return nothing or a value and signal failure by raising
    FilesystemError subclasses.
    """

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        """
        Check if a file exists

        Args:
            path: File path

        Returns:
            True if the object exists, False otherwise
        """
        pass

    @abstractmethod
    def directory_exists(self, path: str) -> bool:
        """
        Check if anything is stored beneath a directory path

        Args:
            path: Directory path

        Returns:
            True if at least one object exists under the directory
        """
        pass

    @abstractmethod
    def write(self, path: str, contents: Union[str, bytes], config: Optional[Dict[str, Any]] = None) -> None:
        """
        Write contents to a file

        Args:
            path: File path
            contents: File content as str or bytes
            config: Optional write options (visibility, metadata, mimetype, cache_control)
        """
        pass

    @abstractmethod
    def write_stream(self, path: str, stream: BinaryIO, config: Optional[Dict[str, Any]] = None) -> None:
        """
        Write a binary stream to a file

        Args:
            path: File path
            stream: Readable binary stream
            config: Optional write options
        """
        pass

    @abstractmethod
    def read(self, path: str) -> bytes:
        """
        Read a file

        Args:
            path: File path

        Returns:
            File contents
        """
        pass

    @abstractmethod
    def read_stream(self, path: str) -> BinaryIO:
        """
        Open a file for streaming reads

        Args:
            path: File path

        Returns:
            Readable binary stream
        """
        pass

    @abstractmethod
    def delete(self, path: str) -> None:
        """Delete a file"""
        pass

    @abstractmethod
    def delete_directory(self, path: str) -> None:
        """Delete a directory and everything stored beneath it"""
        pass

    @abstractmethod
    def create_directory(self, path: str, config: Optional[Dict[str, Any]] = None) -> None:
        """Create a directory marker object"""
        pass

    @abstractmethod
    def set_visibility(self, path: str, visibility: str) -> None:
        """
        Change the visibility of a file

        Args:
            path: File path
            visibility: Visibility.PUBLIC or Visibility.PRIVATE
        """
        pass

    @abstractmethod
    def visibility(self, path: str) -> FileAttributes:
        """Return the visibility of a file"""
        pass

    @abstractmethod
    def mime_type(self, path: str) -> FileAttributes:
        """Return the mime type of a file"""
        pass

    @abstractmethod
    def last_modified(self, path: str) -> FileAttributes:
        """Return the last modified timestamp of a file"""
        pass

    @abstractmethod
    def file_size(self, path: str) -> FileAttributes:
        """Return the size of a file"""
        pass

    @abstractmethod
    def list_contents(self, path: str = "", deep: bool = False) -> List[StorageAttributes]:
        """
        List the contents of a directory

        Args:
            path: Directory path, empty for the root
            deep: Include nested entries when True

        Returns:
            File and directory attributes
        """
        pass

    @abstractmethod
    def move(self, source: str, destination: str, config: Optional[Dict[str, Any]] = None) -> None:
        """Move a file, keeping the source when the copy fails"""
        pass

    @abstractmethod
    def copy(self, source: str, destination: str, config: Optional[Dict[str, Any]] = None) -> None:
        """Copy a file, keeping its access control"""
        pass

    @abstractmethod
    def get_url(self, path: str) -> str:
        """Return the public URL of a file"""
        pass

    @abstractmethod
    def get_temporary_url(
        self,
        path: str,
        expiration: Union[int, timedelta, datetime],
        options: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Generate a signed URL for temporary file access

        Args:
            path: File path
            expiration: UNIX timestamp, absolute datetime, or timedelta lifetime
            options: Extra keyword arguments for the signed URL

        Returns:
            Signed URL
        """
        pass
