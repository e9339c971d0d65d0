"""
Google Cloud Storage Adapter

Implements FilesystemAdapterInterface on a google.cloud.storage bucket.
Operations return plain values and raise FilesystemError subclasses;
storage client errors other than NotFound propagate unchanged.
"""

import logging
from typing import Any, BinaryIO, Dict, List, Optional, Union

from gcs_filesystem.core.constants import PATH_SEPARATOR
from .base import DirectoryAttributes, FileAttributes, FilesystemAdapterInterface, StorageAttributes
from .gcs_base import GoogleStorageAdapterBase
from .normalizer import TYPE_DIR, normalise_dir_name
from .visibility import apply_visibility

logger = logging.getLogger(__name__)


class GoogleCloudStorageAdapter(GoogleStorageAdapterBase, FilesystemAdapterInterface):
    """
    Google Cloud Storage implementation of FilesystemAdapterInterface
    """

    def file_exists(self, path: str) -> bool:
        return self._object_exists(path)

    def directory_exists(self, path: str) -> bool:
        prefix = self.apply_path_prefix(normalise_dir_name(path))
        blobs = self.bucket.list_blobs(prefix=prefix, max_results=1)
        return any(True for _ in blobs)

    def write(self, path: str, contents: Union[str, bytes], config: Optional[Dict[str, Any]] = None) -> None:
        self._upload(path, contents, config)

    def write_stream(self, path: str, stream: BinaryIO, config: Optional[Dict[str, Any]] = None) -> None:
        self._ensure_streams_supported("write_stream")
        self._upload_stream(path, stream, config)

    def read(self, path: str) -> bytes:
        return self._download(path)

    def read_stream(self, path: str) -> BinaryIO:
        self._ensure_streams_supported("read_stream")
        blob = self._fetch_object(path)
        return blob.open("rb")

    def delete(self, path: str) -> None:
        self._delete_object(path)

    def delete_directory(self, path: str) -> None:
        self._delete_directory(path)

    def create_directory(self, path: str, config: Optional[Dict[str, Any]] = None) -> None:
        self._create_directory(path, config)

    def set_visibility(self, path: str, visibility: str) -> None:
        apply_visibility(self._get_object(path), visibility)
        logger.info(f"✅ 可见性设置成功: {path} → {visibility}")

    def visibility(self, path: str) -> FileAttributes:
        return FileAttributes(path=path, visibility=self._get_raw_visibility(path))

    def get_metadata(self, path: str) -> Dict[str, Any]:
        return self._normalise_object(self._fetch_object(path))

    def mime_type(self, path: str) -> FileAttributes:
        return FileAttributes(path=path, mime_type=self.get_metadata(path)["mimetype"])

    def last_modified(self, path: str) -> FileAttributes:
        return FileAttributes(path=path, last_modified=self.get_metadata(path)["timestamp"])

    def file_size(self, path: str) -> FileAttributes:
        return FileAttributes(path=path, file_size=self.get_metadata(path)["size"])

    def list_contents(self, path: str = "", deep: bool = False) -> List[StorageAttributes]:
        directory = path.strip(PATH_SEPARATOR)
        listing = self._list_normalised(normalise_dir_name(directory) if directory else "")

        contents: List[StorageAttributes] = []
        for entry in listing:
            if not self._is_listed(entry, directory, deep):
                continue
            if entry["type"] == TYPE_DIR:
                contents.append(DirectoryAttributes.from_entry(entry))
            else:
                contents.append(FileAttributes.from_entry(entry))
        return contents

    @staticmethod
    def _is_listed(entry: Dict[str, Any], directory: str, deep: bool) -> bool:
        if entry["path"] == directory:
            return False
        if not deep:
            return entry.get("dirname", "") == directory
        return directory == "" or entry["path"].startswith(directory + PATH_SEPARATOR)

    def move(self, source: str, destination: str, config: Optional[Dict[str, Any]] = None) -> None:
        # 复制失败时直接抛出异常，不删除源文件
        self._copy_object(source, destination)
        self._delete_object(source)

    def copy(self, source: str, destination: str, config: Optional[Dict[str, Any]] = None) -> None:
        self._copy_object(source, destination)
