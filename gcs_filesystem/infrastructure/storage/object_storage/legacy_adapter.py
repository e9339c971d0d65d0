"""
Legacy Google Cloud Storage Adapter

Keeps the historical adapter contract where every call returns a
normalised record (or a boolean) instead of raising on expected outcomes.
It shares its whole implementation with GoogleCloudStorageAdapter.
"""

import logging
from typing import Any, BinaryIO, Dict, List, Optional, Union

from gcs_filesystem.infrastructure.exceptions import UnableToCopyFile
from .gcs_base import GoogleStorageAdapterBase
from .visibility import apply_visibility

logger = logging.getLogger(__name__)


class LegacyGoogleStorageAdapter(GoogleStorageAdapterBase):
    """
    Record-returning adapter contract

    Missing objects on read and metadata calls still raise
    ObjectNotFoundError; copy failures are reported as False.
    """

    def write(self, path: str, contents: Union[str, bytes], config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._upload(path, contents, config)

    def write_stream(self, path: str, resource: BinaryIO, config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        self._ensure_streams_supported("write_stream")
        return self._upload_stream(path, resource, config)

    def update(self, path: str, contents: Union[str, bytes], config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._upload(path, contents, config)

    def update_stream(self, path: str, resource: BinaryIO, config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        self._ensure_streams_supported("update_stream")
        return self._upload_stream(path, resource, config)

    def rename(self, path: str, newpath: str) -> bool:
        if not self.copy(path, newpath):
            return False
        return self.delete(path)

    def copy(self, path: str, newpath: str) -> bool:
        try:
            self._copy_object(path, newpath)
        except UnableToCopyFile:
            return False
        return True

    def delete(self, path: str) -> bool:
        self._delete_object(path)
        return True

    def delete_dir(self, dirname: str) -> bool:
        self._delete_directory(dirname)
        return True

    def create_dir(self, dirname: str, config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._create_directory(dirname, config)

    def set_visibility(self, path: str, visibility: str) -> Dict[str, Any]:
        blob = self._get_object(path)
        apply_visibility(blob, visibility)
        blob.reload()
        logger.info(f"✅ 可见性设置成功: {path} → {visibility}")

        normalised = self._normalise_object(blob)
        normalised["visibility"] = visibility
        return normalised

    def has(self, path: str) -> bool:
        return self._object_exists(path)

    def read(self, path: str) -> Dict[str, Any]:
        blob = self._fetch_object(path)
        contents = blob.download_as_bytes()

        data = self._normalise_object(blob)
        data["contents"] = contents
        return data

    def read_stream(self, path: str) -> Dict[str, Any]:
        self._ensure_streams_supported("read_stream")
        blob = self._fetch_object(path)

        data = self._normalise_object(blob)
        data["stream"] = blob.open("rb")
        return data

    def list_contents(self, directory: str = "", recursive: bool = False) -> List[Dict[str, Any]]:
        # 递归过滤由上层文件系统处理
        return self._list_normalised(directory)

    def get_metadata(self, path: str) -> Dict[str, Any]:
        return self._normalise_object(self._fetch_object(path))

    def get_size(self, path: str) -> Dict[str, Any]:
        return self.get_metadata(path)

    def get_mimetype(self, path: str) -> Dict[str, Any]:
        return self.get_metadata(path)

    def get_timestamp(self, path: str) -> Dict[str, Any]:
        return self.get_metadata(path)

    def get_visibility(self, path: str) -> Dict[str, str]:
        return {"visibility": self._get_raw_visibility(path)}
