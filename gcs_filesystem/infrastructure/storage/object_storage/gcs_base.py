"""
Google Cloud Storage Adapter Core

Shared implementation behind both adapter contracts: prefix handling,
uploads, lookups, listings, copies, directory deletion and URL building.
"""

import io
import logging
import mimetypes
from datetime import datetime, timedelta, timezone
from typing import Any, BinaryIO, Dict, List, Optional, Union
from urllib.parse import quote

from google.api_core.exceptions import NotFound

from gcs_filesystem.core.constants import PATH_SEPARATOR, STORAGE_API_URI_DEFAULT
from gcs_filesystem.infrastructure.exceptions import (
    ObjectNotFoundError,
    UnableToCopyFile,
    UnsupportedOperationError,
)
from .base import Visibility
from .normalizer import TYPE_DIR, TYPE_FILE, emulate_directories, normalise_dir_name, normalise_object
from .path_prefixer import PathPrefixer
from .visibility import AclStrategy, PredefinedAclStrategy, get_raw_visibility, predefined_acl_for_visibility

logger = logging.getLogger(__name__)


class GoogleStorageAdapterBase:
    """
    Wraps a google.cloud.storage client and bucket

    Subclasses expose the shared operations under a specific contract.
    """

    def __init__(
        self,
        storage_client,
        bucket,
        path_prefix: Optional[str] = None,
        storage_api_uri: Optional[str] = None,
        acl_strategy: Optional[AclStrategy] = None,
        supports_streams: bool = True
    ):
        self.storage_client = storage_client
        self.bucket = bucket
        self.prefixer = PathPrefixer(path_prefix)
        self.storage_api_uri = storage_api_uri or STORAGE_API_URI_DEFAULT
        self.acl_strategy = acl_strategy or PredefinedAclStrategy()
        self.supports_streams = supports_streams

    def get_storage_client(self):
        return self.storage_client

    def get_bucket(self):
        return self.bucket

    def set_storage_api_uri(self, uri: str) -> None:
        self.storage_api_uri = uri

    def get_storage_api_uri(self) -> str:
        return self.storage_api_uri

    def set_path_prefix(self, prefix: Optional[str]) -> None:
        self.prefixer.set_prefix(prefix)

    def get_path_prefix(self) -> str:
        return self.prefixer.get_prefix()

    def apply_path_prefix(self, path: str) -> str:
        return self.prefixer.apply(path)

    def remove_path_prefix(self, key: str) -> str:
        return self.prefixer.remove(key)

    def _ensure_streams_supported(self, operation: str) -> None:
        if not self.supports_streams:
            raise UnsupportedOperationError(operation, f"Streams are not supported by this adapter ({operation})")

    def _get_options_from_config(self, path: str, config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Build upload options from a write config

        Args:
            path: Caller path, used to guess the content type
            config: Optional dict with visibility, metadata, mimetype, cache_control

        Returns:
            Dict with predefined_acl, content_type and optional metadata/cache_control
        """
        config = config or {}
        options: Dict[str, Any] = {}

        visibility = config.get("visibility")
        if visibility:
            options["predefined_acl"] = predefined_acl_for_visibility(visibility)
        else:
            # 未设置ACL的对象无法在控制台访问，因此默认私有
            options["predefined_acl"] = predefined_acl_for_visibility(Visibility.PRIVATE)

        options["content_type"] = config.get("mimetype") or mimetypes.guess_type(path)[0]

        if config.get("metadata"):
            options["metadata"] = config["metadata"]
        if config.get("cache_control"):
            options["cache_control"] = config["cache_control"]

        return options

    def _upload(
        self,
        path: str,
        contents: Union[str, bytes, BinaryIO],
        config: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Upload contents (str, bytes or stream) and return the normalised object"""
        key = self.apply_path_prefix(path)
        options = self._get_options_from_config(path, config)

        blob = self.bucket.blob(key)
        if "metadata" in options:
            blob.metadata = options["metadata"]
        if "cache_control" in options:
            blob.cache_control = options["cache_control"]

        logger.debug(f"正在上传对象: {self.bucket.name}/{key} (ACL: {options['predefined_acl']})")

        if isinstance(contents, (str, bytes)):
            blob.upload_from_string(
                contents,
                content_type=options["content_type"],
                predefined_acl=options["predefined_acl"]
            )
        else:
            blob.upload_from_file(
                contents,
                content_type=options["content_type"],
                predefined_acl=options["predefined_acl"]
            )

        logger.info(f"✅ 对象上传成功: {self.bucket.name}/{key}")
        return self._normalise_object(blob)

    def _upload_stream(self, path: str, stream, config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        # Handle bytes input
        if isinstance(stream, bytes):
            stream = io.BytesIO(stream)
        return self._upload(path, stream, config)

    def _normalise_object(self, blob) -> Dict[str, Any]:
        return normalise_object(blob, self.prefixer)

    def _get_object(self, path: str):
        """Return a blob handle for a path without issuing a request"""
        return self.bucket.blob(self.apply_path_prefix(path))

    def _fetch_object(self, path: str):
        """Return a blob with its properties loaded, raising when it is missing"""
        key = self.apply_path_prefix(path)
        blob = self.bucket.get_blob(key)
        if blob is None:
            logger.debug(f"对象不存在: {self.bucket.name}/{key}")
            raise ObjectNotFoundError(path)
        return blob

    def _download(self, path: str) -> bytes:
        blob = self._get_object(path)
        try:
            return blob.download_as_bytes()
        except NotFound as e:
            raise ObjectNotFoundError(path, reason=str(e)) from e

    def _delete_object(self, path: str) -> None:
        key = self.apply_path_prefix(path)
        logger.debug(f"正在删除对象: {self.bucket.name}/{key}")
        try:
            self.bucket.blob(key).delete()
        except NotFound as e:
            raise ObjectNotFoundError(path, reason=str(e)) from e
        logger.info(f"✅ 对象删除成功: {self.bucket.name}/{key}")

    def _object_exists(self, path: str) -> bool:
        return self._get_object(path).exists()

    def _list_normalised(self, directory: str = "") -> List[Dict[str, Any]]:
        """List every object under a directory, with emulated directories"""
        prefix = self.apply_path_prefix(directory)
        blobs = self.bucket.list_blobs(prefix=prefix)

        normalised = [self._normalise_object(blob) for blob in blobs]
        logger.debug(f"列出对象成功: {self.bucket.name}/{prefix} (共{len(normalised)}个对象)")

        return emulate_directories(normalised)

    def _get_raw_visibility(self, path: str) -> str:
        return get_raw_visibility(self._get_object(path))

    def _copy_object(self, source: str, destination: str):
        """
        Copy an object and verify that the destination exists

        Raises:
            UnableToCopyFile: The destination is missing after the copy
        """
        source_blob = self._get_object(source)
        destination_key = self.apply_path_prefix(destination)

        logger.debug(f"正在复制对象: {source_blob.name} → {destination_key}")
        try:
            new_blob = self.acl_strategy.copy(self.bucket, source_blob, destination_key)
        except NotFound as e:
            logger.warning(f"❌ 复制对象失败: {source} → {destination}: {e}")
            raise UnableToCopyFile(source, destination, reason=str(e)) from e

        if not new_blob.exists():
            logger.warning(f"❌ 复制后目标对象不存在: {source} → {destination}")
            raise UnableToCopyFile(source, destination, reason="destination does not exist after copy")

        logger.info(f"✅ 对象复制成功: {source} → {destination}")
        return new_blob

    def _delete_directory(self, dirname: str) -> None:
        """
        Delete every object stored beneath a directory

        Files go first, then directory markers from the deepest up. Directory
        entries without a backing object (emulated ones) are skipped.
        """
        dirname = normalise_dir_name(dirname)
        objects = self._list_normalised(dirname)

        # 过滤掉不应删除的对象
        filtered_objects = []
        for entry in objects:
            path = entry["path"]
            if entry["type"] == TYPE_DIR:
                path = normalise_dir_name(path)
            if path.startswith(dirname):
                filtered_objects.append((entry["type"], path))

        # 先删除文件，再按深度从深到浅删除目录标记
        filtered_objects.sort(key=lambda item: (item[0] != TYPE_FILE, -item[1].count(PATH_SEPARATOR)))

        for entry_type, path in filtered_objects:
            try:
                self._delete_object(path)
            except ObjectNotFoundError:
                if entry_type != TYPE_DIR:
                    raise
                logger.warning(f"⚠️ 跳过不存在的目录标记: {path}")

        logger.info(f"✅ 目录删除成功: {dirname} (共{len(filtered_objects)}个对象)")

    def _create_directory(self, dirname: str, config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._upload(normalise_dir_name(dirname), "", config)

    def get_url(self, path: str) -> str:
        """
        Return a public url to a file

        The object must have public visibility for the url to be usable.
        Each path segment is percent-encoded on its own so separators stay
        intact. The bucket name is only prepended for the default endpoint:

            https://storage.googleapis.com/{bucket}/{path_prefix}/{path}
            https://example.com/{path_prefix}/{path}
        """
        uri = self.storage_api_uri.rstrip(PATH_SEPARATOR)
        key = self.apply_path_prefix(path)
        key = PATH_SEPARATOR.join(quote(segment, safe="") for segment in key.split(PATH_SEPARATOR))

        if self.get_storage_api_uri() == STORAGE_API_URI_DEFAULT:
            key = f"{self.bucket.name}{PATH_SEPARATOR}{key}"

        return f"{uri}{PATH_SEPARATOR}{key}"

    def get_temporary_url(
        self,
        path: str,
        expiration: Union[int, timedelta, datetime],
        options: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Get a signed url for the file at the given path

        Args:
            path: File path
            expiration: UNIX timestamp, absolute datetime, or timedelta
                lifetime from now
            options: Keyword arguments for Blob.generate_signed_url
                (method, content_type, headers, response_disposition, ...)

        Returns:
            Signed url; for a custom storage api uri the host and bucket part
            is replaced while the signature query is kept verbatim
        """
        # Integer expiration is a UNIX timestamp
        if isinstance(expiration, int):
            expiration = datetime.fromtimestamp(expiration, tz=timezone.utc)

        signed_options = {"version": "v4", "method": "GET"}
        signed_options.update(options or {})

        blob = self._get_object(path)
        signed_url = blob.generate_signed_url(expiration=expiration, **signed_options)
        logger.debug(f"生成临时URL: {blob.name} (过期时间: {expiration})")

        if self.get_storage_api_uri() != STORAGE_API_URI_DEFAULT:
            _, _, params = signed_url.partition("?")
            signed_url = f"{self.get_url(path)}?{params}"

        return signed_url
