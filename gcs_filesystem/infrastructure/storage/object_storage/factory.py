"""
Object Storage Factory

Creates Google Cloud Storage adapters based on configuration.
"""

import logging
from typing import Optional, Union

from google.cloud import storage

from gcs_filesystem.core.config import settings
from .base import StorageConfig
from .gcs_adapter import GoogleCloudStorageAdapter
from .legacy_adapter import LegacyGoogleStorageAdapter
from .visibility import get_acl_strategy

logger = logging.getLogger(__name__)

StorageAdapter = Union[GoogleCloudStorageAdapter, LegacyGoogleStorageAdapter]


class StorageFactory:
    """Factory for creating object storage adapters"""

    _adapters = {
        "gcs": GoogleCloudStorageAdapter,
        "gcs-legacy": LegacyGoogleStorageAdapter,
    }

    @classmethod
    def create_storage(
        cls,
        storage_type: Optional[str] = None,
        config: Optional[StorageConfig] = None,
        storage_client: Optional[storage.Client] = None
    ) -> StorageAdapter:
        """
        Create an adapter instance based on type

        Args:
            storage_type: "gcs" or "gcs-legacy", defaults to settings.GCS_ADAPTER
            config: Optional custom configuration
            storage_client: Optional pre-built client (skips credential loading)

        Returns:
            Adapter bound to the configured bucket
        """
        storage_type = (storage_type or settings.GCS_ADAPTER).lower()
        if storage_type not in cls._adapters:
            raise ValueError(f"Unsupported storage type: {storage_type}")

        if config is None:
            config = cls._get_default_config()

        if storage_client is None:
            storage_client = cls._create_client(config)

        bucket = storage_client.bucket(config.bucket)
        adapter_class = cls._adapters[storage_type]

        logger.info(f"创建存储适配器: {storage_type} (存储桶: {config.bucket})")
        return adapter_class(
            storage_client,
            bucket,
            path_prefix=config.path_prefix,
            storage_api_uri=config.storage_api_uri,
            acl_strategy=get_acl_strategy(config.acl_strategy),
            supports_streams=config.supports_streams
        )

    @staticmethod
    def _create_client(config: StorageConfig) -> storage.Client:
        """Build a storage client from a key file or application default credentials"""
        if config.key_file_path:
            logger.debug(f"使用服务账号密钥创建客户端: {config.key_file_path}")
            return storage.Client.from_service_account_json(config.key_file_path, project=config.project_id)
        return storage.Client(project=config.project_id)

    @staticmethod
    def _get_default_config() -> StorageConfig:
        """Get default configuration from settings"""
        return StorageConfig(
            bucket=settings.GCS_BUCKET,
            project_id=settings.GCS_PROJECT_ID,
            key_file_path=settings.GCS_KEY_FILE_PATH,
            path_prefix=settings.GCS_PATH_PREFIX,
            storage_api_uri=settings.GCS_STORAGE_API_URI,
            acl_strategy=settings.GCS_ACL_STRATEGY,
            supports_streams=settings.GCS_SUPPORTS_STREAMS
        )

    @classmethod
    def get_default_storage(cls) -> StorageAdapter:
        """Get default storage instance"""
        return cls.create_storage()
