from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from gcs_filesystem.infrastructure.storage.object_storage import (
    GoogleCloudStorageAdapter,
    LegacyGoogleStorageAdapter,
)

UPDATED = datetime(2016, 9, 26, 14, 44, 42, tzinfo=timezone.utc)
TIMESTAMP = 1474901082


def _make_blob(name, size=5, content_type="text/plain", updated=UPDATED):
    blob = MagicMock()
    blob.name = name
    blob.size = size
    blob.content_type = content_type
    blob.updated = updated
    return blob


def _make_acl_entity(*roles):
    entity = MagicMock()
    entity.get_roles.return_value = set(roles)
    return entity


@pytest.fixture
def make_blob():
    return _make_blob


@pytest.fixture
def make_acl_entity():
    return _make_acl_entity


@pytest.fixture
def storage_client():
    return MagicMock()


@pytest.fixture
def bucket():
    bucket = MagicMock()
    bucket.name = "my-bucket"
    return bucket


@pytest.fixture
def adapter(storage_client, bucket):
    return GoogleCloudStorageAdapter(storage_client, bucket, path_prefix="prefix")


@pytest.fixture
def legacy_adapter(storage_client, bucket):
    return LegacyGoogleStorageAdapter(storage_client, bucket, path_prefix="prefix")
