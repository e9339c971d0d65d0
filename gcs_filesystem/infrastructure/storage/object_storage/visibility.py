"""
Visibility / ACL Mapping

Maps the two filesystem visibilities onto Google Cloud Storage object
ACLs: an object is public when the ``allUsers`` entity holds the READER
role, private otherwise.
"""

import logging
from abc import ABC, abstractmethod

from google.api_core.exceptions import NotFound

from gcs_filesystem.core.constants import (
    ALL_USERS_ENTITY,
    PREDEFINED_ACL_PRIVATE,
    PREDEFINED_ACL_PUBLIC,
    READER_ROLE,
)
from gcs_filesystem.infrastructure.exceptions import InvalidVisibilityProvided
from .base import Visibility

logger = logging.getLogger(__name__)


def validate_visibility(visibility: str) -> str:
    if visibility not in Visibility.values():
        raise InvalidVisibilityProvided(visibility)
    return visibility


def predefined_acl_for_visibility(visibility: str) -> str:
    validate_visibility(visibility)
    return PREDEFINED_ACL_PUBLIC if visibility == Visibility.PUBLIC else PREDEFINED_ACL_PRIVATE


def get_raw_visibility(blob) -> str:
    """
    Read the visibility of a blob from its ACL

    Args:
        blob: google.cloud.storage.Blob

    Returns:
        Visibility.PUBLIC if allUsers holds the reader role, else Visibility.PRIVATE
    """
    acl = blob.acl
    try:
        acl.reload()
    except NotFound:
        # 对象可能没有ACL记录，按私有处理
        logger.debug(f"未找到ACL记录，按私有处理: {blob.name}")
        return Visibility.PRIVATE

    entity = acl.get_entity(ALL_USERS_ENTITY)
    if entity is not None and READER_ROLE in entity.get_roles():
        return Visibility.PUBLIC
    return Visibility.PRIVATE


def apply_visibility(blob, visibility: str) -> None:
    """
    Grant or remove public read access on a blob

    Args:
        blob: google.cloud.storage.Blob
        visibility: Visibility.PUBLIC or Visibility.PRIVATE
    """
    validate_visibility(visibility)

    acl = blob.acl
    entity = acl.all()
    if visibility == Visibility.PUBLIC:
        entity.grant_read()
    else:
        # 删除allUsers的全部角色，条目不存在时不视为失败
        for role in list(entity.get_roles()):
            entity.revoke(role)
    acl.save()


class AclStrategy(ABC):
    """Decides how a copied object receives its access control"""

    name = ""

    @abstractmethod
    def copy(self, bucket, source_blob, destination_key: str):
        """
        Copy a blob inside the bucket and apply access control

        Args:
            bucket: google.cloud.storage.Bucket
            source_blob: Blob to copy
            destination_key: Prefixed key of the new object

        Returns:
            The new blob
        """
        pass


class PredefinedAclStrategy(AclStrategy):
    """Give the copy the predefined ACL matching the source's visibility"""

    name = "visibility"

    def copy(self, bucket, source_blob, destination_key: str):
        # 新文件与原文件保持相同的可见性
        visibility = get_raw_visibility(source_blob)

        new_blob = bucket.copy_blob(source_blob, bucket, destination_key)
        new_blob.acl.save_predefined(predefined_acl_for_visibility(visibility))
        return new_blob


class ReplicateAclStrategy(AclStrategy):
    """Give the copy exactly the source's ACL entries"""

    name = "replicate"

    def copy(self, bucket, source_blob, destination_key: str):
        new_blob = bucket.copy_blob(source_blob, bucket, destination_key)

        source_blob.acl.reload()
        # saving the source list replaces every entry on the destination
        new_blob.acl.save(acl=source_blob.acl)
        return new_blob


ACL_STRATEGIES = {
    PredefinedAclStrategy.name: PredefinedAclStrategy,
    ReplicateAclStrategy.name: ReplicateAclStrategy,
}


def get_acl_strategy(name: str) -> AclStrategy:
    try:
        return ACL_STRATEGIES[name]()
    except KeyError:
        raise ValueError(f"不支持的ACL策略: {name}")
