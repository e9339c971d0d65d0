"""
Object Metadata Normalization

Turns Google Cloud Storage blobs into the flat records the filesystem
layer works with, and synthesizes the directory entries that object
storage does not have.
"""

import logging
import posixpath
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from gcs_filesystem.core.constants import PATH_SEPARATOR
from .path_prefixer import PathPrefixer

logger = logging.getLogger(__name__)

TYPE_FILE = "file"
TYPE_DIR = "dir"


def dirname(path: str) -> str:
    """Parent of a path; root-level entries have an empty dirname."""
    parent = posixpath.dirname(path)
    return "" if parent == "." else parent


def basename(path: str) -> str:
    return path.rstrip(PATH_SEPARATOR).rsplit(PATH_SEPARATOR, 1)[-1]


def normalise_dir_name(dirname_: str) -> str:
    """Directory keys always end with exactly one separator."""
    return dirname_.rstrip(PATH_SEPARATOR) + PATH_SEPARATOR


def pathinfo(path: str) -> Dict[str, str]:
    """Path derived fields of a synthesized directory entry."""
    name = basename(path)
    return {
        "path": path,
        "dirname": dirname(path),
        "basename": name,
        "filename": name,
    }


def parse_timestamp(value: Union[datetime, str, None]) -> Optional[int]:
    """
    Convert the object's last-modified value to epoch seconds

    Args:
        value: datetime from the SDK or an RFC 3339 string

    Returns:
        Integer seconds since epoch, None when the object carries no value
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return int(value.timestamp())


def normalise_object(blob, prefixer: PathPrefixer) -> Dict[str, Any]:
    """
    Return a dictionary of object metadata from a blob

    Args:
        blob: google.cloud.storage.Blob with its properties loaded
        prefixer: Prefixer of the adapter that produced the key

    Returns:
        NormalizedEntry dict (type, dirname, path, timestamp, mimetype, size)
    """
    name = prefixer.remove(blob.name)

    is_dir = name.endswith(PATH_SEPARATOR)
    if is_dir:
        name = name.rstrip(PATH_SEPARATOR)

    return {
        "type": TYPE_DIR if is_dir else TYPE_FILE,
        "dirname": dirname(name),
        "path": name,
        "timestamp": parse_timestamp(blob.updated),
        "mimetype": blob.content_type or "",
        "size": int(blob.size) if blob.size is not None else 0,
    }


def emulate_directories(listing: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Add an entry for every directory implied by the listing's paths

    Ancestors that are already present as explicit directory entries are
    not repeated. Synthesized entries only carry path derived fields
    (path, dirname, basename, filename, type).

    Args:
        listing: Normalised entries, prefix already removed

    Returns:
        The input listing followed by the synthesized directories
    """
    # dict keeps discovery order
    discovered: Dict[str, None] = {}
    explicit = set()

    for entry in listing:
        if entry["type"] == TYPE_DIR:
            explicit.add(entry["path"])

        parent = entry.get("dirname") or ""
        while parent.strip() != "" and parent not in discovered:
            discovered[parent] = None
            parent = dirname(parent)

    synthesized = [
        {**pathinfo(directory), "type": TYPE_DIR}
        for directory in discovered
        if directory not in explicit
    ]
    if synthesized:
        logger.debug(f"补全虚拟目录 {len(synthesized)} 个")

    return list(listing) + synthesized
