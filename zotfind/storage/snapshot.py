"""Snapshots of the Zotero database.

Zotero keeps ``zotero.sqlite`` locked while it runs, so the database is
copied to a mirror file next to it and the mirror is read instead.
"""

import logging
import shutil
from pathlib import Path

from zotfind.core.exceptions import SnapshotError

logger = logging.getLogger(__name__)

DATABASE_NAME = "zotero.sqlite"
MIRROR_NAME = "zotero-mirror.sqlite"


def database_path(data_dir: Path) -> Path:
    """Path of the live Zotero database in a data directory."""
    return Path(data_dir) / DATABASE_NAME


def snapshot_database(data_dir: Path, mirror_name: str = MIRROR_NAME) -> Path:
    """Copy the Zotero database to a mirror file.

    Args:
        data_dir: Zotero data directory
        mirror_name: File name of the mirror inside ``data_dir``

    Returns:
        Absolute path to the mirror

    Raises:
        SnapshotError: If the database is missing or cannot be copied
    """
    source = database_path(data_dir)
    mirror = Path(data_dir) / mirror_name

    if not source.is_file():
        raise SnapshotError(str(source), "database not found")

    try:
        shutil.copyfile(source, mirror)
    except OSError as e:
        raise SnapshotError(str(source), str(e)) from e

    logger.debug(f"Copied {source} to {mirror}")
    return mirror.resolve()
