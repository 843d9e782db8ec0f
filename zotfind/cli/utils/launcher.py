"""Zotero application integration for the CLI.

Items are opened and selected by handing ``zotero://`` URLs to the Zotero
executable.
"""

import logging
import subprocess

from zotfind.core.exceptions import LaunchError

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "zotero"


def item_url(action: str, key: str) -> str:
    """Build a ``zotero://`` URL for an item in the user library."""
    return f"zotero://{action}/library/items/{key}"


def open_pdf(key: str, command: str = DEFAULT_COMMAND) -> None:
    """Open a PDF attachment inside Zotero.

    Args:
        key: Key of the attachment item
        command: Zotero executable
    """
    execute_url(item_url("open-pdf", key), command)


def select_item(key: str, command: str = DEFAULT_COMMAND) -> None:
    """Select an item in the Zotero library view.

    Args:
        key: Key of the item
        command: Zotero executable
    """
    execute_url(item_url("select", key), command)


def execute_url(url: str, command: str = DEFAULT_COMMAND) -> None:
    """Run ``<command> -url <url>`` and wait for it.

    Raises:
        LaunchError: If the command cannot be started or exits abnormally
    """
    logger.info(f"Opening {url}")
    try:
        result = subprocess.call([command, "-url", url])
    except OSError as e:
        raise LaunchError(url, details=str(e)) from e

    if result != 0:
        raise LaunchError(url, returncode=result)
