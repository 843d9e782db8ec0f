"""Pytest configuration and fixtures for CLI tests."""

from types import SimpleNamespace
from unittest.mock import patch

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner():
    """Click CLI test runner with custom invoke method."""

    class ZotfindCliRunner(CliRunner):
        def invoke(self, args, **kwargs):  # type: ignore
            """Invoke the zotfind group when given a list of arguments."""
            from zotfind.cli.main import cli

            if isinstance(args, list):
                return super().invoke(cli, args, **kwargs)
            return super().invoke(args, **kwargs)

    return ZotfindCliRunner()


@pytest.fixture
def run(cli_runner, zotero_data_dir):
    """Invoke the CLI against the sample data directory."""

    def invoke(*args, **kwargs):
        return cli_runner.invoke(["--data-dir", str(zotero_data_dir), *args], **kwargs)

    return invoke


@pytest.fixture
def launcher():
    """Patch the Zotero launcher used by the find command."""
    with (
        patch("zotfind.cli.commands.find.select_item") as select_item,
        patch("zotfind.cli.commands.find.open_pdf") as open_pdf,
    ):
        yield SimpleNamespace(select_item=select_item, open_pdf=open_pdf)


@pytest.fixture
def config_file(tmp_path):
    """Write a config file and return its path."""

    def write(content: str):
        path = tmp_path / "zotfind-test.yaml"
        path.write_text(content)
        return path

    return write
