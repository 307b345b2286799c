"""Integration test fixtures.

Integration tests run the whole pipeline (settings, orchestrator, backend
client, validator, Markdown host) against a temporary vault on disk. The
backends themselves are replaced by httpx.MockTransport.
"""

from pathlib import Path

import pytest

from auto_classifier.document.markdown_note import LocalVault


@pytest.fixture
def vault_dir(tmp_path: Path) -> Path:
    """Temporary vault with a few tagged notes."""
    (tmp_path / "Inbox").mkdir()
    (tmp_path / "Archive").mkdir()

    (tmp_path / "Inbox" / "Cats.md").write_text(
        "Cats are small domesticated felines.\n",
        encoding="utf-8",
    )
    (tmp_path / "Archive" / "Dogs.md").write_text(
        "---\ntags:\n  - animals\n  - pets\n---\nDogs are loyal. #mammals\n",
        encoding="utf-8",
    )
    (tmp_path / "Archive" / "Recipes.md").write_text(
        "Pasta with tomato sauce. #food #cooking/italian\n",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def local_vault(vault_dir: Path) -> LocalVault:
    """LocalVault over the temporary vault."""
    return LocalVault(vault_dir)
