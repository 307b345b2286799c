"""Unit test fixtures (mocks and stubs).

Provides mock host objects for testing the orchestrators without an editor
or a filesystem.
"""

from unittest.mock import Mock

import pytest


@pytest.fixture
def mock_note_host():
    """Mock NoteHost returning a fixed input text.

    Usage:
        def test_something(mock_note_host):
            mock_note_host.get_input_text.return_value = None
    """
    mock = Mock()
    mock.get_input_text = Mock(return_value="Cats are small domesticated felines.")
    mock.insert_label = Mock(return_value=None)
    mock.notify = Mock(return_value=None)
    return mock


@pytest.fixture
def mock_vault():
    """Mock VaultHost with one note and an empty folder."""
    mock = Mock()
    mock.read_note = Mock(return_value=("Untitled", "---\ntags: [draft]\n---\nMeeting notes about the Q3 budget."))
    mock.path_exists = Mock(return_value=False)
    mock.rename_file = Mock(return_value=None)
    mock.list_known_labels = Mock(return_value=["animals", "food", "pets"])
    mock.notify = Mock(return_value=None)
    return mock
