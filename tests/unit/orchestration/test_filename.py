"""
Unit tests for FilenameSuggester and unique path resolution.
"""

import httpx
import pytest

from auto_classifier.backends.prompt_builder import FILENAME_SYSTEM_ROLE
from auto_classifier.orchestration.exceptions import (
    CredentialMissingError,
    NoFilenameSuggestionError,
    UnsupportedOperationError,
)
from auto_classifier.orchestration.filename import FilenameSuggester, resolve_unique_path


class TestResolveUniquePath:
    """Test collision handling for suggested filenames."""

    def test_free_name(self):
        assert resolve_unique_path("Inbox", "Note", ".md", lambda path: False) == "Inbox/Note.md"

    def test_first_collision(self):
        existing = {"Inbox/Note.md"}

        assert resolve_unique_path("Inbox", "Note", ".md", existing.__contains__) == "Inbox/Note 2.md"

    def test_second_collision(self):
        existing = {"Inbox/Note.md", "Inbox/Note 2.md"}

        assert resolve_unique_path("Inbox", "Note", ".md", existing.__contains__) == "Inbox/Note 3.md"

    def test_vault_root(self):
        existing = {"Note.md"}

        assert resolve_unique_path("", "Note", ".md", existing.__contains__) == "Note 2.md"
        assert resolve_unique_path(".", "Note", ".md", existing.__contains__) == "Note 2.md"

    def test_every_candidate_checked(self):
        checked = []

        def path_exists(path):
            checked.append(path)
            return len(checked) < 4

        result = resolve_unique_path("A", "N", ".md", path_exists)

        assert checked == ["A/N.md", "A/N 2.md", "A/N 3.md", "A/N 4.md"]
        assert result == "A/N 4.md"

    def test_current_path_counts_as_free(self):
        result = resolve_unique_path(
            "Inbox", "Note", ".md", lambda path: True, current_path="Inbox/Note.md"
        )

        assert result == "Inbox/Note.md"


@pytest.fixture
def filename_backend(recording_backend, chat_completion_body):
    """Factory: generative backend answering with the given filename text."""
    def _create(content: str):
        return recording_backend(lambda request: httpx.Response(200, json=chat_completion_body(content)))
    return _create


class TestFilenameSuggester:
    """Test suite for FilenameSuggester."""

    @pytest.mark.asyncio
    async def test_suggest(self, test_settings, mock_vault, filename_backend):
        backend = filename_backend("Q3 Budget Meeting")
        suggester = FilenameSuggester(mock_vault, transport=backend.transport)

        suggestion = await suggester.suggest("Inbox/Untitled.md", test_settings)

        assert suggestion.raw_text == "Q3 Budget Meeting"
        assert suggestion.sanitized == "Q3 Budget Meeting"
        assert suggestion.final_path == "Inbox/Q3 Budget Meeting.md"
        mock_vault.rename_file.assert_not_called()

    @pytest.mark.asyncio
    async def test_request_parameters(self, test_settings, mock_vault, filename_backend):
        backend = filename_backend("Budget")

        await FilenameSuggester(mock_vault, transport=backend.transport).suggest(
            "Inbox/Untitled.md", test_settings
        )

        body = backend.json_body()
        assert body["max_tokens"] == 50
        assert body["temperature"] == 0.2
        assert body["top_p"] == 0.95
        assert body["model"] == "gpt-4.1-mini"
        assert body["messages"][0]["content"] == FILENAME_SYSTEM_ROLE
        user_prompt = body["messages"][1]["content"]
        assert "Meeting notes about the Q3 budget." in user_prompt
        assert "draft" not in user_prompt

    @pytest.mark.asyncio
    async def test_answer_sanitized(self, test_settings, mock_vault, filename_backend):
        backend = filename_backend('```\n"Budget: Q3/Q4 review?"\n```')

        suggestion = await FilenameSuggester(mock_vault, transport=backend.transport).suggest(
            "Untitled.md", test_settings
        )

        assert suggestion.sanitized == "Budget Q3Q4 review"
        assert suggestion.final_path == "Budget Q3Q4 review.md"

    @pytest.mark.asyncio
    async def test_collisions_resolved(self, test_settings, mock_vault, filename_backend):
        existing = {"Inbox/Note.md", "Inbox/Note 2.md"}
        mock_vault.path_exists.side_effect = existing.__contains__
        backend = filename_backend("Note")

        suggestion = await FilenameSuggester(mock_vault, transport=backend.transport).suggest(
            "Inbox/Untitled.md", test_settings
        )

        assert suggestion.final_path == "Inbox/Note 3.md"

    @pytest.mark.asyncio
    async def test_empty_suggestion(self, test_settings, mock_vault, filename_backend):
        backend = filename_backend('  ???  "" ')

        with pytest.raises(NoFilenameSuggestionError) as exc_info:
            await FilenameSuggester(mock_vault, transport=backend.transport).suggest(
                "Inbox/Untitled.md", test_settings
            )

        assert exc_info.value.message == "No filename suggestion."
        mock_vault.notify.assert_called_once_with("⛔ Auto Classifier: No filename suggestion.")

    @pytest.mark.asyncio
    async def test_zero_shot_engine_unsupported(self, zero_shot_settings, mock_vault, filename_backend):
        backend = filename_backend("Note")

        with pytest.raises(UnsupportedOperationError):
            await FilenameSuggester(mock_vault, transport=backend.transport).suggest(
                "Inbox/Untitled.md", zero_shot_settings
            )

        assert backend.call_count == 0
        mock_vault.read_note.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_api_key(self, test_settings, mock_vault, filename_backend):
        test_settings.API_KEY = ""
        backend = filename_backend("Note")

        with pytest.raises(CredentialMissingError):
            await FilenameSuggester(mock_vault, transport=backend.transport).suggest(
                "Inbox/Untitled.md", test_settings
            )

        assert backend.call_count == 0

    @pytest.mark.asyncio
    async def test_rename(self, test_settings, mock_vault, filename_backend):
        backend = filename_backend("Q3 Budget")

        suggestion = await FilenameSuggester(mock_vault, transport=backend.transport).rename(
            "Inbox/Untitled.md", test_settings
        )

        mock_vault.rename_file.assert_called_once_with("Inbox/Untitled.md", "Inbox/Q3 Budget.md")
        mock_vault.notify.assert_called_once_with("✅ Auto Classifier: renamed to Inbox/Q3 Budget.md")
        assert suggestion.final_path == "Inbox/Q3 Budget.md"

    @pytest.mark.asyncio
    async def test_rename_to_same_name_is_noop(self, test_settings, mock_vault, filename_backend):
        mock_vault.path_exists.return_value = True
        backend = filename_backend("Untitled")

        suggestion = await FilenameSuggester(mock_vault, transport=backend.transport).rename(
            "Inbox/Untitled.md", test_settings
        )

        assert suggestion.final_path == "Inbox/Untitled.md"
        mock_vault.rename_file.assert_not_called()
