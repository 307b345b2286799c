"""
Filename Suggestion Orchestrator.

Asks the generative backend for a short, descriptive filename, sanitizes it
and resolves it to a free path in the note's folder. Only the generative
engine supports this; the zero-shot engine reports UnsupportedOperationError
instead of falling back.
"""

from pathlib import PurePosixPath
from typing import Callable, Optional

import httpx
import structlog

from auto_classifier.backends.prompt_builder import FILENAME_SYSTEM_ROLE
from auto_classifier.backends.text_utils import sanitize_filename
from auto_classifier.config import Settings
from auto_classifier.document.protocols import VaultHost
from auto_classifier.exceptions import AutoClassifierError
from auto_classifier.models.classification_models import FilenameSuggestion
from auto_classifier.models.enums import ClassifierEngine
from auto_classifier.monitoring.metrics import filename_suggestions_total
from auto_classifier.orchestration.engines import GenerativeEngine
from auto_classifier.orchestration.exceptions import (
    NoFilenameSuggestionError,
    UnsupportedOperationError,
)


logger = structlog.get_logger(__name__)


def _join(folder: str, filename: str) -> str:
    if folder in ("", "."):
        return filename
    return str(PurePosixPath(folder) / filename)


def resolve_unique_path(
    folder: str,
    name: str,
    extension: str,
    path_exists: Callable[[str], bool],
    current_path: Optional[str] = None,
) -> str:
    """
    First free path for `name` in `folder`.

    Tries "name.ext", then "name 2.ext", "name 3.ext", ... checking
    path_exists on every candidate. There is no upper bound on the suffix.
    A candidate equal to current_path counts as free (renaming a note to
    its own name is a no-op).
    """
    candidate = _join(folder, f"{name}{extension}")
    suffix = 2
    while candidate != current_path and path_exists(candidate):
        candidate = _join(folder, f"{name} {suffix}{extension}")
        suffix += 1
    return candidate


class FilenameSuggester:
    """
    Propose (and optionally apply) a filename for one note.

    Args:
        vault: Note reader, existence checker and renamer
        transport: Optional httpx transport for the chat client
    """

    def __init__(
        self,
        vault: VaultHost,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.vault = vault
        self.transport = transport

    async def suggest(self, path: str, settings: Settings) -> FilenameSuggestion:
        """
        Suggest a unique filename for the note at `path` without renaming.

        Raises:
            AutoClassifierError: Unsupported engine, missing credentials,
                backend failure or empty suggestion (already notified)
        """
        snapshot = settings.model_copy(deep=True)
        try:
            suggestion = await self._suggest(path, snapshot)
        except AutoClassifierError as e:
            self._report_failure(e, path, snapshot)
            raise
        filename_suggestions_total.labels(outcome="suggested").inc()
        return suggestion

    async def rename(self, path: str, settings: Settings) -> FilenameSuggestion:
        """Suggest a filename and rename the note to it."""
        snapshot = settings.model_copy(deep=True)
        try:
            suggestion = await self._suggest(path, snapshot)
        except AutoClassifierError as e:
            self._report_failure(e, path, snapshot)
            raise

        if suggestion.final_path != path:
            self.vault.rename_file(path, suggestion.final_path)
        filename_suggestions_total.labels(outcome="renamed").inc()
        self.vault.notify(f"✅ {snapshot.APP_NAME}: renamed to {suggestion.final_path}")
        return suggestion

    async def _suggest(self, path: str, snapshot: Settings) -> FilenameSuggestion:
        if snapshot.CLASSIFIER_ENGINE != ClassifierEngine.GENERATIVE:
            raise UnsupportedOperationError(
                "Filename suggestion is only supported with the OpenAI-compatible API engine.",
                details={"engine": ClassifierEngine(snapshot.CLASSIFIER_ENGINE).value},
            )

        engine = GenerativeEngine(snapshot, transport=self.transport)
        engine.check_credentials()

        title, content = self.vault.read_note(path)
        prompt = engine.prompt_builder.build_filename_prompt(title, content)

        async with engine.client() as client:
            completion = await client.generate(
                FILENAME_SYSTEM_ROLE,
                prompt,
                model=engine.config.model_id,
                max_tokens=snapshot.FILENAME_MAX_TOKENS,
                temperature=snapshot.FILENAME_TEMPERATURE,
                top_p=snapshot.FILENAME_TOP_P,
            )

        sanitized = sanitize_filename(completion.content, snapshot.FILENAME_MAX_LENGTH)
        if not sanitized:
            raise NoFilenameSuggestionError(
                "No filename suggestion.",
                details={"raw_text": completion.content[:500]},
            )

        current = PurePosixPath(path)
        final_path = resolve_unique_path(
            folder=str(current.parent),
            name=sanitized,
            extension=current.suffix or ".md",
            path_exists=self.vault.path_exists,
            current_path=path,
        )

        logger.info(
            "Filename suggested",
            path=path,
            raw_text=completion.content[:200],
            sanitized=sanitized,
            final_path=final_path,
        )
        return FilenameSuggestion(
            raw_text=completion.content,
            sanitized=sanitized,
            final_path=final_path,
        )

    def _report_failure(self, error: AutoClassifierError, path: str, snapshot: Settings) -> None:
        filename_suggestions_total.labels(outcome=type(error).__name__).inc()
        logger.error(
            "Filename suggestion failed",
            path=path,
            error_type=type(error).__name__,
            error=error.message,
            details=error.details,
        )
        self.vault.notify(f"⛔ {snapshot.APP_NAME}: {error.message}")
