"""
Classification engines.

An engine pairs a backend client with the step that turns its answer into
ranked labels:
- GenerativeEngine: ChatCompletionClient + ResponseValidator
- ZeroShotEngine: JinaClient + rank_labels

Both share the {request, normalize} contract and carry their own
engine-specific precondition checks, so the orchestrator selects an engine
once (build_engine) and never branches on the engine type again.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Sequence, TypeVar

import httpx
import structlog
from pydantic import ValidationError

from auto_classifier.backends.chat_client import ChatCompletionClient
from auto_classifier.backends.jina_client import JinaClient
from auto_classifier.backends.prompt_builder import PromptBuilder
from auto_classifier.config import Settings, is_local_base_url
from auto_classifier.models.classification_models import (
    ClassificationRequest,
    ClassificationResult,
    Usage,
)
from auto_classifier.models.enums import ClassifierEngine
from auto_classifier.models.llm_models import ChatCompletionResponse, ZeroShotResponse
from auto_classifier.orchestration.exceptions import (
    CredentialMissingError,
    InvalidSettingsError,
    NoLabelsProducedError,
    ReferenceCountExceededError,
    ReferenceMissingError,
)
from auto_classifier.validation.pipeline import ResponseValidator
from auto_classifier.validation.ranking import rank_labels


logger = structlog.get_logger(__name__)

ConfigT = TypeVar("ConfigT")


class ClassificationEngine(ABC):
    """
    Abstract classification engine.

    Args:
        settings: Settings snapshot for the current invocation
        transport: Optional httpx transport handed to the backend client
    """

    kind: ClassifierEngine

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.transport = transport

    @staticmethod
    def _load_config(build: Callable[[], ConfigT]) -> ConfigT:
        # Settings fields can be reassigned without validation
        try:
            return build()
        except ValidationError as e:
            fields = sorted({str(error["loc"][0]) for error in e.errors() if error["loc"]})
            raise InvalidSettingsError(
                f"Invalid settings: {', '.join(fields)}",
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e

    @property
    def display_name(self) -> str:
        return self.kind.display_name

    @abstractmethod
    def check_credentials(self) -> None:
        """Raise CredentialMissingError when the engine cannot authenticate."""

    def check_references(self, reference_labels: Sequence[str]) -> None:
        """Engine-specific reference label constraints. No-op by default."""

    @abstractmethod
    async def request(self, request: ClassificationRequest) -> Any:
        """Issue the backend call and return its normalized wire response."""

    @abstractmethod
    def normalize(self, response: Any, request: ClassificationRequest) -> ClassificationResult:
        """Turn the wire response into labels ranked best-first."""

    async def classify(self, request: ClassificationRequest) -> ClassificationResult:
        response = await self.request(request)
        return self.normalize(response, request)


class GenerativeEngine(ClassificationEngine):
    """Chat completion model asked to answer {reliability, outputs} as JSON."""

    kind = ClassifierEngine.GENERATIVE

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        prompt_builder: Optional[PromptBuilder] = None,
    ):
        super().__init__(settings, transport)
        self.config = self._load_config(settings.generative_config)
        self.prompt_builder = prompt_builder or PromptBuilder(
            filename_body_limit=settings.FILENAME_BODY_LIMIT
        )
        self.validator = ResponseValidator(reliability_threshold=settings.RELIABILITY_THRESHOLD)

    def check_credentials(self) -> None:
        if self.config.api_key:
            return
        if is_local_base_url(self.config.base_url):
            logger.debug("Local base URL, API key not required", base_url=self.config.base_url)
            return
        raise CredentialMissingError(
            "API Key is missing. Required for most cloud APIs.",
            details={"base_url": self.config.base_url},
        )

    def client(self) -> ChatCompletionClient:
        return ChatCompletionClient(
            base_url=self.config.base_url,
            api_key=self.config.api_key,
            timeout=self.settings.HTTP_TIMEOUT,
            transport=self.transport,
        )

    async def request(self, request: ClassificationRequest) -> ChatCompletionResponse:
        prompt = self.prompt_builder.build_classification_prompt(
            self.config.prompt_template,
            request.input_text,
            request.reference_labels,
        )
        async with self.client() as client:
            return await client.generate(
                self.config.system_role,
                prompt,
                model=self.config.model_id,
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                top_p=self.config.top_p,
                frequency_penalty=self.config.frequency_penalty,
                presence_penalty=self.config.presence_penalty,
            )

    def normalize(
        self, response: ChatCompletionResponse, request: ClassificationRequest
    ) -> ClassificationResult:
        labels = self.validator.validate(response.content, request.use_references)
        usage = Usage(total_tokens=response.total_tokens) if response.total_tokens else None
        return ClassificationResult(labels=labels, usage=usage)


class ZeroShotEngine(ClassificationEngine):
    """Zero-shot classifier scoring every reference label against the input."""

    kind = ClassifierEngine.ZERO_SHOT

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(settings, transport)
        self.config = self._load_config(settings.zero_shot_config)

    def check_credentials(self) -> None:
        if not self.config.api_key:
            raise CredentialMissingError("Jina AI API Key is missing.")

    def check_references(self, reference_labels: Sequence[str]) -> None:
        # Candidate labels are the classifier's only output space
        if not reference_labels:
            raise ReferenceMissingError("no reference tags")
        limit = self.settings.ZERO_SHOT_MAX_LABELS
        if len(reference_labels) > limit:
            raise ReferenceCountExceededError(count=len(reference_labels), limit=limit)

    def client(self) -> JinaClient:
        return JinaClient(
            base_url=self.config.base_url,
            api_key=self.config.api_key,
            timeout=self.settings.HTTP_TIMEOUT,
            transport=self.transport,
        )

    async def request(self, request: ClassificationRequest) -> ZeroShotResponse:
        async with self.client() as client:
            return await client.classify(
                self.config.model_id,
                [request.input_text],
                request.reference_labels,
            )

    def normalize(
        self, response: ZeroShotResponse, request: ClassificationRequest
    ) -> ClassificationResult:
        if not response.data:
            raise NoLabelsProducedError("Jina AI returned no data.")
        # One input per request: only the first item is consumed
        labels = rank_labels(response.data[0].predictions)
        total_tokens = response.usage.total_tokens
        usage = Usage(total_tokens=total_tokens) if total_tokens else None
        return ClassificationResult(labels=labels, usage=usage)


_ENGINES: dict[ClassifierEngine, type[ClassificationEngine]] = {
    ClassifierEngine.GENERATIVE: GenerativeEngine,
    ClassifierEngine.ZERO_SHOT: ZeroShotEngine,
}


def build_engine(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ClassificationEngine:
    """Instantiate the engine selected by Settings.CLASSIFIER_ENGINE."""
    engine_cls = _ENGINES[ClassifierEngine(settings.CLASSIFIER_ENGINE)]
    return engine_cls(settings, transport=transport)
