"""
Configuration settings for Auto Classifier.

All settings are loaded from environment variables (prefix AUTO_CLASSIFIER_)
with sensible defaults. Use a .env file for local development.

The orchestrators never read the module-level `settings` instance directly:
a Settings object is passed in at call time and snapshotted, so hosts and
tests can keep several configurations side by side.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from auto_classifier.backends.prompt_builder import (
    DEFAULT_CHAT_ROLE,
    DEFAULT_PROMPT_TEMPLATE,
    DEFAULT_PROMPT_TEMPLATE_WO_REF,
    default_prompt_template,
)
from auto_classifier.models.classification_models import (
    GenerativeEngineConfig,
    PlacementDirective,
    ZeroShotEngineConfig,
)
from auto_classifier.models.enums import (
    ClassifierEngine,
    OutputKind,
    OutputLocation,
    ReferenceType,
)

LOCAL_ADDRESS_MARKERS = ("localhost", "127.0.0.1", "192.168.")


def is_local_base_url(base_url: str) -> bool:
    """
    Whether a base URL points at a local server (Ollama, LocalAI, ...).

    Local servers usually run without an API key, so the generative
    credential check is waived for them. Matching is a case-insensitive
    substring test on `localhost`, `127.0.0.1` and `192.168.`.
    """
    lowered = base_url.lower()
    return any(marker in lowered for marker in LOCAL_ADDRESS_MARKERS)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="AUTO_CLASSIFIER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Auto Classifier"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Engine selection ===
    CLASSIFIER_ENGINE: ClassifierEngine = ClassifierEngine.GENERATIVE

    # === Generative (OpenAI-compatible) ===
    API_KEY: str = ""
    BASE_URL: str = "https://api.openai.com/v1"  # Ollama: http://localhost:11434/v1
    CHAT_MODEL: str = "gpt-4.1-mini"
    MAX_TOKENS: int = Field(default=150, ge=1)
    TEMPERATURE: Optional[float] = Field(default=None, ge=0.0, le=2.0)  # None = server default
    TOP_P: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    FREQUENCY_PENALTY: Optional[float] = Field(default=None, ge=-2.0, le=2.0)
    PRESENCE_PENALTY: Optional[float] = Field(default=None, ge=-2.0, le=2.0)
    CHAT_ROLE: str = DEFAULT_CHAT_ROLE
    PROMPT_TEMPLATE: str = DEFAULT_PROMPT_TEMPLATE

    # === Zero-shot (Jina AI) ===
    JINA_API_KEY: str = ""
    JINA_BASE_URL: str = "https://api.jina.ai/v1"
    JINA_MODEL: str = "jina-embeddings-v3"  # 8192 tokens, 256 classes
    ZERO_SHOT_MAX_LABELS: int = 256  # Hard backend limit

    # === Transport ===
    HTTP_TIMEOUT: float = 60.0  # seconds, single attempt

    # === References ===
    USE_REFERENCES: bool = True  # False = propose new labels
    REFERENCE_TYPE: ReferenceType = ReferenceType.ALL
    FILTER_REGEX: str = ""
    REFERENCES: list[str] = []  # Resolved reference labels
    MANUAL_REFERENCES: list[str] = []

    # === Output placement ===
    OUTPUT_TYPE: OutputKind = OutputKind.TAG
    OUTPUT_LOCATION: OutputLocation = OutputLocation.CURSOR
    FRONTMATTER_KEY: str = "tags"
    OUTPUT_PREFIX: str = ""
    OUTPUT_SUFFIX: str = ""
    OVERWRITE: bool = False
    MAX_SUGGESTIONS: int = Field(default=3, ge=1, le=10)

    # === Validation ===
    RELIABILITY_THRESHOLD: float = 0.2  # Reject reliability <= this (references mode)

    # === Filename suggestion ===
    FILENAME_MAX_LENGTH: int = 60
    FILENAME_BODY_LIMIT: int = 2000  # chars of body (frontmatter stripped) sent to the model
    FILENAME_MAX_TOKENS: int = Field(default=50, ge=1)
    FILENAME_TEMPERATURE: float = Field(default=0.2, ge=0.0, le=2.0)
    FILENAME_TOP_P: float = Field(default=0.95, ge=0.0, le=1.0)

    def placement_directive(self) -> PlacementDirective:
        """Placement options bundled for the output step."""
        return PlacementDirective(
            output_kind=self.OUTPUT_TYPE,
            location=self.OUTPUT_LOCATION,
            frontmatter_key=self.FRONTMATTER_KEY,
            overwrite=self.OVERWRITE,
            prefix=self.OUTPUT_PREFIX,
            suffix=self.OUTPUT_SUFFIX,
        )

    def generative_config(self) -> GenerativeEngineConfig:
        return GenerativeEngineConfig(
            system_role=self.CHAT_ROLE,
            prompt_template=self.PROMPT_TEMPLATE,
            model_id=self.CHAT_MODEL,
            max_tokens=self.MAX_TOKENS,
            temperature=self.TEMPERATURE,
            top_p=self.TOP_P,
            frequency_penalty=self.FREQUENCY_PENALTY,
            presence_penalty=self.PRESENCE_PENALTY,
            api_key=self.API_KEY,
            base_url=self.BASE_URL,
        )

    def zero_shot_config(self) -> ZeroShotEngineConfig:
        return ZeroShotEngineConfig(
            model_id=self.JINA_MODEL,
            api_key=self.JINA_API_KEY,
            base_url=self.JINA_BASE_URL,
        )

    def set_use_references(self, use_references: bool) -> None:
        """
        Toggle references mode.

        A prompt template still equal to one mode's default is swapped for the
        other mode's default; a customized template is kept.
        """
        self.USE_REFERENCES = use_references
        if use_references and self.PROMPT_TEMPLATE == DEFAULT_PROMPT_TEMPLATE_WO_REF:
            self.PROMPT_TEMPLATE = DEFAULT_PROMPT_TEMPLATE
        elif not use_references and self.PROMPT_TEMPLATE == DEFAULT_PROMPT_TEMPLATE:
            self.PROMPT_TEMPLATE = DEFAULT_PROMPT_TEMPLATE_WO_REF

    def reset_prompt_template(self) -> None:
        """Restore the default template for the current references mode."""
        self.PROMPT_TEMPLATE = default_prompt_template(self.USE_REFERENCES)

    def reset_chat_role(self) -> None:
        self.CHAT_ROLE = DEFAULT_CHAT_ROLE


# Global settings instance
settings = Settings()
