"""
Unit tests for data models, logging configuration and the exception hierarchy.
"""

import io
import json
import logging

import pytest
import structlog
from pydantic import ValidationError

from auto_classifier.backends.exceptions import BackendError, BackendHTTPError
from auto_classifier.config import Settings
from auto_classifier.exceptions import AutoClassifierError
from auto_classifier.logging_config import PACKAGE_LOGGER, configure_logging
from auto_classifier.models import (
    ChatCompletionRequest,
    ChatMessage,
    ClassificationRequest,
    ClassifierEngine,
    FilenameSuggestion,
    PlacementDirective,
    ZeroShotResponse,
)
from auto_classifier.orchestration.exceptions import PreconditionError, ReferenceMissingError
from auto_classifier.validation.exceptions import ReliabilityError


class TestModels:
    """Test pydantic model constraints."""

    def test_classification_request_needs_input(self):
        with pytest.raises(ValidationError):
            ClassificationRequest(input_text="", engine=ClassifierEngine.GENERATIVE)

    def test_classification_request_without_references(self):
        request = ClassificationRequest(
            input_text="x", engine=ClassifierEngine.GENERATIVE, use_references=False
        )

        assert request.reference_labels == []

    def test_requests_are_frozen(self):
        request = ClassificationRequest(input_text="x", engine=ClassifierEngine.ZERO_SHOT)

        with pytest.raises(ValidationError):
            request.input_text = "y"

    def test_chat_payload_drops_unset_parameters(self):
        request = ChatCompletionRequest(
            model="m",
            messages=[ChatMessage(role="user", content="hi")],
            max_tokens=5,
            top_p=0.9,
        )

        assert request.to_payload() == {
            "model": "m",
            "messages": [{"role": "user", "content": "hi"}],
            "max_tokens": 5,
            "top_p": 0.9,
        }

    def test_zero_shot_response_ignores_unknown_fields(self):
        response = ZeroShotResponse.model_validate(
            {
                "usage": {"total_tokens": 3, "prompt_tokens": 3},
                "data": [{"index": 0, "predictions": [{"label": "a", "score": 0.5}], "extra": 1}],
                "model": "jina-embeddings-v3",
            }
        )

        assert response.data[0].predictions[0].label == "a"

    def test_placement_directive_decorate(self):
        directive = PlacementDirective(prefix="ai/", suffix="!")

        assert directive.decorate("cats") == "ai/cats!"

    def test_filename_suggestion_needs_name(self):
        with pytest.raises(ValidationError):
            FilenameSuggestion(raw_text="???", sanitized="", final_path="x.md")


class TestExceptionHierarchy:
    """Every failure is catchable as AutoClassifierError."""

    def test_backend_errors(self):
        error = BackendHTTPError("Chat completion API error: 500", status=500, body="oops")

        assert isinstance(error, BackendError)
        assert isinstance(error, AutoClassifierError)
        assert error.error_details == "oops"
        assert str(error) == "Chat completion API error: 500"

    def test_precondition_errors(self):
        assert isinstance(ReferenceMissingError("no reference tags"), PreconditionError)

    def test_validation_error_str_includes_details(self):
        error = ReliabilityError(score=0.1, threshold=0.2)

        assert isinstance(error, AutoClassifierError)
        assert "threshold" in str(error)


class TestConfigureLogging:
    """Test the package-scoped structlog handler."""

    def setup_method(self):
        structlog.reset_defaults()
        self.root_handlers = list(logging.getLogger().handlers)
        self.root_level = logging.getLogger().level

    def teardown_method(self):
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        package_logger.handlers.clear()
        package_logger.setLevel(logging.NOTSET)
        package_logger.propagate = True
        structlog.reset_defaults()

    def test_production_renders_json_to_stream(self):
        stream = io.StringIO()
        configure_logging(Settings(LOG_LEVEL="INFO", ENVIRONMENT="production"), stream=stream)

        structlog.get_logger("auto_classifier.orchestration").info("Classifying", input_length=12)

        event = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert event["event"] == "Classifying"
        assert event["input_length"] == 12
        assert event["level"] == "info"
        assert event["app"] == "Auto Classifier"
        assert event["logger"] == "auto_classifier.orchestration"

    def test_root_logger_untouched(self):
        configure_logging(Settings(LOG_LEVEL="DEBUG"), stream=io.StringIO())

        root = logging.getLogger()
        assert root.handlers == self.root_handlers
        assert root.level == self.root_level
        assert logging.getLogger("httpx").level == logging.NOTSET

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        assert package_logger.level == logging.DEBUG
        assert package_logger.propagate is False

    def test_repeated_calls_replace_handler(self):
        configure_logging(Settings(), stream=io.StringIO())
        handler = configure_logging(Settings(LOG_LEVEL="warning"), stream=io.StringIO())

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        assert package_logger.handlers == [handler]
        assert package_logger.level == logging.WARNING

    def test_level_filters_events(self):
        stream = io.StringIO()
        configure_logging(Settings(LOG_LEVEL="WARNING", ENVIRONMENT="production"), stream=stream)

        logger = structlog.get_logger("auto_classifier.backends")
        logger.info("Sending chat completion request")
        logger.warning("Chat completion API test failed")

        assert "Sending" not in stream.getvalue()
        assert "API test failed" in stream.getvalue()

    def test_host_supplied_handler(self):
        records: list[logging.LogRecord] = []

        class ListHandler(logging.Handler):
            def emit(self, record):
                records.append(record)

        handler = configure_logging(Settings(), handler=ListHandler())
        structlog.get_logger("auto_classifier.document").info("Notification", message="done")

        assert isinstance(handler, ListHandler)
        assert isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)
        assert [record.name for record in records] == ["auto_classifier.document"]

    def test_unknown_level_defaults_to_info(self):
        configure_logging(Settings(LOG_LEVEL="verbose"), stream=io.StringIO())

        assert logging.getLogger(PACKAGE_LOGGER).level == logging.INFO

    def test_existing_structlog_configuration_kept(self):
        structlog.configure(processors=[structlog.processors.KeyValueRenderer()])

        configure_logging(Settings(), stream=io.StringIO())

        processors = structlog.get_config()["processors"]
        assert len(processors) == 1
        assert isinstance(processors[0], structlog.processors.KeyValueRenderer)
