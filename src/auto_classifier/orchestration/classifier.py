"""
Classification Orchestrator.

Coordinates one classify invocation:
1. Snapshot settings and select the engine
2. Fail-fast gates: credentials, references, zero-shot ceiling, input
3. Engine call (generative or zero-shot) and normalization to ranked labels
4. Truncation to MAX_SUGGESTIONS
5. Placement of each label, in rank order, through the note host
6. One user-visible notification (success or failure)

Every failure is logged, counted, notified once, then re-raised. Nothing is
retried.
"""

from typing import Optional

import httpx
import structlog

from auto_classifier.config import Settings
from auto_classifier.document.protocols import NoteHost
from auto_classifier.exceptions import AutoClassifierError
from auto_classifier.models.classification_models import (
    ClassificationRequest,
    ClassifyOutcome,
    PlacementDirective,
)
from auto_classifier.models.enums import ClassifierEngine, InputType
from auto_classifier.monitoring.metrics import classifications_total, labels_placed_total
from auto_classifier.orchestration.engines import ClassificationEngine, build_engine
from auto_classifier.orchestration.exceptions import (
    InputMissingError,
    NoLabelsProducedError,
    PlacementError,
    ReferenceMissingError,
)


logger = structlog.get_logger(__name__)


class ClassificationOrchestrator:
    """
    Top-level coordinator for note classification.

    Args:
        host: The active note (input text, label placement, notifications)
        transport: Optional httpx transport for the backend clients
    """

    def __init__(
        self,
        host: NoteHost,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.host = host
        self.transport = transport

    async def classify(self, input_type: InputType, settings: Settings) -> ClassifyOutcome:
        """
        Classify the selected input and write the labels into the note.

        Args:
            input_type: Which part of the note to classify
            settings: Configuration; snapshotted at call start so concurrent
                edits do not affect this invocation

        Returns:
            ClassifyOutcome with the number of labels placed

        Raises:
            AutoClassifierError: Any precondition, backend, validation or
                placement failure (already notified and logged)
        """
        snapshot = settings.model_copy(deep=True)
        engine_kind = ClassifierEngine(snapshot.CLASSIFIER_ENGINE)
        log = logger.bind(engine=engine_kind.value, input_type=InputType(input_type).value)

        try:
            engine = build_engine(snapshot, transport=self.transport)
            outcome = await self._run(engine, input_type, snapshot, log)
        except AutoClassifierError as e:
            classifications_total.labels(
                engine=engine_kind.value, outcome=type(e).__name__
            ).inc()
            log.error(
                "Classification failed",
                error_type=type(e).__name__,
                error=e.message,
                details=e.details,
            )
            self.host.notify(f"⛔ {snapshot.APP_NAME}: {e.message}")
            raise

        classifications_total.labels(engine=engine.kind.value, outcome="success").inc()
        token_info = (
            f" ({outcome.total_tokens} tokens used)" if outcome.total_tokens else ""
        )
        self.host.notify(
            f"✅ {snapshot.APP_NAME}: classified with {outcome.labels_applied} tags "
            f"using {engine.display_name}{token_info}."
        )
        return outcome

    async def _run(
        self,
        engine: ClassificationEngine,
        input_type: InputType,
        snapshot: Settings,
        log: structlog.stdlib.BoundLogger,
    ) -> ClassifyOutcome:
        # === Preconditions (no side effects) ===
        engine.check_credentials()

        references = list(snapshot.REFERENCES)
        if snapshot.USE_REFERENCES and not references:
            raise ReferenceMissingError("no reference tags")

        engine.check_references(references)

        input_text = self.host.get_input_text(input_type)
        if not input_text:
            raise InputMissingError("no input data", details={"input_type": InputType(input_type).value})

        # === Backend call ===
        request = ClassificationRequest(
            input_text=input_text,
            reference_labels=references,
            engine=engine.kind,
            use_references=snapshot.USE_REFERENCES,
        )
        log.info(
            "Classifying",
            input_length=len(input_text),
            reference_count=len(references),
            use_references=snapshot.USE_REFERENCES,
        )
        result = await engine.classify(request)

        labels = result.labels[: snapshot.MAX_SUGGESTIONS]
        if not labels:
            raise NoLabelsProducedError("No tags were classified.")

        # === Placement, sequential and in rank order ===
        directive = snapshot.placement_directive()
        placed = self._place_labels(labels, directive, log)

        total_tokens = result.usage.total_tokens if result.usage else None
        log.info(
            "Classification completed",
            labels=labels,
            labels_applied=placed,
            ranked_count=len(result.labels),
            total_tokens=total_tokens,
        )
        return ClassifyOutcome(
            labels_applied=placed,
            labels=labels,
            engine=engine.kind,
            total_tokens=total_tokens,
        )

    def _place_labels(
        self,
        labels: list[str],
        directive: PlacementDirective,
        log: structlog.stdlib.BoundLogger,
    ) -> int:
        placed = 0
        for label in labels:
            try:
                self.host.insert_label(label, directive)
            except Exception as e:
                raise PlacementError(
                    f"Failed to insert '{label}': {e}",
                    details={
                        "label": label,
                        "placed_before_failure": placed,
                        "skipped": len(labels) - placed - 1,
                        "error_type": type(e).__name__,
                    },
                ) from e
            placed += 1
            labels_placed_total.labels(output_kind=directive.output_kind.value).inc()
            log.debug("Label placed", label=label, output_kind=directive.output_kind.value)
        return placed
