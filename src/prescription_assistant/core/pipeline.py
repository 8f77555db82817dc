# ============================================================================
# src/prescription_assistant/core/pipeline.py
# ============================================================================
"""
Processing Pipeline

Drives one image through:

    1. Text extraction      (TextExtractionCapability)
    2. Medication parsing   (pure, synchronous)
    3. Explanation          (ExplanationCapability)
    4. Finalization         -> Prescription

State is exposed as a ProcessingState value that can be read (`state`),
subscribed to (`subscribe`) or awaited (the return value of `run`).

Every run is tagged with a generation number. Starting a new run or calling
`cancel()` bumps the generation; when an older run's capability call
eventually returns, its result is discarded instead of being applied. The
capability call itself is not interrupted.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from .capabilities import ExplanationCapability, TextExtractionCapability
from .constants import ANALYZING_PRESCRIPTION, EXTRACTING_TEXT, PREPARING_RESULTS
from .medication_parser import parse_medications
from .models import ImagePayload, Medication, OCRResult, Prescription
from .state import Completed, Failed, Idle, Observable, Processing, ProcessingState
from ..utils.exceptions import (
    ExplanationError,
    ExplanationErrorKind,
    ExtractionError,
    ExtractionErrorKind,
    NoImageError,
)
from ..utils.logging import LogAdapter


class ProcessingPipeline:
    """
    Cancellable, observable orchestration of OCR -> parse -> explanation.

    Example:
        pipeline = ProcessingPipeline(extractor, llm_service)
        pipeline.subscribe(lambda state: print(state))
        state = await pipeline.run(ImagePayload.from_path("rx.jpg"))
        if state.is_completed:
            print(state.prescription.explanation)
    """

    def __init__(
        self,
        text_extractor: TextExtractionCapability,
        explainer: ExplanationCapability,
        parser: Callable[[str], List[Medication]] = parse_medications,
    ):
        self.text_extractor = text_extractor
        self.explainer = explainer
        self.parser = parser

        self.logger = logging.getLogger(__name__)
        self._state: ProcessingState = Idle()
        self._generation = 0
        self._observers: Observable[ProcessingState] = Observable()

    @property
    def state(self) -> ProcessingState:
        return self._state

    @property
    def generation(self) -> int:
        """Number of runs started or cancelled so far."""
        return self._generation

    def subscribe(self, callback: Callable[[ProcessingState], None]) -> Callable[[], None]:
        """Call `callback` with every new state; returns an unsubscribe function."""
        return self._observers.subscribe(callback)

    def cancel(self) -> None:
        """
        Abandon the in-flight run, if any.

        Results of the abandoned run are ignored when they arrive. A
        pipeline that was processing returns to Idle; terminal states are
        left untouched.
        """
        self._generation += 1
        if self._state.is_processing:
            self.logger.info(f"Run cancelled (generation now {self._generation})")
            self._set_state(Idle())

    async def run(self, image: Optional[ImagePayload]) -> ProcessingState:
        """
        Process an image from the top.

        Calling this again while a run is in flight supersedes that run.
        Calling it after a failure is the retry path.

        Args:
            image: Image to process, or None

        Returns:
            The state this run ended in, or the current state if the run
            was superseded before finishing.
        """
        if image is None:
            self._generation += 1
            self._set_state(Failed(NoImageError()))
            return self._state

        self._generation += 1
        generation = self._generation
        log = LogAdapter(self.logger, {"generation": generation})
        start_time = datetime.now()

        log.info(f"Run {generation} started ({image.width}x{image.height})")
        self._set_state(Processing(EXTRACTING_TEXT))

        # Stage 1: OCR
        try:
            ocr_result = await self._extract(image)
        except Exception as e:
            return self._fail(generation, e, log)

        if self._is_stale(generation):
            log.debug(f"Discarding stale extraction result of run {generation}")
            return self._state

        log.info(
            f"Extracted {len(ocr_result.extracted_text)} chars "
            f"(confidence {ocr_result.confidence:.2f})"
        )

        # Stage 2: medication parsing (pure)
        medications = self.parser(ocr_result.extracted_text)

        # Stage 3: explanation
        self._set_state(Processing(ANALYZING_PRESCRIPTION))
        try:
            explanation = await self._explain(ocr_result.extracted_text)
        except Exception as e:
            return self._fail(generation, e, log)

        if self._is_stale(generation):
            log.debug(f"Discarding stale explanation result of run {generation}")
            return self._state

        # Stage 4: finalize
        self._set_state(Processing(PREPARING_RESULTS))
        prescription = Prescription(
            extracted_text=ocr_result.extracted_text,
            explanation=explanation,
            medications=tuple(medications),
        )
        self._set_state(Completed(prescription))

        duration = (datetime.now() - start_time).total_seconds()
        log.info(
            f"Run {generation} completed in {duration:.2f}s "
            f"({len(prescription.medications)} medication(s))"
        )
        return self._state

    async def _extract(self, image: ImagePayload) -> OCRResult:
        try:
            return await self.text_extractor.extract_text(image)
        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(ExtractionErrorKind.PROVIDER_FAILURE, str(e)) from e

    async def _explain(self, text: str) -> str:
        try:
            return await self.explainer.explain(text)
        except ExplanationError:
            raise
        except Exception as e:
            raise ExplanationError(ExplanationErrorKind.PROVIDER_FAILURE, str(e)) from e

    def _fail(self, generation: int, error: Exception, log: logging.LoggerAdapter) -> ProcessingState:
        if self._is_stale(generation):
            log.debug(f"Discarding stale failure of run {generation}: {error}")
            return self._state

        log.error(f"Run {generation} failed: {error}")
        self._set_state(Failed(error))
        return self._state

    def _is_stale(self, generation: int) -> bool:
        return generation != self._generation

    def _set_state(self, state: ProcessingState) -> None:
        self._state = state
        self._observers.publish(state)
