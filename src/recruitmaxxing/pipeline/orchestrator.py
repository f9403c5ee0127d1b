"""Main pipeline orchestrator - runs skills extraction then Boolean search construction."""

from __future__ import annotations

import logging
import time
from typing import Callable

from recruitmaxxing.clients.gemini_client import ModelGateway
from recruitmaxxing.errors import InputEmpty, PipelineError, RunInProgress
from recruitmaxxing.models.analysis import STAGE_TRANSITIONS, AnalysisResult, PipelineStage
from recruitmaxxing.pipeline.search_builder import BooleanSearchBuilder
from recruitmaxxing.pipeline.skills_analyst import SkillsAnalyst
from recruitmaxxing.storage.analysis_store import AnalysisStore, InMemoryAnalysisStore

logger = logging.getLogger(__name__)

StageCallback = Callable[[PipelineStage, PipelineStage], None]


class AnalysisOrchestrator:
    """Runs the two-stage analysis and tracks its progress.

    Stage 2 embeds the validated output of stage 1, so the stages always run
    one after the other. Only one run may be in flight per orchestrator; a
    second ``run`` call while one is active raises ``RunInProgress``.

    ``result`` is the last completed analysis (or None). A failed run leaves it
    untouched.
    """

    def __init__(self, gateway: ModelGateway, store: AnalysisStore | None = None):
        self.skills_analyst = SkillsAnalyst(gateway)
        self.search_builder = BooleanSearchBuilder(gateway)
        self.store: AnalysisStore = store if store is not None else InMemoryAnalysisStore()
        self._stage = PipelineStage.IDLE
        self._subscribers: list[StageCallback] = []
        self.job_description: str = self.store.load_input() or ""
        self.result: AnalysisResult | None = self.store.load_result()
        self.last_error: PipelineError | None = None
        self.elapsed_seconds: float = 0.0

    @property
    def stage(self) -> PipelineStage:
        return self._stage

    def subscribe(self, callback: StageCallback) -> Callable[[], None]:
        """Call ``callback(previous, current)`` on every stage change.

        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def _advance(self, stage: PipelineStage) -> None:
        previous = self._stage
        if stage not in STAGE_TRANSITIONS[previous]:
            raise RuntimeError(f"Illegal stage transition {previous.value} -> {stage.value}")
        self._stage = stage
        logger.info("Pipeline stage: %s -> %s", previous.value, stage.value)
        for callback in list(self._subscribers):
            try:
                callback(previous, stage)
            except Exception:
                logger.error("Stage subscriber raised", exc_info=True)

    def set_input(self, text: str) -> None:
        """Replace the current job description and persist it."""
        self.job_description = text
        self.store.save_input(text)

    def accept_selection(self, text: str | None) -> bool:
        """Take a job description captured outside the app (e.g. a text selection).

        Blank selections are ignored. Returns True when the input was replaced.
        """
        if not text or not text.strip():
            return False
        self.set_input(text)
        return True

    async def run(self, job_description: str | None = None) -> AnalysisResult:
        """Run the full pipeline on ``job_description`` (defaults to the current input).

        Raises a ``PipelineError`` subclass on failure, after moving to FAILED.
        """
        text = self.job_description if job_description is None else job_description
        if not text or not text.strip():
            raise InputEmpty("Job description is empty")
        if self._stage.in_flight:
            raise RunInProgress("An analysis is already running")

        if text != self.job_description:
            self.set_input(text)

        start = time.monotonic()
        self.last_error = None
        current = "skills"
        self._advance(PipelineStage.SKILLS_IN_FLIGHT)
        try:
            skills = await self.skills_analyst.analyze(text)
            logger.info("Extracted %d skills", len(skills.key_skills))

            current = "booleanSearches"
            self._advance(PipelineStage.BOOLEAN_IN_FLIGHT)
            searches = await self.search_builder.build(skills)

            result = AnalysisResult.from_stages(skills, searches)
            self.store.save_result(result)
        except PipelineError as exc:
            exc.stage = exc.stage or current
            self._fail(exc)
            raise
        except BaseException:
            # cancellation, a store failure or an unexpected bug
            self._fail(None)
            raise

        self.result = result
        self.elapsed_seconds = time.monotonic() - start
        self._advance(PipelineStage.COMPLETE)
        logger.info("Analysis complete in %.1fs", self.elapsed_seconds)
        return result

    def _fail(self, error: PipelineError | None) -> None:
        self.last_error = error
        logger.warning("Analysis failed: %s", error if error is not None else "aborted")
        self._advance(PipelineStage.FAILED)

    def reset(self) -> None:
        """Forget the input and the last result, here and in the store."""
        if self._stage.in_flight:
            raise RunInProgress("Cannot reset while an analysis is running")
        self.store.clear()
        self.job_description = ""
        self.result = None
        self.last_error = None
        if self._stage is not PipelineStage.IDLE:
            self._advance(PipelineStage.IDLE)
