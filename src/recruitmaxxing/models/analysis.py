"""Pipeline result and progress models."""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from recruitmaxxing.models.boolean_search import BooleanSearches
from recruitmaxxing.models.fields import AnalysisModel
from recruitmaxxing.models.skills import SkillEntry, SkillsAnalysis, SuggestedCriteria


class PipelineStage(str, Enum):
    IDLE = "idle"
    SKILLS_IN_FLIGHT = "skills_in_flight"
    BOOLEAN_IN_FLIGHT = "boolean_in_flight"
    COMPLETE = "complete"
    FAILED = "failed"

    @property
    def in_flight(self) -> bool:
        return self in (PipelineStage.SKILLS_IN_FLIGHT, PipelineStage.BOOLEAN_IN_FLIGHT)


# Legal transitions; a new run may start from idle or either terminal stage.
STAGE_TRANSITIONS: dict[PipelineStage, frozenset[PipelineStage]] = {
    PipelineStage.IDLE: frozenset({PipelineStage.SKILLS_IN_FLIGHT}),
    PipelineStage.SKILLS_IN_FLIGHT: frozenset({PipelineStage.BOOLEAN_IN_FLIGHT, PipelineStage.FAILED}),
    PipelineStage.BOOLEAN_IN_FLIGHT: frozenset({PipelineStage.COMPLETE, PipelineStage.FAILED}),
    PipelineStage.COMPLETE: frozenset({PipelineStage.SKILLS_IN_FLIGHT, PipelineStage.IDLE}),
    PipelineStage.FAILED: frozenset({PipelineStage.SKILLS_IN_FLIGHT, PipelineStage.IDLE}),
}


class AnalysisResult(AnalysisModel):
    """Completed output of one pipeline run."""

    skills: tuple[SkillEntry, ...] = ()
    boolean_searches: BooleanSearches
    red_flags: tuple[str, ...] = ()
    suggested_criteria: SuggestedCriteria = Field(default_factory=SuggestedCriteria)

    @classmethod
    def from_stages(cls, skills: SkillsAnalysis, searches: BooleanSearches) -> "AnalysisResult":
        return cls(
            skills=skills.key_skills,
            boolean_searches=searches,
            red_flags=skills.red_flags,
            suggested_criteria=skills.suggested_criteria,
        )

    @property
    def required_skills(self) -> tuple[SkillEntry, ...]:
        return tuple(s for s in self.skills if s.importance == "required")

    @property
    def preferred_skills(self) -> tuple[SkillEntry, ...]:
        return tuple(s for s in self.skills if s.importance == "preferred")
