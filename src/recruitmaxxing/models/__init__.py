"""Data models for the analysis pipeline."""

from recruitmaxxing.models.analysis import AnalysisResult, PipelineStage
from recruitmaxxing.models.boolean_search import (
    TIERS,
    BooleanSearches,
    BooleanSearchTier,
    GroupingLogic,
    SearchConstruction,
    sentinel_search_string,
)
from recruitmaxxing.models.skills import (
    SkillEntry,
    SkillRelationship,
    SkillsAnalysis,
    SuggestedCriteria,
)

__all__ = [
    "TIERS",
    "AnalysisResult",
    "BooleanSearchTier",
    "BooleanSearches",
    "GroupingLogic",
    "PipelineStage",
    "SearchConstruction",
    "SkillEntry",
    "SkillRelationship",
    "SkillsAnalysis",
    "SuggestedCriteria",
    "sentinel_search_string",
]
