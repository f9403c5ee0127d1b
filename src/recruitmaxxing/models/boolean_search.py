"""Pydantic models for the Boolean search construction stage."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BeforeValidator, Field, field_validator, model_validator

from recruitmaxxing.models.fields import AnalysisModel, Text, TextList, as_object_tuple

TIERS: tuple[str, ...] = ("broad", "mid", "narrow")


def sentinel_search_string(tier: str) -> str:
    """Placeholder used when the model left a tier's search string out."""
    return f"No {tier} boolean search string generated"


class GroupingLogic(AnalysisModel):
    group: Text = ""
    reason: Text = ""
    expected_impact: Text = ""


class SearchConstruction(AnalysisModel):
    title_variations: TextList = ()
    core_technologies: TextList = ()
    grouping_logic: Annotated[
        tuple[GroupingLogic, ...], BeforeValidator(as_object_tuple)
    ] = ()


class BooleanSearchTier(AnalysisModel):
    search_string: Text
    explanation: Text = ""
    construction: SearchConstruction = Field(default_factory=SearchConstruction)

    @field_validator("construction", mode="before")
    @classmethod
    def _default_construction(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, SearchConstruction)) else {}

    @classmethod
    def for_tier(cls, tier: str, data: Any) -> "BooleanSearchTier":
        """Build a tier, substituting the sentinel for a missing search string."""
        if isinstance(data, BooleanSearchTier):
            return data
        if isinstance(data, str):
            data = {"searchString": data}
        elif not isinstance(data, dict):
            data = {}
        data = dict(data)
        raw = data.pop("search_string", None) or data.get("searchString")
        search_string = raw.strip() if isinstance(raw, str) else ""
        data["searchString"] = search_string or sentinel_search_string(tier)
        return cls.model_validate(data)


class BooleanSearches(AnalysisModel):
    """Exactly three tiers, broadest first."""

    broad: BooleanSearchTier
    mid: BooleanSearchTier
    narrow: BooleanSearchTier

    @model_validator(mode="before")
    @classmethod
    def _fill_tiers(cls, data: Any) -> Any:
        if isinstance(data, BooleanSearches):
            data = {tier: getattr(data, tier) for tier in TIERS}
        elif not isinstance(data, dict):
            data = {}
        return {tier: BooleanSearchTier.for_tier(tier, data.get(tier)) for tier in TIERS}

    def tiers(self) -> dict[str, BooleanSearchTier]:
        return {tier: getattr(self, tier) for tier in TIERS}
