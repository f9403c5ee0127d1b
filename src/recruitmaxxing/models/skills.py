"""Pydantic models for the skills extraction stage."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BeforeValidator, Field, field_validator, model_validator

from recruitmaxxing.models.fields import AnalysisModel, Text, TextList, as_object_tuple

Importance = Literal["required", "preferred"]


class SkillRelationship(AnalysisModel):
    related_skill_name: Text = ""
    relationship_explanation: Text = ""
    analogy: Text = ""


class SkillEntry(AnalysisModel):
    name: Text
    importance: Importance = "preferred"
    category: Text = ""
    alternatives: TextList = ()
    context_explanation: Text = ""
    relationships: Annotated[
        tuple[SkillRelationship, ...], BeforeValidator(as_object_tuple)
    ] = ()

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_keys(cls, data: Any) -> Any:
        # older prompts used "skill" and "context"
        if isinstance(data, dict):
            data = dict(data)
            if "name" not in data and "skill" in data:
                data["name"] = data["skill"]
            if "contextExplanation" not in data and "context" in data:
                data["contextExplanation"] = data["context"]
        return data

    @field_validator("importance", mode="before")
    @classmethod
    def _normalize_importance(cls, value: Any) -> str:
        text = str(value or "").strip().lower()
        return text if text in ("required", "preferred") else "preferred"


class SuggestedCriteria(AnalysisModel):
    must_have: TextList = ()
    nice_to_have: TextList = ()


class SkillsAnalysis(AnalysisModel):
    """Validated output of the first stage."""

    key_skills: tuple[SkillEntry, ...] = ()
    red_flags: TextList = ()
    suggested_criteria: SuggestedCriteria = Field(default_factory=SuggestedCriteria)

    @field_validator("suggested_criteria", mode="before")
    @classmethod
    def _default_criteria(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, SuggestedCriteria)) else {}
