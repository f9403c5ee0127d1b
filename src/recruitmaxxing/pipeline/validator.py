"""Apply the expected shape to parsed model output.

Field-level omissions are tolerated and filled with defaults. Only a missing
root key (``keySkills`` / ``booleanSearches``) fails validation, since that
means the model answered with the wrong kind of document.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

import pydantic

from recruitmaxxing.errors import MissingRequiredField
from recruitmaxxing.models.boolean_search import BooleanSearches
from recruitmaxxing.models.fields import as_text
from recruitmaxxing.models.skills import SkillsAnalysis
from recruitmaxxing.utils.result import Failure, Ok, Result

logger = logging.getLogger(__name__)

Shape = Literal["skills", "booleanSearches"]

ROOT_KEYS: dict[str, tuple[str, ...]] = {
    "skills": ("keySkills", "key_skills"),
    "booleanSearches": ("booleanSearches", "boolean_searches"),
}


def validate(parsed: Any, shape: Shape) -> Result[SkillsAnalysis | BooleanSearches]:
    """Validate ``parsed`` against ``shape``, filling defaults for optional fields."""
    if shape not in ROOT_KEYS:
        raise ValueError(f"Unknown shape: {shape!r}")

    if not isinstance(parsed, dict):
        return Failure(MissingRequiredField(
            f"Expected a JSON object for {shape}, got {type(parsed).__name__}"
        ))

    root = _find_root(parsed, shape)
    if root is None:
        return Failure(MissingRequiredField(
            f"Response has no {ROOT_KEYS[shape][0]!r} key (keys: {sorted(parsed)})"
        ))

    try:
        if shape == "skills":
            return Ok(_validate_skills(parsed, root))
        return Ok(BooleanSearches.model_validate(root))
    except pydantic.ValidationError as exc:
        logger.warning("Schema validation failed for %s: %s", shape, exc)
        return Failure(MissingRequiredField(f"{shape} did not match the expected schema: {exc}"))


def _find_root(parsed: dict, shape: Shape) -> list | dict | None:
    for key in ROOT_KEYS[shape]:
        value = parsed.get(key)
        if shape == "skills" and isinstance(value, list):
            return value
        if shape == "booleanSearches" and isinstance(value, dict):
            return value
    return None


def _validate_skills(parsed: dict, entries: list) -> SkillsAnalysis:
    skills = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            logger.warning("Dropping skill #%d: not an object (%r)", index, entry)
            continue
        name = as_text(entry.get("name") or entry.get("skill"))
        if not name:
            logger.warning("Dropping skill #%d: no name", index)
            continue
        skills.append({**entry, "name": name})

    return SkillsAnalysis.model_validate({
        "keySkills": skills,
        "redFlags": parsed.get("redFlags", parsed.get("red_flags")),
        "suggestedCriteria": parsed.get("suggestedCriteria", parsed.get("suggested_criteria")),
    })
