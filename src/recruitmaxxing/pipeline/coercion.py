"""Model text -> validated stage model."""

from __future__ import annotations

import logging

from recruitmaxxing.models.boolean_search import BooleanSearches
from recruitmaxxing.models.skills import SkillsAnalysis
from recruitmaxxing.pipeline.validator import Shape, validate
from recruitmaxxing.utils.json_parser import extract_object
from recruitmaxxing.utils.result import Failure, Result

logger = logging.getLogger(__name__)


def coerce(raw_text: str, shape: Shape) -> Result[SkillsAnalysis | BooleanSearches]:
    """Run normalize -> repair -> parse -> validate, stopping at the first failure."""
    result = extract_object(raw_text).then(lambda obj: validate(obj, shape))
    if isinstance(result, Failure):
        logger.warning(
            "Could not coerce %s response (%s): %.200r",
            shape, type(result.error).__name__, raw_text,
        )
    return result
