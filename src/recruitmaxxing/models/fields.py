"""Lenient field types shared by the analysis models.

Model output routinely has ``null`` where a list belongs, a lone string where a
list belongs, or numbers in text slots. These types coerce such values before
pydantic's own validation runs.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


def as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (list, tuple)):
        return ", ".join(as_text(v) for v in value if v is not None)
    return str(value)


def as_text_tuple(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, int, float)):
        text = as_text(value)
        return (text,) if text else ()
    if isinstance(value, (list, tuple)):
        items = (as_text(v) for v in value if v is not None and not isinstance(v, dict))
        return tuple(item for item in items if item)
    return ()


def as_object_tuple(value: Any) -> tuple[Any, ...]:
    if value is None:
        return ()
    if isinstance(value, dict):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(v for v in value if isinstance(v, (dict, BaseModel)))
    return ()


Text = Annotated[str, BeforeValidator(as_text)]
TextList = Annotated[tuple[str, ...], BeforeValidator(as_text_tuple)]


class AnalysisModel(BaseModel):
    """Frozen base: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )
