"""Stage 2: Boolean Search Builder - turns validated skills into search strings."""

from __future__ import annotations

from recruitmaxxing.clients.gemini_client import ModelGateway
from recruitmaxxing.models.boolean_search import BooleanSearches
from recruitmaxxing.models.skills import SkillsAnalysis
from recruitmaxxing.pipeline.coercion import coerce

BOOLEAN_PROMPT = """\
You are a sourcing specialist who writes Boolean search strings for LinkedIn,
job boards and ATS databases. Using the skills analysis below, write three
search strings of decreasing breadth:

- broad: maximum reach; job title variations OR'd together with one or two
  core technologies.
- mid: balanced; titles AND the required skills, alternatives OR'd in.
- narrow: precise; required and key preferred skills AND'd, NOT clauses for
  obviously wrong profiles.

Return ONLY a raw JSON object without any markdown formatting, using this structure:

{{
  "booleanSearches": {{
    "broad": {{
      "searchString": "string",
      "explanation": "who this search finds and why",
      "construction": {{
        "titleVariations": ["string"],
        "coreTechnologies": ["string"],
        "groupingLogic": [
          {{"group": "a parenthesized group from the string", "reason": "string", "expectedImpact": "string"}}
        ]
      }}
    }},
    "mid": {{ same structure }},
    "narrow": {{ same structure }}
  }}
}}

Skills analysis:
{skills_json}

Remember: return ONLY the JSON object with no markdown formatting."""


def build_boolean_prompt(skills: SkillsAnalysis) -> str:
    skills_json = skills.model_dump_json(by_alias=True, indent=2)
    return BOOLEAN_PROMPT.format(skills_json=skills_json)


class BooleanSearchBuilder:
    def __init__(self, gateway: ModelGateway):
        self.gateway = gateway

    async def build(self, skills: SkillsAnalysis) -> BooleanSearches:
        """Generate broad, mid and narrow search strings from validated skills."""
        response = await self.gateway.complete(build_boolean_prompt(skills))
        return coerce(response.text, "booleanSearches").unwrap()
