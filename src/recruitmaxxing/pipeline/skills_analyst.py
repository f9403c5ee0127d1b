"""Stage 1: Skills Analyst - extracts skills and their relationships from a JD."""

from __future__ import annotations

from recruitmaxxing.clients.gemini_client import ModelGateway
from recruitmaxxing.models.skills import SkillsAnalysis
from recruitmaxxing.pipeline.coercion import coerce

SKILLS_PROMPT = """\
Analyze this job description as an expert technical recruiter and ATS specialist.
Return ONLY a raw JSON object without any markdown formatting, using this structure:

{{
  "keySkills": [
    {{
      "name": "string",
      "importance": "required|preferred",
      "category": "string (e.g. language, framework, cloud, database, soft skill)",
      "alternatives": ["equivalent or adjacent skill a candidate might list instead"],
      "contextExplanation": "why this skill matters for the role, in one or two sentences",
      "relationships": [
        {{
          "relatedSkillName": "another skill from keySkills",
          "relationshipExplanation": "how the two skills are used together",
          "analogy": "a short analogy a non-technical recruiter would understand"
        }}
      ]
    }}
  ],
  "redFlags": ["anything in the posting that suggests an unrealistic or unclear role"],
  "suggestedCriteria": {{
    "mustHave": ["screening criterion"],
    "niceToHave": ["screening criterion"]
  }}
}}

Rules:
- Mark a skill "required" only when the posting states it as a requirement.
- Only relate skills that both appear in keySkills.
- Do not invent skills the posting does not mention or clearly imply.

Job Description:
---
{job_description}
---

Remember: return ONLY the JSON object with no markdown formatting."""


def build_skills_prompt(job_description: str) -> str:
    return SKILLS_PROMPT.format(job_description=job_description)


class SkillsAnalyst:
    def __init__(self, gateway: ModelGateway):
        self.gateway = gateway

    async def analyze(self, job_description: str) -> SkillsAnalysis:
        """Extract skills from a job description."""
        response = await self.gateway.complete(build_skills_prompt(job_description))
        return coerce(response.text, "skills").unwrap()
