"""Shared test fixtures."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from recruitmaxxing.clients.gemini_client import ModelGateway, RawModelResponse
from recruitmaxxing.models.analysis import AnalysisResult
from recruitmaxxing.models.boolean_search import BooleanSearches
from recruitmaxxing.models.skills import SkillsAnalysis


@pytest.fixture
def sample_jd_text() -> str:
    return """Senior Python Developer (Remote, US)

We are looking for a backend engineer to build data-heavy APIs.

Requirements:
- 5+ years of professional Python experience
- Production experience with AWS (ECS, Lambda, S3)
- Docker and container-based deployment
- PostgreSQL

Nice to have:
- Kubernetes
- Terraform
- Experience mentoring junior engineers
"""


@pytest.fixture
def skills_payload() -> dict:
    return {
        "keySkills": [
            {
                "name": "Python",
                "importance": "required",
                "category": "language",
                "alternatives": ["Django", "FastAPI"],
                "contextExplanation": "Primary backend language.",
                "relationships": [
                    {
                        "relatedSkillName": "AWS",
                        "relationshipExplanation": "Services are deployed to AWS Lambda.",
                        "analogy": "The engine and the road it drives on.",
                    }
                ],
            },
            {
                "name": "AWS",
                "importance": "required",
                "category": "cloud",
                "alternatives": ["GCP"],
                "contextExplanation": "Hosting platform.",
                "relationships": [],
            },
            {
                "name": "Kubernetes",
                "importance": "preferred",
                "category": "infrastructure",
            },
        ],
        "redFlags": ["Salary range not stated"],
        "suggestedCriteria": {
            "mustHave": ["5+ years Python"],
            "niceToHave": ["Kubernetes"],
        },
    }


@pytest.fixture
def boolean_payload() -> dict:
    def tier(search: str) -> dict:
        return {
            "searchString": search,
            "explanation": f"Finds {search}",
            "construction": {
                "titleVariations": ["Python Developer", "Backend Engineer"],
                "coreTechnologies": ["Python", "AWS"],
                "groupingLogic": [
                    {
                        "group": '("Python Developer" OR "Backend Engineer")',
                        "reason": "Title variations",
                        "expectedImpact": "Widens the pool",
                    }
                ],
            },
        }

    return {
        "booleanSearches": {
            "broad": tier('("Python Developer" OR "Backend Engineer") AND Python'),
            "mid": tier('("Python Developer" OR "Backend Engineer") AND Python AND AWS'),
            "narrow": tier('"Senior Python Developer" AND Python AND AWS AND Docker NOT intern'),
        }
    }


@pytest.fixture
def sample_skills(skills_payload) -> SkillsAnalysis:
    return SkillsAnalysis.model_validate(skills_payload)


@pytest.fixture
def sample_searches(boolean_payload) -> BooleanSearches:
    return BooleanSearches.model_validate(boolean_payload["booleanSearches"])


@pytest.fixture
def sample_result(sample_skills, sample_searches) -> AnalysisResult:
    return AnalysisResult.from_stages(sample_skills, sample_searches)


@pytest.fixture
def fenced():
    """Render a payload the way models usually answer: prose plus a json fence."""

    def _fenced(payload: dict) -> str:
        return f"Here is the analysis:\n```json\n{json.dumps(payload, indent=2)}\n```\nLet me know!"

    return _fenced


@pytest.fixture
def mock_gateway() -> ModelGateway:
    """Create a mock model gateway."""
    gateway = AsyncMock(spec=ModelGateway)
    gateway.complete = AsyncMock(
        return_value=RawModelResponse(text="{}", input_tokens=100, output_tokens=50)
    )
    return gateway
