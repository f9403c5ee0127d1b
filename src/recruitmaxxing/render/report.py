"""Render a completed analysis as a Markdown report."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from recruitmaxxing.models.analysis import AnalysisResult

TEMPLATES_DIR = Path(__file__).parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


def render_markdown(result: AnalysisResult, title: str = "Job Description Analysis") -> str:
    """Render skills, Boolean searches and screening notes to Markdown."""
    template = _env.get_template("analysis.md.j2")
    return template.render(
        title=title,
        result=result,
        required=result.required_skills,
        preferred=result.preferred_skills,
        tiers=result.boolean_searches.tiers(),
    )


def save_report(content: str, output_path: str | Path) -> Path:
    """Save a rendered report to file."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
