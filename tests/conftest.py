"""Shared fixtures for layout and rendering tests."""

import pytest

SCENARIO_RESUME = (
    "# Jane Doe\n"
    "Data Analyst\n"
    "jane@x.com | linkedin.com/in/jane\n"
    "## Professional Summary\n"
    "Result-driven analyst.\n"
    "## LANGUAGES\n"
    "Spanish\n"
    "## Skills\n"
    "- SQL\n"
    "- Python"
)

# Width per character (mm) of the fixed-pitch test metric
CHAR_WIDTH = 2.0


def char_metric(text: str, bold: bool, font_size: float) -> float:
    """Deterministic metric: every character is CHAR_WIDTH mm wide."""
    return len(text) * CHAR_WIDTH


@pytest.fixture
def scenario_resume() -> str:
    return SCENARIO_RESUME


@pytest.fixture
def metric():
    return char_metric


@pytest.fixture
def long_resume() -> str:
    """Resume long enough to need at least two pages."""
    bullets = "\n".join(
        f"- Delivered project {i} on time, cutting reporting latency by {i}% across teams"
        for i in range(1, 61)
    )
    return (
        SCENARIO_RESUME
        + "\n## Experience\n### Senior Analyst | 2020 - 2024\n"
        + bullets
        + "\n## Education\n### BSc Statistics | 2016\n- Graduated with honours"
    )
