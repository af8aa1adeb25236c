"""Shared pytest setup.

``src/`` goes on ``sys.path`` so the suite runs from a plain checkout.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from skirmish.config import Settings  # noqa: E402


@pytest.fixture
def fast_settings() -> Settings:
    """Settings with no advisor credential, no ``.env`` and no pacing delays."""

    return Settings(
        _env_file=None,
        advisor_api_key=None,
        ai_thinking_delay_seconds=0,
        ai_action_delay_seconds=0,
    )
