"""Service Factory for the simulation.

Builds advisors and turn engines from :class:`~skirmish.config.Settings` so
the HTTP layer and scripts share one wiring.  Tests construct
:class:`~skirmish.services.turn_engine.TurnEngine` directly with fakes.
"""

from __future__ import annotations

from skirmish.config import Settings
from skirmish.domain.events import EventBus
from skirmish.domain.rules_config import DEFAULT_RULES, RulesConfig
from skirmish.domain.setup import build_board
from skirmish.interfaces.advisor import IStrategyAdvisor
from skirmish.services.advisor_service import HttpStrategyAdvisor, UnconfiguredStrategyAdvisor
from skirmish.services.turn_engine import TurnEngine
from skirmish.utils.rng import generate_seed, seeded_random_source, system_random_source


def create_advisor(settings: Settings) -> IStrategyAdvisor:
    """Return the HTTP advisor, or a stand-in when no credential is configured."""

    if not settings.advisor_configured:
        return UnconfiguredStrategyAdvisor()
    return HttpStrategyAdvisor(
        base_url=settings.advisor_base_url,
        api_key=settings.advisor_api_key,
        model=settings.advisor_model,
        timeout_seconds=settings.advisor_timeout_seconds,
        temperature=settings.advisor_temperature,
        max_tokens=settings.advisor_max_tokens,
    )


def create_turn_engine(
    settings: Settings,
    *,
    game_id: int = 0,
    seed: int | None = None,
    advisor: IStrategyAdvisor | None = None,
    events: EventBus | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> TurnEngine:
    """Create a fresh board and the engine that drives it.

    With ``seed`` set, combat draws are reproducible for that game.
    """

    if seed is None:
        random_source = system_random_source()
    else:
        random_source = seeded_random_source(generate_seed(game_id, seed, "combat"))
    return TurnEngine(
        build_board(rules=rules),
        advisor if advisor is not None else create_advisor(settings),
        events=events,
        random_source=random_source,
        rules=rules,
        thinking_delay_seconds=settings.ai_thinking_delay_seconds,
        action_delay_seconds=settings.ai_action_delay_seconds,
        advisor_timeout_seconds=settings.advisor_timeout_seconds,
    )
