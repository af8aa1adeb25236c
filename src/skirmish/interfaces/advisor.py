"""Strategy Advisor Protocol Interface."""

from typing import Protocol

from skirmish.schemas.advisor import StrategySnapshot


class IStrategyAdvisor(Protocol):
    """Protocol for services that turn a board snapshot into a strategic hint."""

    async def get_strategy(self, snapshot: StrategySnapshot) -> str:
        """Return free-text advice for the automated side.

        Args:
            snapshot: Read-only projection of the board

        Returns:
            Hint text

        Raises:
            AdvisorUnavailable: If no hint could be produced
        """
        ...
