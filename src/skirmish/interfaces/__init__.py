"""Protocol-based interfaces for collaborators of the simulation.

Implementations are injected into the services, so tests can pass simple
fakes instead of network clients.
"""

from skirmish.interfaces.advisor import IStrategyAdvisor

__all__ = [
    "IStrategyAdvisor",
]
