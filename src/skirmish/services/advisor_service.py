"""Strategy advisor backed by a remote chat-completions service.

The advisor is a best-effort collaborator: one request per AI turn, no
retries, and every failure surfaces as :class:`AdvisorUnavailable` so the
caller can fall back to a default hint.
"""

from __future__ import annotations

import json
import logging

import httpx
from pydantic import SecretStr

from skirmish.domain.errors import AdvisorUnavailable
from skirmish.schemas.advisor import StrategySnapshot

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a strategic AI advisor for a territory control game."


def build_prompt(snapshot: StrategySnapshot) -> str:
    """Render the user prompt describing ``snapshot``."""

    data = snapshot.model_dump(mode="json")
    return (
        "You are an AI strategic advisor for a territory control game.\n\n"
        "Current game state:\n"
        f"- AI controls {snapshot.ai_territory_count} territories "
        f"with {snapshot.ai_units} total units\n"
        f"- Player controls {snapshot.player_territory_count} territories "
        f"with {snapshot.player_units} total units\n"
        f"- There are {snapshot.neutral_territory_count} neutral territories\n\n"
        f"AI territories: {json.dumps(data['ai_territories'])}\n"
        f"Player territories: {json.dumps(data['player_territories'])}\n"
        f"Neutral territories: {json.dumps(data['neutral_territories'])}\n\n"
        "Based on this information, provide a short strategic recommendation "
        "for the AI's next moves.\n"
        "Focus on which territories to attack or reinforce, and why.\n"
        "Keep your response under 100 words and be specific."
    )


class HttpStrategyAdvisor:
    """Fetch strategy hints over HTTP with ``httpx``."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: SecretStr,
        model: str,
        timeout_seconds: float = 10.0,
        temperature: float = 0.7,
        max_tokens: int = 150,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._api_key = api_key
        self._model = model
        self._timeout = timeout_seconds
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._transport = transport

    def build_payload(self, snapshot: StrategySnapshot) -> dict[str, object]:
        return {
            "model": self._model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(snapshot)},
            ],
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }

    async def get_strategy(self, snapshot: StrategySnapshot) -> str:
        headers = {
            "Authorization": f"Bearer {self._api_key.get_secret_value()}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    "chat/completions",
                    json=self.build_payload(snapshot),
                    headers=headers,
                )
                response.raise_for_status()
                content = response.json()["choices"][0]["message"]["content"]
        except httpx.HTTPError as exc:
            raise AdvisorUnavailable(f"advisor request failed: {exc}") from exc
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise AdvisorUnavailable("unexpected advisor response format") from exc

        if not isinstance(content, str) or not content.strip():
            raise AdvisorUnavailable("advisor returned an empty strategy")
        logger.debug("advisor returned %d characters", len(content))
        return content.strip()


class UnconfiguredStrategyAdvisor:
    """Stand-in used when no advisor credential is configured."""

    async def get_strategy(self, snapshot: StrategySnapshot) -> str:
        raise AdvisorUnavailable("no advisor credential configured")
