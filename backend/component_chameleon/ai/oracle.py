"""Oracle capability — the external generative service behind every lookup.

The core only needs "send a prompt, get text back". ``Oracle`` captures that
as a protocol so the client can be handed any backend (an OpenAI-compatible
endpoint in production, a scripted stub in tests).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from openai import AsyncOpenAI, APIError

from component_chameleon.config import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OracleRequest:
    phase: str
    system_prompt: str
    user_prompt: str
    schema: dict[str, Any] = field(default_factory=dict)

    @property
    def expects_object(self) -> bool:
        return self.schema.get("type") == "object"


class Oracle(Protocol):
    async def generate(self, request: OracleRequest) -> str:
        """Return the raw response text for ``request``."""
        ...


class OpenAIOracle:
    """Oracle backed by an OpenAI-compatible chat completions endpoint.

    Works with:
      - OpenAI API (default)
      - Azure OpenAI (set base_url + api_key)
      - Local models via OpenAI-compatible servers (LM Studio, Ollama, vLLM)
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str,
        temperature: float = 0.1,
    ):
        self.client = client
        self.model = model
        self.temperature = temperature

    async def generate(self, request: OracleRequest) -> str:
        kwargs: dict[str, Any] = {}
        # json_object mode only admits a top-level object
        if request.expects_object:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": request.system_prompt},
                    {"role": "user", "content": request.user_prompt},
                ],
                temperature=self.temperature,
                **kwargs,
            )
        except APIError as e:
            logger.error("[%s] LLM API error: %s", request.phase, e)
            raise

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def aclose(self) -> None:
        await self.client.close()


def create_oracle(settings: Settings | None = None) -> OpenAIOracle:
    """Build the default OpenAI-compatible oracle from settings."""
    settings = settings or get_settings()
    client = AsyncOpenAI(
        api_key=settings.llm_api_key,
        base_url=settings.llm_base_url or None,
        timeout=settings.oracle_timeout_s,
    )
    return OpenAIOracle(
        client=client,
        model=settings.llm_model,
        temperature=settings.llm_temperature,
    )
