"""Oracle Client Adapter — typed lookups over an unreliable text oracle.

Three operations share one attempt loop:
  1. resolve_component()     — query → ComponentRecord (errors surface)
  2. resolve_alternatives()  — ComponentRecord → AlternativeRecords (best effort)
  3. resolve_bom_health()    — batch of BomPartQuery → BomHealthRecords (degrades)

Per call: ATTEMPTING → SUCCESS | RETRY → ATTEMPTING | TERMINAL_FAILURE.
Parsing failures and not-found answers are terminal; everything else is
retried with a linear backoff (1s, 2s, ...) until the attempts run out.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

from component_chameleon.ai.extractor import extract_json
from component_chameleon.ai.llm_schemas import (
    COMPONENT_SCHEMA,
    ALTERNATIVES_SCHEMA,
    BOM_HEALTH_SCHEMA,
    validate_component_output,
    validate_alternatives_output,
    validate_bom_health_output,
)
from component_chameleon.ai.oracle import Oracle, OracleRequest
from component_chameleon.ai.prompts import (
    component_lookup_prompts,
    alternatives_prompts,
    bom_health_prompts,
)
from component_chameleon.config import Settings
from component_chameleon.errors import ComponentFinderError, ErrorKind, ExtractionError
from component_chameleon.schemas.bom import BOM_ERROR, BomHealthRecord, BomPartQuery
from component_chameleon.schemas.component import AlternativeRecord, ComponentRecord
from component_chameleon.text_repair import clean_record

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryPolicy:
    """Linear backoff: wait ``base_delay_s * (attempt + 1)`` between attempts."""

    max_retries: int = 2
    base_delay_s: float = 1.0
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    @property
    def attempts(self) -> int:
        return self.max_retries + 1

    def delay(self, attempt: int) -> float:
        return self.base_delay_s * (attempt + 1)

    @classmethod
    def from_settings(cls, settings: Settings) -> RetryPolicy:
        return cls(
            max_retries=settings.max_retries,
            base_delay_s=settings.retry_base_delay_s,
        )


class OracleClient:
    def __init__(
        self,
        oracle: Oracle,
        policy: RetryPolicy | None = None,
        timeout_s: float | None = None,
        max_alternatives: int = 3,
    ):
        self.oracle = oracle
        self.policy = policy or RetryPolicy()
        self.timeout_s = timeout_s
        self.max_alternatives = max_alternatives

    @classmethod
    def from_settings(cls, oracle: Oracle, settings: Settings) -> OracleClient:
        return cls(
            oracle,
            policy=RetryPolicy.from_settings(settings),
            timeout_s=settings.oracle_timeout_s,
            max_alternatives=settings.max_alternatives,
        )

    # ─── Attempt Loop ───

    async def _ask(self, request: OracleRequest) -> Any:
        call = self.oracle.generate(request)
        if self.timeout_s is not None:
            text = await asyncio.wait_for(call, timeout=self.timeout_s)
        else:
            text = await call
        return extract_json((text or "").strip())

    async def _call_with_retry(
        self,
        request: OracleRequest,
        parse: Callable[[Any], T],
        subject: str,
    ) -> T:
        """Run the attempt loop; raise a classified error on terminal failure."""
        last_error: Exception | None = None
        attempts = self.policy.attempts

        for attempt in range(attempts):
            try:
                result = parse(await self._ask(request))
                logger.info(
                    "[%s] Success on attempt %d/%d", request.phase, attempt + 1, attempts
                )
                return result
            except ComponentFinderError:
                raise
            except ExtractionError as e:
                logger.warning(
                    "[%s] Attempt %d: unusable response for %s (%s) — %s",
                    request.phase,
                    attempt + 1,
                    subject,
                    e.reason,
                    e,
                )
                raise ComponentFinderError(
                    f"Failed to parse JSON response for {subject}: {e}",
                    "The data from the component service was malformed. "
                    "Please try your search again.",
                    ErrorKind.PARSING_ERROR,
                    cause=e,
                ) from e
            except Exception as e:
                last_error = e
                logger.warning(
                    "[%s] Attempt %d/%d failed for %s: %r",
                    request.phase,
                    attempt + 1,
                    attempts,
                    subject,
                    e,
                )

            if attempt < attempts - 1:
                await self.policy.sleep(self.policy.delay(attempt))

        logger.error(
            "[%s] All %d attempts failed for %s. Last error: %r",
            request.phase,
            attempts,
            subject,
            last_error,
        )
        raise ComponentFinderError(
            f"API call failed for {subject} after {attempts} attempts: {last_error!r}",
            f'Failed to fetch details for "{subject}". The component service might '
            "be temporarily unavailable. Please try again later.",
            ErrorKind.API_ERROR,
            cause=last_error,
        ) from last_error

    # ─── Operations ───

    async def resolve_component(self, query: str) -> ComponentRecord:
        """Look up the single best-matching component for ``query``.

        Raises:
            ComponentFinderError: NOT_FOUND, PARSING_ERROR or API_ERROR.
        """
        system, user = component_lookup_prompts(query)
        request = OracleRequest("component_lookup", system, user, COMPONENT_SCHEMA)

        def parse(data: Any) -> ComponentRecord:
            record = clean_record(validate_component_output(data))
            if record.is_not_found:
                raise ComponentFinderError(
                    f"Component {query} not found (partNumber={record.part_number!r}).",
                    f'No component matching "{query}" could be found. '
                    "Please check your search term and try again.",
                    ErrorKind.NOT_FOUND,
                )
            return record

        return await self._call_with_retry(request, parse, query)

    async def resolve_alternatives(
        self, original: ComponentRecord
    ) -> list[AlternativeRecord]:
        """Find up to ``max_alternatives`` replacements. Never raises."""
        if self.max_alternatives <= 0:
            return []

        system, user = alternatives_prompts(original, self.max_alternatives)
        request = OracleRequest("alternatives", system, user, ALTERNATIVES_SCHEMA)

        def parse(data: Any) -> list[AlternativeRecord]:
            records = validate_alternatives_output(data)
            return [clean_record(r) for r in records[: self.max_alternatives]]

        try:
            return await self._call_with_retry(request, parse, original.part_number)
        except ComponentFinderError as e:
            logger.warning(
                "Continuing without alternatives for %r (%s): %s",
                original.part_number,
                e.kind.value,
                e.message,
            )
            return []

    async def resolve_bom_health(
        self, queries: list[BomPartQuery]
    ) -> list[BomHealthRecord]:
        """Fetch lifecycle/stock data for one batch of parts.

        On failure, returns one ``"Error"`` record per query so the output
        length matches the batch. On success the oracle's answer is returned
        as-is; order and count are not guaranteed.
        """
        if not queries:
            return []

        system, user = bom_health_prompts(queries)
        request = OracleRequest("bom_health", system, user, BOM_HEALTH_SCHEMA)
        subject = f"BOM batch of {len(queries)} parts"

        try:
            return await self._call_with_retry(
                request, validate_bom_health_output, subject
            )
        except ComponentFinderError as e:
            logger.error("Failed to fetch BOM health (%s): %s", e.kind.value, e.message)
            return [BomHealthRecord.degraded(q, BOM_ERROR) for q in queries]
