"""Single-call daily plan generation."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter
from typing import Any, Dict, Optional

from cycle_planner.api.schemas.plan import UserContext
from cycle_planner.core.config import Settings
from cycle_planner.observability.metrics import log_metric
from cycle_planner.observability.tracing import annotate, trace
from cycle_planner.services.llm_client import build_openai_client
from cycle_planner.services.plan_errors import PlanErrorKind, PlanFailure
from cycle_planner.services.plan_parser import parse_plan_text
from cycle_planner.services.plan_prompt import (
    SYSTEM_INSTRUCTION,
    build_prompt,
    derive_phase,
    prompt_exceeds_limit,
    response_text_format,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanOutcome:
    plan: Optional[Dict[str, Any]] = None
    failure: Optional[PlanFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def generate_plan(
    context: UserContext,
    *,
    settings: Settings,
    client: Any = None,
    request_id: str | None = None,
) -> PlanOutcome:
    """
    Build the prompt for ``context``, call the model once and parse its reply.

    Preconditions are checked before any network traffic: a configured API key,
    then the prompt length ceiling. ``client`` only needs a ``responses.create``
    method; one is built from ``settings`` when omitted.
    """
    if not settings.openai_api_key:
        logger.error("OPENAI_API_KEY is not configured; refusing plan request")
        return _failed(PlanFailure(PlanErrorKind.CONFIGURATION))

    prompt = build_prompt(context)
    log_metric("plan.prompt_chars", len(prompt))
    if prompt_exceeds_limit(prompt, settings.prompt_max_chars):
        logger.info("Prompt length %d exceeds limit %d", len(prompt), settings.prompt_max_chars)
        return _failed(
            PlanFailure(
                PlanErrorKind.INPUT_TOO_LONG,
                details=f"Prompt is {len(prompt)} characters; limit is {settings.prompt_max_chars}.",
            )
        )

    if client is None:
        client = build_openai_client(settings)

    metadata = {
        "model": settings.openai_model,
        "phase": derive_phase(context.cycle_day).value,
        "energy": context.energy,
        "prompt_chars": len(prompt),
    }
    start = perf_counter()
    with trace("plan.generate", metadata=metadata, request_id=request_id) as span:
        try:
            response = client.responses.create(
                model=settings.openai_model,
                input=[
                    {"role": "system", "content": SYSTEM_INSTRUCTION},
                    {"role": "user", "content": prompt},
                ],
                max_output_tokens=settings.max_output_tokens,
                text=response_text_format(),
            )
        except Exception as exc:
            logger.exception("Plan generation call failed")
            return _failed(PlanFailure(PlanErrorKind.SERVICE_INVOCATION, details=str(exc) or repr(exc)))
        finally:
            log_metric("plan.generate.duration_ms", (perf_counter() - start) * 1000)

        output_text = getattr(response, "output_text", None)
        result = parse_plan_text(output_text)
        annotate(span, output_chars=len(output_text or ""), parse_fallback=result.used_fallback)

    if result.used_fallback:
        log_metric("plan.parse.fallback_used", 1)
    if not result.ok:
        return _failed(result.failure)
    return PlanOutcome(plan=result.plan)


def _failed(failure: PlanFailure) -> PlanOutcome:
    log_metric("plan.error", 1, metadata={"kind": failure.kind.value})
    return PlanOutcome(failure=failure)
