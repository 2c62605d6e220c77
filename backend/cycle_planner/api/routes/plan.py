"""Daily plan API routes."""
from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Path, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from cycle_planner.api.schemas.plan import PhaseHint, Plan, PlanError, UserContext
from cycle_planner.core.config import Settings, get_settings
from cycle_planner.observability.tracing import annotate, trace
from cycle_planner.services.llm_client import get_generation_client
from cycle_planner.services.plan_generator import generate_plan
from cycle_planner.services.plan_prompt import derive_phase
from cycle_planner.services.plan_text import render_plan_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["plan"])


@router.post(
    "/plan",
    response_model=Plan,
    response_model_by_alias=True,
    responses={400: {"model": PlanError}, 500: {"model": PlanError}},
)
def create_plan(
    context: UserContext,
    http_request: Request,
    settings: Settings = Depends(get_settings),
    client: Optional[Any] = Depends(get_generation_client),
):
    """Generate today's plan for the submitted context."""
    request_id = getattr(http_request.state, "request_id", None)
    metadata = {
        "route": "/api/plan",
        "cycle_day": context.cycle_day,
        "energy": context.energy,
        "minutes_available": context.minutes_available,
    }

    with trace("plan.request", metadata=metadata, request_id=request_id) as span:
        outcome = generate_plan(context, settings=settings, client=client, request_id=request_id)
        annotate(span, ok=outcome.ok, error_kind=outcome.failure.kind.value if outcome.failure else None)

    if outcome.failure:
        failure = outcome.failure
        logger.warning("Plan request failed: %s (%s)", failure.message, failure.kind.value)
        return JSONResponse(status_code=failure.status_code, content=failure.to_payload())
    return JSONResponse(content=outcome.plan)


@router.get("/phase/{cycle_day}", response_model=PhaseHint, response_model_by_alias=True)
def phase_hint(cycle_day: int = Path(..., ge=1)) -> PhaseHint:
    """Return the phase label the form shows next to the cycle day input."""
    return PhaseHint(cycle_day=cycle_day, phase=derive_phase(cycle_day).value)


@router.post("/plan/text", response_class=PlainTextResponse)
def plan_as_text(plan: Plan) -> str:
    """Render a plan as the plain text users copy out of the page."""
    return render_plan_text(plan)
