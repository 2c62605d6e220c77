"""Recover a plan from raw model text.

The generation service is asked for bare JSON matching the plan schema, but
replies can still arrive wrapped in prose or cut short. Parsing runs in two
steps: the text as-is, then the span from the first ``{`` to the last ``}``.
Whatever parses is checked against the ``Plan`` model before it is returned.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import ValidationError

from cycle_planner.api.schemas.plan import Plan
from cycle_planner.services.plan_errors import PlanErrorKind, PlanFailure

logger = logging.getLogger(__name__)

_NO_VALUE = object()


@dataclass(frozen=True)
class ParseResult:
    plan: Optional[Dict[str, Any]] = None
    failure: Optional[PlanFailure] = None
    used_fallback: bool = False

    @property
    def ok(self) -> bool:
        return self.failure is None


def parse_plan_text(text: Optional[str]) -> ParseResult:
    """Parse model output into a plan dict or a tagged failure."""
    if not text or not text.strip():
        return ParseResult(failure=PlanFailure(PlanErrorKind.EMPTY_OUTPUT))

    value = _loads(text)
    used_fallback = False
    if value is _NO_VALUE:
        used_fallback = True
        value = _loads_braced_span(text)
    if value is _NO_VALUE:
        logger.warning("Model returned invalid JSON: %r", text)
        return ParseResult(failure=PlanFailure(PlanErrorKind.MALFORMED_OUTPUT), used_fallback=used_fallback)

    try:
        plan = Plan.model_validate(value)
    except ValidationError as exc:
        logger.warning("Model JSON did not match the plan schema: %s | raw=%r", exc, text)
        return ParseResult(
            failure=PlanFailure(PlanErrorKind.MALFORMED_OUTPUT, details=_summarize(exc)),
            used_fallback=used_fallback,
        )

    return ParseResult(plan=plan.model_dump(by_alias=True), used_fallback=used_fallback)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-finite number {name} is not valid JSON")


def _loads(candidate: str) -> Any:
    try:
        return json.loads(candidate, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return _NO_VALUE


def _loads_braced_span(text: str) -> Any:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        return _NO_VALUE
    return _loads(text[start : end + 1])


def _summarize(exc: ValidationError, limit: int = 3) -> str:
    problems = []
    for error in exc.errors()[:limit]:
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        problems.append(f"{location}: {error['msg']}")
    extra = exc.error_count() - limit
    if extra > 0:
        problems.append(f"... and {extra} more")
    return "; ".join(problems)
