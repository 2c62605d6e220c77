"""Prompt, system instruction and output schema for daily plan generation."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from cycle_planner.api.schemas.plan import UserContext


class CyclePhase(str, Enum):
    MENSTRUAL = "Menstrual"
    FOLLICULAR = "Follicular"
    OVULATORY = "Ovulatory"
    LUTEAL = "Luteal"


# (last cycle day of the phase, phase); anything later is luteal
PHASE_THRESHOLDS = (
    (5, CyclePhase.MENSTRUAL),
    (13, CyclePhase.FOLLICULAR),
    (16, CyclePhase.OVULATORY),
)

ARRAY_LIMITS: Dict[str, int] = {
    "workout.warmup": 2,
    "workout.mainSet": 3,
    "workout.cooldown": 2,
    "nutrition.meals": 3,
    "nutrition.hydration": 3,
    "recovery.practices": 2,
    "mindset.fiveMinutePractice": 2,
    "safetyNotes": 3,
}

SCHEMA_NAME = "cycle_plan"


def derive_phase(cycle_day: int) -> CyclePhase:
    """Bucket a cycle day into its coaching phase."""
    for last_day, phase in PHASE_THRESHOLDS:
        if cycle_day <= last_day:
            return phase
    return CyclePhase.LUTEAL


def _limits_text() -> str:
    return ", ".join(f"{path} max {limit}" for path, limit in ARRAY_LIMITS.items())


SYSTEM_INSTRUCTION = (
    "Return ONLY JSON. No markdown. No extra text. "
    f"Keep every list short: {_limits_text()}. "
    "Each list item is one concise sentence."
)


def _or_unspecified(value: str) -> str:
    value = value.strip()
    return value if value else "not specified"


def build_prompt(context: UserContext) -> str:
    """Render the user prompt for one plan request; output depends only on ``context``."""
    phase = derive_phase(context.cycle_day)
    return (
        "You are a cycle-aware fitness and wellness coach.\n\n"
        "User context:\n"
        f"- Cycle day: {context.cycle_day}\n"
        f"- Phase: {phase.value}\n"
        f"- Energy level: {context.energy}\n"
        f"- Time available: {context.minutes_available} minutes\n"
        f"- Equipment: {_or_unspecified(context.equipment)}\n"
        f"- Soreness or pain: {_or_unspecified(context.soreness)}\n"
        f"- Goal: {_or_unspecified(context.goal)}\n"
        f"- Diet: {_or_unspecified(context.dietary_prefs)}\n"
        f"- Notes: {_or_unspecified(context.notes)}\n\n"
        "Create a realistic plan for TODAY with:\n"
        "1) A short workout (warmup, main, cooldown) that fits the time available\n"
        "2) Nutrition suggestions\n"
        "3) Recovery tips\n"
        "4) A 5-minute mindset practice\n"
        "5) Safety notes\n\n"
        f"Length limits (items per list): {_limits_text()}."
    )


def prompt_exceeds_limit(prompt: str, max_chars: int) -> bool:
    return len(prompt) > max_chars


def _string_list() -> Dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}}


def _object(properties: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "object",
        "additionalProperties": False,
        "required": list(properties),
        "properties": properties,
    }


PLAN_OUTPUT_SCHEMA: Dict[str, Any] = _object(
    {
        "phase": {"type": "string"},
        "todaysFocus": {"type": "string"},
        "workout": _object(
            {
                "title": {"type": "string"},
                "durationMinutes": {"type": "number"},
                "warmup": _string_list(),
                "mainSet": _string_list(),
                "cooldown": _string_list(),
                "intensity": {"type": "string", "enum": ["easy", "moderate", "hard"]},
                "modifications": _string_list(),
            }
        ),
        "nutrition": _object(
            {
                "theme": {"type": "string"},
                "meals": _string_list(),
                "hydration": _string_list(),
            }
        ),
        "recovery": _object(
            {
                "practices": _string_list(),
                "sleepTip": {"type": "string"},
            }
        ),
        "mindset": _object(
            {
                "fiveMinutePractice": _string_list(),
                "mantra": {"type": "string"},
            }
        ),
        "safetyNotes": _string_list(),
    }
)


def response_text_format() -> Dict[str, Any]:
    """Structured-output format block for the Responses API."""
    return {
        "format": {
            "type": "json_schema",
            "name": SCHEMA_NAME,
            "strict": True,
            "schema": PLAN_OUTPUT_SCHEMA,
        }
    }
