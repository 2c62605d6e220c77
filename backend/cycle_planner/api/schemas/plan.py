"""Pydantic schemas for the daily plan API."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

EnergyLevel = Literal["low", "medium", "high"]
Intensity = Literal["easy", "moderate", "hard"]


class CamelModel(BaseModel):
    """Base for payloads that use camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserContext(CamelModel):
    cycle_day: int = Field(..., ge=1)
    energy: EnergyLevel
    minutes_available: int = Field(..., ge=1)
    equipment: str = ""
    soreness: str = ""
    goal: str = ""
    dietary_prefs: str = ""
    notes: str = ""


class PlanSection(BaseModel):
    """Model output sections accept only camelCase keys, with no coercion and finite numbers."""

    model_config = ConfigDict(alias_generator=to_camel, extra="forbid", strict=True, allow_inf_nan=False)


class Workout(PlanSection):
    title: str
    duration_minutes: int | float
    warmup: List[str]
    main_set: List[str]
    cooldown: List[str]
    intensity: Intensity
    modifications: List[str]


class Nutrition(PlanSection):
    theme: str
    meals: List[str]
    hydration: List[str]


class Recovery(PlanSection):
    practices: List[str]
    sleep_tip: str


class Mindset(PlanSection):
    five_minute_practice: List[str]
    mantra: str


class Plan(PlanSection):
    phase: str
    todays_focus: str
    workout: Workout
    nutrition: Nutrition
    recovery: Recovery
    mindset: Mindset
    safety_notes: List[str]


class PlanError(BaseModel):
    error: str
    details: Optional[str] = None


class PhaseHint(CamelModel):
    cycle_day: int
    phase: str
