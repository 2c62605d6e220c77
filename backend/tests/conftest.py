"""Shared fixtures for planner tests."""
from __future__ import annotations

import copy
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest

from cycle_planner.core.config import Settings

VALID_PLAN: Dict[str, Any] = {
    "phase": "Luteal",
    "todaysFocus": "Steady strength with extra recovery",
    "workout": {
        "title": "Lower-body dumbbell circuit",
        "durationMinutes": 35,
        "warmup": ["5 min brisk walk", "Hip circles and leg swings"],
        "mainSet": ["3x10 goblet squats", "3x12 Romanian deadlifts", "3x30s glute bridge hold"],
        "cooldown": ["Hamstring stretch", "Child's pose breathing"],
        "intensity": "moderate",
        "modifications": ["Swap squats for box squats if knees ache"],
    },
    "nutrition": {
        "theme": "Complex carbs and magnesium",
        "meals": ["Oats with pumpkin seeds", "Lentil and sweet potato bowl", "Tofu stir fry with greens"],
        "hydration": ["2 liters of water", "Herbal tea in the evening"],
    },
    "recovery": {
        "practices": ["10 min foam rolling", "Warm shower before bed"],
        "sleepTip": "Dim screens an hour before bed.",
    },
    "mindset": {
        "fiveMinutePractice": ["Box breathing for 3 minutes", "Write one thing that went well"],
        "mantra": "Steady is strong.",
    },
    "safetyNotes": ["Stop if you feel sharp pain", "Ease off if cramps worsen"],
}


class FakeGenerationClient:
    """Stand-in for the OpenAI client exposing ``responses.create``."""

    def __init__(self, output_text: Any = None, error: Exception | None = None):
        self.output_text = output_text
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.responses = self

    def create(self, **kwargs: Any) -> SimpleNamespace:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(output_text=self.output_text)


@pytest.fixture()
def valid_plan() -> Dict[str, Any]:
    return copy.deepcopy(VALID_PLAN)


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(_env_file=None, openai_api_key="sk-test", opik_enabled=False)


@pytest.fixture()
def user_context_payload() -> Dict[str, Any]:
    return {
        "cycleDay": 18,
        "energy": "medium",
        "minutesAvailable": 45,
        "equipment": "yoga mat, dumbbells",
        "soreness": "none",
        "goal": "balanced fitness + mood",
        "dietaryPrefs": "vegetarian",
        "notes": "",
    }


@pytest.fixture()
def make_client():
    """Return the fake client class so tests can script its reply."""
    return FakeGenerationClient
