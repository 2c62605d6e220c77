"""Tests for recovering plans from raw model text."""
from __future__ import annotations

import json

import pytest

from cycle_planner.services.plan_errors import PlanErrorKind
from cycle_planner.services.plan_parser import parse_plan_text


def test_direct_json_is_returned_unmodified(valid_plan) -> None:
    result = parse_plan_text(json.dumps(valid_plan))

    assert result.ok
    assert result.plan == valid_plan
    assert result.used_fallback is False


def test_integer_duration_stays_integer(valid_plan) -> None:
    result = parse_plan_text(json.dumps(valid_plan))

    assert isinstance(result.plan["workout"]["durationMinutes"], int)


def test_plan_wrapped_in_prose_is_extracted(valid_plan) -> None:
    text = f"Sure! Here is your plan: {json.dumps(valid_plan)} Hope that helps!"

    result = parse_plan_text(text)

    assert result.ok
    assert result.plan == valid_plan
    assert result.used_fallback is True


def test_markdown_fenced_plan_is_extracted(valid_plan) -> None:
    text = f"```json\n{json.dumps(valid_plan, indent=2)}\n```"

    result = parse_plan_text(text)

    assert result.plan == valid_plan


@pytest.mark.parametrize("text", [None, "", "   \n"])
def test_missing_output_is_empty_output(text) -> None:
    result = parse_plan_text(text)

    assert not result.ok
    assert result.failure.kind is PlanErrorKind.EMPTY_OUTPUT
    assert result.failure.message == "No model output"


@pytest.mark.parametrize(
    "text",
    [
        "no json here",
        "only an opening { brace",
        "closing } before { opening",
        '{"phase": "Luteal", "todaysFocus": "cut off mid',
        "prefix {not: valid json} suffix",
    ],
)
def test_unrecoverable_text_is_malformed(text: str) -> None:
    result = parse_plan_text(text)

    assert result.failure.kind is PlanErrorKind.MALFORMED_OUTPUT
    assert result.failure.message == "Model returned invalid JSON"
    assert result.plan is None


def test_json_that_is_not_an_object_is_malformed() -> None:
    result = parse_plan_text("[1, 2, 3]")

    assert result.failure.kind is PlanErrorKind.MALFORMED_OUTPUT
    assert result.used_fallback is False


def test_extra_field_is_rejected(valid_plan) -> None:
    valid_plan["workout"]["equipment"] = "kettlebell"

    result = parse_plan_text(json.dumps(valid_plan))

    assert result.failure.kind is PlanErrorKind.MALFORMED_OUTPUT
    assert "workout.equipment" in result.failure.details


def test_missing_section_is_rejected(valid_plan) -> None:
    del valid_plan["mindset"]

    result = parse_plan_text(json.dumps(valid_plan))

    assert result.failure.kind is PlanErrorKind.MALFORMED_OUTPUT
    assert "mindset" in result.failure.details


def test_unknown_intensity_is_rejected(valid_plan) -> None:
    valid_plan["workout"]["intensity"] = "extreme"

    result = parse_plan_text(json.dumps(valid_plan))

    assert result.failure.kind is PlanErrorKind.MALFORMED_OUTPUT
    assert "workout.intensity" in result.failure.details


def test_stringly_typed_duration_is_rejected(valid_plan) -> None:
    valid_plan["workout"]["durationMinutes"] = "35"

    result = parse_plan_text(json.dumps(valid_plan))

    assert result.failure.kind is PlanErrorKind.MALFORMED_OUTPUT


@pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
def test_non_finite_duration_is_malformed(valid_plan, constant: str) -> None:
    text = json.dumps(valid_plan).replace('"durationMinutes": 35', f'"durationMinutes": {constant}')

    result = parse_plan_text(text)

    assert result.failure.kind is PlanErrorKind.MALFORMED_OUTPUT


def test_non_finite_duration_in_prose_is_malformed(valid_plan) -> None:
    body = json.dumps(valid_plan).replace('"durationMinutes": 35', '"durationMinutes": NaN')

    result = parse_plan_text(f"Here you go: {body} Enjoy!")

    assert result.failure.kind is PlanErrorKind.MALFORMED_OUTPUT


@pytest.mark.parametrize(
    "text",
    [
        "[" * 100000 + "]" * 100000,
        "Plan: " + '{"a":' * 100000 + "1" + "}" * 100000,
    ],
)
def test_deeply_nested_output_is_malformed(text: str) -> None:
    result = parse_plan_text(text)

    assert result.failure.kind is PlanErrorKind.MALFORMED_OUTPUT


def test_snake_case_keys_are_rejected(valid_plan) -> None:
    valid_plan["todays_focus"] = valid_plan.pop("todaysFocus")

    result = parse_plan_text(json.dumps(valid_plan))

    assert result.failure.kind is PlanErrorKind.MALFORMED_OUTPUT
    assert result.plan is None


def test_nested_snake_case_keys_are_rejected(valid_plan) -> None:
    valid_plan["recovery"]["sleep_tip"] = valid_plan["recovery"].pop("sleepTip")

    result = parse_plan_text(json.dumps(valid_plan))

    assert result.failure.kind is PlanErrorKind.MALFORMED_OUTPUT
    assert "recovery" in result.failure.details
