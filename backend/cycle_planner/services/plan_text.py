"""Plain-text rendering of a plan, suitable for pasting into notes or chat."""
from __future__ import annotations

from typing import List

from cycle_planner.api.schemas.plan import Plan


def _bullets(items: List[str]) -> str:
    return "- " + "\n- ".join(items)


def _minutes(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render_plan_text(plan: Plan) -> str:
    workout = plan.workout
    nutrition = plan.nutrition
    blocks = [
        f"Phase: {plan.phase}\nFocus: {plan.todays_focus}",
        (
            f"Workout: {workout.title} ({_minutes(workout.duration_minutes)} min, {workout.intensity})\n"
            f"Warmup:\n{_bullets(workout.warmup)}\n"
            f"Main:\n{_bullets(workout.main_set)}\n"
            f"Cooldown:\n{_bullets(workout.cooldown)}"
        ),
        f"Nutrition ({nutrition.theme}):\n{_bullets(nutrition.meals)}\nHydration:\n{_bullets(nutrition.hydration)}",
        f"Recovery:\n{_bullets(plan.recovery.practices)}\nSleep: {plan.recovery.sleep_tip}",
        f"5-min practice:\n{_bullets(plan.mindset.five_minute_practice)}\nMantra: {plan.mindset.mantra}",
        f"Safety:\n{_bullets(plan.safety_notes)}",
    ]
    return "\n\n".join(blocks)
