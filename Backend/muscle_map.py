"""
LiftLog Muscle Mapping Module
Turns the completed sets of a workout into per-muscle activation,
stress and recovery estimates plus a push/pull balance verdict.
Pure logic - no external dependencies.
"""
import logging
import math
from typing import Optional

from config import DEFAULT_BODY_WEIGHT_KG
from exercise_library import find_by_name
from models import (
    IntensityLevel, MuscleActivationResult, MuscleImbalance, StressLevel,
    Workout, WorkoutMuscleAnalysis
)

logger = logging.getLogger(__name__)

# Muscle group categories for balance analysis
PUSH_MUSCLES = {"Pectoralis Major", "Anterior Deltoid", "Triceps", "Quadriceps"}
PULL_MUSCLES = {"Latissimus Dorsi", "Mid Back", "Biceps", "Hamstrings", "Lower Back"}

MAX_ACTIVATION = 100.0

BALANCED_RATIO_LOW = 0.8
BALANCED_RATIO_HIGH = 1.2

# Upper bound (inclusive) of each stress tier
STRESS_THRESHOLDS = [
    (15, StressLevel.MINIMAL),
    (35, StressLevel.LIGHT),
    (55, StressLevel.MODERATE),
    (75, StressLevel.HIGH),
    (90, StressLevel.INTENSE),
]

RECOVERY_BASE_HOURS = {
    StressLevel.MINIMAL: 12,
    StressLevel.LIGHT: 24,
    StressLevel.MODERATE: 36,
    StressLevel.HIGH: 48,
    StressLevel.INTENSE: 60,
    StressLevel.EXTREME: 72,
}

# Heatmap colors, upper bound (inclusive) -> hex
ACTIVATION_COLORS = [
    (20, "#86efac"),  # Light Green - Minimal
    (40, "#4ade80"),  # Green - Light
    (60, "#fbbf24"),  # Yellow - Moderate
    (80, "#fb923c"),  # Orange - High
]
MAX_ACTIVATION_COLOR = "#ef4444"  # Red - Intense

RECOVERY_SUGGESTIONS = {
    StressLevel.MINIMAL: "Light work on {muscle}. Recovery: {hours}h. Can train again soon.",
    StressLevel.LIGHT: "Moderate {muscle} activation. Recovery: {hours}h. Rest 1 day before training.",
    StressLevel.MODERATE: "Good workout for {muscle}. Recovery: {hours}h. Rest 1-2 days.",
    StressLevel.HIGH: "Strong {muscle} activation. Recovery: {hours}h. Allow 2 days rest.",
    StressLevel.INTENSE: "Intense {muscle} work! Recovery: {hours}h. Rest 2-3 days.",
    StressLevel.EXTREME: "Extreme {muscle} stress! Recovery: {hours}h. Full 3 day recovery needed.",
}


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


# ============================================================
# Per-set and per-muscle calculations
# ============================================================

def calculate_set_activation(
        base_activation: float,
        weight: float,
        reps: int,
        body_weight_kg: float,
        intensity_multiplier: float,
        max_cap: float,
) -> float:
    """
    Activation one set puts on one muscle:
    base * (1 + (weight / bodyweight) * multiplier + volume_boost / 100), capped at max_cap.
    The volume boost is log10(1 + reps * weight / 100) * 5 percentage points.
    """
    weight_factor = (weight / body_weight_kg) * intensity_multiplier
    volume_boost = math.log10(1 + (reps * weight) / 100) * 5
    raw_activation = base_activation * (1 + weight_factor + volume_boost / 100)
    return max(0.0, min(raw_activation, max_cap))


def get_stress_level(percentage: float) -> StressLevel:
    for upper, level in STRESS_THRESHOLDS:
        if percentage <= upper:
            return level
    return StressLevel.EXTREME


def calculate_recovery_hours(percentage: float, stress_level: StressLevel) -> int:
    """Base hours for the tier plus up to 10h for the position inside a 20-point band."""
    adjustment = (percentage % 20) * 0.5
    return int(_round_half_up(RECOVERY_BASE_HOURS[stress_level] + adjustment))


def get_intensity_level(percentage: float) -> IntensityLevel:
    if percentage < 40:
        return IntensityLevel.LOW
    if percentage <= 70:
        return IntensityLevel.MODERATE
    return IntensityLevel.HIGH


def get_activation_color(percentage: float) -> str:
    for upper, color in ACTIVATION_COLORS:
        if percentage <= upper:
            return color
    return MAX_ACTIVATION_COLOR


def get_recovery_suggestion(muscle_name: str, percentage: float, recovery_hours: int) -> str:
    template = RECOVERY_SUGGESTIONS[get_stress_level(percentage)]
    return template.format(muscle=muscle_name, hours=recovery_hours)


# ============================================================
# Workout analysis
# ============================================================

def accumulate_activation(workout: Workout, body_weight_kg: float) -> dict[str, float]:
    """
    Sum set activations per muscle over every completed set.
    The running total is clamped to 100 after each addition.
    """
    activation: dict[str, float] = {}

    for exercise in workout.exercises:
        definition = find_by_name(exercise.name)
        if not definition:
            logger.warning("[MuscleMap] Exercise %r not found in library, skipping", exercise.name)
            continue

        for workout_set in exercise.sets:
            if not workout_set.completed:
                continue

            for muscle in definition.muscles:
                set_activation = calculate_set_activation(
                    muscle.base_activation,
                    workout_set.weight,
                    workout_set.reps,
                    body_weight_kg,
                    definition.intensity_multiplier,
                    definition.max_cap,
                )
                current = activation.get(muscle.name, 0.0)
                activation[muscle.name] = min(current + set_activation, MAX_ACTIVATION)

    return activation


def build_muscle_result(muscle_name: str, percentage: float) -> MuscleActivationResult:
    stress_level = get_stress_level(percentage)
    recovery_hours = calculate_recovery_hours(percentage, stress_level)

    return MuscleActivationResult(
        muscle_name=muscle_name,
        final_percentage=_round_half_up(percentage, 1),
        intensity_level=get_intensity_level(percentage),
        stress_level=stress_level,
        color=get_activation_color(percentage),
        recovery_hours=recovery_hours,
        recovery_suggestion=get_recovery_suggestion(muscle_name, percentage, recovery_hours),
    )


def detect_muscle_imbalance(muscles: list[MuscleActivationResult]) -> Optional[MuscleImbalance]:
    """Push/pull verdict. None unless both push and pull muscles were worked."""
    push_activation = sum(m.final_percentage for m in muscles if m.muscle_name in PUSH_MUSCLES)
    pull_activation = sum(m.final_percentage for m in muscles if m.muscle_name in PULL_MUSCLES)

    if push_activation == 0 or pull_activation == 0:
        return None

    ratio = push_activation / pull_activation
    is_balanced = BALANCED_RATIO_LOW <= ratio <= BALANCED_RATIO_HIGH

    if is_balanced:
        recommendation = "Balanced push/pull workout. Great muscle symmetry!"
    elif ratio > BALANCED_RATIO_HIGH:
        difference = int(_round_half_up((ratio - 1) * 100))
        recommendation = (
            f"Push-dominant workout (+{difference}%). "
            "Add more pulling exercises (rows, pull-ups, deadlifts) next session."
        )
    else:
        difference = int(_round_half_up((1 - ratio) * 100))
        recommendation = (
            f"Pull-dominant workout (+{difference}%). "
            "Add more pushing exercises (bench press, push-ups, squats) next session."
        )

    return MuscleImbalance(
        push_activation=_round_half_up(push_activation, 1),
        pull_activation=_round_half_up(pull_activation, 1),
        ratio=_round_half_up(ratio, 2),
        is_balanced=is_balanced,
        recommendation=recommendation,
    )


def estimate_recovery_days(overall_intensity: IntensityLevel, muscles: list[MuscleActivationResult]) -> int:
    high_muscles = sum(1 for m in muscles if m.intensity_level == IntensityLevel.HIGH)

    if overall_intensity == IntensityLevel.HIGH or high_muscles >= 3:
        return 3
    if overall_intensity == IntensityLevel.MODERATE or high_muscles >= 1:
        return 2
    return 1


def analyze_workout(workout: Workout, body_weight_kg: float = DEFAULT_BODY_WEIGHT_KG) -> WorkoutMuscleAnalysis:
    """Full muscle activation analysis for a workout, muscles sorted by activation."""
    activation = accumulate_activation(workout, body_weight_kg)

    muscles = sorted(
        (build_muscle_result(name, pct) for name, pct in activation.items()),
        key=lambda m: m.final_percentage,
        reverse=True,
    )

    avg_activation = sum(m.final_percentage for m in muscles) / len(muscles) if muscles else 0
    overall_intensity = get_intensity_level(avg_activation)

    return WorkoutMuscleAnalysis(
        total_muscles=muscles,
        overall_intensity=overall_intensity,
        estimated_recovery_days=estimate_recovery_days(overall_intensity, muscles),
        estimated_recovery_hours=max([m.recovery_hours for m in muscles] + [24]),
        muscle_imbalance=detect_muscle_imbalance(muscles),
    )


def summarize_analysis(analysis: WorkoutMuscleAnalysis) -> str:
    """One-line summary, e.g. for notifications and the coach context."""
    top = ", ".join(f"{m.muscle_name} ({m.final_percentage}%)" for m in analysis.total_muscles[:3])
    return (
        f"{analysis.overall_intensity} intensity workout. Top muscles: {top}. "
        f"Recovery: {analysis.estimated_recovery_hours}h ({analysis.estimated_recovery_days} days)."
    )
