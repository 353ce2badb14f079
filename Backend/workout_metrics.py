"""
LiftLog Workout Metrics
Volume, calorie and intensity calculations for a workout.
Pure logic - no external dependencies.
"""
import math
from typing import Iterator

from config import DEFAULT_BODY_WEIGHT_KG
from models import Workout, WorkoutSet, WorkoutStats

# MET values by volume density (kg lifted per minute)
MET_TIERS = [
    (1000, 6.0),  # High intensity
    (500, 5.0),   # Moderate-High
    (250, 4.0),   # Moderate
]
BASELINE_MET = 3.5

# Intensity score targets (100 points each)
TARGET_VOLUME_PER_MIN = 500
TARGET_SETS_PER_HOUR = 20
TARGET_DURATION_MIN = 60


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def completed_sets(workout: Workout) -> Iterator[WorkoutSet]:
    for exercise in workout.exercises:
        for workout_set in exercise.sets:
            if workout_set.completed:
                yield workout_set


def calculate_volume(workout: Workout) -> float:
    """Volume = sum of weight x reps over completed sets."""
    return sum(s.weight * s.reps for s in completed_sets(workout))


def calculate_workout_stats(workout: Workout) -> WorkoutStats:
    """Calculate aggregate statistics. Total sets counts incomplete sets too."""
    stats = WorkoutStats(duration=workout.duration)

    for exercise in workout.exercises:
        for workout_set in exercise.sets:
            stats.total_sets += 1
            if workout_set.completed:
                stats.completed_sets += 1
                stats.total_volume += workout_set.weight * workout_set.reps
                stats.total_reps += workout_set.reps

    return stats


def calculate_calories_burned(workout: Workout, body_weight_kg: float = DEFAULT_BODY_WEIGHT_KG) -> int:
    """
    Estimate calories with a MET formula: Calories = MET * Weight(kg) * Time(hours).
    MET rises from 3.5 to 6.0 with volume density.
    """
    duration_hours = workout.duration / 3600
    stats = calculate_workout_stats(workout)

    volume_per_minute = stats.total_volume / (workout.duration / 60) if workout.duration > 0 else 0

    met = BASELINE_MET
    for threshold, tier_met in MET_TIERS:
        if volume_per_minute > threshold:
            met = tier_met
            break

    return round_half_up(met * body_weight_kg * duration_hours)


def calculate_intensity_score(workout: Workout) -> int:
    """
    Workout intensity score (0-100).
    50% volume density, 30% set density, 20% duration.
    """
    stats = calculate_workout_stats(workout)
    if stats.duration == 0:
        return 0

    volume_density = stats.total_volume / (stats.duration / 60)
    volume_score = min(100, (volume_density / TARGET_VOLUME_PER_MIN) * 100)

    sets_per_hour = stats.total_sets / (stats.duration / 3600)
    set_score = min(100, (sets_per_hour / TARGET_SETS_PER_HOUR) * 100)

    duration_minutes = stats.duration / 60
    duration_score = min(100, (duration_minutes / TARGET_DURATION_MIN) * 100)

    return round_half_up(volume_score * 0.5 + set_score * 0.3 + duration_score * 0.2)


# ============================================================
# Display helpers
# ============================================================

def format_volume(volume: float) -> str:
    """Format volume with thousand separators, e.g. "2,400 kg"."""
    if float(volume).is_integer():
        return f"{int(volume):,} kg"
    return f"{volume:,.1f} kg"


def format_duration(seconds: int) -> str:
    """Format seconds as M:SS, or H:MM:SS past an hour."""
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def generate_share_text(workout: Workout) -> str:
    """Shareable summary text for social posts."""
    stats = calculate_workout_stats(workout)
    return (
        "Just finished a workout on LiftLog!\n\n"
        "Stats:\n"
        f"Duration: {format_duration(stats.duration)}\n"
        f"Total Volume: {format_volume(stats.total_volume)}\n"
        f"{stats.completed_sets} sets completed\n"
        f"{len(workout.exercises)} exercises\n\n"
        "#LiftLog #Fitness #WorkoutComplete"
    )
