"""
LiftLog Personal Records
Compares a finished workout's per-exercise max weight against stored bests.
"""
import logging
from typing import Optional, Protocol

from models import PersonalBest, PersonalRecordResult, PersonalRecordUpdate, Workout, WorkoutExercise

logger = logging.getLogger(__name__)


class PersonalRecordStore(Protocol):
    async def get_personal_best(self, user_id: str, exercise_id: str) -> Optional[PersonalBest]:
        ...

    async def set_best_weights(self, user_id: str, updates: list[PersonalRecordUpdate]) -> None:
        """Persist all updates as one batch: every update commits or none does."""
        ...


def max_completed_weight(exercise: WorkoutExercise) -> float:
    return max((s.weight for s in exercise.sets if s.completed), default=0.0)


def is_new_record(max_weight: float, best_weight: Optional[float]) -> bool:
    """A first logged weight always counts. Otherwise it must strictly beat the best."""
    if max_weight <= 0:
        return False
    return best_weight is None or max_weight > best_weight


def detect_personal_records(workout: Workout, best_weights: dict[str, float]) -> PersonalRecordResult:
    """
    Pure PR check against known bests (exercise_id -> weight).
    Exercises with no completed weight are skipped; bodyweight-only work never sets a PR.
    """
    result = PersonalRecordResult()

    for exercise in workout.exercises:
        max_weight = max_completed_weight(exercise)
        best = best_weights.get(exercise.exercise_id)
        if not is_new_record(max_weight, best):
            continue

        result.records.append(exercise)
        result.updates.append(PersonalRecordUpdate(
            exercise_id=exercise.exercise_id,
            exercise_name=exercise.name,
            weight=max_weight,
            workout_id=workout.id,
            previous_weight=best,
        ))
        # Repeated exercises in one workout compare against the best seen so far
        best_weights = {**best_weights, exercise.exercise_id: max_weight}

    return result


async def evaluate_personal_records(
        user_id: str,
        workout: Workout,
        store: PersonalRecordStore,
) -> PersonalRecordResult:
    """
    Look up stored bests, detect new records and commit the updates as one batch.
    An exercise whose best lookup fails is left out of this evaluation.
    A failed batch commit propagates to the caller.

    A best already written by this same workout (an earlier finish attempt
    whose save failed) is compared through the best it replaced, so a retry
    reports the same records as the first attempt.
    """
    best_weights: dict[str, float] = {}
    checked = []

    for exercise in workout.exercises:
        if max_completed_weight(exercise) <= 0:
            continue
        try:
            best = await store.get_personal_best(user_id, exercise.exercise_id)
        except Exception as e:
            logger.error("[PR] Error checking PR for %s: %s", exercise.name, e)
            continue
        if best is not None and best.workout_id == workout.id:
            best_weight = best.previous_weight
        else:
            best_weight = best.weight if best is not None else None
        if best_weight is not None:
            best_weights[exercise.exercise_id] = best_weight
        checked.append(exercise)

    result = detect_personal_records(workout.model_copy(update={"exercises": checked}), best_weights)

    if result.updates:
        await store.set_best_weights(user_id, result.updates)
        logger.info("[PR] %d new personal record(s) for user %s", len(result.updates), user_id)

    return result
