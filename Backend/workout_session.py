"""
LiftLog Workout Session
State machine for one user's in-progress workout: exercise/set edits, the
timer, and the finish transition that runs the metric engines and persists
the result.

States: idle -> active -> (finishing) -> idle.
"""
import asyncio
import logging
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import ValidationError

from config import resolve_body_weight
from database import WorkoutStore
from exceptions import (
    InvalidSetFieldError, LastSetError, NoActiveWorkoutError, NoCompletedSetsError,
    NoExercisesError, PersistenceError, SessionBusyError, SetIndexError,
    WorkoutAlreadyActiveError,
)
from exercise_library import find_by_name
from models import (
    Exercise, ExerciseDefinition, SessionState, Workout, WorkoutExercise,
    WorkoutSet, WorkoutTemplate, new_id
)
from muscle_map import analyze_workout
from personal_records import evaluate_personal_records
from session_clock import Clock
from workout_metrics import (
    calculate_calories_burned, calculate_intensity_score, calculate_volume
)

logger = logging.getLogger(__name__)

EDITABLE_SET_FIELDS = {"weight", "reps", "completed", "rpe"}


class WorkoutSession:
    """
    The single active workout of one user.

    Operations are expected to be driven one at a time from one event loop.
    While finish() is waiting on the store the session is `finishing` and
    every mutating operation raises SessionBusyError.
    """

    def __init__(self, store: WorkoutStore, clock: Optional[Clock] = None):
        self.store = store
        self.clock = clock
        self.active_workout: Optional[Workout] = None
        self.workout_timer: int = 0  # seconds
        self.is_timer_running: bool = False
        self.workout_photo: Optional[str] = None
        self._finishing = False

    @property
    def state(self) -> SessionState:
        if self._finishing:
            return SessionState.FINISHING
        if self.active_workout is None:
            return SessionState.IDLE
        return SessionState.ACTIVE

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    def _check_not_busy(self):
        if self._finishing:
            raise SessionBusyError()

    def _require_active(self) -> Workout:
        self._check_not_busy()
        if self.active_workout is None:
            raise NoActiveWorkoutError("No active workout")
        return self.active_workout

    def _get_exercise(self, exercise_index: int) -> WorkoutExercise:
        exercises = self._require_active().exercises
        if not 0 <= exercise_index < len(exercises):
            raise SetIndexError(f"No exercise at position {exercise_index}")
        return exercises[exercise_index]

    def _get_set(self, exercise_index: int, set_index: int) -> WorkoutSet:
        exercise = self._get_exercise(exercise_index)
        if not 0 <= set_index < len(exercise.sets):
            raise SetIndexError(f"{exercise.name} has no set at position {set_index}")
        return exercise.sets[set_index]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _begin(self, workout: Workout):
        self.active_workout = workout
        self.workout_timer = 0
        self.workout_photo = None
        try:
            self.start_timer()
        except Exception:
            self._reset()
            raise
        logger.info("[Session] Started workout %s for user %s", workout.id, workout.user_id)

    def start(self, user_id: str) -> Workout:
        """Start an empty workout. Rejected while another one is active."""
        self._check_not_busy()
        if self.active_workout is not None:
            raise WorkoutAlreadyActiveError()

        workout = Workout(
            user_id=user_id,
            name=f"Workout - {datetime.now():%Y-%m-%d}",
            date=datetime.utcnow(),
        )
        self._begin(workout)
        return workout

    def start_from_template(self, user_id: str, template: WorkoutTemplate) -> Workout:
        """Start a workout pre-filled from a template; weights are left at 0 for the user."""
        self._check_not_busy()
        if self.active_workout is not None:
            raise WorkoutAlreadyActiveError()

        exercises = []
        for template_ex in template.exercises:
            definition = find_by_name(template_ex.name)
            exercises.append(WorkoutExercise(
                exercise_id=definition.id if definition else new_id(),
                name=template_ex.name,
                sets=[WorkoutSet(reps=template_ex.reps) for _ in range(template_ex.sets)],
            ))

        workout = Workout(
            user_id=user_id,
            name=template.name,
            date=datetime.utcnow(),
            exercises=exercises,
        )
        self._begin(workout)
        return workout

    def _reset(self):
        self._stop_clock()
        self.active_workout = None
        self.workout_timer = 0
        self.workout_photo = None

    def discard(self):
        """Drop the active workout without analysing or saving anything."""
        workout = self._require_active()
        self._reset()
        logger.info("[Session] Discarded workout %s", workout.id)

    cancel = discard

    # ------------------------------------------------------------------
    # Exercises and sets
    # ------------------------------------------------------------------

    def add_exercise(self, exercise: Union[Exercise, ExerciseDefinition]) -> WorkoutExercise:
        """Append an exercise with one empty set."""
        workout = self._require_active()
        workout_exercise = WorkoutExercise(
            exercise_id=exercise.id,
            name=exercise.name,
            sets=[WorkoutSet()],
        )
        workout.exercises.append(workout_exercise)
        return workout_exercise

    def update_set(self, exercise_index: int, set_index: int, field: str, value: Any) -> WorkoutSet:
        """Replace one field (weight, reps, completed or rpe) on a set."""
        workout_set = self._get_set(exercise_index, set_index)
        if field not in EDITABLE_SET_FIELDS:
            raise InvalidSetFieldError(f"Cannot edit set field {field!r}")
        try:
            setattr(workout_set, field, value)
        except ValidationError as e:
            raise InvalidSetFieldError(f"Invalid {field}: {value!r}") from e
        return workout_set

    def add_set(self, exercise_index: int) -> WorkoutSet:
        """Append a set that copies reps and weight from the previous one."""
        exercise = self._get_exercise(exercise_index)
        previous = exercise.sets[-1] if exercise.sets else None
        new_set = WorkoutSet(
            reps=previous.reps if previous else 0,
            weight=previous.weight if previous else 0,
        )
        exercise.sets.append(new_set)
        return new_set

    def remove_set(self, exercise_index: int, set_index: int):
        """Remove a set. The last remaining set of an exercise cannot be removed."""
        exercise = self._get_exercise(exercise_index)
        self._get_set(exercise_index, set_index)
        if len(exercise.sets) == 1:
            raise LastSetError(exercise.name)
        del exercise.sets[set_index]

    def set_workout_photo(self, photo: Optional[str]):
        self._require_active()
        self.workout_photo = photo

    # ------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------

    def start_timer(self):
        """Start or resume the timer without resetting elapsed time."""
        self._require_active()
        self.is_timer_running = True
        if self.clock is not None:
            self.clock.start(self.tick)

    def pause_timer(self):
        self._require_active()
        self._stop_clock()

    def stop_timer(self):
        self._check_not_busy()
        self._stop_clock()

    def _stop_clock(self):
        self.is_timer_running = False
        if self.clock is not None:
            self.clock.stop()

    def reset_timer(self):
        self._require_active()
        self.workout_timer = 0

    def tick(self):
        """Advance the timer by one second. Ignored while paused, idle or finishing."""
        if self._finishing or not self.is_timer_running or self.active_workout is None:
            return
        self.workout_timer += 1

    # ------------------------------------------------------------------
    # Finish
    # ------------------------------------------------------------------

    def _validate_for_finish(self) -> Workout:
        self._check_not_busy()
        workout = self.active_workout
        if workout is None:
            raise NoActiveWorkoutError()
        if not workout.exercises:
            raise NoExercisesError()
        if not any(s.completed for ex in workout.exercises for s in ex.sets):
            raise NoCompletedSetsError()
        return workout

    async def finish(self, photo: Optional[str] = None, body_weight_kg: Optional[float] = None) -> Workout:
        """
        Finalize the active workout.

        Validates, computes volume/calories/intensity/muscle analysis using the
        timer as duration, checks personal records, saves the workout and
        updates user stats, then resets to idle. Any failure before the save
        completes leaves the session active and unchanged so the caller can
        retry. A failed stats update is logged and ignored.
        """
        workout = self._validate_for_finish()
        user_id = workout.user_id
        logger.info(
            "[Session] Finishing workout %s: %d exercises, %ds",
            workout.id, len(workout.exercises), self.workout_timer,
        )

        body_weight = resolve_body_weight(body_weight_kg)
        snapshot = workout.model_copy(deep=True, update={"duration": self.workout_timer})

        total_volume = calculate_volume(snapshot)
        completed = snapshot.model_copy(update={
            "total_volume": total_volume,
            "calories": calculate_calories_burned(snapshot, body_weight),
            "intensity_score": calculate_intensity_score(snapshot),
            "photo_url": photo or self.workout_photo,
            "muscle_activation": analyze_workout(snapshot, body_weight),
        })
        logger.info(
            "[Session] Metrics - Volume: %skg, Calories: %s, Intensity: %s",
            total_volume, completed.calories, completed.intensity_score,
        )

        self._finishing = True
        try:
            try:
                records = await evaluate_personal_records(user_id, completed, self.store)
            except Exception as e:
                logger.error("[Session] Failed to store personal records: %s", e)
                raise PersistenceError(f"Could not save personal records: {e}") from e
            if records.records:
                completed.personal_records = records.records

            saved, stats_updated = await asyncio.gather(
                self.store.save_workout(user_id, completed),
                self.store.update_user_stats(user_id, total_volume, completed.duration),
                return_exceptions=True,
            )
            if isinstance(stats_updated, Exception):
                logger.warning("[Session] Error updating user stats: %s", stats_updated)
            if isinstance(saved, Exception):
                logger.error("[Session] Failed to save workout %s: %s", completed.id, saved)
                raise PersistenceError(f"Could not save workout: {saved}") from saved
        finally:
            self._finishing = False

        self._reset()
        logger.info("[Session] Workout %s saved", completed.id)
        return completed


# ============================================================
# Per-user session ownership
# ============================================================

class SessionRegistry:
    """Holds one WorkoutSession per user for the command layer."""

    def __init__(self, store: WorkoutStore, clock_factory=None):
        self.store = store
        self.clock_factory = clock_factory
        self._sessions: dict[str, WorkoutSession] = {}

    def get(self, user_id: str) -> WorkoutSession:
        """Get the user's session, creating an idle one on first use."""
        session = self._sessions.get(user_id)
        if session is None:
            clock = self.clock_factory() if self.clock_factory else None
            session = WorkoutSession(self.store, clock)
            self._sessions[user_id] = session
        return session

    def discard(self, user_id: str):
        """Forget a user's session, dropping any workout in progress."""
        session = self._sessions.pop(user_id, None)
        if session is not None and session.state == SessionState.ACTIVE:
            session.discard()

    def active_users(self) -> list[str]:
        return [uid for uid, s in self._sessions.items() if s.state != SessionState.IDLE]
