"""
LiftLog Exceptions
Errors raised by the workout session and its collaborators.
"""


class FitnessCoreError(Exception):
    """Base error for the workout core."""


# ============================================================
# Validation
# ============================================================

class WorkoutValidationError(FitnessCoreError):
    """A session operation was rejected. The message is safe to show the user."""


class NoActiveWorkoutError(WorkoutValidationError):
    def __init__(self, message: str = "No active workout to finish"):
        super().__init__(message)


class NoExercisesError(WorkoutValidationError):
    def __init__(self, message: str = "Cannot finish workout with no exercises"):
        super().__init__(message)


class NoCompletedSetsError(WorkoutValidationError):
    def __init__(self, message: str = "Please complete at least one set before finishing"):
        super().__init__(message)


class WorkoutAlreadyActiveError(WorkoutValidationError):
    def __init__(self, message: str = "A workout is already in progress. Finish or discard it first"):
        super().__init__(message)


class SetIndexError(WorkoutValidationError):
    """Exercise or set index outside the active workout."""


class LastSetError(WorkoutValidationError):
    def __init__(self, exercise_name: str):
        super().__init__(f"Cannot remove the only set of {exercise_name}")
        self.exercise_name = exercise_name


class InvalidSetFieldError(WorkoutValidationError):
    """Unknown set field, or a value the set model rejects."""


# ============================================================
# Session / Persistence
# ============================================================

class SessionBusyError(FitnessCoreError):
    def __init__(self, message: str = "Workout is being saved, try again in a moment"):
        super().__init__(message)


class PersistenceError(FitnessCoreError):
    """The finished workout could not be saved. The session stays active for a retry."""
