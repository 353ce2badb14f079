"""Shared test fixtures: in-memory store, manual clock, workout builders."""
import asyncio
from typing import Callable, Optional

import pytest

from models import PersonalBest, PersonalRecordUpdate, UserStats, Workout, WorkoutExercise, WorkoutSet
from workout_session import WorkoutSession


class InMemoryStore:
    """WorkoutStore double with switchable failures."""

    def __init__(self):
        self.workouts: dict[str, Workout] = {}
        self.stats: dict[str, UserStats] = {}
        self.bests: dict[tuple[str, str], float] = {}
        self.best_sources: dict[tuple[str, str], tuple] = {}
        self.fail_save = False
        self.fail_stats = False
        self.fail_pr_commit = False
        self.fail_pr_lookup: set[str] = set()
        self.save_gate: Optional[asyncio.Event] = None
        self.save_calls = 0
        self.stats_calls = 0
        self.pr_batches: list[list[PersonalRecordUpdate]] = []

    async def save_workout(self, user_id: str, workout: Workout) -> None:
        self.save_calls += 1
        if self.save_gate is not None:
            await self.save_gate.wait()
        if self.fail_save:
            raise RuntimeError("database unavailable")
        self.workouts[workout.id] = workout

    async def update_user_stats(self, user_id: str, volume: float, duration: int) -> None:
        self.stats_calls += 1
        if self.fail_stats:
            raise RuntimeError("stats unavailable")
        stats = self.stats.setdefault(user_id, UserStats(_id=user_id))
        stats.total_workouts += 1
        stats.total_volume += volume
        stats.total_time += duration

    async def get_user_stats(self, user_id: str) -> Optional[UserStats]:
        return self.stats.get(user_id)

    async def get_personal_best(self, user_id: str, exercise_id: str) -> Optional[PersonalBest]:
        if exercise_id in self.fail_pr_lookup:
            raise RuntimeError(f"lookup failed for {exercise_id}")
        key = (user_id, exercise_id)
        if key not in self.bests:
            return None
        workout_id, previous = self.best_sources.get(key, (None, None))
        return PersonalBest(weight=self.bests[key], workout_id=workout_id, previous_weight=previous)

    async def set_best_weights(self, user_id: str, updates: list[PersonalRecordUpdate]) -> None:
        if self.fail_pr_commit:
            raise RuntimeError("batch commit failed")
        self.pr_batches.append(list(updates))
        for update in updates:
            self.bests[(user_id, update.exercise_id)] = update.weight
            self.best_sources[(user_id, update.exercise_id)] = (update.workout_id, update.previous_weight)


class ManualClock:
    """Clock double: records start/stop, ticks only when the test says so."""

    def __init__(self):
        self.callback: Optional[Callable[[], None]] = None
        self.starts = 0
        self.stops = 0

    @property
    def running(self) -> bool:
        return self.callback is not None

    def start(self, callback: Callable[[], None]) -> None:
        self.starts += 1
        self.callback = callback

    def stop(self) -> None:
        self.stops += 1
        self.callback = None

    def fire(self, times: int = 1):
        for _ in range(times):
            if self.callback is not None:
                self.callback()


def make_exercise(name: str, sets: list[tuple], exercise_id: Optional[str] = None) -> WorkoutExercise:
    """sets: (reps, weight, completed) triples."""
    return WorkoutExercise(
        exercise_id=exercise_id or name.lower().replace(" ", "_"),
        name=name,
        sets=[WorkoutSet(reps=r, weight=w, completed=c) for r, w, c in sets],
    )


def make_workout(*exercises: WorkoutExercise, duration: int = 0, user_id: str = "user-1") -> Workout:
    return Workout(user_id=user_id, name="Test Workout", duration=duration, exercises=list(exercises))


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def session(store, clock) -> WorkoutSession:
    return WorkoutSession(store, clock)


@pytest.fixture
def active_session(session) -> WorkoutSession:
    session.start("user-1")
    return session


@pytest.fixture
def bench_workout() -> Workout:
    """Barbell Bench Press 10x80, 8x85, 6x90 (all completed), 30 minutes."""
    return make_workout(
        make_exercise(
            "Barbell Bench Press",
            [(10, 80, True), (8, 85, True), (6, 90, True)],
            exercise_id="bench_press",
        ),
        duration=1800,
    )
