"""
Seed MongoDB with simulated finished workouts.
Each workout is played through a WorkoutSession so the stored documents carry
real metrics, muscle analysis and personal records.

Usage:
    python generate_mock_data.py
"""
import asyncio
import logging
import random
import sys
from dotenv import load_dotenv

# Load environment variables explicitly
load_dotenv()

from config import configure_logging, settings
from database import MongoWorkoutStore
from templates import WORKOUT_TEMPLATES
from workout_session import WorkoutSession

logger = logging.getLogger("generate_mock_data")

# Configuration
NUM_USERS = 20
WORKOUTS_PER_USER = 5


def simulate_sets(session: WorkoutSession):
    """Fill in weights, complete most sets and run the timer."""
    for ex_idx, exercise in enumerate(session.active_workout.exercises):
        weight = random.choice([0, 20, 40, 60, 80, 100])
        for set_idx in range(len(exercise.sets)):
            session.update_set(ex_idx, set_idx, "weight", weight + 2.5 * set_idx)
            session.update_set(ex_idx, set_idx, "completed", random.random() < 0.85)

    for _ in range(random.randint(30, 90) * 60):
        session.tick()


async def generate_workouts(store: MongoWorkoutStore) -> int:
    count = 0
    for i in range(NUM_USERS):
        user_id = f"mock_user_{i}"
        body_weight = random.choice([None, 60, 70, 85, 100])
        session = WorkoutSession(store)

        for _ in range(random.randint(1, WORKOUTS_PER_USER)):
            session.start_from_template(user_id, random.choice(WORKOUT_TEMPLATES))
            simulate_sets(session)
            if not any(s.completed for ex in session.active_workout.exercises for s in ex.sets):
                session.discard()
                continue
            await session.finish(body_weight_kg=body_weight)
            count += 1

    return count


async def main():
    store = MongoWorkoutStore()
    try:
        await store.setup_indexes()
        count = await generate_workouts(store)
        logger.info("Generated %d workouts", count)
    finally:
        await store.close()


if __name__ == "__main__":
    configure_logging()
    if not settings.MONGODB_URI:
        logger.error("MONGODB_URI not set in config/env")
        sys.exit(1)

    logger.info("Connecting to %s...", settings.MONGODB_DB_NAME)
    asyncio.run(main())
    logger.info("Done!")
