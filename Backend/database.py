"""
LiftLog Database Module
Async MongoDB persistence for finished workouts, user stats and personal records.
"""
import logging
from datetime import datetime
from typing import Optional, Protocol
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import IndexModel, ASCENDING, DESCENDING, UpdateOne

from config import settings
from models import PersonalBest, PersonalRecordUpdate, UserStats, Workout

logger = logging.getLogger(__name__)


class WorkoutStore(Protocol):
    """Persistence collaborator used by the workout session."""

    async def save_workout(self, user_id: str, workout: Workout) -> None:
        ...

    async def update_user_stats(self, user_id: str, volume: float, duration: int) -> None:
        ...

    async def get_user_stats(self, user_id: str) -> Optional[UserStats]:
        ...

    async def get_personal_best(self, user_id: str, exercise_id: str) -> Optional[PersonalBest]:
        ...

    async def set_best_weights(self, user_id: str, updates: list[PersonalRecordUpdate]) -> None:
        ...


def workout_to_document(workout: Workout) -> dict:
    """Serialize a workout for MongoDB, dropping unset optional fields."""
    doc = workout.model_dump(mode="json", by_alias=True, exclude_none=True)
    doc["date"] = workout.date
    return doc


# ============================================================================
# MONGODB STORE
# ============================================================================

class MongoWorkoutStore:
    """Async MongoDB store for LiftLog."""

    def __init__(self, uri: str = settings.MONGODB_URI, db_name: str = settings.MONGODB_DB_NAME):
        self.client = AsyncIOMotorClient(uri)
        self.db = self.client[db_name]

        # Collections
        self.workouts = self.db.workouts
        self.user_stats = self.db.user_stats
        self.personal_records = self.db.personal_records

    async def setup_indexes(self):
        """Create necessary indexes for performance."""
        await self.workouts.create_indexes([
            IndexModel([("user_id", ASCENDING), ("date", DESCENDING)]),
        ])
        await self.personal_records.create_indexes([
            IndexModel([("user_id", ASCENDING), ("exercise_id", ASCENDING)], unique=True),
        ])
        logger.info("[DB] Indexes created")

    async def close(self):
        """Close database connection."""
        self.client.close()

    # ------------------------------------------------------------------
    # Workouts
    # ------------------------------------------------------------------

    async def save_workout(self, user_id: str, workout: Workout) -> None:
        """Upsert the finished workout by id, so a retried finish does not duplicate it."""
        doc = workout_to_document(workout)
        doc["user_id"] = user_id
        doc["created_at"] = datetime.utcnow()

        try:
            await self.workouts.replace_one({"_id": workout.id}, doc, upsert=True)
        except Exception as e:
            logger.error("[DB] Error saving workout %s for user %s: %s", workout.id, user_id, e)
            raise
        logger.info("[DB] Workout saved: %s", workout.id)

    async def get_workout(self, workout_id: str) -> Optional[Workout]:
        doc = await self.workouts.find_one({"_id": workout_id})
        return Workout(**doc) if doc else None

    async def get_user_workouts(self, user_id: str, limit: int = 10) -> list[Workout]:
        """Get workouts for a user, most recent first."""
        cursor = self.workouts.find({"user_id": user_id}).sort("date", DESCENDING).limit(limit)
        return [Workout(**doc) async for doc in cursor]

    # ------------------------------------------------------------------
    # User stats
    # ------------------------------------------------------------------

    async def update_user_stats(self, user_id: str, volume: float, duration: int) -> None:
        """Increment aggregate stats, creating the document on first workout."""
        await self.user_stats.update_one(
            {"_id": user_id},
            {
                "$inc": {
                    "total_workouts": 1,
                    "total_volume": volume,
                    "total_time": duration,
                },
                "$set": {"last_workout_date": datetime.utcnow()},
            },
            upsert=True,
        )

    async def get_user_stats(self, user_id: str) -> Optional[UserStats]:
        doc = await self.user_stats.find_one({"_id": user_id})
        return UserStats(**doc) if doc else None

    # ------------------------------------------------------------------
    # Personal records
    # ------------------------------------------------------------------

    async def get_personal_best(self, user_id: str, exercise_id: str) -> Optional[PersonalBest]:
        doc = await self.personal_records.find_one({"user_id": user_id, "exercise_id": exercise_id})
        if not doc:
            return None
        return PersonalBest(
            weight=doc.get("weight", 0),
            workout_id=doc.get("workout_id"),
            previous_weight=doc.get("previous_weight"),
        )

    async def set_best_weights(self, user_id: str, updates: list[PersonalRecordUpdate]) -> None:
        """Write all record updates in one transaction (requires a replica set)."""
        if not updates:
            return

        now = datetime.utcnow()
        operations = [
            UpdateOne(
                {"user_id": user_id, "exercise_id": update.exercise_id},
                {
                    "$set": {
                        "weight": update.weight,
                        "date": now,
                        "workout_id": update.workout_id,
                        "previous_weight": update.previous_weight,
                        "exercise_name": update.exercise_name,
                    }
                },
                upsert=True,
            )
            for update in updates
        ]

        async with await self.client.start_session() as session:
            async with session.start_transaction():
                await self.personal_records.bulk_write(operations, ordered=True, session=session)
