"""
LiftLog Data Models
Pydantic models for workout sessions, derived analysis and MongoDB documents.
"""
import json
import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field
from enum import Enum


def new_id() -> str:
    return uuid.uuid4().hex


# ============================================================
# Enums
# ============================================================

class MovementType(str, Enum):
    COMPOUND = "compound"
    ISOLATION = "isolation"


class MuscleGroup(str, Enum):
    CHEST = "chest"
    BACK = "back"
    LEGS = "legs"
    SHOULDERS = "shoulders"
    ARMS = "arms"
    CORE = "core"
    FULL_BODY = "full_body"
    CARDIO = "cardio"


class IntensityLevel(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"


class StressLevel(str, Enum):
    MINIMAL = "Minimal"
    LIGHT = "Light"
    MODERATE = "Moderate"
    HIGH = "High"
    INTENSE = "Intense"
    EXTREME = "Extreme"


class DifficultyLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class SessionState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    FINISHING = "finishing"


# ============================================================
# Exercise Library
# ============================================================

class MuscleContribution(BaseModel):
    """Base activation a library exercise puts on one muscle."""
    name: str
    base_activation: float = Field(..., ge=0, le=100)

    class Config:
        frozen = True


class ExerciseDefinition(BaseModel):
    """Library entry used to resolve muscle activation."""
    id: str
    name: str
    category: str
    equipment: str
    type: MovementType = MovementType.COMPOUND
    intensity_multiplier: float = 0.4
    max_cap: float = Field(85, ge=0, le=100)
    muscles: tuple[MuscleContribution, ...] = ()

    class Config:
        frozen = True


class Exercise(BaseModel):
    """Catalog exercise a user can add to an active workout."""
    id: str
    name: str
    muscle_group: MuscleGroup
    equipment: Optional[str] = None
    video_url: Optional[str] = None

    class Config:
        use_enum_values = True


# ============================================================
# Workout Documents
# ============================================================

class WorkoutSet(BaseModel):
    """One performance of an exercise at a given weight and reps."""
    id: str = Field(default_factory=new_id)
    reps: int = Field(0, ge=0)
    weight: float = Field(0, ge=0)  # kg
    rpe: Optional[float] = Field(None, ge=1, le=10)
    completed: bool = False

    class Config:
        validate_assignment = True


class WorkoutExercise(BaseModel):
    """An exercise inside a workout. `name` is what the library lookup uses."""
    exercise_id: str
    name: str
    sets: list[WorkoutSet] = Field(default_factory=list)

    class Config:
        validate_assignment = True


class MuscleActivationResult(BaseModel):
    muscle_name: str
    final_percentage: float
    intensity_level: IntensityLevel
    stress_level: StressLevel
    color: str  # heatmap hex color
    recovery_hours: int
    recovery_suggestion: str

    class Config:
        use_enum_values = True


class MuscleImbalance(BaseModel):
    """Push/pull balance verdict for one workout."""
    push_activation: float
    pull_activation: float
    ratio: float
    is_balanced: bool
    recommendation: str


class WorkoutMuscleAnalysis(BaseModel):
    total_muscles: list[MuscleActivationResult] = Field(default_factory=list)
    overall_intensity: IntensityLevel = IntensityLevel.LOW
    estimated_recovery_days: int = 1
    estimated_recovery_hours: int = 24
    muscle_imbalance: Optional[MuscleImbalance] = None

    class Config:
        use_enum_values = True


class Workout(BaseModel):
    """Workout session document."""
    id: str = Field(default_factory=new_id, alias="_id")
    user_id: str
    name: str
    date: datetime = Field(default_factory=datetime.utcnow)
    duration: int = 0  # seconds
    exercises: list[WorkoutExercise] = Field(default_factory=list)
    notes: Optional[str] = None
    photo_url: Optional[str] = None

    # Filled in by finish()
    total_volume: Optional[float] = None
    calories: Optional[int] = None
    intensity_score: Optional[int] = None
    personal_records: Optional[list[WorkoutExercise]] = None
    muscle_activation: Optional[WorkoutMuscleAnalysis] = None

    class Config:
        populate_by_name = True


class WorkoutStats(BaseModel):
    """Aggregate numbers for one workout."""
    total_volume: float = 0
    total_sets: int = 0
    total_reps: int = 0
    completed_sets: int = 0
    duration: int = 0


class UserStats(BaseModel):
    """Aggregate per-user totals kept alongside the workout history."""
    id: Optional[str] = Field(None, alias="_id")
    total_workouts: int = 0
    total_volume: float = 0
    total_time: int = 0  # seconds
    last_workout_date: Optional[datetime] = None

    class Config:
        populate_by_name = True


# ============================================================
# Templates
# ============================================================

class TemplateExercise(BaseModel):
    name: str
    sets: int = Field(..., ge=1)
    reps: int = Field(..., ge=0)
    rest_seconds: Optional[int] = None


class WorkoutTemplate(BaseModel):
    id: str
    name: str
    description: str = ""
    difficulty: DifficultyLevel = DifficultyLevel.INTERMEDIATE
    duration_minutes: int = 60
    target_muscles: list[str] = Field(default_factory=list)
    exercises: list[TemplateExercise] = Field(default_factory=list)

    class Config:
        use_enum_values = True


# ============================================================
# Personal Records
# ============================================================

class PersonalBest(BaseModel):
    """Stored best weight for one exercise, the workout that set it and the best it replaced."""
    weight: float
    workout_id: Optional[str] = None
    previous_weight: Optional[float] = None


class PersonalRecordUpdate(BaseModel):
    """New best weight to persist for one exercise."""
    exercise_id: str
    exercise_name: str
    weight: float
    workout_id: str
    previous_weight: Optional[float] = None


class PersonalRecordResult(BaseModel):
    records: list[WorkoutExercise] = Field(default_factory=list)
    updates: list[PersonalRecordUpdate] = Field(default_factory=list)


def export_analysis_json(analysis: WorkoutMuscleAnalysis) -> str:
    """Export a muscle analysis as indented JSON."""
    return json.dumps(analysis.model_dump(mode="json"), indent=2)
