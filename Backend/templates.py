"""
LiftLog Workout Templates
Predefined sessions that can seed a new workout.
"""
from typing import Optional

from models import DifficultyLevel, TemplateExercise, WorkoutTemplate


def _exercises(*rows: tuple[str, int, int]) -> list[TemplateExercise]:
    return [TemplateExercise(name=name, sets=sets, reps=reps) for name, sets, reps in rows]


WORKOUT_TEMPLATES: tuple[WorkoutTemplate, ...] = (
    WorkoutTemplate(
        id="push-day",
        name="Push Day",
        description="Chest + Shoulders + Triceps",
        difficulty=DifficultyLevel.INTERMEDIATE,
        duration_minutes=60,
        target_muscles=["Chest", "Shoulders", "Triceps"],
        exercises=_exercises(
            ("Barbell Bench Press", 4, 8),
            ("Incline Dumbbell Press", 3, 10),
            ("Overhead Shoulder Press", 4, 8),
            ("Lateral Raises", 3, 15),
            ("Tricep Pushdowns", 3, 12),
            ("Dips", 3, 10),
        ),
    ),
    WorkoutTemplate(
        id="pull-day",
        name="Pull Day",
        description="Back + Biceps",
        difficulty=DifficultyLevel.INTERMEDIATE,
        duration_minutes=60,
        target_muscles=["Lats", "Mid Back", "Biceps"],
        exercises=_exercises(
            ("Pull Up", 4, 8),
            ("Barbell Rows", 4, 8),
            ("Lat Pulldown", 3, 12),
            ("Face Pulls", 3, 15),
            ("Barbell Curl", 3, 10),
            ("Hammer Curl", 3, 12),
        ),
    ),
    WorkoutTemplate(
        id="leg-day",
        name="Leg Day",
        description="Glutes + Quads + Hamstrings",
        difficulty=DifficultyLevel.INTERMEDIATE,
        duration_minutes=65,
        target_muscles=["Quads", "Glutes", "Hamstrings", "Calves"],
        exercises=_exercises(
            ("Barbell Squat", 4, 8),
            ("Romanian Deadlift", 4, 8),
            ("Leg Press", 3, 12),
            ("Bulgarian Split Squat", 3, 10),
            ("Leg Curl", 3, 12),
            ("Calf Raises", 4, 15),
        ),
    ),
    WorkoutTemplate(
        id="upper-body-strength",
        name="Upper Body Strength",
        description="Full Upper Body Power",
        difficulty=DifficultyLevel.ADVANCED,
        duration_minutes=70,
        target_muscles=["Chest", "Back", "Shoulders", "Arms"],
        exercises=_exercises(
            ("Barbell Bench Press", 5, 5),
            ("Pull Up", 5, 5),
            ("Overhead Press", 4, 6),
            ("Barbell Row", 4, 6),
            ("Skull Crushers", 3, 10),
            ("Barbell Curl", 3, 10),
        ),
    ),
    WorkoutTemplate(
        id="full-body-beginner",
        name="Full Body Beginner",
        description="Perfect for getting started",
        difficulty=DifficultyLevel.BEGINNER,
        duration_minutes=45,
        target_muscles=["Full Body"],
        exercises=_exercises(
            ("Goblet Squats", 3, 12),
            ("Push Up", 3, 10),
            ("Lat Pulldown", 3, 12),
            ("Dumbbell Shoulder Press", 3, 12),
            ("Plank", 3, 30),
            ("Glute Bridge", 3, 15),
        ),
    ),
    WorkoutTemplate(
        id="fat-burn-hiit",
        name="Fat Burn HIIT",
        description="High-intensity full body workout",
        difficulty=DifficultyLevel.INTERMEDIATE,
        duration_minutes=30,
        target_muscles=["Full Body", "Core"],
        exercises=_exercises(
            ("Burpees", 3, 15),
            ("Mountain Climbers", 3, 30),
            ("Kettlebell Swings", 3, 20),
            ("Jump Squats", 3, 15),
            ("Push Up", 3, 12),
            ("Plank", 3, 45),
        ),
    ),
)


def get_template_by_id(template_id: str) -> Optional[WorkoutTemplate]:
    """Get a template by id."""
    for template in WORKOUT_TEMPLATES:
        if template.id == template_id:
            return template
    return None
