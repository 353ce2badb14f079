"""
LiftLog Exercise Library
Static exercise definitions with per-muscle base activation.

The first five entries (bench press, squat, pull up, deadlift, push up) carry
the reference activation tables. The remaining entries are estimates added so
common template lifts show up in the muscle analysis; tune them freely.
Names that match no entry are skipped by the analysis.
"""
from typing import Optional

from models import (
    Exercise, ExerciseDefinition, MovementType, MuscleContribution, MuscleGroup
)


def _muscles(**activation: float) -> tuple[MuscleContribution, ...]:
    return tuple(
        MuscleContribution(name=name.replace("_", " "), base_activation=value)
        for name, value in activation.items()
    )


# ============================================================
# Exercise -> Muscle Activation Library
# Base activations are percentages and sum to ~100 per exercise.
# Declaration order matters: name lookups return the first match.
# ============================================================

EXERCISE_LIBRARY: tuple[ExerciseDefinition, ...] = (
    # === CHEST ===
    ExerciseDefinition(
        id="bench_press", name="Barbell Bench Press", category="Chest", equipment="Barbell",
        type=MovementType.COMPOUND, intensity_multiplier=0.4, max_cap=85,
        muscles=_muscles(Pectoralis_Major=60, Triceps=25, Anterior_Deltoid=15),
    ),
    # === LEGS ===
    ExerciseDefinition(
        id="squat", name="Barbell Squat", category="Legs", equipment="Barbell",
        type=MovementType.COMPOUND, intensity_multiplier=0.45, max_cap=90,
        muscles=_muscles(Quadriceps=40, Glutes=35, Hamstrings=15, Core=10),
    ),
    # === BACK ===
    ExerciseDefinition(
        id="pullup", name="Pull Up", category="Back", equipment="Bodyweight",
        type=MovementType.COMPOUND, intensity_multiplier=0.35, max_cap=85,
        muscles=_muscles(Latissimus_Dorsi=50, Biceps=30, Mid_Back=20),
    ),
    ExerciseDefinition(
        id="deadlift", name="Barbell Deadlift", category="Back", equipment="Barbell",
        type=MovementType.COMPOUND, intensity_multiplier=0.5, max_cap=95,
        muscles=_muscles(Hamstrings=35, Glutes=30, Lower_Back=20, Core=15),
    ),
    ExerciseDefinition(
        id="pushup", name="Push Up", category="Chest", equipment="Bodyweight",
        type=MovementType.COMPOUND, intensity_multiplier=0.3, max_cap=75,
        muscles=_muscles(Pectoralis_Major=55, Triceps=30, Anterior_Deltoid=15),
    ),
    ExerciseDefinition(
        id="barbell_row", name="Barbell Row", category="Back", equipment="Barbell",
        type=MovementType.COMPOUND, intensity_multiplier=0.4, max_cap=85,
        muscles=_muscles(Latissimus_Dorsi=40, Mid_Back=30, Biceps=20, Lower_Back=10),
    ),
    ExerciseDefinition(
        id="lat_pulldown", name="Lat Pulldown", category="Back", equipment="Cable",
        type=MovementType.COMPOUND, intensity_multiplier=0.35, max_cap=80,
        muscles=_muscles(Latissimus_Dorsi=55, Biceps=30, Mid_Back=15),
    ),
    ExerciseDefinition(
        id="romanian_deadlift", name="Romanian Deadlift", category="Legs", equipment="Barbell",
        type=MovementType.COMPOUND, intensity_multiplier=0.45, max_cap=90,
        muscles=_muscles(Hamstrings=50, Glutes=30, Lower_Back=20),
    ),
    # === SHOULDERS ===
    ExerciseDefinition(
        id="overhead_press", name="Overhead Press", category="Shoulders", equipment="Barbell",
        type=MovementType.COMPOUND, intensity_multiplier=0.45, max_cap=85,
        muscles=_muscles(Anterior_Deltoid=50, Triceps=30, Lateral_Deltoid=20),
    ),
    ExerciseDefinition(
        id="dumbbell_shoulder_press", name="Dumbbell Shoulder Press", category="Shoulders",
        equipment="Dumbbell", type=MovementType.COMPOUND, intensity_multiplier=0.4, max_cap=80,
        muscles=_muscles(Anterior_Deltoid=50, Lateral_Deltoid=25, Triceps=25),
    ),
    ExerciseDefinition(
        id="lateral_raise", name="Lateral Raise", category="Shoulders", equipment="Dumbbell",
        type=MovementType.ISOLATION, intensity_multiplier=0.3, max_cap=75,
        muscles=_muscles(Lateral_Deltoid=80, Trapezius=20),
    ),
    # === ARMS ===
    ExerciseDefinition(
        id="barbell_curl", name="Barbell Curl", category="Arms", equipment="Barbell",
        type=MovementType.ISOLATION, intensity_multiplier=0.35, max_cap=80,
        muscles=_muscles(Biceps=85, Forearms=15),
    ),
    ExerciseDefinition(
        id="tricep_pushdown", name="Tricep Pushdown", category="Arms", equipment="Cable",
        type=MovementType.ISOLATION, intensity_multiplier=0.3, max_cap=80,
        muscles=_muscles(Triceps=90, Forearms=10),
    ),
    # === LEGS ===
    ExerciseDefinition(
        id="leg_press", name="Leg Press", category="Legs", equipment="Machine",
        type=MovementType.COMPOUND, intensity_multiplier=0.3, max_cap=85,
        muscles=_muscles(Quadriceps=55, Glutes=30, Hamstrings=15),
    ),
    ExerciseDefinition(
        id="lunge", name="Lunge", category="Legs", equipment="Dumbbell",
        type=MovementType.COMPOUND, intensity_multiplier=0.35, max_cap=80,
        muscles=_muscles(Quadriceps=45, Glutes=35, Hamstrings=10, Calves=10),
    ),
    # === CORE ===
    ExerciseDefinition(
        id="plank", name="Plank", category="Core", equipment="Bodyweight",
        type=MovementType.ISOLATION, intensity_multiplier=0.3, max_cap=70,
        muscles=_muscles(Core=75, Anterior_Deltoid=15, Glutes=10),
    ),
)


def normalize_exercise_name(name: str) -> str:
    """Normalize exercise name for lookup."""
    return name.lower().strip()


def find_by_id(exercise_id: str) -> Optional[ExerciseDefinition]:
    """Get an exercise definition by its exact id."""
    for definition in EXERCISE_LIBRARY:
        if definition.id == exercise_id:
            return definition
    return None


def find_by_name(exercise_name: str) -> Optional[ExerciseDefinition]:
    """
    Get an exercise definition by fuzzy name match.
    Either name containing the other counts as a match; the first entry in
    declaration order wins when several do.
    """
    normalized = normalize_exercise_name(exercise_name or "")
    if not normalized:
        return None

    for definition in EXERCISE_LIBRARY:
        library_name = normalize_exercise_name(definition.name)
        if normalized in library_name or library_name in normalized:
            return definition

    return None


def find(id_or_name: str) -> Optional[ExerciseDefinition]:
    """Resolve by exact id first, then by name."""
    return find_by_id(id_or_name) or find_by_name(id_or_name)


# ============================================================
# Pickable exercise catalog
# ============================================================

EXERCISE_CATALOG: tuple[Exercise, ...] = (
    Exercise(id="bench_press", name="Bench Press", muscle_group=MuscleGroup.CHEST, equipment="barbell"),
    Exercise(id="pushup", name="Push Up", muscle_group=MuscleGroup.CHEST, equipment="bodyweight"),
    Exercise(id="squat", name="Squat", muscle_group=MuscleGroup.LEGS, equipment="barbell"),
    Exercise(id="deadlift", name="Deadlift", muscle_group=MuscleGroup.BACK, equipment="barbell"),
    Exercise(id="pullup", name="Pull Up", muscle_group=MuscleGroup.BACK, equipment="bodyweight"),
    Exercise(id="dumbbell_curl", name="Dumbbell Curl", muscle_group=MuscleGroup.ARMS, equipment="dumbbell"),
    Exercise(id="dumbbell_shoulder_press", name="Shoulder Press", muscle_group=MuscleGroup.SHOULDERS, equipment="dumbbell"),
    Exercise(id="plank", name="Plank", muscle_group=MuscleGroup.CORE, equipment="bodyweight"),
    Exercise(id="tricep_dip", name="Tricep Dip", muscle_group=MuscleGroup.ARMS, equipment="bodyweight"),
    Exercise(id="lunge", name="Lunges", muscle_group=MuscleGroup.LEGS, equipment="dumbbell"),
    Exercise(id="lateral_raise", name="Lateral Raise", muscle_group=MuscleGroup.SHOULDERS, equipment="dumbbell"),
    Exercise(id="crunch", name="Crunch", muscle_group=MuscleGroup.CORE, equipment="bodyweight"),
)


def search_exercises(query: str) -> list[Exercise]:
    """Case-insensitive substring search over the catalog. Blank query returns everything."""
    normalized = normalize_exercise_name(query or "")
    if not normalized:
        return list(EXERCISE_CATALOG)
    return [ex for ex in EXERCISE_CATALOG if normalized in ex.name.lower()]
