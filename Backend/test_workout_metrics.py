"""Tests for workout volume, stats, calories and intensity score."""
import pytest

from conftest import make_exercise, make_workout
from workout_metrics import (
    calculate_calories_burned,
    calculate_intensity_score,
    calculate_volume,
    calculate_workout_stats,
    format_duration,
    format_volume,
    generate_share_text,
)


class TestVolumeAndStats:
    def test_volume_counts_completed_sets_only(self) -> None:
        workout = make_workout(
            make_exercise("Barbell Bench Press", [(10, 80, True), (8, 85, True), (10, 100, False)]),
            make_exercise("Barbell Squat", [(5, 120, True), (5, 140, False)]),
        )
        assert calculate_volume(workout) == 800 + 680 + 600

    def test_scenario_volume(self, bench_workout) -> None:
        assert calculate_volume(bench_workout) == 2020

    def test_stats_total_sets_includes_incomplete(self) -> None:
        workout = make_workout(
            make_exercise("Barbell Bench Press", [(10, 80, True), (8, 85, False)]),
            make_exercise("Pull Up", [(12, 0, True)]),
            duration=900,
        )
        stats = calculate_workout_stats(workout)
        assert stats.total_sets == 3
        assert stats.completed_sets == 2
        assert stats.total_reps == 22
        assert stats.total_volume == 800
        assert stats.duration == 900

    def test_empty_workout(self) -> None:
        stats = calculate_workout_stats(make_workout())
        assert stats.total_sets == 0
        assert stats.total_volume == 0


class TestCalories:
    @pytest.mark.parametrize("volume,expected", [
        (10010, 70),   # 1001 kg/min -> MET 6.0
        (10000, 58),   # exactly 1000 kg/min stays at MET 5.0
        (2510, 47),    # 251 kg/min -> MET 4.0
        (2500, 41),    # 250 kg/min -> baseline 3.5
    ])
    def test_met_tiers(self, volume, expected) -> None:
        workout = make_workout(make_exercise("Deadlift", [(1, volume, True)]), duration=600)
        assert calculate_calories_burned(workout, 70) == expected

    def test_scenario_calories(self, bench_workout) -> None:
        assert calculate_calories_burned(bench_workout, 75) == 131

    def test_default_body_weight_is_70kg(self, bench_workout) -> None:
        assert calculate_calories_burned(bench_workout) == 123

    def test_zero_duration_is_zero(self) -> None:
        workout = make_workout(make_exercise("Deadlift", [(5, 200, True)]), duration=0)
        assert calculate_calories_burned(workout, 80) == 0


class TestIntensityScore:
    def test_zero_duration_is_zero(self) -> None:
        workout = make_workout(make_exercise("Deadlift", [(5, 200, True)]), duration=0)
        assert calculate_intensity_score(workout) == 0

    def test_scenario_score(self, bench_workout) -> None:
        # volume 13.47 * 0.5 + sets 30 * 0.3 + duration 50 * 0.2 = 25.73
        assert calculate_intensity_score(bench_workout) == 26

    def test_components_capped_and_half_rounded_up(self) -> None:
        workout = make_workout(make_exercise("Deadlift", [(1, 100000, True)]), duration=3600)
        # 100 * 0.5 + 5 * 0.3 + 100 * 0.2 = 71.5
        assert calculate_intensity_score(workout) == 72

    def test_never_exceeds_100(self) -> None:
        sets = [(10, 500, True)] * 200
        workout = make_workout(make_exercise("Leg Press", sets), duration=7200)
        assert calculate_intensity_score(workout) == 100


class TestFormatting:
    def test_format_volume(self) -> None:
        assert format_volume(2400) == "2,400 kg"
        assert format_volume(2020.5) == "2,020.5 kg"

    def test_format_duration(self) -> None:
        assert format_duration(2730) == "45:30"
        assert format_duration(5025) == "1:23:45"
        assert format_duration(0) == "0:00"

    def test_share_text(self, bench_workout) -> None:
        text = generate_share_text(bench_workout)
        assert "Duration: 30:00" in text
        assert "Total Volume: 2,020 kg" in text
        assert "3 sets completed" in text
        assert "1 exercises" in text
