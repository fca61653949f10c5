# -*- coding: utf-8 -*-
"""Tests for project statistics, participant aggregates and the leaderboard."""

import math
from datetime import date, datetime, timezone
from types import SimpleNamespace

import pytest

from greendex.calculation.factors import CO2_FACTORS, ParticipantActivityType
from greendex.calculation.statistics import (
    ActivityBreakdown,
    ParticipantResult,
    ProjectStats,
    calculate_project_duration,
    compute_project_stats,
    evaluate_participant,
    get_project_statistics,
    rank_participants,
)


# ==============================================================================
# Project duration and summary
# ==============================================================================

class TestCalculateProjectDuration:
    """Tests for calculate_project_duration."""

    def test_invalid_dates(self):
        assert calculate_project_duration("invalid", "also-invalid") == 0
        assert calculate_project_duration(None, "2025-01-01") == 0
        assert calculate_project_duration(20250101, 20250105) == 0

    def test_end_before_start(self):
        assert calculate_project_duration(date(2025, 1, 10), date(2025, 1, 1)) == 0

    def test_rounds_up_to_whole_days(self):
        assert calculate_project_duration("2025-01-01T00:00:00Z", "2025-01-02T12:00:00Z") == 2

    def test_same_day(self):
        assert calculate_project_duration("2025-06-01", "2025-06-01") == 0

    def test_mixed_inputs(self):
        start = datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert calculate_project_duration(start, date(2025, 1, 8)) == 7
        assert calculate_project_duration(date(2025, 1, 1), "2025-01-05") == 4


class TestGetProjectStatistics:
    """Tests for get_project_statistics."""

    def test_counts_distance_duration_and_co2(self):
        project = {"startDate": "2025-01-01", "endDate": "2025-01-05"}
        participants = [{}, {}, {}]
        activities = [
            {"activityType": "car", "distanceKm": 10},
            {"activityType": "train", "distanceKm": 20.5},
            {"activityType": "unknown", "distanceKm": 15},
            {"activityType": "bus", "distanceKm": -5},
        ]

        stats = get_project_statistics(project, participants, activities)

        assert stats.participants_count == 3
        assert stats.activities_count == 4
        # Distance counts any positive distance; CO2 only priced types
        assert stats.total_distance_km == pytest.approx(45.5)
        assert stats.duration_days == 4
        assert stats.activities_co2_kg == pytest.approx(10 * CO2_FACTORS["car"] + 20.5 * CO2_FACTORS["train"])

    def test_missing_inputs(self):
        stats = get_project_statistics(None, None, None)

        assert stats.to_dict() == {
            "participants_count": 0,
            "activities_count": 0,
            "total_distance_km": 0,
            "duration_days": 0,
            "activities_co2_kg": 0,
        }

    def test_project_object_with_snake_case_dates(self):
        project = SimpleNamespace(start_date=date(2025, 3, 1), end_date=date(2025, 3, 11))
        assert get_project_statistics(project, [], []).duration_days == 10

    def test_string_distances(self, project_activities):
        stats = get_project_statistics(None, [], project_activities)
        assert stats.total_distance_km == pytest.approx(460.5)


# ==============================================================================
# Participants
# ==============================================================================

@pytest.fixture
def participants():
    return [
        evaluate_participant({"firstName": "Ana", "flightKm": 1000, "days": 5, "food": "every day"}, participant_id="p1"),
        evaluate_participant({"firstName": "Ben", "trainKm": 300, "days": 5, "food": "never"}, participant_id="p2"),
        evaluate_participant({"firstName": "Cleo", "carKm": 400, "carPassengers": 2, "days": 5}, participant_id="p3"),
    ]


class TestEvaluateParticipant:
    """Tests for evaluate_participant."""

    def test_result_matches_calculators(self, scenario_answers, project_activities):
        result = evaluate_participant(scenario_answers, project_activities, participant_id="42")

        assert result.participant_id == "42"
        assert result.total_co2 == result.emissions.total_co2
        assert result.emissions.project_activities_co2 > 0
        assert sum(a.co2_kg for a in result.activities) == pytest.approx(result.emissions.transport_co2)

    def test_name_comes_from_answers(self):
        assert evaluate_participant({"firstName": "Ana"}).name == "Ana"
        assert evaluate_participant(None).name is None

    def test_project_activities_iterator_is_consumed_once(self, project_activities):
        result = evaluate_participant({}, iter(project_activities))
        assert result.emissions.project_activities_co2 == pytest.approx(
            120.5 * 0.089 + 300 * 0.041 + 40 * 0.115
        )

    def test_to_dict(self, participants):
        data = participants[0].to_dict()

        assert data["participant_id"] == "p1"
        assert data["name"] == "Ana"
        assert data["activities"] == [{"type": "plane", "distance_km": 2000, "co2_kg": pytest.approx(510.0)}]
        assert data["total_co2"] == data["emissions"]["total_co2"]


class TestComputeProjectStats:
    """Tests for compute_project_stats."""

    def test_totals_and_average(self, participants):
        stats = compute_project_stats(participants)
        total = sum(p.total_co2 for p in participants)

        assert stats.total_participants == 3
        assert stats.total_co2 == pytest.approx(total)
        assert stats.average_co2 == pytest.approx(total / 3)
        assert stats.trees_needed == math.ceil(total / 22)

    def test_breakdown_lists_every_mode(self, participants):
        breakdown = compute_project_stats(participants).breakdown_by_type

        assert set(breakdown) == {member.value for member in ParticipantActivityType}
        assert breakdown["plane"] == ActivityBreakdown(distance=2000, co2=pytest.approx(510.0), count=1)
        assert breakdown["car"].distance == 800
        assert breakdown["car"].co2 == pytest.approx(400 * 0.192 / 2 * 2)
        assert breakdown["boat"] == ActivityBreakdown()

    def test_empty(self):
        stats = compute_project_stats([])

        assert stats.total_participants == 0
        assert stats.total_co2 == 0
        assert stats.average_co2 == 0
        assert stats.trees_needed == 0
        assert all(b.count == 0 for b in stats.breakdown_by_type.values())
        assert compute_project_stats(None).total_participants == 0

    def test_to_dict(self, participants):
        data = compute_project_stats(participants).to_dict()

        assert data["breakdown_by_type"]["train"]["count"] == 1
        assert data["breakdown_by_type"]["electricCar"] == {"distance": 0.0, "co2": 0.0, "count": 0}
        assert isinstance(compute_project_stats(participants), ProjectStats)


class TestRankParticipants:
    """Tests for the leaderboard."""

    def test_lowest_emitter_first(self, participants):
        ranked = rank_participants(participants)

        totals = [p.total_co2 for p in ranked]
        assert totals == sorted(totals)
        assert [p.rank for p in ranked] == [1, 2, 3]
        assert ranked[0].name == "Ben"
        assert ranked[-1].name == "Ana"

    def test_ties_keep_input_order(self):
        same = [evaluate_participant({"trainKm": 100}, participant_id=pid) for pid in ("a", "b", "c")]
        ranked = rank_participants(same)

        assert [p.participant_id for p in ranked] == ["a", "b", "c"]
        assert [p.rank for p in ranked] == [1, 2, 3]

    def test_input_is_not_modified(self, participants):
        rank_participants(participants)
        assert all(p.rank is None for p in participants)

    def test_empty(self):
        assert rank_participants([]) == []
        assert rank_participants(None) == []

    def test_accepts_results_built_directly(self):
        low = ParticipantResult(emissions=evaluate_participant({"busKm": 1}).emissions, participant_id="low")
        high = ParticipantResult(emissions=evaluate_participant({"busKm": 100}).emissions, participant_id="high")

        assert [p.participant_id for p in rank_participants([high, low])] == ["low", "high"]
