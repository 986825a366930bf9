#!/usr/bin/env python3
"""
Tests for generate_maintenance_suggestions.

Covers the end-to-end behaviour of the suggestion engine:
1. Worked examples - overdue oil change, partial progress, no history,
   inspection expiry, tie-breaking
2. Properties - determinism, score bounds, overdue implies critical,
   monotonic in odometer, ordering
3. Aggregation - no-signal omission, template de-duplication, grouping
"""

import math
from datetime import date, timedelta

import pytest
from engine import (
    Category,
    Confidence,
    DueInfo,
    InvalidArgumentError,
    MaintenanceRecord,
    MaintenanceTaskDefinition,
    Status,
    VehicleSnapshot,
    build_message,
    default_catalog,
    generate_maintenance_suggestions,
    group_by_status,
)

TODAY = date(2026, 10, 19)


@pytest.fixture
def oil_catalog():
    return (
        MaintenanceTaskDefinition(
            id="oil", display_title="Engine oil change", category=Category.OIL,
            distance_interval_km=5000,
        ),
    )


@pytest.fixture
def oil_record():
    return MaintenanceRecord("Oil change", "2026-09-01", mileage_km=49000, category=Category.OIL)


def _by_id(suggestions):
    return {s.id: s for s in suggestions}


# =============================================================================
# Worked examples
# =============================================================================


class TestExamples:
    """Worked examples of the engine on small inputs."""

    def test_oil_change_due_now(self, oil_catalog, oil_record):
        """54,000 km with last change at 49,000 of a 5,000 km interval."""
        vehicle = VehicleSnapshot(odometer_km=54000)

        [s] = generate_maintenance_suggestions(vehicle, [oil_record], oil_catalog, TODAY)

        assert s.due_info.remaining_km == 0
        assert s.due_info.is_overdue is True
        assert s.status == Status.CRITICAL
        assert s.score == 100

    def test_oil_change_partway(self, oil_catalog, oil_record):
        """51,000 km: 3,000 of 5,000 km left scores 40, upcoming."""
        vehicle = VehicleSnapshot(odometer_km=51000)

        [s] = generate_maintenance_suggestions(vehicle, [oil_record], oil_catalog, TODAY)

        assert s.due_info.remaining_km == 3000
        assert s.score == 40
        assert s.status == Status.UPCOMING
        assert s.due_info.is_overdue is False

    def test_no_history_registered_two_years_ago(self):
        """Baseline from registration, low confidence, no projection."""
        vehicle = VehicleSnapshot(odometer_km=30000, first_registered_month="2024-10")

        suggestions = _by_id(generate_maintenance_suggestions(vehicle, [], today=TODAY))

        oil = suggestions["oil"]
        assert oil.confidence == Confidence.LOW
        assert oil.due_info.projected is False
        # Distance counts from the current odometer; time from registration.
        assert oil.due_info.remaining_km == 5000
        assert oil.due_info.due_date == date(2025, 3, 30)
        assert oil.due_info.is_overdue is True
        assert oil.status == Status.CRITICAL
        assert all(s.confidence == Confidence.LOW for s in suggestions.values())

    def test_distance_only_task_without_history(self):
        """Only the distance dimension exists, and it is untouched."""
        catalog = (
            MaintenanceTaskDefinition(
                id="tire-rotation", display_title="Tire rotation",
                category=Category.TIRE_ROTATION, distance_interval_km=10000,
            ),
        )
        vehicle = VehicleSnapshot(odometer_km=30000, first_registered_month="2024-10")

        [s] = generate_maintenance_suggestions(vehicle, [], catalog, TODAY)

        assert s.due_info.remaining_km == 10000
        assert math.isinf(s.due_info.remaining_days)
        assert s.score == 0
        assert s.status == Status.OK

    def test_inspection_due_in_ten_days(self):
        """Time-only task driven by the declared inspection expiry."""
        vehicle = VehicleSnapshot(odometer_km=30000, inspection_expiry="2026-10-29")

        s = _by_id(generate_maintenance_suggestions(vehicle, [], today=TODAY))["inspection"]

        assert math.isinf(s.due_info.remaining_km)
        assert s.due_info.remaining_days == 10
        assert s.score == 99
        assert s.status == Status.CRITICAL
        assert s.confidence == Confidence.MEDIUM

    def test_equal_scores_sorted_by_remaining_days(self):
        """Tie at 70: fewer remaining days first, even against id order."""
        catalog = (
            MaintenanceTaskDefinition(
                id="alpha", display_title="Alpha", category=Category.COOLANT,
                time_interval_days=200,
            ),
            MaintenanceTaskDefinition(
                id="zeta", display_title="Zeta", category=Category.BATTERY,
                time_interval_days=100,
            ),
        )
        records = [
            MaintenanceRecord("Coolant", TODAY - timedelta(days=140), category=Category.COOLANT),
            MaintenanceRecord("Battery", TODAY - timedelta(days=70), category=Category.BATTERY),
        ]
        vehicle = VehicleSnapshot(odometer_km=30000)

        suggestions = generate_maintenance_suggestions(vehicle, records, catalog, TODAY)

        assert [s.score for s in suggestions] == [70, 70]
        assert [s.id for s in suggestions] == ["zeta", "alpha"]
        assert suggestions[0].due_info.remaining_days == 30
        assert suggestions[1].due_info.remaining_days == 60

    def test_high_confidence_with_history_and_pace(self, oil_catalog, oil_record):
        """Real record plus declared pace is high confidence."""
        vehicle = VehicleSnapshot(odometer_km=51000, average_distance_per_month_km=900)

        [s] = generate_maintenance_suggestions(vehicle, [oil_record], oil_catalog, TODAY)

        assert s.confidence == Confidence.HIGH
        assert s.due_info.projected is True
        assert s.due_info.remaining_days == 100

    def test_medium_confidence_with_pace_only(self, oil_catalog):
        """Declared pace without history is medium confidence."""
        vehicle = VehicleSnapshot(odometer_km=51000, average_distance_per_month_km=900)

        [s] = generate_maintenance_suggestions(vehicle, [], oil_catalog, TODAY)

        assert s.confidence == Confidence.MEDIUM


# =============================================================================
# Properties
# =============================================================================


@pytest.fixture
def history():
    return [
        MaintenanceRecord("Oil change", "2026-03-02", mileage_km=49000, category="oil"),
        MaintenanceRecord("Oil filter", "2025-09-14", mileage_km=44200, category="oil_filter"),
        MaintenanceRecord("Rotation", "2025-09-14", category="tire_rotation"),
        MaintenanceRecord("Brake fluid", "2024-11-20", mileage_km=36800, category="brake_fluid"),
        MaintenanceRecord("Wipers", "2026-10-01", mileage_km=53800, category="wiper"),
    ]


class TestProperties:
    """Invariants that hold for any input."""

    def test_deterministic(self, history):
        vehicle = VehicleSnapshot(
            odometer_km=54000, average_distance_per_month_km=900,
            first_registered_month="2019-04", inspection_expiry="2027-04-15",
        )
        first = generate_maintenance_suggestions(vehicle, history, today=TODAY)
        second = generate_maintenance_suggestions(vehicle, history, today=TODAY)
        assert first == second
        assert [s.to_dict() for s in first] == [s.to_dict() for s in second]

    @pytest.mark.parametrize("odometer", [0, 20000, 49000, 54000, 90000, 250000])
    def test_score_bounds_and_overdue_critical(self, history, odometer):
        vehicle = VehicleSnapshot(odometer_km=odometer, average_distance_per_month_km=900)
        for s in generate_maintenance_suggestions(vehicle, history, today=TODAY):
            assert 0 <= s.score <= 100
            if s.due_info.is_overdue:
                assert s.status == Status.CRITICAL

    def test_score_monotonic_in_odometer(self, history):
        """More mileage never lowers a task's score."""
        previous = {}
        for odometer in range(40000, 80001, 2500):
            vehicle = VehicleSnapshot(odometer_km=odometer, average_distance_per_month_km=900)
            scores = {
                s.id: s.score
                for s in generate_maintenance_suggestions(vehicle, history, today=TODAY)
            }
            for task_id, score in previous.items():
                assert scores[task_id] >= score
            previous = scores

    def test_sorted_by_score_then_days(self, history):
        vehicle = VehicleSnapshot(odometer_km=54000, first_registered_month="2019-04")
        suggestions = generate_maintenance_suggestions(vehicle, history, today=TODAY)
        keys = [(-s.score, s.due_info.remaining_days) for s in suggestions]
        assert keys == sorted(keys)

    def test_unique_template_ids(self, history):
        vehicle = VehicleSnapshot(odometer_km=54000)
        suggestions = generate_maintenance_suggestions(vehicle, history, today=TODAY)
        template_ids = [s.template_id for s in suggestions]
        assert len(template_ids) == len(set(template_ids))


# =============================================================================
# Aggregation
# =============================================================================


class TestAggregation:
    """Tests for filtering, de-duplication and input contracts."""

    def test_missing_vehicle_raises(self):
        with pytest.raises(InvalidArgumentError):
            generate_maintenance_suggestions(None, [])

    def test_records_may_be_none(self):
        vehicle = VehicleSnapshot(odometer_km=1000)
        suggestions = generate_maintenance_suggestions(vehicle, None, today=TODAY)
        assert len(suggestions) == len(default_catalog())

    def test_defaults_to_today(self, oil_catalog):
        vehicle = VehicleSnapshot(odometer_km=1000)
        [s] = generate_maintenance_suggestions(vehicle, [], oil_catalog)
        assert s.due_info.remaining_km == 5000

    def test_no_signal_task_is_omitted(self, oil_catalog, monkeypatch):
        """A task with neither remaining distance nor time is dropped.

        Every valid task has an interval, so calc_due is stubbed to reach this state.
        """
        monkeypatch.setattr(
            "engine.suggestions.calc_due",
            lambda *args, **kwargs: DueInfo(math.inf, math.inf, False),
        )
        vehicle = VehicleSnapshot(odometer_km=1000)
        assert generate_maintenance_suggestions(vehicle, [], oil_catalog, TODAY) == []

    def test_non_numeric_pace_is_ignored(self, oil_catalog, oil_record):
        """A malformed pace counts as no pace rather than failing."""
        vehicle = VehicleSnapshot(odometer_km=51000, average_distance_per_month_km="900")

        [s] = generate_maintenance_suggestions(vehicle, [oil_record], oil_catalog, TODAY)

        assert s.due_info.remaining_km == 3000
        assert s.due_info.projected is False
        assert math.isinf(s.due_info.remaining_days)
        assert s.confidence == Confidence.MEDIUM

    def test_non_numeric_record_mileage_is_ignored(self, oil_catalog):
        """A malformed mileage falls back to the current odometer."""
        record = MaintenanceRecord("Oil change", "2026-09-01", mileage_km="49,000", category="oil")
        vehicle = VehicleSnapshot(odometer_km=54000)

        [s] = generate_maintenance_suggestions(vehicle, [record], oil_catalog, TODAY)

        assert s.due_info.remaining_km == 5000
        assert s.score == 0
        assert s.confidence == Confidence.MEDIUM

    def test_duplicate_template_keeps_most_urgent(self, oil_record):
        catalog = (
            MaintenanceTaskDefinition(
                id="oil-long", display_title="Oil (long interval)", category=Category.OIL,
                distance_interval_km=10000, template_id="oil",
            ),
            MaintenanceTaskDefinition(
                id="oil-short", display_title="Oil (short interval)", category=Category.OIL,
                distance_interval_km=5000, template_id="oil",
            ),
        )
        vehicle = VehicleSnapshot(odometer_km=53000)

        suggestions = generate_maintenance_suggestions(vehicle, [oil_record], catalog, TODAY)

        assert [s.id for s in suggestions] == ["oil-short"]
        assert suggestions[0].score == 80

    def test_group_by_status(self, history):
        vehicle = VehicleSnapshot(odometer_km=54000, first_registered_month="2019-04")
        suggestions = generate_maintenance_suggestions(vehicle, history, today=TODAY)

        groups = group_by_status(suggestions)

        assert list(groups) == [Status.CRITICAL, Status.SOON, Status.UPCOMING, Status.OK]
        assert sum(len(g) for g in groups.values()) == len(suggestions)
        for status, group in groups.items():
            assert all(s.status == status for s in group)
            assert group == [s for s in suggestions if s.status == status]


class TestBuildMessage:
    """Tests for build_message."""

    def test_overdue(self):
        due = DueInfo(remaining_km=-200, remaining_days=math.inf, is_overdue=True)
        assert build_message(due, Confidence.HIGH, True) == (
            "Overdue, do this as soon as possible."
        )

    def test_distance_only(self):
        due = DueInfo(remaining_km=3000, remaining_days=math.inf, is_overdue=False)
        assert build_message(due, Confidence.HIGH, True) == (
            "About 3,000 km left."
        )

    def test_distance_and_time(self):
        due = DueInfo(remaining_km=4000, remaining_days=45, is_overdue=False)
        assert build_message(due, Confidence.HIGH, True) == (
            "About 4,000 km / 45 days left."
        )

    def test_time_only_low_confidence(self):
        due = DueInfo(remaining_km=math.inf, remaining_days=10, is_overdue=False)
        assert build_message(due, Confidence.LOW) == (
            "About 10 days left. (estimated: no history)"
        )

    def test_medium_confidence_notes(self):
        due = DueInfo(remaining_km=3000, remaining_days=math.inf, is_overdue=False)
        assert build_message(due, Confidence.MEDIUM, True).endswith(
            "(estimated: no mileage pace)"
        )
        assert build_message(due, Confidence.MEDIUM, False).endswith(
            "(estimated: no service history)"
        )
