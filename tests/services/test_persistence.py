import json
from decimal import Decimal

import pytest

from models.category import Category
from models.expense import ExpenseDraft
from services import defaults
from services.persistence import SNAPSHOT_VERSION, snapshot_for


def _stored(services):
    return json.loads(services.store.get(services.config.storage_key))


def _write(services, payload):
    raw = payload if isinstance(payload, str) else json.dumps(payload)
    services.store.set(services.config.storage_key, raw)


class TestSave:
    """Tests for PersistenceService.save."""

    def test_snapshot_layout(self, tracker, services):
        """Test that a mutation writes the full snapshot under the configured key."""
        tracker.set_budget(1000)
        tracker.add_expense(
            ExpenseDraft(name="Flight", amount="300", category="flights", date="2025-03-01")
        )

        data = _stored(services)

        assert data["version"] == SNAPSHOT_VERSION
        assert data["tripName"] == "Girls' Trip — Spring Break"
        assert data["budget"] == 1000
        assert len(data["categories"]) == 8
        assert data["categories"][0] == {
            "key": "flights",
            "label": "Flights",
            "color": "#f472b6",
        }
        assert data["expenses"] == [
            {
                "id": "exp-1",
                "name": "Flight",
                "amount": 300,
                "category": "flights",
                "date": "2025-03-01",
            }
        ]

    def test_nan_budget_is_saved_as_null(self, tracker, services):
        tracker.set_budget("not a number")

        assert _stored(services)["budget"] is None

    def test_save_overwrites(self, tracker, services):
        tracker.set_trip_name("First")
        tracker.set_trip_name("Second")

        assert _stored(services)["tripName"] == "Second"
        assert services.store.keys() == [services.config.storage_key]


class TestLoad:
    """Tests for PersistenceService.load."""

    def test_missing_snapshot_yields_defaults(self, services):
        assert services.persistence.load() == defaults.default_state()

    @pytest.mark.parametrize("raw", ["", "{not json", "[1, 2, 3]", "42", "null", '"text"'])
    def test_corrupt_snapshot_yields_defaults(self, services, raw):
        _write(services, raw)

        assert services.persistence.load() == defaults.default_state()

    def test_unknown_version_yields_defaults(self, services):
        _write(services, {"version": 2, "tripName": "Future", "budget": 10})

        assert services.persistence.load() == defaults.default_state()

    def test_missing_version_is_read_as_current(self, services):
        _write(services, {"tripName": "Old format", "budget": 800})

        state = services.persistence.load()

        assert state.trip_name == "Old format"
        assert state.budget == Decimal("800")

    def test_round_trip(self, tracker, services):
        """Test that save followed by load reproduces the same state."""
        tracker.set_trip_name("Miami ✨")
        tracker.set_budget("1234.56")
        tracker.add_category("Boat Party", "#0ea5e9")
        tracker.add_expense(
            ExpenseDraft(name="Yacht", amount="412.35", category="boat-party", date="2025-03-02")
        )
        tracker.add_expense(
            ExpenseDraft(name="Uber", amount=18, category="transport", date="2025-03-03")
        )

        restored = services.persistence.load()

        assert restored == tracker.state

    def test_empty_object_yields_defaults_per_field(self, services):
        _write(services, {})

        assert services.persistence.load() == defaults.default_state()

    def test_null_fields_fall_back(self, services):
        _write(
            services,
            {"tripName": None, "budget": None, "categories": None, "expenses": None},
        )

        assert services.persistence.load() == defaults.default_state()

    def test_fields_fall_back_independently(self, services):
        """Test that a bad field does not discard the good ones."""
        _write(
            services,
            {
                "tripName": 123,
                "budget": 640,
                "categories": "oops",
                "expenses": [
                    {
                        "id": "a1",
                        "name": "Tacos",
                        "amount": 22.5,
                        "category": "food",
                        "date": "2025-03-05",
                    }
                ],
            },
        )

        state = services.persistence.load()

        assert state.trip_name == defaults.default_trip_name()
        assert state.budget == Decimal("640")
        assert state.categories == defaults.default_categories()
        assert len(state.expenses) == 1
        assert state.expenses[0].amount == Decimal("22.5")

    @pytest.mark.parametrize("budget", ["1200", True, [], {"a": 1}])
    def test_invalid_budget_falls_back(self, services, budget):
        _write(services, {"budget": budget})

        assert services.persistence.load().budget == defaults.default_budget()

    def test_empty_category_list_falls_back(self, services):
        _write(services, {"categories": []})

        assert services.persistence.load().categories == defaults.default_categories()

    def test_malformed_entries_are_skipped(self, services):
        _write(
            services,
            {
                "categories": [
                    {"key": "spa", "label": "Spa", "color": "#123456"},
                    {"key": "spa", "label": "Spa again", "color": "#654321"},
                    {"label": "No key", "color": "#000000"},
                    "garbage",
                ],
                "expenses": [
                    {"id": "x1", "name": "Massage", "amount": 80, "category": "spa", "date": "2025-03-06"},
                    {"id": "x2", "name": "Free", "amount": 0, "category": "spa", "date": "2025-03-06"},
                    {"id": "x3", "name": "Missing amount", "category": "spa", "date": "2025-03-06"},
                    None,
                ],
            },
        )

        state = services.persistence.load()

        assert state.categories == (Category(key="spa", label="Spa", color="#123456"),)
        assert [e.id for e in state.expenses] == ["x1"]

    def test_expenses_not_a_list_become_empty(self, services):
        _write(services, {"expenses": {"id": "x1"}})

        assert services.persistence.load().expenses == ()

    def test_tracker_load_uses_snapshot(self, services):
        _write(services, snapshot_for(defaults.default_state()).replace("1200", "950"))

        services.tracker.load()

        assert services.tracker.trip.budget == Decimal("950")


class TestExactRoundTrip:
    """Tests that accepted values reload field for field."""

    def test_high_precision_amount(self, tracker, services):
        tracker.add_expense(
            ExpenseDraft(
                name="Tip",
                amount="0.12345678901234567891",
                category="food",
                date="2025-03-07",
            )
        )
        tracker.set_budget("1234.56789012345678")

        assert services.persistence.load() == tracker.state

    def test_out_of_range_budget_never_writes_infinity(self, tracker, services):
        tracker.set_budget("1e400")

        raw = services.store.get(services.config.storage_key)

        assert "Infinity" not in raw
        assert json.loads(raw)["budget"] is None

    def test_snapshot_with_huge_values_is_tolerated(self, services):
        """Test that out-of-range numbers in a snapshot fall back instead of breaking totals."""
        _write(
            services,
            '{"budget": 1e400, "expenses": ['
            '{"id": "a", "name": "Huge", "amount": 1e26, "category": "food", "date": "2025-03-01"},'
            '{"id": "b", "name": "Fine", "amount": 12.5, "category": "food", "date": "2025-03-01"}'
            "]}",
        )

        services.tracker.load()

        assert services.tracker.trip.budget == defaults.default_budget()
        assert [e.id for e in services.tracker.expenses] == ["b"]
        assert services.tracker.summary().total_spent == Decimal("12.5")
