# Overview: Pytest coverage for the foreign-key existence validator.

import pytest

from warehouse.services.existence_service import EntityKind, exists, missing_references
from warehouse.validation import InvalidArgumentError


class TestExists:
    def test_existing_entities(self, db_session, employee_anna, supply_a, zone_dry):
        assert exists(EntityKind.EMPLOYEE, employee_anna.id) is True
        assert exists(EntityKind.SUPPLY, supply_a.id) is True
        assert exists(EntityKind.STORAGE_ZONE, zone_dry.id) is True

    def test_not_found_is_false_not_error(self, db_session):
        for kind in EntityKind:
            assert exists(kind, 987654) is False

    def test_kind_accepts_plain_string_value(self, db_session, employee_anna):
        assert exists("Employee", employee_anna.id) is True

    @pytest.mark.parametrize("kind", list(EntityKind))
    @pytest.mark.parametrize("bad_id", [0, -7])
    def test_non_positive_id_rejected(self, db_session, kind, bad_id):
        with pytest.raises(InvalidArgumentError):
            exists(kind, bad_id)

    def test_unknown_kind_rejected(self, db_session):
        with pytest.raises(InvalidArgumentError):
            exists("Warehouse", 1)

    def test_repeated_calls_have_no_side_effects(self, db_session, employee_anna):
        results = [exists(EntityKind.EMPLOYEE, employee_anna.id) for _ in range(3)]
        assert results == [True, True, True]


class TestMissingReferences:
    def test_all_present(self, db_session, employee_anna, supply_a, zone_dry):
        refs = [
            (EntityKind.EMPLOYEE, employee_anna.id),
            (EntityKind.SUPPLY, supply_a.id),
            (EntityKind.STORAGE_ZONE, zone_dry.id),
        ]
        assert missing_references(refs) == []

    def test_lists_every_missing_reference(self, db_session, employee_anna):
        refs = [
            (EntityKind.EMPLOYEE, employee_anna.id),
            (EntityKind.SUPPLY, 555001),
            (EntityKind.STORAGE_ZONE, 555002),
        ]
        assert missing_references(refs) == ["Supply 555001", "StorageZone 555002"]

    def test_empty_input(self, db_session):
        assert missing_references([]) == []
