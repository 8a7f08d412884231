# Overview: Pytest coverage for the generic entity stores.

from datetime import date

import pytest

from warehouse.models import Employee, Product, StorageZone, Supplier
from warehouse.services import entity_store
from warehouse.validation import InvalidArgumentError, InvalidOperationError


class TestCrud:
    def test_get_all_empty(self, db_session):
        assert entity_store.employees.get_all() == []

    def test_add_assigns_id_and_get_by_id_returns_it(self, db_session):
        employee = entity_store.employees.add(Employee(first_name="Olga", last_name="Ivanova", position="Clerk"))
        assert employee.id is not None

        fetched = entity_store.employees.get_by_id(employee.id)
        assert fetched.first_name == "Olga"
        assert entity_store.employees.exists(employee.id) is True

    def test_get_all_is_ordered_by_id(self, db_session):
        first = entity_store.suppliers.add(Supplier(company_name="Zeta"))
        second = entity_store.suppliers.add(Supplier(company_name="Alpha"))
        assert [s.id for s in entity_store.suppliers.get_all()] == [first.id, second.id]

    def test_get_by_id_missing_returns_none(self, db_session):
        assert entity_store.products.get_by_id(999999) is None
        assert entity_store.products.exists(999999) is False

    @pytest.mark.parametrize("bad_id", [0, -1])
    def test_non_positive_id_rejected(self, db_session, bad_id):
        with pytest.raises(InvalidArgumentError):
            entity_store.employees.get_by_id(bad_id)
        with pytest.raises(InvalidArgumentError):
            entity_store.employees.exists(bad_id)
        with pytest.raises(InvalidArgumentError):
            entity_store.employees.delete(bad_id)

    def test_add_none_rejected(self, db_session):
        with pytest.raises(InvalidArgumentError):
            entity_store.employees.add(None)

    def test_add_wrong_type_rejected(self, db_session):
        with pytest.raises(InvalidArgumentError):
            entity_store.employees.add(Product(name="Not an employee"))

    def test_add_duplicate_explicit_id_rejected(self, db_session, employee_anna):
        with pytest.raises(InvalidOperationError):
            entity_store.employees.add(Employee(id=employee_anna.id, first_name="Dup", last_name="Licate"))
        assert len(entity_store.employees.get_all()) == 1

    def test_update_existing(self, db_session, employee_anna):
        employee_anna.position = "Shift lead"
        entity_store.employees.update(employee_anna)

        db_session.expire_all()
        assert entity_store.employees.get_by_id(employee_anna.id).position == "Shift lead"

    def test_update_missing_rejected(self, db_session):
        with pytest.raises(InvalidOperationError):
            entity_store.employees.update(Employee(id=424242, first_name="Ghost", last_name="User"))

    def test_update_without_id_rejected(self, db_session):
        with pytest.raises(InvalidArgumentError):
            entity_store.employees.update(Employee(first_name="No", last_name="Id"))

    def test_delete(self, db_session, employee_anna):
        employee_id = employee_anna.id
        entity_store.employees.delete(employee_id)
        assert entity_store.employees.exists(employee_id) is False

    def test_delete_missing_rejected(self, db_session):
        with pytest.raises(InvalidOperationError):
            entity_store.employees.delete(424242)


class TestGetFiltered:
    def test_case_insensitive_substring(self, db_session, employee_anna, employee_ivan):
        result = entity_store.employees.get_filtered("PETRO")
        assert [e.id for e in result] == [employee_anna.id]

    def test_matches_any_search_column(self, db_session, employee_anna, employee_ivan):
        result = entity_store.employees.get_filtered("forklift")
        assert [e.id for e in result] == [employee_ivan.id]

    def test_blank_text_returns_empty(self, db_session, employee_anna):
        assert entity_store.employees.get_filtered("") == []
        assert entity_store.employees.get_filtered("   ") == []
        assert entity_store.employees.get_filtered(None) == []

    def test_wildcards_match_literally(self, db_session):
        entity_store.products.add(Product(name="100% juice", product_type="BEVERAGE"))
        entity_store.products.add(Product(name="1000 nails", product_type="HOUSEHOLD"))

        result = entity_store.products.get_filtered("0%")
        assert [p.name for p in result] == ["100% juice"]

    def test_injection_text_is_just_data(self, db_session, employee_anna):
        assert entity_store.employees.get_filtered("' OR 1=1 --") == []
        assert entity_store.employees.exists(employee_anna.id) is True

    def test_numeric_columns_are_searched_as_text(self, db_session, zone_dry, zone_cold):
        result = entity_store.storage_zones.get_filtered("refriger")
        assert [z.id for z in result] == [zone_cold.id]

        by_id = entity_store.storage_zones.get_filtered(str(zone_dry.id))
        assert zone_dry.id in [z.id for z in by_id]

    def test_supply_search_by_date(self, db_session, supply_a, supply_b):
        result = entity_store.supplies.get_filtered("2024-02")
        assert [s.id for s in result] == [supply_b.id]


class TestProductAccountingStore:
    def test_lookups(self, db_session, record_factory):
        first = record_factory()
        second = record_factory(quantity=4)

        assert [r.id for r in entity_store.product_accounting.get_all()] == [first, second]
        assert entity_store.product_accounting.get_by_id(second).quantity == 4
        assert entity_store.product_accounting.exists(first) is True
        assert entity_store.product_accounting.exists(second + 1000) is False
        assert entity_store.product_accounting.get_by_id(second + 1000) is None

    def test_search_by_status_and_date(self, db_session, record_factory):
        shipped = record_factory(movement_status="SHIPPED", accounting_date=date(2024, 1, 5))
        record_factory(movement_status="IN_STOCK", accounting_date=date(2024, 3, 1))

        assert [r.id for r in entity_store.product_accounting.get_filtered("shipp")] == [shipped]
        assert [r.id for r in entity_store.product_accounting.get_filtered("2024-01")] == [shipped]
        assert entity_store.product_accounting.get_filtered("   ") == []

    def test_search_by_storage_id(self, db_session, record_factory, zone_cold):
        in_cold = record_factory(storage_id=zone_cold.id)
        assert in_cold in [r.id for r in entity_store.product_accounting.get_filtered(str(zone_cold.id))]

    def test_has_no_write_operations(self):
        store = entity_store.product_accounting
        assert not hasattr(store, "add")
        assert not hasattr(store, "update")
        assert not hasattr(store, "delete")

    def test_non_positive_id_rejected(self, db_session):
        with pytest.raises(InvalidArgumentError):
            entity_store.product_accounting.get_by_id(0)
