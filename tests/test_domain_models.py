"""Tests for the pure domain helpers: document keys, contact lists, permission grouping."""
from datetime import date

import pytest
from pydantic import ValidationError

from hub.modules.accounts.domain.models import AccountConflictReport, AccountCreate
from hub.modules.auth.domain.models import group_module_permissions
from hub.modules.entities.domain.models import EntityConflict, EntityData, parse_dni
from hub.shared.core.exceptions import AccountConflictError, EntityConflictError


class TestParseDni:
    def test_separator_sets_type_and_number(self):
        query = parse_dni("V-12345678")
        assert query.nationality_type == "V"
        assert query.national_id == "12345678"

    def test_leading_letter_without_separator_is_the_type(self):
        query = parse_dni("E87654321")
        assert query.nationality_type == "E"
        assert query.national_id == "87654321"

    def test_digits_only_leave_type_unconstrained(self):
        query = parse_dni("12345678")
        assert query.nationality_type is None
        assert query.national_id == "12345678"

    def test_pieces_after_the_second_are_ignored(self):
        query = parse_dni("J-30123456-7")
        assert query.nationality_type == "J"
        assert query.national_id == "30123456"


def test_repeated_contacts_collapse_to_first_occurrence():
    data = EntityData(
        name="Ana",
        lastname="Diaz",
        birthdate=date(1985, 1, 1),
        national_id="1",
        nationality_type="V",
        emails=["b@example.com", "a@example.com", "b@example.com"],
        phones=["1", "1"],
    )
    assert data.emails == ["b@example.com", "a@example.com"]
    assert data.phones == ["1"]


def test_nationality_type_is_a_single_character():
    with pytest.raises(ValidationError):
        EntityData(
            name="Ana",
            lastname="Diaz",
            birthdate=date(1985, 1, 1),
            national_id="1",
            nationality_type="VE",
        )


class TestGroupModulePermissions:
    def test_repeated_grant_yields_one_entry(self):
        modules = group_module_permissions([
            ("entities", "read"),
            ("entities", "read"),
        ])
        assert len(modules) == 1
        assert modules[0].permissions == ["read"]

    def test_first_seen_order_is_kept(self):
        modules = group_module_permissions([
            ("accounts", "update"),
            ("entities", "read"),
            ("accounts", "read"),
            ("entities", "create"),
            ("accounts", "update"),
        ])
        assert [module.name for module in modules] == ["accounts", "entities"]
        assert modules[0].permissions == ["update", "read"]
        assert modules[1].permissions == ["read", "create"]

    def test_no_grants(self):
        assert group_module_permissions([]) == []


class TestConflictReports:
    def test_empty_entity_conflict(self):
        assert not EntityConflict().has_conflicts

    def test_entity_conflict_error_details(self):
        error = EntityConflict(emails_used=["a@example.com"]).to_error()
        assert isinstance(error, EntityConflictError)
        assert error.status_code == 409
        assert error.details == {
            "duplicated_national_id": False,
            "emails_used": ["a@example.com"],
            "phones_used": [],
        }

    def test_account_report_nests_entity_conflict(self):
        report = AccountConflictReport(
            entity_conflict=EntityConflict(duplicated_national_id=True),
            username_used=True,
        )
        assert report.has_conflicts

        error = report.to_error()
        assert isinstance(error, AccountConflictError)
        assert error.details["username_used"] is True
        assert error.details["another_account_with_entity"] is False
        assert error.details["entity"]["duplicated_national_id"] is True

    def test_clean_entity_conflict_is_not_nested(self):
        report = AccountConflictReport(entity_conflict=EntityConflict(), another_account_with_entity=True)
        assert report.to_error().details["entity"] is None


def test_account_needs_an_entity_reference():
    with pytest.raises(ValidationError):
        AccountCreate(username="u", password="p", role_id=1)
