"""Tests for GroupReadService listing, retrieval and lookup."""

from datetime import date

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from groupread.core.dependencies import build_group_read_service, resolve_caller_context
from groupread.core.hierarchy import CallerContext
from groupread.schemas.groups import SearchParameters
from groupread.services.base import NotFoundError, ValidationError
from groupread.services.domain.group_service import GroupNotFoundError, GroupReadService


@pytest.fixture
def service(session):
    return build_group_read_service(session)


def ids(page):
    return [record.id for record in page.items]


class TestRetrieveAll:

    def test_head_office_sees_every_group(self, service, standard_org, head_caller):
        page = service.retrieve_all(head_caller, SearchParameters())
        assert page.total_count == 5
        assert ids(page) == [40, 41, 42, 43, 44]

    def test_centers_are_never_listed(self, service, standard_org, head_caller):
        page = service.retrieve_all(head_caller, SearchParameters())
        assert 30 not in ids(page)
        assert all(record.group_level == 2 for record in page.items)

    def test_caller_only_sees_own_subtree(self, service, standard_org, east_caller):
        page = service.retrieve_all(east_caller, SearchParameters())
        assert ids(page) == [40, 41, 44]
        assert all(record.office_hierarchy.startswith(".2.") for record in page.items)

    def test_group_outside_hierarchy_is_excluded(self, session, org):
        org.office(1, ".1.", "Region One")
        org.office(2, ".1.2.", "Branch Two", parent_id=1)
        org.office(4, ".3.4.", "Branch Four")
        org.group(7, 2, "Inside")
        org.group(8, 4, "Outside")
        session.commit()

        service = build_group_read_service(session)
        page = service.retrieve_all(CallerContext(office_id=1, office_hierarchy=".1."), SearchParameters())

        assert ids(page) == [7]
        assert page.total_count == 1

    def test_empty_result(self, service, standard_org):
        caller = CallerContext(office_id=99, office_hierarchy=".99.")
        page = service.retrieve_all(caller, SearchParameters())
        assert page.total_count == 0
        assert page.items == []

    def test_name_filter(self, service, standard_org, head_caller):
        page = service.retrieve_all(head_caller, SearchParameters(name="Wes"))
        assert ids(page) == [40, 41]

    @pytest.mark.parametrize("name", ["_", "%", "p_G"])
    def test_name_wildcard_characters_match_literally(self, service, standard_org, head_caller, name):
        page = service.retrieve_all(head_caller, SearchParameters(name=name))
        assert page.total_count == 0
        assert page.items == []

    def test_name_with_literal_underscore(self, service, session, org, head_caller):
        org.office(1, ".", "Head Office")
        org.group(60, 1, "Savings_Circle")
        org.group(61, 1, "SavingsXCircle")
        session.commit()

        page = service.retrieve_all(head_caller, SearchParameters(name="s_C"))

        assert ids(page) == [60]

    def test_external_id_filter(self, service, standard_org, head_caller):
        page = service.retrieve_all(head_caller, SearchParameters(external_id="G-40"))
        assert ids(page) == [40]

    def test_office_filter(self, service, standard_org, head_caller):
        page = service.retrieve_all(head_caller, SearchParameters(office_id=5))
        assert ids(page) == [41, 44]

    def test_hierarchy_filter_narrows_within_scope(self, service, standard_org, head_caller):
        page = service.retrieve_all(head_caller, SearchParameters(hierarchy=".2.5."))
        assert ids(page) == [41, 44]

    def test_hierarchy_filter_cannot_widen_scope(self, service, standard_org, east_caller):
        page = service.retrieve_all(east_caller, SearchParameters(hierarchy="."))
        assert ids(page) == [40, 41, 44]

    def test_sql_search_filter(self, service, standard_org, head_caller):
        page = service.retrieve_all(head_caller, SearchParameters(sql_search="status_enum = 600 or staff_id = 11"))
        assert ids(page) == [40, 44]

    def test_invalid_search_raises_validation_error(self, service, standard_org, head_caller):
        with pytest.raises(ValidationError):
            service.retrieve_all(head_caller, SearchParameters(sql_search="1=1"))

    @pytest.mark.parametrize("params", [
        SearchParameters(sql_search="id = 99999999999999999999999"),
        SearchParameters(limit=10, offset=10 ** 30),
        SearchParameters(office_id=10 ** 20),
    ])
    def test_out_of_range_integers_raise_validation_error(self, service, standard_org, head_caller, params):
        with pytest.raises(ValidationError):
            service.retrieve_all(head_caller, params)

    def test_ordering_by_name_descending(self, service, standard_org, head_caller):
        page = service.retrieve_all(head_caller, SearchParameters(order_by="name", sort_order="DESC"))
        assert [record.name for record in page.items] == [
            "Westbrook Group", "Wesley Group", "Remote Group", "Hilltop Group", "Closed Group"
        ]

    def test_ordering_by_joined_column(self, service, standard_org, head_caller):
        page = service.retrieve_all(head_caller, SearchParameters(order_by="office_name"))
        assert [record.office_name for record in page.items] == [
            "East", "East Branch", "East Branch", "Remote", "West"
        ]
        assert ids(page)[1:3] == [41, 44]

    def test_unknown_order_by_raises_validation_error(self, service, standard_org, head_caller):
        with pytest.raises(ValidationError):
            service.retrieve_all(head_caller, SearchParameters(order_by="password"))

    def test_window(self, service, standard_org, head_caller):
        page = service.retrieve_all(head_caller, SearchParameters(order_by="id", limit=2, offset=2))
        assert ids(page) == [42, 43]
        assert page.total_count == 5

    def test_total_count_ignores_the_window(self, service, standard_org, head_caller):
        windows = [
            SearchParameters(),
            SearchParameters(limit=1),
            SearchParameters(limit=2, offset=4),
            SearchParameters(limit=3, offset=50),
            SearchParameters(offset=3),
        ]
        totals = {service.retrieve_all(head_caller, params).total_count for params in windows}
        assert totals == {5}

    def test_window_never_exceeds_limit(self, service, standard_org, head_caller):
        for limit in range(0, 7):
            page = service.retrieve_all(head_caller, SearchParameters(limit=limit))
            assert len(page.items) == min(limit, page.total_count)

    def test_offset_past_the_end(self, service, standard_org, head_caller):
        page = service.retrieve_all(head_caller, SearchParameters(limit=5, offset=10))
        assert page.items == []
        assert page.total_count == 5

    def test_offset_without_limit_returns_everything(self, service, standard_org, head_caller):
        page = service.retrieve_all(head_caller, SearchParameters(offset=3))
        assert len(page.items) == 5

    def test_limit_is_clamped_to_configured_maximum(self, session, standard_org, head_caller):
        service = GroupReadService(session, template_assembler=None, config={"max_page_limit": 2})
        page = service.retrieve_all(head_caller, SearchParameters(limit=100))
        assert len(page.items) == 2
        assert page.total_count == 5

    def test_storage_errors_propagate(self, session, service, standard_org, head_caller):
        session.execute(text("DROP TABLE m_group"))
        with pytest.raises(OperationalError):
            service.retrieve_all(head_caller, SearchParameters())


class TestRetrieveOne:

    def test_maps_every_column(self, service, session, standard_org, east_caller):
        record = service.retrieve_one(east_caller, 41)

        assert record.id == 41
        assert record.name == "Wesley Group"
        assert record.office_id == 5
        assert record.office_name == "East Branch"
        assert record.office_hierarchy == ".2.5."
        assert record.center_id == 30
        assert record.center_name == "Market Center"
        assert record.staff_id == 12
        assert record.staff_name == "Silva, Cara"
        assert record.hierarchy == ".30.41."
        assert record.status.id == 300
        assert record.status.code == "groupingStatusType.active"
        assert record.status.value == "Active"
        assert record.group_level == 2

    def test_missing_center_and_staff_map_to_none(self, service, standard_org, head_caller):
        record = service.retrieve_one(head_caller, 42)
        assert record.center_id is None
        assert record.center_name is None
        assert record.staff_id is None
        assert record.staff_name is None
        assert record.external_id is None
        assert record.activation_date is None

    def test_activation_date(self, service, session, org, head_caller):
        org.office(1, ".", "Head Office")
        org.group(50, 1, "Dated Group", activation_date=date(2023, 4, 1))
        session.commit()
        assert service.retrieve_one(head_caller, 50).activation_date == date(2023, 4, 1)

    def test_out_of_scope_group_is_not_found(self, service, session, org):
        org.office(1, ".1.", "Region One")
        org.office(9, ".9.", "Region Nine")
        org.group(42, 9, "Elsewhere")
        session.commit()

        with pytest.raises(GroupNotFoundError) as exc_info:
            service.retrieve_one(CallerContext(office_id=1, office_hierarchy=".1."), 42)
        assert exc_info.value.group_id == 42

    def test_out_of_scope_and_missing_look_the_same(self, service, standard_org, east_caller):
        with pytest.raises(GroupNotFoundError) as hidden:
            service.retrieve_one(east_caller, 42)
        with pytest.raises(GroupNotFoundError) as missing:
            service.retrieve_one(east_caller, 4242)

        assert hidden.value.error_code == missing.value.error_code == "NOT_FOUND"
        assert hidden.value.message == "Group not found: 42"
        assert missing.value.message == "Group not found: 4242"

    def test_out_of_range_id_raises_validation_error(self, service, standard_org, east_caller):
        with pytest.raises(ValidationError) as exc_info:
            service.retrieve_one(east_caller, 2 ** 64)
        assert exc_info.value.field == "group_id"

    def test_not_found_is_a_not_found_error(self, service, standard_org, east_caller):
        with pytest.raises(NotFoundError):
            service.retrieve_one(east_caller, 4242)

    def test_repeated_calls_return_the_same_record(self, service, standard_org, east_caller):
        assert service.retrieve_one(east_caller, 40) == service.retrieve_one(east_caller, 40)

    def test_matches_the_listed_record(self, service, standard_org, east_caller):
        listed = {record.id: record for record in service.retrieve_all(east_caller, SearchParameters()).items}
        assert service.retrieve_one(east_caller, 44) == listed[44]

    def test_centers_can_be_retrieved_by_id(self, service, standard_org, east_caller):
        record = service.retrieve_one(east_caller, 30)
        assert record.group_level == 1
        assert record.center_id is None


class TestRetrieveGroupsForLookup:

    def test_only_group_level_rows_of_the_office(self, service, standard_org, east_caller):
        lookups = service.retrieve_groups_for_lookup(east_caller, 5)
        assert [(lookup.id, lookup.name) for lookup in lookups] == [(44, "Closed Group"), (41, "Wesley Group")]

    def test_unscoped_by_default(self, service, standard_org, west_caller):
        assert [lookup.id for lookup in service.retrieve_groups_for_lookup(west_caller, 5)] == [44, 41]

    def test_scoped_when_configured(self, session, standard_org, east_caller, west_caller):
        service = GroupReadService(session, template_assembler=None, config={"scope_lookup_to_hierarchy": True})
        assert service.retrieve_groups_for_lookup(west_caller, 5) == []
        assert [lookup.id for lookup in service.retrieve_groups_for_lookup(east_caller, 5)] == [44, 41]

    def test_out_of_range_office_raises_validation_error(self, service, standard_org, head_caller):
        with pytest.raises(ValidationError):
            service.retrieve_groups_for_lookup(head_caller, 2 ** 63)

    def test_office_without_groups(self, service, standard_org, head_caller):
        assert service.retrieve_groups_for_lookup(head_caller, 1) == []


class TestResolveCallerContext:

    def test_uses_the_office_hierarchy(self, session, standard_org):
        caller = resolve_caller_context(session, 5, user_id=7)
        assert caller == CallerContext(office_id=5, office_hierarchy=".2.5.", user_id=7)

    def test_unknown_office(self, session, standard_org):
        with pytest.raises(NotFoundError):
            resolve_caller_context(session, 404)
