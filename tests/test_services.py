"""Tests for AuditLogService: filter parsing, listing, timelines and stats."""

from datetime import date, timedelta

import pytest
from django.utils import timezone

from audit.services import AuditLogService
from core.dto import AuditLogFiltersDTO
from core.exceptions import ValidationError


@pytest.fixture
def service():
    return AuditLogService()


class TestParseFilters:
    def test_empty(self, service):
        filters = service.parse_filters({})
        assert filters == AuditLogFiltersDTO()
        assert filters.is_empty()

    def test_full(self, service):
        filters = service.parse_filters({
            "from_date": "2026-01-01",
            "to_date": "2026-01-31",
            "action": "Delete",
            "table_name": " providers ",
            "user": "ana@",
            "record_id": "p-1",
            "data_content": "Smith",
        })
        assert filters.from_date == date(2026, 1, 1)
        assert filters.to_date == date(2026, 1, 31)
        assert filters.action == "delete"
        assert filters.table_name == "providers"
        assert filters.actor_email == "ana@"
        assert filters.record_id == "p-1"
        assert filters.data_content == "Smith"
        assert not filters.is_empty()

    def test_all_action_means_no_filter(self, service):
        assert service.parse_filters({"action": "all"}).action is None

    def test_bad_date(self, service):
        with pytest.raises(ValidationError) as excinfo:
            service.parse_filters({"from_date": "01/02/2026"})
        assert excinfo.value.code == "INVALID_DATE"
        assert "from_date" in excinfo.value.details

    def test_reversed_range(self, service):
        with pytest.raises(ValidationError) as excinfo:
            service.parse_filters({"from_date": "2026-02-01", "to_date": "2026-01-01"})
        assert excinfo.value.code == "INVALID_DATE_RANGE"

    def test_unknown_action(self, service):
        with pytest.raises(ValidationError) as excinfo:
            service.parse_filters({"action": "upsert"})
        assert excinfo.value.code == "INVALID_ACTION"


@pytest.mark.django_db
class TestListLogs:
    def test_newest_first(self, service, make_log):
        old = make_log(record_id="a", age=timedelta(hours=2))
        new = make_log(record_id="b")
        rows = list(service.list_logs(AuditLogFiltersDTO()))
        assert [r.pk for r in rows] == [new.pk, old.pk]

    def test_action_filter_counts_create_as_insert(self, service, make_log):
        legacy = make_log(action="create", new_data={"name": "x"})
        insert = make_log(action="insert", new_data={"name": "y"})
        make_log(action="update", old_data={}, new_data={})
        make_log(action="delete", old_data={"name": "z"})

        rows = service.list_logs(AuditLogFiltersDTO(action="insert"))
        assert {r.pk for r in rows} == {legacy.pk, insert.pk}
        assert service.list_logs(AuditLogFiltersDTO(action="update")).count() == 1
        assert service.list_logs(AuditLogFiltersDTO(action="delete")).count() == 1

    def test_text_filters(self, service, make_log):
        target = make_log(table_name="provider_state_licenses", record_id="lic-1",
                          actor_email="Bob@VestaTelemed.com")
        make_log(table_name="facilities", record_id="f-1", actor_email="ana@vestasolutions.com")

        assert [r.pk for r in service.list_logs(AuditLogFiltersDTO(table_name="LICENSE"))] == [target.pk]
        assert [r.pk for r in service.list_logs(AuditLogFiltersDTO(actor_email="bob@"))] == [target.pk]
        assert [r.pk for r in service.list_logs(AuditLogFiltersDTO(record_id="lic-1"))] == [target.pk]
        assert service.list_logs(AuditLogFiltersDTO(record_id="lic")).count() == 0

    def test_data_content(self, service, make_log):
        in_old = make_log(action="delete", old_data={"name": "Dr. Smith"})
        in_new = make_log(action="insert", new_data={"name": "Dr. SMITHSON"})
        make_log(action="insert", new_data={"name": "Dr. Jones"})

        rows = service.list_logs(AuditLogFiltersDTO(data_content="smith"))
        assert {r.pk for r in rows} == {in_old.pk, in_new.pk}

    def test_data_content_non_ascii(self, service, make_log):
        target = make_log(action="insert", new_data={"name": "Dr. José Núñez"})
        make_log(action="insert", new_data={"name": "Dr. Jones"})

        rows = service.list_logs(AuditLogFiltersDTO(data_content="José"))
        assert [r.pk for r in rows] == [target.pk]
        rows = service.list_logs(AuditLogFiltersDTO(data_content="Núñez"))
        assert [r.pk for r in rows] == [target.pk]

    def test_data_content_with_quotes(self, service, make_log):
        target = make_log(action="update", old_data={"notes": "quiet"}, new_data={"notes": 'said "hi"'})
        make_log(action="insert", new_data={"notes": "hi there"})

        rows = service.list_logs(AuditLogFiltersDTO(data_content='"hi"'))
        assert [r.pk for r in rows] == [target.pk]

    def test_date_range_is_inclusive(self, service, make_log):
        today = timezone.localdate()
        recent = make_log(record_id="today")
        make_log(record_id="old", age=timedelta(days=10))
        week = make_log(record_id="week", age=timedelta(days=3))

        rows = service.list_logs(AuditLogFiltersDTO(from_date=today - timedelta(days=5), to_date=today))
        assert {r.pk for r in rows} == {recent.pk, week.pk}

        rows = service.list_logs(AuditLogFiltersDTO(to_date=today - timedelta(days=9)))
        assert [r.record_id for r in rows] == ["old"]


@pytest.mark.django_db
class TestListByEntity:
    def test_provider_timeline(self, service, make_log):
        own = make_log(table_name="providers", record_id="p-1", old_data={"status": "A"}, new_data={"status": "B"})
        child = make_log(action="insert", table_name="provider_state_licenses", record_id="lic-1",
                         new_data={"provider_id": "p-1", "state": "CA"})
        deleted_child = make_log(action="delete", table_name="provider_vesta_privileges", record_id="v-1",
                                 old_data={"provider_id": "p-1", "privilege_tier": "Tier 1"})
        make_log(table_name="providers", record_id="p-2")
        make_log(action="insert", table_name="provider_state_licenses", record_id="lic-2",
                 new_data={"provider_id": "p-2", "state": "TX"})
        make_log(table_name="facilities", record_id="p-1")

        entries, has_more = service.list_by_entity("provider", "p-1")
        assert {e.pk for e in entries} == {own.pk, child.pk, deleted_child.pk}
        assert has_more is False

    def test_facility_timeline_includes_credentials(self, service, make_log):
        own = make_log(action="insert", table_name="facilities", record_id="f-1", new_data={"name": "General"})
        credential = make_log(action="insert", table_name="provider_facility_credentials", record_id="c-1",
                              new_data={"provider_id": "p-1", "facility_id": "f-1"})

        entries, _ = service.list_by_entity("Facility", "f-1")
        assert {e.pk for e in entries} == {own.pk, credential.pk}

    def test_limit_and_has_more(self, service, make_log):
        for i in range(4):
            make_log(table_name="providers", record_id="p-1", age=timedelta(minutes=i))

        entries, has_more = service.list_by_entity("provider", "p-1", limit="3")
        assert len(entries) == 3
        assert has_more is True

    def test_limit_is_clamped(self, service, make_log):
        make_log(table_name="providers", record_id="p-1")
        entries, has_more = service.list_by_entity("provider", "p-1", limit="0")
        assert len(entries) == 1
        assert has_more is True

    def test_invalid_params(self, service):
        with pytest.raises(ValidationError):
            service.list_by_entity("agent", "a-1")
        with pytest.raises(ValidationError):
            service.list_by_entity("provider", "")
        with pytest.raises(ValidationError):
            service.list_by_entity("provider", "p-1", limit="many")


@pytest.mark.django_db
class TestStats:
    def test_counts_whole_filtered_set(self, service, make_log):
        make_log(action="insert", actor_email="a@vestasolutions.com")
        make_log(action="create", actor_email="a@vestasolutions.com")
        make_log(action="update", actor_email="b@vestasolutions.com")
        make_log(action="delete", actor_email=None)
        make_log(action="weird", actor_email="")

        stats = service.get_stats(service.list_logs(AuditLogFiltersDTO()))
        assert stats.to_dict() == {
            "total": 5,
            "inserts": 2,
            "updates": 2,
            "deletes": 1,
            "unique_users": 2,
        }

    def test_respects_filters(self, service, make_log):
        make_log(action="insert", table_name="providers")
        make_log(action="update", table_name="facilities")

        stats = service.get_stats(service.list_logs(AuditLogFiltersDTO(table_name="providers")))
        assert stats.total == 1
        assert stats.inserts == 1
        assert stats.updates == 0


@pytest.mark.django_db
class TestSummary:
    def test_summary(self, service, make_log):
        make_log(age=timedelta(days=3))
        latest = make_log()

        summary = service.get_summary()
        assert summary["total_logs"] == 2
        assert summary["logs_today"] == 1
        assert summary["logs_last_24h"] == 1
        assert summary["recent_changes"][0].pk == latest.pk
