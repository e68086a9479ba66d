"""Tests for pubresolve.resolve.targets — picking one publish destination."""

import pytest

from pubresolve.errors import (
    AmbiguousTargetError,
    NoTargetConfiguredError,
    UnknownServiceError,
)
from pubresolve.records.models import PublishEntry, PublishRecord
from pubresolve.resolve.targets import resolve_target

from sample_data import CONNECT_SERVER, NETLIFY_ID, NETLIFY_URL


# ── No explicit flags ──────────────────────────────────────────────


class TestNoFlags:
    def test_single_entry_resolves(self, netlify_record):
        target = resolve_target([netlify_record])
        assert target.service == "netlify"
        assert target.id == NETLIFY_ID
        assert target.url == NETLIFY_URL
        assert target.from_record is True

    def test_single_entry_is_deterministic(self, netlify_record):
        first = resolve_target([netlify_record])
        second = resolve_target([netlify_record])
        assert first == second

    def test_no_records_fails(self):
        with pytest.raises(NoTargetConfiguredError, match="No publish destination configured"):
            resolve_target([])

    def test_records_without_entries_count_as_none(self):
        empty = PublishRecord(source="project", service="netlify", entries=[])
        with pytest.raises(NoTargetConfiguredError):
            resolve_target([empty])

    def test_two_entries_for_one_service_is_ambiguous(self, connect_record):
        with pytest.raises(AmbiguousTargetError) as exc_info:
            resolve_target([connect_record])
        assert len(exc_info.value.candidates) == 2

    def test_two_records_is_ambiguous(self, netlify_record, quarto_pub_record):
        with pytest.raises(AmbiguousTargetError) as exc_info:
            resolve_target([netlify_record, quarto_pub_record])
        assert f"netlify:{NETLIFY_ID}" in exc_info.value.candidates
        assert "quarto-pub:a1b2c3" in exc_info.value.candidates

    def test_ambiguity_names_remediation(self, connect_record):
        with pytest.raises(AmbiguousTargetError) as exc_info:
            resolve_target([connect_record])
        assert "--id" in exc_info.value.remediation

    def test_server_flag_overrides_recorded_server(self, connect_record):
        single = PublishRecord(
            source="project", service="connect", entries=connect_record.entries[:1]
        )
        target = resolve_target([single], server="https://other.example.com")
        assert target.server == "https://other.example.com"


# ── Service only ───────────────────────────────────────────────────


class TestServiceOnly:
    def test_single_entry_for_service(self, netlify_record, quarto_pub_record):
        target = resolve_target([netlify_record, quarto_pub_record], service="quarto-pub")
        assert target.service == "quarto-pub"
        assert target.id == "a1b2c3"

    def test_multiple_entries_is_ambiguous(self, connect_record):
        with pytest.raises(AmbiguousTargetError, match="--id"):
            resolve_target([connect_record], service="connect")

    def test_no_entries_for_service(self, netlify_record):
        with pytest.raises(NoTargetConfiguredError) as exc_info:
            resolve_target([netlify_record], service="connect")
        assert "--id" in exc_info.value.remediation

    def test_service_name_is_case_insensitive(self, netlify_record):
        target = resolve_target([netlify_record], service="Netlify")
        assert target.service == "netlify"

    def test_unknown_service(self, netlify_record):
        with pytest.raises(UnknownServiceError) as exc_info:
            resolve_target([netlify_record], service="gh-pages")
        assert exc_info.value.service == "gh-pages"
        assert "netlify" in exc_info.value.supported


# ── Service and id ─────────────────────────────────────────────────


class TestExplicitServiceAndId:
    def test_explicit_target_without_records(self):
        target = resolve_target([], service="netlify", target_id="new-site-id")
        assert target.service == "netlify"
        assert target.id == "new-site-id"
        assert target.url is None
        assert target.from_record is False

    def test_explicit_id_picks_among_ambiguous_entries(self, connect_record):
        target = resolve_target(
            [connect_record], service="connect", target_id="9b1c7d55-2e1f-4a0b-8d3c-6e5f4a3b2c1d"
        )
        assert target.id == "9b1c7d55-2e1f-4a0b-8d3c-6e5f4a3b2c1d"
        assert target.url == f"{CONNECT_SERVER}/content/9b1c7d55/"
        assert target.server == CONNECT_SERVER
        assert target.from_record is True

    def test_explicit_flags_beat_record_contents(self, netlify_record):
        target = resolve_target([netlify_record], service="quarto-pub", target_id="other")
        assert target.service == "quarto-pub"
        assert target.id == "other"

    def test_explicit_server_wins_over_recorded_server(self, connect_record):
        target = resolve_target(
            [connect_record],
            service="connect",
            target_id="4f2ee8b2-0a36-4b4f-a6c5-8f4b43a3c7a1",
            server="https://override.example.com",
        )
        assert target.server == "https://override.example.com"
        # url still comes from the matching record entry
        assert target.url == f"{CONNECT_SERVER}/content/4f2ee8b2/"

    def test_same_id_under_other_service_is_not_borrowed(self, netlify_record):
        target = resolve_target([netlify_record], service="quarto-pub", target_id=NETLIFY_ID)
        assert target.service == "quarto-pub"
        assert target.url is None
        assert target.from_record is False

    def test_source_passed_through_for_new_targets(self):
        target = resolve_target([], service="netlify", target_id="x", source="report.qmd")
        assert target.source == "report.qmd"


# ── Id only ────────────────────────────────────────────────────────


class TestIdOnly:
    def test_id_found_in_one_service(self, netlify_record, quarto_pub_record):
        target = resolve_target([netlify_record, quarto_pub_record], target_id="a1b2c3")
        assert target.service == "quarto-pub"

    def test_id_not_recorded(self, netlify_record):
        with pytest.raises(NoTargetConfiguredError, match="nope"):
            resolve_target([netlify_record], target_id="nope")

    def test_id_recorded_under_two_services(self):
        records = [
            PublishRecord(
                service="netlify", entries=[PublishEntry(id="shared", url="https://a.example")]
            ),
            PublishRecord(
                service="quarto-pub", entries=[PublishEntry(id="shared", url="https://b.example")]
            ),
        ]
        with pytest.raises(AmbiguousTargetError) as exc_info:
            resolve_target(records, target_id="shared")
        assert exc_info.value.candidates == ["netlify:shared", "quarto-pub:shared"]
