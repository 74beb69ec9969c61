"""Unit tests for resource URL parsing and building."""

from __future__ import annotations

import pytest

from hl7_fhir.errors import InvalidArgumentError
from hl7_fhir.urls.locator import (
    ResourceLocator,
    absolute_to_relative_url,
    is_absolute_url,
    parse_absolute_url,
    parse_relative_url,
    parse_url,
    relative_to_absolute_url,
    resource_type_keyword,
    resource_type_name,
)
from hl7_fhir.urls.paths import build_url, encode_query, join_paths


class TestParseRelativeUrl:
    def test_type_and_id(self) -> None:
        assert parse_relative_url("Patient/1234") == ResourceLocator(type="Patient", id="1234")

    def test_versioned(self) -> None:
        loc = parse_relative_url("Patient/1234/_history/2")
        assert loc == ResourceLocator(type="Patient", id="1234", version="2")

    def test_single_segment_is_none(self) -> None:
        assert parse_relative_url("Patient") is None

    def test_three_segments_is_none(self) -> None:
        assert parse_relative_url("Patient/1234/_history") is None

    def test_four_segments_without_history_is_none(self) -> None:
        assert parse_relative_url("Patient/1234/foo/2") is None

    def test_query_string_is_stripped(self) -> None:
        loc = parse_relative_url("Encounter/e-1?_format=json")
        assert loc is not None
        assert loc.id == "e-1"

    def test_keywordize_gives_hyphenated_type(self) -> None:
        loc = parse_relative_url("DiagnosticReport/dr-9", keywordize=True)
        assert loc is not None
        assert loc.type == "diagnostic-report"

    def test_type_is_canonicalised(self) -> None:
        loc = parse_relative_url("diagnostic-report/dr-9")
        assert loc is not None
        assert loc.type == "DiagnosticReport"


class TestParseAbsoluteUrl:
    def test_ignores_server_root_segments(self) -> None:
        loc = parse_absolute_url("http://fhir.example.com/base/r4/Observation/obs-1")
        assert loc == ResourceLocator(type="Observation", id="obs-1")

    def test_versioned(self) -> None:
        loc = parse_absolute_url("http://fhir.example.com/fhir/Patient/p1/_history/7")
        assert loc == ResourceLocator(type="Patient", id="p1", version="7")

    def test_query_is_ignored(self) -> None:
        loc = parse_absolute_url("http://fhir.example.com/Patient/p1?_summary=true")
        assert loc == ResourceLocator(type="Patient", id="p1")

    def test_server_root_only_is_none(self) -> None:
        assert parse_absolute_url("http://fhir.example.com/") is None

    def test_history_listing_is_none(self) -> None:
        assert parse_absolute_url("http://fhir.example.com/Patient/p1/_history") is None

    def test_keywordize(self) -> None:
        loc = parse_absolute_url("http://x.org/fhir/MedicationStatement/m1", keywordize=True)
        assert loc is not None
        assert loc.type == "medication-statement"


class TestIsAbsoluteUrl:
    def test_absolute(self) -> None:
        assert is_absolute_url("https://fhir.example.com/Patient/1") is True

    def test_relative(self) -> None:
        assert is_absolute_url("Patient/1") is False

    @pytest.mark.parametrize("value", [None, "", "   ", 42])
    def test_invalid_argument(self, value) -> None:
        with pytest.raises(InvalidArgumentError):
            is_absolute_url(value)

    def test_parse_failure_is_false(self) -> None:
        assert is_absolute_url("http://[::1") is False


class TestParseUrl:
    def test_dispatches_relative(self) -> None:
        assert parse_url("Patient/1") == ResourceLocator(type="Patient", id="1")

    def test_dispatches_absolute(self) -> None:
        assert parse_url("http://x.org/fhir/Patient/1/_history/3") == ResourceLocator(
            type="Patient", id="1", version="3"
        )


class TestConversion:
    def test_absolute_to_relative(self) -> None:
        assert absolute_to_relative_url("http://x.org/fhir/Patient/1") == "Patient/1"

    def test_absolute_to_relative_versioned(self) -> None:
        assert (
            absolute_to_relative_url("http://x.org/fhir/Patient/1/_history/2")
            == "Patient/1/_history/2"
        )

    @pytest.mark.parametrize("value", [None, "", "  ", "http://x.org/"])
    def test_absolute_to_relative_none(self, value) -> None:
        assert absolute_to_relative_url(value) is None

    def test_relative_to_absolute(self) -> None:
        assert (
            relative_to_absolute_url("http://x.org/fhir", "Patient/1")
            == "http://x.org/fhir/Patient/1"
        )

    def test_relative_to_absolute_collapses_slashes(self) -> None:
        assert (
            relative_to_absolute_url("http://x.org/fhir/", "/Patient/1")
            == "http://x.org/fhir/Patient/1"
        )

    @pytest.mark.parametrize("base,rel", [("", "Patient/1"), ("http://x.org", ""), (None, "Patient/1")])
    def test_relative_to_absolute_blank(self, base, rel) -> None:
        assert relative_to_absolute_url(base, rel) is None

    def test_round_trip(self) -> None:
        base = "https://fhir.example.com/r4"
        absolute = relative_to_absolute_url(base, "Patient/1234/_history/2")
        assert relative_to_absolute_url(base, absolute_to_relative_url(absolute)) == absolute


class TestResourceTypeNames:
    @pytest.mark.parametrize(
        "camel,keyword",
        [
            ("Patient", "patient"),
            ("DiagnosticReport", "diagnostic-report"),
            ("AllergyIntolerance", "allergy-intolerance"),
            ("ImmunizationRecommendation", "immunization-recommendation"),
        ],
    )
    def test_lossless_pair(self, camel: str, keyword: str) -> None:
        assert resource_type_keyword(camel) == keyword
        assert resource_type_name(keyword) == camel

    def test_name_is_idempotent(self) -> None:
        assert resource_type_name("OperationOutcome") == "OperationOutcome"


class TestPaths:
    def test_join_paths_skips_none_and_collapses(self) -> None:
        assert join_paths("/", "Patient", None, "1") == "/Patient/1"

    def test_build_url_keeps_base_path(self) -> None:
        assert build_url("http://x.org/fhir", "Patient", "_id=1") == "http://x.org/fhir/Patient?_id=1"

    def test_encode_query_repeats_sequence_values(self) -> None:
        assert encode_query({"date": [">2013", "<2014"]}) == "date=%3E2013&date=%3C2014"

    def test_encode_query_empty(self) -> None:
        assert encode_query(None) == ""
