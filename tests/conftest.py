"""Shared pytest fixtures, bundle factories, and test markers.

Test tiers
----------
  unit        Fast, fully offline, zero external dependencies.
              HTTP is faked with requests_mock or MagicMock sessions.

  integration Multi-step client flows (search → page → collect,
              create → follow Location) against a mocked server.

  quality     Property-based (Hypothesis) checks of the pure URL and
              search-encoding functions. Always run offline.

  live        Real FHIR server. Skipped unless FHIR_LIVE_BASE_URL is set.
              See tests/live/conftest.py for guards.

Run specific tiers:
  pytest tests/unit tests/integration tests/quality   # offline only
  pytest tests/live -m live                           # live only
  pytest tests/ -v                                    # everything
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from hl7_fhir.client.fhir_client import FHIRClient

BASE_URL = "https://fhir.example.com/r4"
FHIR_HEADERS = {"Content-Type": "application/json+fhir; charset=UTF-8"}


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------

def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast offline unit tests")
    config.addinivalue_line("markers", "integration: mock-based integration tests")
    config.addinivalue_line("markers", "quality: property-based")
    config.addinivalue_line("markers", "live: requires a real FHIR server (skipped by default)")


# ---------------------------------------------------------------------------
# Bundle factories
# ---------------------------------------------------------------------------

def make_entry(resource_type: str, resource_id: str, base_url: str = BASE_URL) -> dict:
    return {
        "id": f"{base_url}/{resource_type}/{resource_id}",
        "content": {"resourceType": resource_type, "id": resource_id},
    }


def make_bundle(
    entries: list[dict] | None = None,
    links: dict[str, str] | None = None,
    base_url: str = BASE_URL,
) -> dict[str, Any]:
    """Build a searchset bundle. ``links`` maps rel → href; 'fhir-base' is always added."""
    link = [{"rel": "fhir-base", "href": base_url}]
    link += [{"rel": rel, "href": href} for rel, href in (links or {}).items()]
    return {
        "resourceType": "Bundle",
        "type": "searchset",
        "entry": entries or [],
        "link": link,
    }


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def client() -> FHIRClient:
    return FHIRClient(BASE_URL)


@pytest.fixture
def mock_session() -> MagicMock:
    """A session double; tests assert on its call count."""
    return MagicMock()


@pytest.fixture
def sample_patient() -> dict:
    return {
        "resourceType": "Patient",
        "id": "p-001",
        "name": [{"family": "Smith", "given": ["Jane"]}],
        "gender": "female",
        "birthDate": "1980-05-12",
    }


@pytest.fixture
def operation_outcome() -> dict:
    return {
        "resourceType": "OperationOutcome",
        "issue": [{"severity": "error", "code": "invalid", "diagnostics": "Bad request"}],
    }


@pytest.fixture
def three_page_chain() -> list[dict]:
    """page1 → page2 → page3; the last page still carries previous/first/last links."""
    page2_url = f"{BASE_URL}?_getpages=abc&_getpagesoffset=2"
    page3_url = f"{BASE_URL}?_getpages=abc&_getpagesoffset=4"
    page1 = make_bundle(
        [make_entry("Patient", "1"), make_entry("Patient", "2")],
        {"self": f"{BASE_URL}/Patient/_search", "next": page2_url, "last": page3_url},
    )
    page2 = make_bundle(
        [make_entry("Patient", "3"), make_entry("Patient", "4")],
        {"next": page3_url, "previous": f"{BASE_URL}/Patient/_search"},
    )
    page3 = make_bundle(
        [make_entry("Patient", "5")],
        {"first": f"{BASE_URL}/Patient/_search", "previous": page2_url, "last": page3_url},
    )
    return [page1, page2, page3]
