"""Skip guards for live tests.

Live tests talk to a real FHIR server and are skipped unless
FHIR_LIVE_BASE_URL is set. Writes (create/update/delete) additionally
require FHIR_LIVE_ALLOW_WRITES=1 so that read-only servers are safe.

Optional environment variables:
  FHIR_OAUTH_TOKEN           Bearer token sent with every request
  FHIR_BASIC_AUTH_USER       Basic auth user (with FHIR_BASIC_AUTH_PASSWORD)
  FHIR_INSECURE              Skip TLS verification (1/true)

Set them in your shell before running:
  export FHIR_LIVE_BASE_URL=https://hapi.fhir.org/baseR4
  pytest tests/live -v -m live
"""

from __future__ import annotations

import os

import pytest

from hl7_fhir.client.fhir_client import FHIRClient
from hl7_fhir.client.options import RequestOptions

skip_no_writes = pytest.mark.skipif(
    os.environ.get("FHIR_LIVE_ALLOW_WRITES", "") != "1",
    reason="Set FHIR_LIVE_ALLOW_WRITES=1 to run live write tests",
)


@pytest.fixture(scope="session")
def live_base_url() -> str:
    base_url = os.environ.get("FHIR_LIVE_BASE_URL", "")
    if not base_url:
        pytest.skip("FHIR_LIVE_BASE_URL not set")
    return base_url


@pytest.fixture(scope="session")
def live_client(live_base_url: str) -> FHIRClient:
    return FHIRClient(live_base_url, RequestOptions.from_env())
