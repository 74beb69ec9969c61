"""Example: search a FHIR server and walk every result page.

Usage:
    FHIR_BASE_URL=https://hapi.fhir.org/baseR4 python examples/paged_search.py [family]

Credentials are read from FHIR_OAUTH_TOKEN / FHIR_BASIC_AUTH_USER if set.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from hl7_fhir import FHIRClient, RequestOptions, collect_resources, eq
from hl7_fhir.errors import PageLimitExceeded

DEFAULT_BASE_URL = "https://hapi.fhir.org/baseR4"
MAX_PAGES = 5


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    family = sys.argv[1] if len(sys.argv) > 1 else "Smith"
    base_url = os.environ.get("FHIR_BASE_URL", DEFAULT_BASE_URL)

    print(f"=== Patient search on {base_url} (family={family}) ===\n")
    client = FHIRClient(base_url, RequestOptions.from_env())

    # 1. First page, sent as a form-encoded POST to Patient/_search
    first_page = client.search("Patient", [eq("family", family)], _count=10)
    print(f"First page: {len(first_page.get('entry') or [])} entries")

    # 2. Merge the remaining pages, bounded so a looping server cannot hang us
    try:
        merged = client.fetch_all(first_page, max_pages=MAX_PAGES)
    except PageLimitExceeded:
        print(f"More than {MAX_PAGES} pages; showing the first page only.")
        merged = first_page

    # 3. Print each patient
    for patient in collect_resources(merged):
        names = patient.get("name") or [{}]
        given = " ".join(names[0].get("given", []))
        print(f"  Patient/{patient.get('id')}: {given} {names[0].get('family', '')}".rstrip())


if __name__ == "__main__":
    main()
