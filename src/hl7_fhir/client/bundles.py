"""Bundle navigation and paged-result aggregation.

Paged results are walked through their ``next`` links one page at a time;
the absence of a ``next`` link is the only termination signal.

Entries and links are read in both the DSTU1 (``content``/``id``,
``rel``/``href``) and the current (``resource``/``fullUrl``,
``relation``/``url``) bundle layouts.

reference:
  bundles: http://hl7.org/fhir/bundle.html
  paging:  http://hl7.org/fhir/http.html#paging
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..errors import PageLimitExceeded
from ..resources.predicates import validate_bundle
from ..urls.locator import is_absolute_url, relative_to_absolute_url
from .transport import FHIRTransport

logger = logging.getLogger(__name__)

PAGE_LINK_RELS = frozenset({"first", "last", "next", "previous"})


def _link_rel(link: Mapping[str, Any]) -> str | None:
    return link.get("rel", link.get("relation"))


def _link_href(bundle: Mapping[str, Any], rel: str) -> str | None:
    for link in bundle.get("link") or []:
        if _link_rel(link) == rel:
            return link.get("href", link.get("url"))
    return None


def _entry_content(entry: Mapping[str, Any]) -> Any:
    return entry.get("content", entry.get("resource"))


def next_page_url(bundle: Mapping[str, Any]) -> str | None:
    """Return the bundle's 'next' link, or None on the last page."""
    validate_bundle(bundle)
    return _link_href(bundle, "next")


def base_url_from_bundle(bundle: Mapping[str, Any]) -> str | None:
    """Return the bundle's 'fhir-base' link, or None."""
    validate_bundle(bundle)
    return _link_href(bundle, "fhir-base")


def fetch_next_page(transport: FHIRTransport, bundle: Mapping[str, Any]) -> dict | None:
    """GET the page after ``bundle``; None if it is the last page."""
    url = next_page_url(bundle)
    if not url:
        return None
    return transport.get_json(url)


def _concat_entries(merged: dict | None, page: Mapping[str, Any]) -> dict:
    if merged is None:
        return {**page, "entry": list(page.get("entry") or [])}
    merged["entry"] = merged["entry"] + list(page.get("entry") or [])
    return merged


def _strip_page_links(bundle: dict) -> dict:
    bundle["link"] = [
        link for link in bundle.get("link") or [] if _link_rel(link) not in PAGE_LINK_RELS
    ]
    return bundle


def fetch_all(
    transport: FHIRTransport,
    bundle: Mapping[str, Any],
    max_pages: int | None = None,
) -> dict:
    """Fetch every remaining page and merge all entries into one bundle.

    The first page's bundle metadata is kept; its first/last/next/previous
    links are removed and any other links (e.g. 'fhir-base') preserved.
    The input bundle is not modified.

    Args:
        transport: Transport used for the page GETs.
        bundle: The first page.
        max_pages: Maximum number of pages, including the first. None means
            no limit; a server that cycles its 'next' links then loops forever.

    Raises:
        PageLimitExceeded: if more than max_pages pages would be read.
    """
    validate_bundle(bundle)
    merged = _concat_entries(None, bundle)
    page: Mapping[str, Any] | None = bundle
    pages = 1
    while next_page_url(page):
        if max_pages is not None and pages >= max_pages:
            raise PageLimitExceeded(max_pages)
        page = fetch_next_page(transport, page)
        validate_bundle(page)
        pages += 1
        logger.info("Fetched bundle page %d", pages)
        merged = _concat_entries(merged, page)
    return _strip_page_links(merged)


def collect_resources(bundle: Mapping[str, Any]) -> list[dict]:
    """Return every entry's resource, skipping entries with none (deletions)."""
    validate_bundle(bundle)
    return [
        content
        for content in (_entry_content(e) for e in bundle.get("entry") or [])
        if content is not None
    ]


def find_resource_in(bundle: Mapping[str, Any] | None, resource_url: str) -> dict | None:
    """Find the entry identified by an absolute URL or a relative one.

    Relative URLs are resolved against the bundle's 'fhir-base' link.
    """
    if bundle is None:
        return None
    validate_bundle(bundle)
    if is_absolute_url(resource_url):
        search_url = resource_url
    else:
        search_url = relative_to_absolute_url(base_url_from_bundle(bundle), resource_url)
    if search_url is None:
        return None
    for entry in bundle.get("entry") or []:
        entry_url = entry.get("id") or entry.get("fullUrl")
        if entry_url is not None and entry_url == search_url:
            return entry
    return None


def get_contained(resource: Mapping[str, Any], ref_id: str | None) -> dict | None:
    """Resolve a '#id' reference against the resource's contained resources."""
    if not ref_id or not ref_id.strip() or not ref_id.startswith("#"):
        return None
    contained_id = ref_id[1:]
    for contained in resource.get("contained") or []:
        if contained.get("id") == contained_id:
            return contained
    return None
