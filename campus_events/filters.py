"""Search and filter helpers applied to already fetched rows."""

from __future__ import annotations

from typing import Iterable, Optional

from .models.entities import Event, Resource


def _active(value: Optional[str]) -> bool:
    return bool(value) and value != "all"


def _contains(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle in haystack.lower()


def filter_resources(
    resources: Iterable[Resource],
    search: Optional[str] = None,
    resource_type: Optional[str] = None,
) -> list[Resource]:
    """Keep resources matching a search term and/or an exact type."""

    results = list(resources)
    if search and search.strip():
        term = search.strip().lower()
        results = [
            resource
            for resource in results
            if _contains(resource.name, term)
            or _contains(resource.description, term)
            or _contains(resource.location, term)
        ]
    if _active(resource_type):
        results = [resource for resource in results if resource.type == resource_type]
    return results


def filter_events(
    events: Iterable[Event],
    search: Optional[str] = None,
    status: Optional[str] = None,
) -> list[Event]:
    """Keep events matching a search term and/or an exact status."""

    results = list(events)
    if search and search.strip():
        term = search.strip().lower()
        results = [
            event for event in results if _contains(event.title, term) or _contains(event.description, term)
        ]
    if _active(status):
        results = [event for event in results if event.status == status]
    return results
