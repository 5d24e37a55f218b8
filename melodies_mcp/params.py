"""
Search criteria and query serialization for the two search endpoints.

Array filters go out as repeated ``key[]`` entries. Tempo and duration ranges
are AND-gated: a bound is sent only together with its partner, a lone
``minTempo`` (or ``maxDuration``, ...) is dropped on purpose instead of sending
an open-ended range the API does not define.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

SerializedQuery = List[Tuple[str, Any]]

SORT_MODES = ("latest", "shuffle", "featured")

_ARRAY_FIELDS = ("genre", "mood", "instrument", "purpose")


def _as_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


@dataclass(frozen=True)
class SearchCriteria:
    q: Optional[str] = None
    page: Optional[int] = None
    sort: Optional[str] = None
    genre: List[str] = field(default_factory=list)
    mood: List[str] = field(default_factory=list)
    instrument: List[str] = field(default_factory=list)
    purpose: List[str] = field(default_factory=list)
    min_tempo: Optional[float] = None
    max_tempo: Optional[float] = None
    min_duration: Optional[float] = None
    max_duration: Optional[float] = None
    per_page: Optional[int] = None

    @classmethod
    def from_arguments(cls, arguments: Dict[str, Any]) -> "SearchCriteria":
        """Build criteria from a tool argument bag (camelCase keys)."""
        return cls(
            q=arguments.get("q"),
            page=arguments.get("page"),
            sort=arguments.get("sort"),
            genre=_as_list(arguments.get("genre")),
            mood=_as_list(arguments.get("mood")),
            instrument=_as_list(arguments.get("instrument")),
            purpose=_as_list(arguments.get("purpose")),
            min_tempo=arguments.get("minTempo"),
            max_tempo=arguments.get("maxTempo"),
            min_duration=arguments.get("minDuration"),
            max_duration=arguments.get("maxDuration"),
            per_page=arguments.get("perPage"),
        )


def serialize_search_params(criteria: SearchCriteria) -> SerializedQuery:
    params: SerializedQuery = []

    if criteria.q:
        params.append(("q", criteria.q))
    if criteria.page:
        params.append(("page", criteria.page))
    # sort is passed through; the tool schema declares the allowed values
    if criteria.sort:
        params.append(("sort", criteria.sort))

    for name in _ARRAY_FIELDS:
        for value in getattr(criteria, name) or ():
            params.append((f"{name}[]", value))

    if criteria.min_tempo and criteria.max_tempo:
        params.append(("min_tempo", criteria.min_tempo))
        params.append(("max_tempo", criteria.max_tempo))
    if criteria.min_duration and criteria.max_duration:
        params.append(("min_duration", criteria.min_duration))
        params.append(("max_duration", criteria.max_duration))

    # no clamping: the API enforces its own 200 maximum
    if criteria.per_page:
        params.append(("per_page", criteria.per_page))

    return params
