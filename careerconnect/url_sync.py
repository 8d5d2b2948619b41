"""Mirror keyword/location into the page address for shareable searches."""
from __future__ import annotations

from typing import Mapping, MutableMapping
from urllib.parse import urlencode

from careerconnect.models import FilterState

URL_KEYS: tuple[str, ...] = ("keyword", "location")


def _first(value: object) -> str:
    # Query-param mappings may hand back a list for repeated keys.
    if isinstance(value, (list, tuple)):
        value = value[0] if value else ""
    return str(value or "").strip()


def read_initial(params: Mapping[str, object]) -> dict[str, str]:
    """Initial keyword/location taken from the address at page load."""
    return {key: _first(params.get(key, "")) for key in URL_KEYS}


def url_params(state: FilterState) -> dict[str, str]:
    params: dict[str, str] = {}
    for key in URL_KEYS:
        value = getattr(state, key)
        if value:
            params[key] = value
    return params


def write(state: FilterState, params: MutableMapping[str, str]) -> None:
    """Replace the address query with the submitted keyword/location.

    Called on explicit search submission only, never on facet toggles.
    """
    params.clear()
    params.update(url_params(state))


def to_query_string(state: FilterState) -> str:
    return urlencode(url_params(state))
