"""Job search: filter store → query builder → API → listing view.

Each search is stamped with a generation token. A response is only applied
if its token is still the latest one issued, so a slow earlier search can
never overwrite the results of a later one.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, MutableMapping

from careerconnect import url_sync
from careerconnect.api import ApiClient
from careerconnect.config import Settings
from careerconnect.demo import demo_jobs
from careerconnect.errors import ApiError
from careerconnect.filters import FilterStore, build_query_params
from careerconnect.log import get_logger
from careerconnect.models import FilterState, JobListing
from careerconnect.render import ListingView, RequestStatus, SortOrder, render_listings

log = get_logger(__name__)


@dataclass(frozen=True)
class FetchResult:
    listings: list[JobListing] = field(default_factory=list)
    error: ApiError | None = None
    demo: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_listings(payload: Any) -> list[JobListing]:
    items = payload if isinstance(payload, list) else (payload or {}).get("jobs") or []
    return [JobListing.from_api(item) for item in items]


def fetch_listings(client: ApiClient, state: FilterState, settings: Settings) -> FetchResult:
    params = build_query_params(state)
    try:
        payload = client.get_jobs(params)
    except ApiError as exc:
        if settings.use_demo_data:
            log.warning("Job search failed (%s); showing demo listings", exc)
            return FetchResult(listings=demo_jobs(), error=exc, demo=True)
        log.error("Job search failed: %s", exc)
        return FetchResult(error=exc)
    listings = parse_listings(payload)
    log.info("Search %s returned %d jobs", params or "{}", len(listings))
    return FetchResult(listings=listings)


class SearchController:
    def __init__(self, client: ApiClient, settings: Settings, initial: FilterState | None = None) -> None:
        self.client = client
        self.settings = settings
        self.store = FilterStore(initial)
        self.status = RequestStatus.LOADING
        self.result = FetchResult()
        self._generation = 0

    @classmethod
    def from_url(
        cls, client: ApiClient, settings: Settings, params: Mapping[str, object]
    ) -> "SearchController":
        """The address is the source of truth for keyword/location at mount."""
        return cls(client, settings, FilterState(**url_sync.read_initial(params)))

    @property
    def state(self) -> FilterState:
        return self.store.state

    def begin(self) -> int:
        self._generation += 1
        self.status = RequestStatus.LOADING
        return self._generation

    def complete(self, token: int, result: FetchResult) -> bool:
        if token != self._generation:
            log.debug("Discarding stale search result (token %d, latest %d)", token, self._generation)
            return False
        self.result = result
        self.status = RequestStatus.DONE
        return True

    def search(self) -> FetchResult:
        token = self.begin()
        self.complete(token, fetch_listings(self.client, self.state, self.settings))
        return self.result

    def update_filters(self, **partial: Any) -> FetchResult:
        self.store.apply(**partial)
        return self.search()

    def clear_filters(self) -> FetchResult:
        self.store.clear()
        return self.search()

    def submit(self, keyword: str, location: str, url_params: MutableMapping[str, str]) -> FetchResult:
        """Explicit search submission; the only path that rewrites the URL."""
        state = self.store.apply(keyword=keyword.strip(), location=location.strip())
        url_sync.write(state, url_params)
        return self.search()

    def view(self, order: SortOrder = SortOrder.RECEIVED, now: datetime | None = None) -> ListingView:
        return render_listings(self.status, self.result.listings, order, now)
