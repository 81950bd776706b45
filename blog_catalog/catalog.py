##########################################################################################
#
# Script name: catalog.py
#
# Description: In-memory article snapshot with refresh, slug lookup, and local search.
#
##########################################################################################

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable, Iterable

from .config import REVALIDATE_SECONDS
from .fetchers import fetch_all_articles
from .models import Article, FetchResult, FetchStatus
from .utils import utc_now


# ****************************************************************************************
# Global data and configuration
# ****************************************************************************************

log = logging.getLogger(__name__)


# ****************************************************************************************
# Functions
# ****************************************************************************************


def matches(article: Article, needle: str) -> bool:
    """Case-insensitive substring match against title, excerpt, category or any tag."""
    return any(needle in field.lower() for field in article.search_fields())


def filter_articles(articles: Iterable[Article], query: str | None) -> tuple[Article, ...]:
    snapshot = tuple(articles)
    query = query or ''
    if not query.strip():
        return snapshot
    needle = query.lower()
    return tuple(article for article in snapshot if matches(article, needle))


def _dedupe_slugs(articles: Iterable[Article]) -> tuple[tuple[Article, ...], dict[str, Article]]:
    ordered: list[Article] = []
    by_slug: dict[str, Article] = {}
    for article in articles:
        if article.slug in by_slug:
            log.warning('Duplicate slug %s (id=%s) dropped from snapshot.', article.slug, article.id)
            continue
        by_slug[article.slug] = article
        ordered.append(article)
    return tuple(ordered), by_slug


# ****************************************************************************************
# Classes
# ****************************************************************************************


class CatalogStore:
    '''
    Holds the current catalog snapshot for one view.

    The snapshot is an immutable tuple; refresh() and replace() swap it in a single
    assignment, so readers see either the previous snapshot or the new one. Filtering
    only ever reads the snapshot and never touches the network.
    '''

    def __init__(
        self,
        client=None,
        seed: Iterable[Article] = (),
        revalidate_seconds: int = REVALIDATE_SECONDS,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._client = client
        self._clock = clock
        self.revalidate_seconds = revalidate_seconds
        self._snapshot: tuple[Article, ...] = ()
        self._by_slug: dict[str, Article] = {}
        self.refreshed_at: datetime | None = None
        self.last_status = FetchStatus.OK
        seed = tuple(seed)
        if seed:
            self.replace(seed)

    @property
    def snapshot(self) -> tuple[Article, ...]:
        return self._snapshot

    @property
    def unavailable(self) -> bool:
        return self.last_status is FetchStatus.FAILED

    def __len__(self) -> int:
        return len(self._snapshot)

    def replace(self, articles: Iterable[Article], status: FetchStatus = FetchStatus.OK) -> None:
        snapshot, by_slug = _dedupe_slugs(articles)
        self._snapshot, self._by_slug = snapshot, by_slug
        self.last_status = status
        self.refreshed_at = self._clock()

    def refresh(self) -> FetchResult:
        if self._client is None:
            log.warning('Catalog refresh requested without a content client.')
            result = FetchResult(status=FetchStatus.FAILED, error='no content client configured')
        else:
            result = fetch_all_articles(self._client)
        if result.unavailable:
            log.warning('Catalog refresh failed; snapshot is now empty (%s).', result.error)
        self.replace(result.articles, status=result.status)
        log.info('Catalog snapshot holds %d article(s).', len(self._snapshot))
        return result

    def is_stale(self, now: datetime | None = None) -> bool:
        if self.refreshed_at is None:
            return True
        now = now or self._clock()
        return now - self.refreshed_at >= timedelta(seconds=self.revalidate_seconds)

    def refresh_if_stale(self, now: datetime | None = None) -> FetchResult | None:
        if not self.is_stale(now):
            return None
        return self.refresh()

    def filter(self, query: str | None) -> tuple[Article, ...]:
        return filter_articles(self._snapshot, query)

    def get(self, slug: str) -> Article | None:
        return self._by_slug.get((slug or '').strip())
