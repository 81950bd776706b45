from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .config import PLACEHOLDER_COVER, TAG_PREVIEW_LIMIT, WORDS_PER_MINUTE
from .utils import format_date, word_count


@dataclass(frozen=True)
class Article:
    id: str
    title: str
    slug: str
    excerpt: str = ""
    content: str | None = None
    published_at: datetime | None = None
    category: str = ""
    tags: tuple[str, ...] = ()
    cover_images: tuple[str, ...] = ()

    @property
    def cover_url(self) -> str:
        return self.cover_images[0] if self.cover_images else PLACEHOLDER_COVER

    @property
    def reading_minutes(self) -> int:
        if not self.content:
            return 1
        return max(1, math.ceil(word_count(self.content) / WORDS_PER_MINUTE))

    def display_date(self, long: bool = False) -> str:
        return format_date(self.published_at, long=long)

    def tag_preview(self, limit: int = TAG_PREVIEW_LIMIT) -> tuple[tuple[str, ...], int]:
        return self.tags[:limit], max(0, len(self.tags) - limit)

    def search_fields(self) -> tuple[str, ...]:
        return (self.title, self.excerpt, self.category) + self.tags


class FetchStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchResult:
    """Articles returned by a list fetch, plus whether the fetch actually succeeded.

    An empty ``FAILED`` result means the source was unavailable; an empty ``OK``
    result means the source is genuinely empty.
    """

    articles: tuple[Article, ...] = ()
    status: FetchStatus = FetchStatus.OK
    error: str | None = None

    @property
    def unavailable(self) -> bool:
        return self.status is FetchStatus.FAILED

    def __iter__(self):
        return iter(self.articles)

    def __len__(self) -> int:
        return len(self.articles)

    def __getitem__(self, index):
        return self.articles[index]


@dataclass(frozen=True)
class LookupResult:
    article: Article | None = None
    status: LookupStatus = LookupStatus.NOT_FOUND
    error: str | None = None

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND

    def __bool__(self) -> bool:
        return self.found
