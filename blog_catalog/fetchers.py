##########################################################################################
#
# Script name: fetchers.py
#
# Description: Fetches articles from the content API and normalizes them into Articles.
#
##########################################################################################

import logging
from datetime import datetime, timedelta, timezone

from .config import ALL_POSTS_QUERY, POST_BY_SLUG_QUERY
from .errors import ContentQueryError
from .models import Article, FetchResult, FetchStatus, LookupResult, LookupStatus
from .utils import normalize_tags, normalize_whitespace, parse_timestamp, stable_id


# ****************************************************************************************
# Global data and configuration
# ****************************************************************************************

log = logging.getLogger(__name__)


# ****************************************************************************************
# Functions
# ****************************************************************************************


def _text(value) -> str:
    if value is None:
        return ''
    return str(value)


def _cover_urls(raw) -> tuple[str, ...]:
    if isinstance(raw, dict):
        raw = [raw]
    if not isinstance(raw, list):
        return ()
    urls = []
    for item in raw:
        if isinstance(item, dict):
            url = _text(item.get('url')).strip()
        elif isinstance(item, str):
            url = item.strip()
        else:
            url = ''
        if url:
            urls.append(url)
    return tuple(urls)


def normalize_article(record: dict) -> Article | None:
    if not isinstance(record, dict):
        log.warning('Skipping post record that is not an object: %r', record)
        return None
    title = normalize_whitespace(_text(record.get('title')))
    slug = _text(record.get('slug')).strip()
    if not title or not slug:
        log.warning('Skipping post %s without a title or slug.', record.get('id'))
        return None
    content = record.get('content')
    return Article(
        id=_text(record.get('id')) or stable_id(slug, title),
        title=title,
        slug=slug,
        excerpt=_text(record.get('excerpt')).strip(),
        content=_text(content) if content is not None else None,
        published_at=parse_timestamp(record.get('publishedAt')),
        category=_text(record.get('category')).strip(),
        tags=normalize_tags(record.get('tags')),
        cover_images=_cover_urls(record.get('coverImage')),
    )


def _posts_from(data: dict) -> list:
    posts = data.get('posts')
    if posts is None:
        return []
    if not isinstance(posts, list):
        raise ValueError(f'expected a list of posts, got {type(posts).__name__}')
    return posts


def fetch_all_articles(client) -> FetchResult:
    '''
    Fetch every article the content API exposes.

    Never raises: a transport, query or payload failure is logged and returned as an
    empty result with status FAILED, so a listing page can always render.
    '''
    try:
        posts = _posts_from(client.query(ALL_POSTS_QUERY))
    except (ContentQueryError, ValueError) as exc:
        log.error('Error fetching posts: %s', exc)
        return FetchResult(status=FetchStatus.FAILED, error=str(exc))

    articles = []
    for record in posts:
        article = normalize_article(record)
        if article is not None:
            articles.append(article)
    log.debug('Available slugs: %s', [article.slug for article in articles])
    log.info('Fetched %d article(s) from the content API.', len(articles))
    return FetchResult(articles=tuple(articles))


def fetch_article_by_slug(client, slug: str) -> LookupResult:
    '''
    Look up one article, including its content, by exact slug.

    Returns NOT_FOUND for a blank slug or no match and FAILED when the query fails.
    Both are falsy, so callers that only care about presence can treat them alike.
    '''
    slug = (slug or '').strip()
    if not slug:
        log.warning('Refusing to look up a post with an empty slug.')
        return LookupResult()

    try:
        posts = _posts_from(client.query(POST_BY_SLUG_QUERY, {'slug': slug}))
    except (ContentQueryError, ValueError) as exc:
        log.error('Error fetching post %s: %s', slug, exc)
        return LookupResult(status=LookupStatus.FAILED, error=str(exc))

    for record in posts:
        if not isinstance(record, dict) or record.get('slug') != slug:
            continue
        article = normalize_article(record)
        if article is not None:
            log.debug('Post found: %s', slug)
            return LookupResult(article=article, status=LookupStatus.FOUND)
    log.warning('No post found for slug: %s', slug)
    return LookupResult()


def build_sample_articles() -> list[Article]:
    now = datetime.now(timezone.utc).replace(microsecond=0)
    templates = [
        ('Intro to Rust', 'Programming', 'rust,systems', 'Why ownership makes systems code safer.'),
        ('Cooking Pasta', 'Food', ['food'], 'Salt the water and keep tasting.'),
        ('Rust Ownership', 'Programming', ['rust'], 'Borrowing rules explained with examples.'),
        ('Designing Static Sites', 'Web', 'web, static, ,hosting', 'Fast pages with no server to babysit.'),
        ('Weekend Hiking Guide', 'Outdoors', ['travel', 'hiking', 'maps', 'gear'], 'Short loops close to town.'),
    ]
    articles: list[Article] = []
    for idx, (title, category, tags, excerpt) in enumerate(templates):
        slug = title.lower().replace(' ', '-')
        record = {
            'id': stable_id('sample', slug),
            'title': title,
            'slug': slug,
            'excerpt': excerpt,
            'content': f'<p>{excerpt}</p><p>Sample content for {title}.</p>',
            'publishedAt': (now - timedelta(days=idx)).isoformat(),
            'category': category,
            'tags': tags,
            'coverImage': [],
        }
        articles.append(normalize_article(record))
    return articles
