##########################################################################################
#
# Script name: render.py
#
# Description: Static-site rendering for the article listing and per-article pages.
#
##########################################################################################

import json
import logging
import re
from html import escape
from pathlib import Path

from .catalog import CatalogStore
from .config import SiteSettings
from .fetchers import fetch_article_by_slug
from .models import Article
from .utils import utc_now_iso


# ****************************************************************************************
# Global data and configuration
# ****************************************************************************************

log = logging.getLogger(__name__)

SAFE_SLUG = re.compile(r'[A-Za-z0-9][A-Za-z0-9._~-]*')

CSS = '''
:root {
  --bg: #ffffff;
  --surface: #ffffff;
  --text: #000000;
  --muted: #4b5563;
  --faint: #9ca3af;
  --stroke: #e5e7eb;
  --soft: #f9fafb;
}

* { box-sizing: border-box; }
html, body { margin: 0; padding: 0; }
body {
  font-family: "Inter", "Segoe UI", sans-serif;
  color: var(--text);
  background: var(--bg);
  min-height: 100vh;
}

.wrap {
  max-width: 1150px;
  margin: 0 auto;
  padding: 0 1rem;
}

.narrow { max-width: 56rem; }

header.site {
  border-bottom: 1px solid var(--stroke);
  padding: 1.5rem 0;
}

.headline {
  font-size: 1.9rem;
  font-weight: 700;
  margin: 0;
}

.subline {
  color: var(--muted);
  margin: 0.25rem 0 0;
}

.results {
  color: var(--muted);
  margin: 1.5rem 0;
}

.grid {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(300px, 1fr));
  gap: 2rem;
  padding: 2rem 0;
}

.card {
  border: 1px solid var(--stroke);
  border-radius: 10px;
  overflow: hidden;
  transition: box-shadow 0.3s ease;
}

.card:hover { box-shadow: 0 10px 20px rgba(0, 0, 0, 0.08); }

.cover {
  position: relative;
}

.cover img {
  width: 100%;
  height: 12rem;
  object-fit: cover;
  display: block;
}

.badge {
  display: inline-block;
  border-radius: 999px;
  font-size: 0.75rem;
  font-weight: 600;
  padding: 0.15rem 0.6rem;
  background: #000;
  color: #fff;
}

.cover .badge {
  position: absolute;
  top: 1rem;
  left: 1rem;
}

.badge-outline {
  background: transparent;
  color: var(--text);
  border: 1px solid var(--stroke);
}

.card-body { padding: 1rem 1.25rem 1.25rem; }

.meta {
  font-size: 0.85rem;
  color: var(--faint);
  margin: 0 0 0.5rem;
}

.card h2 {
  font-size: 1.2rem;
  margin: 0 0 0.5rem;
}

.excerpt { color: var(--muted); }

.tags {
  display: flex;
  flex-wrap: wrap;
  gap: 0.3rem;
  margin: 0.75rem 0 1rem;
}

.read-more {
  color: var(--text);
  font-weight: 600;
}

.empty {
  text-align: center;
  padding: 3rem 0;
}

.empty p { color: var(--muted); }

.post-title {
  font-size: 2.6rem;
  line-height: 1.15;
  margin: 1rem 0;
}

.lead {
  font-size: 1.2rem;
  color: var(--muted);
}

.hero {
  width: 100%;
  max-height: 24rem;
  object-fit: cover;
  border-radius: 10px;
  margin: 2rem 0;
}

.prose { line-height: 1.7; color: #374151; }

footer.site {
  border-top: 1px solid var(--stroke);
  background: var(--soft);
  margin-top: 4rem;
  padding: 2rem 0;
  text-align: center;
  color: var(--muted);
  font-size: 0.85rem;
}
'''


# ****************************************************************************************
# Functions
# ****************************************************************************************


def _article_to_json(article: Article) -> dict:
    return {
        'id': article.id,
        'title': article.title,
        'slug': article.slug,
        'excerpt': article.excerpt,
        'published_at': article.published_at.isoformat() if article.published_at else None,
        'category': article.category,
        'tags': list(article.tags),
        'cover_url': article.cover_url,
    }


def _render_tag(tag: str) -> str:
    return f'<span class="badge badge-outline">#{escape(tag)}</span>'


def _page_href(article: Article) -> str:
    if not SAFE_SLUG.fullmatch(article.slug):
        return './404.html'
    return f'./posts/{article.slug}.html'


def _render_card(article: Article) -> str:
    shown, remaining = article.tag_preview()
    tags_html = ''.join(_render_tag(tag) for tag in shown)
    if remaining:
        tags_html += f'<span class="badge badge-outline">+{remaining}</span>'
    return (
        '<article class="card">'
        '<div class="cover">'
        f'<img src="{escape(article.cover_url)}" alt="{escape(article.title)}" width="400" height="200" />'
        f'<span class="badge">{escape(article.category)}</span>'
        '</div>'
        '<div class="card-body">'
        f'<p class="meta">{escape(article.display_date())}</p>'
        f'<h2>{escape(article.title)}</h2>'
        f'<p class="excerpt">{escape(article.excerpt)}</p>'
        f'<div class="tags">{tags_html}</div>'
        f'<a class="read-more" href="{escape(_page_href(article))}">Read Article &rarr;</a>'
        '</div>'
        '</article>'
    )


def _render_empty(search: str | None, unavailable: bool) -> str:
    if search:
        message = f'No articles match your search for "{search}"'
    else:
        message = 'No articles available at the moment'
    retry = '<p>The content source could not be reached. Try again shortly.</p>' if unavailable else ''
    return (
        '<div class="empty">'
        '<h3>No articles found</h3>'
        f'<p>{escape(message)}</p>'
        f'{retry}'
        '</div>'
    )


def _render_shell(site: SiteSettings, title: str, description: str, body: str, css_href: str, extra_head: str = '') -> str:
    return f'''<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{escape(title)}</title>
    <meta name="description" content="{escape(description)}" />{extra_head}
    <link rel="stylesheet" href="{css_href}" />
  </head>
  <body>
{body}
    <footer class="site">
      <strong>{escape(site.title)}</strong>
      <p>{escape(site.footer)}</p>
    </footer>
  </body>
</html>
'''


def render_index(articles: tuple[Article, ...], site: SiteSettings, search: str | None = None, unavailable: bool = False) -> str:
    search = (search or '').strip() or None
    results = ''
    if search:
        plural = '' if len(articles) == 1 else 's'
        results = f'<p class="results">Found {len(articles)} article{plural} for "{escape(search)}"</p>'
    if articles:
        main = '<main class="wrap grid">' + ''.join(_render_card(article) for article in articles) + '</main>'
    else:
        main = f'<main class="wrap">{_render_empty(search, unavailable)}</main>'
    body = (
        '    <header class="site"><div class="wrap">'
        f'<h1 class="headline">{escape(site.title)}</h1>'
        f'<p class="subline">{escape(site.tagline)}</p>'
        '</div></header>\n'
        f'    <div class="wrap">{results}</div>\n'
        f'    {main}'
    )
    title = f'{site.title} - Latest Articles & Insights'
    return _render_shell(site, title, site.description, body, './style.css')


def render_post(article: Article, site: SiteSettings) -> str:
    tags_html = ''.join(_render_tag(tag) for tag in article.tags)
    hero = ''
    if article.cover_images:
        hero = f'<img class="hero" src="{escape(article.cover_url)}" alt="{escape(article.title)}" />'
    og_image = ''
    if article.cover_images:
        og_image = f'\n    <meta property="og:image" content="{escape(article.cover_url)}" />'
    extra_head = (
        f'\n    <meta property="og:title" content="{escape(article.title)}" />'
        f'\n    <meta property="og:description" content="{escape(article.excerpt)}" />'
        f'{og_image}'
        '\n    <meta property="og:type" content="article" />'
    )
    body = (
        '    <header class="site"><div class="wrap narrow"><a class="read-more" href="../index.html">&larr; Back to Blog</a></div></header>\n'
        '    <main class="wrap narrow">'
        f'<p><span class="badge">{escape(article.category)}</span></p>'
        f'<h1 class="post-title">{escape(article.title)}</h1>'
        f'<p class="lead">{escape(article.excerpt)}</p>'
        f'<p class="meta">{escape(article.display_date(long=True))} · {article.reading_minutes} min read</p>'
        f'<div class="tags">{tags_html}</div>'
        f'{hero}'
        f'<div class="prose">{article.content or ""}</div>'
        '</main>'
    )
    return _render_shell(site, f'{article.title} - {site.title}', article.excerpt, body, '../style.css', extra_head)


def render_not_found(site: SiteSettings) -> str:
    body = (
        '    <main class="wrap empty">'
        '<h2>Post not found</h2>'
        '<p><a class="read-more" href="./index.html">Back to Blog</a></p>'
        '</main>'
    )
    return _render_shell(site, f'Post not found - {site.title}', site.description, body, './style.css')


def _detail_article(article: Article, client) -> Article | None:
    if client is None:
        return article
    result = fetch_article_by_slug(client, article.slug)
    if not result:
        log.warning('Skipping detail page for %s (%s).', article.slug, result.status.value)
        return None
    return result.article


def write_site(
    store: CatalogStore,
    output_dir: str,
    client=None,
    site: SiteSettings | None = None,
    search: str | None = None,
) -> list[str]:
    '''
    Write the static site for the store's current snapshot.

    Output:
        Slugs of the detail pages that were written.
    '''
    site = site or SiteSettings()
    root = Path(output_dir)
    posts_dir = root / 'posts'
    data_dir = root / 'data'
    root.mkdir(parents=True, exist_ok=True)
    posts_dir.mkdir(parents=True, exist_ok=True)
    data_dir.mkdir(parents=True, exist_ok=True)

    listed = store.filter(search)
    payload = {
        'generated_at': utc_now_iso(),
        'search': search or '',
        'unavailable': store.unavailable,
        'articles': [_article_to_json(article) for article in listed],
    }
    (data_dir / 'articles.json').write_text(json.dumps(payload, ensure_ascii=True, indent=2), encoding='utf-8')
    (root / 'style.css').write_text(CSS.strip() + '\n', encoding='utf-8')
    (root / '.nojekyll').write_text('', encoding='utf-8')
    (root / 'index.html').write_text(
        render_index(listed, site, search=search, unavailable=store.unavailable), encoding='utf-8'
    )
    (root / '404.html').write_text(render_not_found(site), encoding='utf-8')

    written: list[str] = []
    for article in store.snapshot:
        if not SAFE_SLUG.fullmatch(article.slug):
            log.warning('Skipping detail page for unsafe slug %r.', article.slug)
            continue
        detail = _detail_article(article, client)
        if detail is None:
            continue
        (posts_dir / f'{detail.slug}.html').write_text(render_post(detail, site), encoding='utf-8')
        written.append(detail.slug)
    for stale in posts_dir.glob('*.html'):
        if stale.stem not in written:
            log.info('Removing page for article no longer in the catalog: %s', stale.name)
            stale.unlink()
    log.info('Wrote %d article page(s) to %s', len(written), posts_dir)
    return written
