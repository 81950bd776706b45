##########################################################################################
#
# Script name: config.py
#
# Description: Static configuration, GraphQL documents, and settings loading for the blog.
#
##########################################################################################

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from .errors import ConfigError


# ****************************************************************************************
# Global data and configuration
# ****************************************************************************************

log = logging.getLogger(__name__)

ENDPOINT_ENV = 'HYGRAPH_ENDPOINT'
TOKEN_ENV = 'HYGRAPH_TOKEN'

REVALIDATE_SECONDS = 60
REQUEST_TIMEOUT_SECONDS = 15.0
PLACEHOLDER_COVER = '/placeholder.svg?height=400&width=800'
TAG_PREVIEW_LIMIT = 3
WORDS_PER_MINUTE = 200
USER_AGENT = 'blog-catalog/1.0'

ARTICLE_FIELDS = '''
      id
      title
      slug
      excerpt
      publishedAt
      category
      tags
      coverImage {
        url
      }
'''

ALL_POSTS_QUERY = (
    'query GetAllPosts {\n'
    '  posts(orderBy: publishedAt_DESC) {'
    f'{ARTICLE_FIELDS}'
    '  }\n'
    '}\n'
)

POST_BY_SLUG_QUERY = (
    'query GetPostBySlug($slug: String!) {\n'
    '  posts(where: { slug: $slug }) {'
    f'{ARTICLE_FIELDS}'
    '      content\n'
    '  }\n'
    '}\n'
)


@dataclass(frozen=True)
class ClientSettings:
    endpoint: str
    token: str | None = None
    timeout: float = REQUEST_TIMEOUT_SECONDS


@dataclass(frozen=True)
class SiteSettings:
    title: str = 'Modern Blog'
    tagline: str = 'Discover amazing stories and insights'
    description: str = 'Discover the latest articles, insights, and stories on our modern blog platform.'
    footer: str = 'All rights reserved.'
    revalidate_seconds: int = REVALIDATE_SECONDS


# ****************************************************************************************
# Functions
# ****************************************************************************************


def _read_yaml(path: str) -> dict:
    try:
        with open(path, 'r', encoding='utf-8') as handle:
            payload = yaml.safe_load(handle) or {}
    except OSError as exc:
        raise ConfigError(f'Unable to read config file {path}: {exc}') from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f'Invalid YAML in config file {path}: {exc}') from exc
    if not isinstance(payload, dict):
        raise ConfigError(f'Config file {path} must contain a mapping at the top level')
    return payload


def _section(payload: dict, key: str) -> dict:
    value = payload.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f'config.{key} must be a mapping')
    return value


def load_site_settings(path: str | None = None) -> SiteSettings:
    if not path or not Path(path).exists():
        return SiteSettings()
    site = _section(_read_yaml(path), 'site')
    defaults = SiteSettings()
    try:
        revalidate = int(site.get('revalidate_seconds', defaults.revalidate_seconds))
    except (TypeError, ValueError) as exc:
        raise ConfigError('config.site.revalidate_seconds must be an integer') from exc
    return SiteSettings(
        title=str(site.get('title') or defaults.title),
        tagline=str(site.get('tagline') or defaults.tagline),
        description=str(site.get('description') or defaults.description),
        footer=str(site.get('footer') or defaults.footer),
        revalidate_seconds=max(0, revalidate),
    )


def load_client_settings(path: str | None = None, environ: dict | None = None) -> ClientSettings:
    '''
    Resolve the content API endpoint and credential.

    The optional YAML file's `content` block supplies defaults; the HYGRAPH_ENDPOINT and
    HYGRAPH_TOKEN environment variables win when set. A missing token is legal.
    '''
    env = os.environ if environ is None else environ
    content: dict = {}
    if path and Path(path).exists():
        content = _section(_read_yaml(path), 'content')

    endpoint = (env.get(ENDPOINT_ENV) or content.get('endpoint') or '').strip()
    if not endpoint:
        raise ConfigError(f'No content endpoint configured. Set {ENDPOINT_ENV} or content.endpoint.')
    token = (env.get(TOKEN_ENV) or content.get('token') or '').strip() or None
    try:
        timeout = float(content.get('timeout', REQUEST_TIMEOUT_SECONDS))
    except (TypeError, ValueError) as exc:
        raise ConfigError('config.content.timeout must be a number') from exc

    log.debug('Content endpoint: %s (token configured: %s)', endpoint, token is not None)
    return ClientSettings(endpoint=endpoint, token=token, timeout=timeout)
