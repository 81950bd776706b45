##########################################################################################
#
# Script name: conftest.py
#
# Description: Shared fixtures: a fake content client and sample post records.
#
##########################################################################################

import pytest

from blog_catalog.fetchers import normalize_article


class FakeContentClient:
    def __init__(self, posts=None, error=None):
        self.posts = list(posts or [])
        self.error = error
        self.calls = []

    def query(self, document, variables=None):
        self.calls.append((document, variables))
        if self.error is not None:
            raise self.error
        if variables and 'slug' in variables:
            return {'posts': [post for post in self.posts if post.get('slug') == variables['slug']]}
        return {'posts': list(self.posts)}


def make_post(title, tags, slug=None, **extra):
    slug = slug or title.lower().replace(' ', '-')
    record = {
        'id': f'id-{slug}',
        'title': title,
        'slug': slug,
        'excerpt': extra.pop('excerpt', ''),
        'publishedAt': extra.pop('publishedAt', '2024-01-05T10:00:00Z'),
        'category': extra.pop('category', 'General'),
        'tags': tags,
        'coverImage': extra.pop('coverImage', []),
    }
    record.update(extra)
    return record


@pytest.fixture
def scenario_posts():
    return [
        make_post('Intro to Rust', ['rust', 'systems']),
        make_post('Cooking Pasta', 'food', category='Food'),
        make_post('Rust Ownership', ['rust']),
    ]


@pytest.fixture
def scenario_articles(scenario_posts):
    return [normalize_article(post) for post in scenario_posts]


@pytest.fixture
def fake_client_factory():
    return FakeContentClient


@pytest.fixture
def post_factory():
    return make_post
