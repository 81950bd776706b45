##########################################################################################
#
# Script name: test_main.py
#
# Description: End-to-end build behavior of the CLI entrypoint.
#
##########################################################################################

from datetime import datetime, timedelta, timezone
from pathlib import Path

from blog_catalog.catalog import CatalogStore
from blog_catalog.config import ALL_POSTS_QUERY
from blog_catalog.errors import ContentQueryError
from blog_catalog.main import build_blog, main, watch_blog


def test_sample_mode_writes_site_without_network(tmp_path: Path) -> None:
    output_dir = tmp_path / 'site'

    main(['--sample', '--output-dir', str(output_dir), '--config', str(tmp_path / 'missing.yaml'), '-q'])

    index_html = (output_dir / 'index.html').read_text(encoding='utf-8')
    assert 'Intro to Rust' in index_html
    assert (output_dir / 'posts' / 'cooking-pasta.html').exists()


def test_build_blog_fetches_once_and_renders(tmp_path: Path, fake_client_factory, scenario_posts) -> None:
    client = fake_client_factory(scenario_posts)
    store = CatalogStore(client=client)

    written = build_blog(store, str(tmp_path), client=client)

    assert written == ['intro-to-rust', 'cooking-pasta', 'rust-ownership']
    list_calls = [call for call in client.calls if call[0] == ALL_POSTS_QUERY]
    assert len(list_calls) == 1


def test_build_blog_survives_unavailable_source(tmp_path: Path, fake_client_factory) -> None:
    client = fake_client_factory(error=ContentQueryError('https://cms.example/graphql', 'down'))
    store = CatalogStore(client=client)

    written = build_blog(store, str(tmp_path), client=client)

    assert written == []
    assert 'No articles available at the moment' in (tmp_path / 'index.html').read_text(encoding='utf-8')


def test_watch_blog_rebuilds_after_revalidation_window(tmp_path: Path, fake_client_factory, scenario_posts) -> None:
    now = [datetime(2024, 1, 1, tzinfo=timezone.utc)]
    client = fake_client_factory(scenario_posts)
    store = CatalogStore(client=client, revalidate_seconds=60, clock=lambda: now[0])
    sleeps = []

    def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)
        now[0] += timedelta(seconds=30)

    builds = watch_blog(store, str(tmp_path), client=client, max_cycles=2, sleep=fake_sleep)

    assert builds == 2
    assert len(sleeps) == 2
    list_calls = [call for call in client.calls if call[0] == ALL_POSTS_QUERY]
    assert len(list_calls) == 2
