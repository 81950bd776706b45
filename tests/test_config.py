##########################################################################################
#
# Script name: test_config.py
#
# Description: Site and client settings resolution from YAML and the environment.
#
##########################################################################################

from pathlib import Path

import pytest

from blog_catalog.config import REVALIDATE_SECONDS, load_client_settings, load_site_settings
from blog_catalog.errors import ConfigError


def _write_file(path: Path, content: str) -> None:
    path.write_text(content.strip() + '\n', encoding='utf-8')


def test_environment_supplies_credentials() -> None:
    settings = load_client_settings(
        environ={'HYGRAPH_ENDPOINT': 'https://cms.example/graphql', 'HYGRAPH_TOKEN': 'tok'}
    )
    assert settings.endpoint == 'https://cms.example/graphql'
    assert settings.token == 'tok'


def test_missing_token_is_legal() -> None:
    settings = load_client_settings(environ={'HYGRAPH_ENDPOINT': 'https://cms.example/graphql'})
    assert settings.token is None


def test_missing_endpoint_raises() -> None:
    with pytest.raises(ConfigError):
        load_client_settings(environ={})


def test_yaml_content_block_is_overridden_by_environment(tmp_path: Path) -> None:
    path = tmp_path / 'site.yaml'
    _write_file(
        path,
        '''
        content:
          endpoint: https://from-yaml.example/graphql
          token: yaml-token
          timeout: 5
        ''',
    )

    from_yaml = load_client_settings(str(path), environ={})
    assert from_yaml.endpoint == 'https://from-yaml.example/graphql'
    assert from_yaml.token == 'yaml-token'
    assert from_yaml.timeout == 5.0

    overridden = load_client_settings(str(path), environ={'HYGRAPH_ENDPOINT': 'https://env.example/graphql'})
    assert overridden.endpoint == 'https://env.example/graphql'
    assert overridden.token == 'yaml-token'


def test_site_settings_defaults_when_file_missing(tmp_path: Path) -> None:
    settings = load_site_settings(str(tmp_path / 'missing.yaml'))
    assert settings.title == 'Modern Blog'
    assert settings.revalidate_seconds == REVALIDATE_SECONDS


def test_site_settings_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / 'site.yaml'
    _write_file(
        path,
        '''
        site:
          title: Field Notes
          revalidate_seconds: 300
        ''',
    )
    settings = load_site_settings(str(path))
    assert settings.title == 'Field Notes'
    assert settings.tagline == 'Discover amazing stories and insights'
    assert settings.revalidate_seconds == 300


@pytest.mark.parametrize('content', ['- just\n- a list', 'site: [1, 2]', 'site: {revalidate_seconds: soon}'])
def test_malformed_site_config_raises(tmp_path: Path, content: str) -> None:
    path = tmp_path / 'site.yaml'
    _write_file(path, content)
    with pytest.raises(ConfigError):
        load_site_settings(str(path))
