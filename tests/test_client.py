##########################################################################################
#
# Script name: test_client.py
#
# Description: Content API client request shape and error translation.
#
##########################################################################################

from unittest.mock import MagicMock

import pytest
import requests

from blog_catalog.client import ContentClient
from blog_catalog.config import ALL_POSTS_QUERY, ClientSettings
from blog_catalog.errors import ContentQueryError

ENDPOINT = 'https://cms.example/graphql'


def _session(status_code=200, body=None, json_error=None) -> MagicMock:
    session = MagicMock()
    session.headers = {}
    response = MagicMock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body
    session.post.return_value = response
    return session


def test_bearer_header_attached_when_token_configured() -> None:
    session = _session(body={'data': {'posts': []}})
    ContentClient(ClientSettings(endpoint=ENDPOINT, token='secret'), session=session)
    assert session.headers['Authorization'] == 'Bearer secret'


def test_no_authorization_header_without_token() -> None:
    session = _session(body={'data': {'posts': []}})
    client = ContentClient(ClientSettings(endpoint=ENDPOINT), session=session)

    assert client.query(ALL_POSTS_QUERY) == {'posts': []}
    assert 'Authorization' not in session.headers


def test_query_posts_document_and_variables() -> None:
    session = _session(body={'data': {'posts': [{'slug': 'a'}]}})
    client = ContentClient(ClientSettings(endpoint=ENDPOINT, timeout=7.5), session=session)

    data = client.query('query Q($slug: String!) { posts }', {'slug': 'a'})

    assert data == {'posts': [{'slug': 'a'}]}
    session.post.assert_called_once_with(
        ENDPOINT,
        json={'query': 'query Q($slug: String!) { posts }', 'variables': {'slug': 'a'}},
        timeout=7.5,
    )


def test_transport_error_becomes_content_query_error() -> None:
    session = _session()
    session.post.side_effect = requests.ConnectionError('connection refused')
    client = ContentClient(ClientSettings(endpoint=ENDPOINT), session=session)

    with pytest.raises(ContentQueryError) as excinfo:
        client.query(ALL_POSTS_QUERY)
    assert excinfo.value.endpoint == ENDPOINT
    assert 'connection refused' in str(excinfo.value)


@pytest.mark.parametrize(
    'status_code, body, json_error, reason',
    [
        (500, {'data': None}, None, 'HTTP 500'),
        (200, None, ValueError('bad json'), 'not JSON'),
        (200, ['unexpected'], None, 'not a JSON object'),
        (200, {'errors': [{'message': 'field tags unknown'}]}, None, 'field tags unknown'),
        (200, {'data': None}, None, 'no data object'),
    ],
)
def test_bad_responses_raise(status_code, body, json_error, reason) -> None:
    session = _session(status_code=status_code, body=body, json_error=json_error)
    client = ContentClient(ClientSettings(endpoint=ENDPOINT), session=session)

    with pytest.raises(ContentQueryError) as excinfo:
        client.query(ALL_POSTS_QUERY)
    assert reason in excinfo.value.reason


def test_context_manager_closes_session() -> None:
    session = _session()
    with ContentClient(ClientSettings(endpoint=ENDPOINT), session=session):
        pass
    session.close.assert_called_once_with()
