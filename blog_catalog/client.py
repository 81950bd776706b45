##########################################################################################
#
# Script name: client.py
#
# Description: GraphQL client for the headless content API.
#
##########################################################################################

import logging

import requests

from .config import USER_AGENT, ClientSettings
from .errors import ContentQueryError


# ****************************************************************************************
# Global data and configuration
# ****************************************************************************************

log = logging.getLogger(__name__)


# ****************************************************************************************
# Classes
# ****************************************************************************************


class ContentClient:
    '''
    Sends GraphQL documents to the content endpoint.

    Input:
        settings: endpoint, optional bearer token and request timeout. Fixed after
            construction.
        session: optional requests.Session, mainly so tests can substitute one.

    Output:
        query() returns the response's `data` object or raises ContentQueryError.
    '''

    def __init__(self, settings: ClientSettings, session: requests.Session | None = None):
        self.settings = settings
        self._session = session or requests.Session()
        self._session.headers.update(self._build_headers())

    def _build_headers(self) -> dict[str, str]:
        headers = {
            'Content-Type': 'application/json',
            'Accept': 'application/json',
            'User-Agent': USER_AGENT,
        }
        if self.settings.token:
            headers['Authorization'] = f'Bearer {self.settings.token}'
        return headers

    @property
    def endpoint(self) -> str:
        return self.settings.endpoint

    def query(self, document: str, variables: dict | None = None) -> dict:
        payload = {'query': document, 'variables': variables or {}}
        try:
            response = self._session.post(
                self.settings.endpoint,
                json=payload,
                timeout=self.settings.timeout,
            )
        except requests.RequestException as exc:
            raise ContentQueryError(self.settings.endpoint, str(exc)) from exc

        if response.status_code >= 400:
            raise ContentQueryError(self.settings.endpoint, f'HTTP {response.status_code}')
        try:
            body = response.json()
        except ValueError as exc:
            raise ContentQueryError(self.settings.endpoint, 'response was not JSON') from exc
        if not isinstance(body, dict):
            raise ContentQueryError(self.settings.endpoint, 'response was not a JSON object')

        errors = body.get('errors')
        if errors:
            messages = [str(error.get('message', error)) if isinstance(error, dict) else str(error) for error in errors]
            raise ContentQueryError(self.settings.endpoint, '; '.join(messages))

        data = body.get('data')
        if not isinstance(data, dict):
            raise ContentQueryError(self.settings.endpoint, 'response has no data object')
        return data

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> 'ContentClient':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
