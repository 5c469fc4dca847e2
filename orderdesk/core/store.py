"""
Content Store Client
====================

Thin client for the Sanity HTTP API used as the order database.

- fetch(query, params)              GROQ query, returns the `result` payload
- patch(doc_id).set({...}).commit() single-document partial update
- delete(doc_id)                    delete-by-identifier

Requests always go to the live API host (never the CDN) because every
request carries a token.
"""

import json
import logging
from typing import Any, Dict, Optional

import requests

from .config import get_config_value

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = '2024-02-07'


class StoreError(Exception):
    """Raised when the content store cannot be reached or rejects a request"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class Patch:
    """Pending partial update for one document, sent on commit()"""

    def __init__(self, client: 'ContentStoreClient', doc_id: str):
        self.client = client
        self.doc_id = doc_id
        self.operations: Dict[str, Any] = {}

    def set(self, fields: Dict[str, Any]) -> 'Patch':
        self.operations.setdefault('set', {}).update(fields)
        return self

    def commit(self) -> Dict[str, Any]:
        if not self.operations:
            raise StoreError(f"Patch for {self.doc_id} has no operations")
        return self.client.mutate([{'patch': {'id': self.doc_id, **self.operations}}])


class ContentStoreClient:
    """Client for one Sanity project/dataset"""

    def __init__(self, project_id: str = None, dataset: str = None, token: str = None,
                 api_version: str = DEFAULT_API_VERSION, timeout: int = 30):
        self.project_id = project_id
        self.dataset = dataset
        self.token = token
        self.api_version = api_version or DEFAULT_API_VERSION
        self.timeout = timeout

    @classmethod
    def from_config(cls) -> 'ContentStoreClient':
        """Build a client from SANITY_* settings (app config, Config, env)"""
        return cls(
            project_id=get_config_value('SANITY_PROJECT_ID'),
            dataset=get_config_value('SANITY_DATASET'),
            token=get_config_value('SANITY_API_TOKEN'),
            api_version=get_config_value('SANITY_API_VERSION', DEFAULT_API_VERSION),
            timeout=int(get_config_value('STORE_TIMEOUT', 30)),
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.project_id and self.dataset and self.token)

    @property
    def base_url(self) -> str:
        api_version = self.api_version.lstrip('v')
        return f"https://{self.project_id}.api.sanity.io/v{api_version}/data"

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        if not self.is_configured:
            raise StoreError("Content store is not configured (SANITY_PROJECT_ID, SANITY_DATASET, SANITY_API_TOKEN)")

        url = f"{self.base_url}/{path}/{self.dataset}"
        headers = {'Authorization': f"Bearer {self.token}"}

        try:
            response = requests.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Content store {method} {path} failed: {e}")
            raise StoreError(f"Content store unreachable: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.status_code >= 400 or 'error' in payload:
            message = self._error_message(payload) or f"HTTP {response.status_code}"
            logger.error(f"Content store {method} {path} rejected ({response.status_code}): {message}")
            raise StoreError(message, response.status_code)

        return payload

    @staticmethod
    def _error_message(payload: Dict[str, Any]) -> Optional[str]:
        """Pull the human readable part out of a Sanity error body"""
        error = payload.get('error')
        if isinstance(error, dict):
            return error.get('description') or error.get('message') or error.get('type')
        if error:
            return payload.get('message') or str(error)
        return payload.get('message')

    def fetch(self, query: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Run a GROQ query and return its result"""
        query_params = {'query': query}
        for key, value in (params or {}).items():
            query_params[f"${key}"] = json.dumps(value)
        return self._request('GET', 'query', params=query_params).get('result')

    def mutate(self, mutations) -> Dict[str, Any]:
        """Send a mutation batch and wait for it to be visible"""
        return self._request(
            'POST', 'mutate',
            params={'returnIds': 'true', 'visibility': 'sync'},
            json={'mutations': mutations},
        )

    def patch(self, doc_id: str) -> Patch:
        return Patch(self, doc_id)

    def delete(self, doc_id: str) -> Dict[str, Any]:
        return self.mutate([{'delete': {'id': doc_id}}])
