"""
Blob Storage Service

Thin client for the Vercel Blob REST API. One instance is built per app
in create_app() and looked up through get_blob_store().
"""

import logging
import re

import requests
from flask import current_app

logger = logging.getLogger(__name__)

DEFAULT_URL_PATTERN = r'\.vercel-storage\.com/'
API_VERSION = '7'


class BlobStoreError(Exception):
    """Raised when the blob provider rejects or fails a request."""


def is_blob_url(url, pattern=DEFAULT_URL_PATTERN):
    """True if `url` points at an object the blob provider manages.

    External URLs and inline data URLs are never considered managed.
    """
    if not url or not isinstance(url, str):
        return False
    if url.strip().lower().startswith('data:'):
        return False
    return re.search(pattern, url) is not None


class BlobStore:
    """Upload and delete objects in blob storage."""

    def __init__(self, token, api_url='https://blob.vercel-storage.com',
                 url_pattern=DEFAULT_URL_PATTERN, timeout=10, session=None):
        self.token = token
        self.api_url = api_url.rstrip('/')
        self.url_pattern = url_pattern
        self.timeout = timeout
        self.http = session or requests.Session()

    @classmethod
    def from_config(cls, config):
        return cls(
            token=config.get('BLOB_READ_WRITE_TOKEN'),
            api_url=config.get('BLOB_API_URL') or 'https://blob.vercel-storage.com',
            url_pattern=config.get('BLOB_URL_PATTERN') or DEFAULT_URL_PATTERN,
        )

    def is_managed(self, url):
        return is_blob_url(url, self.url_pattern)

    def _headers(self):
        if not self.token:
            raise BlobStoreError('Blob storage is not configured')
        return {
            'authorization': f'Bearer {self.token}',
            'x-api-version': API_VERSION,
        }

    def put(self, path, data, content_type=None):
        """Upload `data` under `path`; returns {'url', 'pathname'}."""
        headers = self._headers()
        headers['x-add-random-suffix'] = '0'
        if content_type:
            headers['x-content-type'] = content_type

        try:
            resp = self.http.put(f'{self.api_url}/{path.lstrip("/")}', data=data,
                                 headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise BlobStoreError(f'Upload failed: {e}') from e

        if resp.status_code >= 400:
            raise BlobStoreError(f'Upload failed with status {resp.status_code}')

        body = resp.json()
        return {'url': body['url'], 'pathname': body.get('pathname', path)}

    def delete(self, url):
        """Delete the object at `url`."""
        headers = self._headers()
        try:
            resp = self.http.post(f'{self.api_url}/delete', json={'urls': [url]},
                                  headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise BlobStoreError(f'Delete failed: {e}') from e

        if resp.status_code >= 400:
            raise BlobStoreError(f'Delete failed with status {resp.status_code}')


def get_blob_store():
    return current_app.extensions['blob_store']


def discard_blob(url, blob_store=None):
    """Best-effort delete of a managed blob. Returns True if a delete succeeded.

    Unmanaged references are left alone; failures are logged, never raised.
    """
    blob_store = blob_store or get_blob_store()
    if not url or not blob_store.is_managed(url):
        return False
    try:
        blob_store.delete(url)
    except Exception:
        logger.warning('Failed to delete blob %s', url, exc_info=True)
        return False
    logger.info('Deleted blob %s', url)
    return True
