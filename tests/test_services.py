from datetime import date, datetime

import pytest
import requests

from association_site.services.blob import BlobStore, BlobStoreError, discard_blob, is_blob_url
from association_site.services.dates import ensure_date_only, parse_date_only, to_date_only_string
from association_site.services.mailer import Mailer
from tests.conftest import BLOB_URL, CDN_URL, DATA_URL, FakeBlobStore


class FakeResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self._body = body or {}
        self.text = str(self._body)

    def json(self):
        return self._body


class FakeHttp:
    def __init__(self, response=None, error=None):
        self.calls = []
        self.response = response or FakeResponse()
        self.error = error

    def _call(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error:
            raise self.error
        return self.response

    def put(self, url, **kwargs):
        return self._call('PUT', url, **kwargs)

    def post(self, url, **kwargs):
        return self._call('POST', url, **kwargs)


def test_is_blob_url():
    assert is_blob_url(BLOB_URL)
    assert not is_blob_url(CDN_URL)
    assert not is_blob_url(DATA_URL)
    assert not is_blob_url('data:text/plain,https://x.public.blob.vercel-storage.com/a.jpg')
    assert not is_blob_url('')
    assert not is_blob_url(None)


def test_blob_put_and_delete_requests():
    http = FakeHttp(FakeResponse(body={'url': BLOB_URL, 'pathname': 'events/a.jpg'}))
    store = BlobStore('tok', api_url='https://blob.example/', session=http)

    assert store.put('events/a.jpg', b'img', content_type='image/jpeg') == {'url': BLOB_URL, 'pathname': 'events/a.jpg'}
    method, url, kwargs = http.calls[0]
    assert (method, url) == ('PUT', 'https://blob.example/events/a.jpg')
    assert kwargs['headers']['authorization'] == 'Bearer tok'
    assert kwargs['headers']['x-content-type'] == 'image/jpeg'

    store.delete(BLOB_URL)
    method, url, kwargs = http.calls[1]
    assert (method, url) == ('POST', 'https://blob.example/delete')
    assert kwargs['json'] == {'urls': [BLOB_URL]}


def test_blob_errors():
    with pytest.raises(BlobStoreError):
        BlobStore(None, session=FakeHttp()).delete(BLOB_URL)
    with pytest.raises(BlobStoreError):
        BlobStore('tok', session=FakeHttp(FakeResponse(500))).delete(BLOB_URL)
    with pytest.raises(BlobStoreError):
        BlobStore('tok', session=FakeHttp(error=requests.exceptions.Timeout())).put('a.jpg', b'')


def test_discard_blob_is_best_effort():
    store = FakeBlobStore()
    assert discard_blob(CDN_URL, store) is False
    assert discard_blob(BLOB_URL, store) is True
    store.fail_deletes = True
    assert discard_blob(BLOB_URL, store) is False
    assert store.deleted == [BLOB_URL, BLOB_URL]


def test_mailer_posts_to_provider():
    http = FakeHttp()
    mailer = Mailer('https://mail.example/emails', 'key', 'noreply@example.org', session=http)
    assert mailer.send('a@example.org', 'Hi', '<p>Hi</p>', 'Hi') is True
    _, url, kwargs = http.calls[0]
    assert url == 'https://mail.example/emails'
    assert kwargs['json']['to'] == ['a@example.org']
    assert kwargs['headers']['Authorization'] == 'Bearer key'


def test_mailer_failures_return_false():
    rejected = Mailer('https://mail.example', 'key', 'x@example.org', session=FakeHttp(FakeResponse(422)))
    assert rejected.send('a@example.org', 'Hi', '', 'Hi') is False
    offline = Mailer('https://mail.example', 'key', 'x@example.org',
                     session=FakeHttp(error=requests.exceptions.ConnectionError()))
    assert offline.send('a@example.org', 'Hi', '', 'Hi') is False


def test_mailer_without_key_only_logs():
    http = FakeHttp()
    assert Mailer('https://mail.example', None, 'x@example.org', session=http).send('a@example.org', 'Hi', '', 'Hi')
    assert http.calls == []


def test_date_only_helpers():
    assert parse_date_only('2026-02-15') == datetime(2026, 2, 15)
    assert parse_date_only('2026-02-15T23:30:00.000Z') == datetime(2026, 2, 15)
    assert parse_date_only(date(2026, 2, 15)) == datetime(2026, 2, 15)
    assert parse_date_only(datetime(2026, 2, 15, 18, 45)) == datetime(2026, 2, 15)
    assert ensure_date_only('2026-02-15T10:00') == '2026-02-15'
    assert to_date_only_string(datetime(2026, 2, 15)) == '2026-02-15'
    assert to_date_only_string(None) is None
    with pytest.raises(ValueError):
        parse_date_only('')
