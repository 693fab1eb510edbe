import pytest

from association_site import create_app
from association_site.auth.passwords import hash_password
from association_site.config import TestConfig
from association_site.extensions import db
from association_site.models import Role, User
from association_site.services.blob import BlobStoreError, is_blob_url

BLOB_URL = 'https://abc123.public.blob.vercel-storage.com/events/1700000000000-aaaa.jpg'
OTHER_BLOB_URL = 'https://abc123.public.blob.vercel-storage.com/events/1700000000001-bbbb.png'
CDN_URL = 'https://images.unsplash.com/photo-1533174072545?w=800&q=80'
DATA_URL = 'data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z8BQDwAEhQGAhKmMIQAAAABJRU5ErkJggg=='


class FakeBlobStore:
    """Records calls instead of talking to the blob provider"""

    def __init__(self):
        self.uploaded = []
        self.deleted = []
        self.fail_deletes = False

    def is_managed(self, url):
        return is_blob_url(url)

    def put(self, path, data, content_type=None):
        self.uploaded.append((path, data, content_type))
        return {'url': f'https://abc123.public.blob.vercel-storage.com/{path}', 'pathname': path}

    def delete(self, url):
        self.deleted.append(url)
        if self.fail_deletes:
            raise BlobStoreError('provider unavailable')


class FakeMailer:
    def __init__(self):
        self.sent = []
        self.result = True

    def send(self, to, subject, html, text):
        self.sent.append({'to': to, 'subject': subject, 'html': html, 'text': text})
        return self.result


@pytest.fixture()
def blob_store():
    return FakeBlobStore()


@pytest.fixture()
def mailer():
    return FakeMailer()


@pytest.fixture()
def app(blob_store, mailer):
    app = create_app(TestConfig, blob_store=blob_store, mailer=mailer)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_user(app):
    """Create a user and return its id"""
    def _make(username='edit1', password='secret1', role=Role.EDITOR, **extra):
        with app.app_context():
            user = User(username=username, password_hash=hash_password(password), role=role, **extra)
            db.session.add(user)
            db.session.commit()
            return user.id
    return _make


@pytest.fixture()
def login(client):
    def _login(username, password):
        return client.post('/api/auth/login', json={'username': username, 'password': password})
    return _login


@pytest.fixture()
def editor_client(client, make_user, login):
    make_user('edit1', 'secret1', Role.EDITOR)
    assert login('edit1', 'secret1').status_code == 200
    return client


@pytest.fixture()
def admin_client(client, make_user, login):
    make_user('boss', 'secret1', Role.ADMIN)
    assert login('boss', 'secret1').status_code == 200
    return client
