import io

from association_site.extensions import db
from association_site.models import Application, ApplicationType, MembershipRequest, Role


def _application(app, type_=ApplicationType.TEAM):
    with app.app_context():
        application = Application(type=type_, name='Applicant', email='applicant@example.org')
        db.session.add(application)
        db.session.commit()
        return application.id


def test_membership_list_requires_login(app, client):
    assert client.get('/admin/api/memberships').status_code == 401


def test_membership_list_newest_first(app, editor_client):
    with app.app_context():
        db.session.add(MembershipRequest(name='First', email='1@example.org'))
        db.session.commit()
        db.session.add(MembershipRequest(name='Second', email='2@example.org'))
        db.session.commit()

    data = editor_client.get('/admin/api/memberships').get_json()
    assert [r['name'] for r in data['requests']] == ['Second', 'First']


def test_application_list_filter(app, editor_client):
    _application(app, ApplicationType.TEAM)
    _application(app, ApplicationType.MEMBER)
    data = editor_client.get('/admin/api/applications?type=TEAM').get_json()
    assert [a['type'] for a in data['applications']] == ['TEAM']
    assert len(editor_client.get('/admin/api/applications').get_json()['applications']) == 2


def test_application_status_is_terminal(app, editor_client):
    application_id = _application(app)

    r = editor_client.patch('/admin/api/applications', json={'id': application_id, 'status': 'ACCEPTED'})
    assert r.status_code == 200
    assert r.get_json()['application']['status'] == 'ACCEPTED'

    r = editor_client.patch('/admin/api/applications', json={'id': application_id, 'status': 'REJECTED'})
    assert r.status_code == 400
    r = editor_client.patch('/admin/api/applications', json={'id': application_id, 'status': 'PENDING'})
    assert r.status_code == 400


def test_application_status_validation(app, editor_client):
    application_id = _application(app)
    assert editor_client.patch('/admin/api/applications', json={'id': application_id}).status_code == 400
    r = editor_client.patch('/admin/api/applications', json={'id': application_id, 'status': 'MAYBE'})
    assert r.status_code == 400


def test_application_status_requires_login(app, client):
    application_id = _application(app)
    r = client.patch('/admin/api/applications', json={'id': application_id, 'status': 'ACCEPTED'})
    assert r.status_code == 401


def test_editor_cannot_manage_users(editor_client):
    assert editor_client.get('/admin/api/users').status_code == 401
    r = editor_client.post('/admin/api/users', json={'username': 'x', 'password': 'secret1'})
    assert r.status_code == 401


def test_admin_creates_editor(admin_client, login):
    r = admin_client.post('/admin/api/users', json={'username': 'newbie', 'password': 'secret1'})
    assert r.status_code == 200
    assert r.get_json()['user']['role'] == 'EDITOR'

    usernames = [u['username'] for u in admin_client.get('/admin/api/users').get_json()['users']]
    assert usernames == ['boss', 'newbie']
    assert login('newbie', 'secret1').status_code == 200


def test_admin_cannot_grant_superadmin(admin_client):
    r = admin_client.post('/admin/api/users', json={'username': 'root', 'password': 'secret1', 'role': 'SUPERADMIN'})
    assert r.status_code == 400


def test_user_creation_validation(admin_client):
    assert admin_client.post('/admin/api/users', json={'username': 'x', 'password': '123'}).status_code == 400
    assert admin_client.post('/admin/api/users', json={'username': 'boss', 'password': 'secret1'}).status_code == 400


def test_superadmin_can_grant_superadmin(client, make_user, login):
    make_user('root', 'secret1', Role.SUPERADMIN)
    login('root', 'secret1')
    r = client.post('/admin/api/users', json={'username': 'root2', 'password': 'secret1', 'role': 'superadmin'})
    assert r.status_code == 200


def test_upload_stores_image(editor_client, blob_store):
    r = editor_client.post('/admin/api/upload', content_type='multipart/form-data',
                           data={'file': (io.BytesIO(b'\x89PNG fake'), 'poster.png', 'image/png')})
    assert r.status_code == 200
    data = r.get_json()
    assert data['filename'].startswith('events/') and data['filename'].endswith('.png')
    assert data['url'].endswith(data['filename'])
    assert blob_store.uploaded[0][1] == b'\x89PNG fake'


def test_upload_rejects_non_images(editor_client, blob_store):
    r = editor_client.post('/admin/api/upload', content_type='multipart/form-data',
                           data={'file': (io.BytesIO(b'hello'), 'notes.txt', 'text/plain')})
    assert r.status_code == 400
    assert editor_client.post('/admin/api/upload', data={}).status_code == 400
    assert blob_store.uploaded == []


def test_upload_rejects_large_files(app, editor_client):
    app.config['MAX_UPLOAD_BYTES'] = 8
    r = editor_client.post('/admin/api/upload', content_type='multipart/form-data',
                           data={'file': (io.BytesIO(b'0123456789'), 'big.jpg', 'image/jpeg')})
    assert r.status_code == 400


def test_upload_requires_login(client):
    r = client.post('/admin/api/upload', content_type='multipart/form-data',
                    data={'file': (io.BytesIO(b'x'), 'a.png', 'image/png')})
    assert r.status_code == 401


def test_application_status_rejects_odd_payloads(app, editor_client):
    application_id = _application(app)
    assert editor_client.patch('/admin/api/applications', json=[application_id, 'ACCEPTED']).status_code == 400
    r = editor_client.patch('/admin/api/applications', json={'id': application_id, 'status': ['ACCEPTED']})
    assert r.status_code == 400


def test_user_creation_with_non_object_body(admin_client):
    assert admin_client.post('/admin/api/users', json=['someone', 'secret1']).status_code == 400


def test_oversized_request_body_is_refused(app, editor_client, blob_store):
    app.config['MAX_CONTENT_LENGTH'] = 1024
    r = editor_client.post('/admin/api/upload', content_type='multipart/form-data',
                           data={'file': (io.BytesIO(b'0' * 4096), 'big.png', 'image/png')})
    assert r.status_code == 413
    assert r.get_json()['ok'] is False
    assert blob_store.uploaded == []
