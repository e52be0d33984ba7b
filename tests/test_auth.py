"""
Auth endpoints: user sync, token handling and account listing.
"""
from datetime import timedelta

from coe_tracker.api.auth import create_access_token, split_display_name


class TestDisplayName:
    def test_first_word_and_rest(self):
        assert split_display_name('Ada Lovelace King') == ('Ada', 'Lovelace King')

    def test_defaults(self):
        assert split_display_name(None) == ('Unknown', 'User')
        assert split_display_name('Cher') == ('Cher', 'User')


class TestSync:
    def test_creates_user_and_sets_cookie(self, client):
        resp = client.post('/api/auth/sync', json={
            'email': 'sara@example.com',
            'uid': 'firebase-uid-1',
            'displayName': 'Sara Ahmed',
        })

        assert resp.status_code == 201
        body = resp.json()
        assert body['token_type'] == 'bearer'
        assert body['access_token']
        assert body['user']['email'] == 'sara@example.com'
        assert body['user']['firstName'] == 'Sara'
        assert body['user']['lastName'] == 'Ahmed'
        assert body['user']['role'] == 'Researcher/Dev'

        set_cookie = resp.headers['set-cookie']
        assert set_cookie.startswith('token=')
        assert 'httponly' in set_cookie.lower()

    def test_existing_user_is_returned(self, client, alice):
        resp = client.post('/api/auth/sync', json={'email': 'alice@example.com'})
        assert resp.status_code == 200
        assert resp.json()['user']['id'] == str(alice.id)

    def test_director_email_gets_director_role(self, client):
        resp = client.post('/api/auth/sync', json={'email': 'director@example.com'})
        assert resp.json()['user']['role'] == 'director'

    def test_director_role_cannot_be_requested(self, client):
        resp = client.post('/api/auth/sync', json={'email': 'eve@example.com', 'role': 'director'})
        assert resp.json()['user']['role'] == 'Researcher/Dev'

    def test_other_roles_can_be_requested(self, client):
        resp = client.post('/api/auth/sync', json={'email': 'intern@example.com', 'role': 'Intern'})
        assert resp.json()['user']['role'] == 'Intern'

    def test_invalid_email(self, client):
        resp = client.post('/api/auth/sync', json={'email': 'not-an-email'})
        assert resp.status_code == 422

    def test_token_from_sync_authenticates(self, client):
        token = client.post('/api/auth/sync', json={'email': 'sara@example.com'}).json()['access_token']
        resp = client.get('/api/auth/me', headers={'Authorization': f'Bearer {token}'})
        assert resp.status_code == 200
        assert resp.json()['email'] == 'sara@example.com'


class TestCurrentUser:
    def test_missing_token(self, client):
        resp = client.get('/api/auth/me')
        assert resp.status_code == 401
        assert resp.headers['www-authenticate'] == 'Bearer'

    def test_garbage_token(self, client):
        resp = client.get('/api/auth/me', headers={'Authorization': 'Bearer garbage'})
        assert resp.status_code == 401

    def test_expired_token(self, client, alice):
        token = create_access_token({'sub': str(alice.id)}, expires_delta=timedelta(minutes=-5))
        resp = client.get('/api/auth/me', headers={'Authorization': f'Bearer {token}'})
        assert resp.status_code == 401

    def test_token_for_unknown_user(self, client):
        token = create_access_token({'sub': '00000000-0000-0000-0000-000000000000'})
        resp = client.get('/api/auth/me', headers={'Authorization': f'Bearer {token}'})
        assert resp.status_code == 401

    def test_list_accounts(self, client, alice, bob, auth_headers):
        resp = client.get('/api/auth/accounts', headers=auth_headers(alice))
        assert resp.status_code == 200
        assert [a['firstName'] for a in resp.json()['accounts']] == ['Alice', 'Bob']
