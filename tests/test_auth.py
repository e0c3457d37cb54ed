from shiftboard.extensions import db


def test_login_returns_token_and_user(client, owner):
    response = client.post('/auth/login', json={'email': 'Owner@Example.com ', 'password': 'secret123'})

    assert response.status_code == 200
    body = response.get_json()
    assert body['access_token']
    assert body['user']['email'] == 'owner@example.com'
    assert body['user']['role'] == 'OWNER'
    assert 'password_hash' not in body['user']

    me = client.get('/auth/me', headers={'Authorization': f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.get_json()['name'] == 'Olivia Owner'


def test_login_rejects_bad_credentials(client, owner):
    assert client.post('/auth/login', json={'email': 'owner@example.com', 'password': 'nope'}).status_code == 401
    assert client.post('/auth/login', json={'email': 'ghost@example.com', 'password': 'secret123'}).status_code == 401
    assert client.post('/auth/login', json={'email': 'owner@example.com'}).status_code == 400


def test_me_requires_token(client):
    assert client.get('/auth/me').status_code == 401


def test_stale_token_is_unauthorized(client, make_user, auth_headers):
    user = make_user('gone@example.com')
    headers = auth_headers(user)
    db.session.delete(user)
    db.session.commit()

    assert client.get('/auth/me', headers=headers).status_code == 401


def test_health(client):
    assert client.get('/health').status_code == 200
