from conftest import register


def test_index(client):
    res = client.get('/')
    assert res.status_code == 200


def test_register_logs_user_in(client):
    res = register(client, email='Alice@Example.com', display_name='Alice')
    assert res.status_code == 201
    user = res.get_json()['user']
    assert user['email'] == 'alice@example.com'
    assert user['displayName'] == 'Alice'

    me = client.get('/api/auth/me')
    assert me.status_code == 200
    assert me.get_json()['user']['id'] == user['id']


def test_register_validation(client):
    assert client.post('/api/auth/register', json={'email': 'a@b.com'}).status_code == 400
    res = register(client, password='123')
    assert res.status_code == 400
    assert 'at least 6' in res.get_json()['message']

    assert register(client).status_code == 201
    dup = register(client.application.test_client())
    assert dup.status_code == 400
    assert dup.get_json()['message'] == 'Email is already registered'


def test_password_is_hashed(flask_app, client):
    from scoreboard.models import User
    register(client, email='hash@example.com', password='secret123')
    with flask_app.app_context():
        user = User.query.filter_by(email='hash@example.com').one()
        assert user.password_hash != 'secret123'
        assert user.check_password('secret123')
        assert not user.check_password('wrong')


def test_login_and_logout(flask_app):
    first = flask_app.test_client()
    register(first, email='bob@example.com', password='hunter22')

    fresh = flask_app.test_client()
    bad = fresh.post('/api/auth/login', json={'email': 'bob@example.com', 'password': 'nope'})
    assert bad.status_code == 401
    assert bad.get_json()['message'] == 'Invalid email or password'
    assert fresh.post('/api/auth/login', json={'email': 'nobody@example.com', 'password': 'x'}).status_code == 401

    ok = fresh.post('/api/auth/login', json={'email': 'BOB@example.com', 'password': 'hunter22'})
    assert ok.status_code == 200
    assert ok.get_json()['success'] is True
    assert fresh.get('/api/auth/me').status_code == 200

    assert fresh.post('/api/auth/logout').status_code == 200
    assert fresh.get('/api/auth/me').status_code == 401


def test_each_client_keeps_its_own_login(flask_app, auth_client):
    other = flask_app.test_client()
    assert register(other, email='second@example.com').status_code == 201

    assert auth_client.get('/api/auth/me').get_json()['user']['email'] == 'player@example.com'
    assert other.get('/api/auth/me').get_json()['user']['email'] == 'second@example.com'

    # A client that never logged in stays anonymous
    assert flask_app.test_client().get('/api/auth/me').status_code == 401


def test_register_rejects_non_object_body(client):
    res = client.post('/api/auth/register', json=['player@example.com', 'secret123'])
    assert res.status_code == 400
    assert res.get_json()['success'] is False


def test_register_rejects_non_string_credentials(client):
    assert client.post('/api/auth/register', json={'email': 5, 'password': 'secret123'}).status_code == 400
    assert client.post('/api/auth/register', json={'email': 'a@b.com', 'password': 123456}).status_code == 400


def test_login_rejects_malformed_body(client):
    assert client.post('/api/auth/login', json=[1]).status_code == 400
    assert client.post('/api/auth/login', json={'email': ['x'], 'password': 'secret123'}).status_code == 400
