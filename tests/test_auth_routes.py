def _register(client, username='frontdesk', password='s3cret!'):
    return client.post('/api/auth/register', json={'username': username, 'password': password})


def test_register_creates_user(client):
    resp = _register(client)
    assert resp.status_code == 201
    assert resp.get_json()['data'] == {'username': 'frontdesk'}


def test_register_existing_user(client):
    _register(client)
    resp = _register(client)
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'User already exists'


def test_register_requires_username_and_password(client):
    resp = client.post('/api/auth/register', json={'username': 'frontdesk'})
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'Please provide username and password'


def test_password_is_stored_hashed(app, client):
    from clinic_records.models import User

    _register(client)
    user = User.query.filter_by(username='frontdesk').one()
    assert user.password_hash != 's3cret!'
    assert user.check_password('s3cret!')


def test_login(client):
    _register(client)

    ok = client.post('/api/auth/login', json={'username': 'frontdesk', 'password': 's3cret!'})
    assert ok.status_code == 200
    assert ok.get_json()['message'] == 'Login successful'

    wrong = client.post('/api/auth/login', json={'username': 'frontdesk', 'password': 'nope'})
    assert wrong.status_code == 401

    unknown = client.post('/api/auth/login', json={'username': 'ghost', 'password': 'nope'})
    assert unknown.status_code == 401
    assert unknown.get_json()['error'] == 'Invalid credentials'
