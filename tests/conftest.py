import os

os.environ.setdefault('SQL_DATABASE_URL', 'sqlite://')
os.environ.setdefault('SECRET_KEY', 'test-secret-key')

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from medtrack.db.base import get_db
from medtrack.main import app
from medtrack.models import Base

PASSWORD = 'secret123'


@pytest.fixture()
def engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


def _client_for(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture()
def bare_client(engine):
    """Client over an empty database with no tables."""
    with _client_for(engine) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture()
def client(engine):
    Base.metadata.create_all(bind=engine)
    with _client_for(engine) as client:
        yield client
    app.dependency_overrides.clear()


def signup_and_login(client, email, name=None):
    payload = {'email': email, 'password': PASSWORD}
    if name:
        payload['name'] = name
    resp = client.post('/api/auth/signup', json=payload)
    assert resp.status_code == 200, resp.text
    resp = client.post('/api/auth/login', json={'username': email, 'password': PASSWORD})
    assert resp.status_code == 200, resp.text
    return resp.json()['data']['access_token']


@pytest.fixture()
def token(client):
    return signup_and_login(client, 'family@example.com', name='Lan')


@pytest.fixture()
def auth_headers(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture()
def other_headers(client):
    other = signup_and_login(client, 'neighbour@example.com')
    return {'Authorization': f'Bearer {other}'}


@pytest.fixture()
def create_medication(client, auth_headers):
    def _create(**fields):
        payload = {'name': 'Aspirin', 'time': '08:00'}
        payload.update(fields)
        resp = client.post('/api/medications', json=payload, headers=auth_headers)
        assert resp.status_code == 200, resp.text
        return resp.json()['data']
    return _create
