import os

os.environ.setdefault('DATABASE_URL', 'sqlite://')
os.environ.setdefault('JWT_SECRET_KEY', 'test-secret-key-for-the-school-api-suite')
os.environ.setdefault('SALT_ROUNDS', '4')

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from school_api.database import Base, get_db  # noqa: E402
from school_api.main import create_app  # noqa: E402
from school_api.models import course, student, teacher, user  # noqa: E402,F401


@pytest.fixture
def engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def _client_for(app, session_factory) -> TestClient:
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def client(session_factory) -> TestClient:
    """Client for the default deployment: only /students is protected."""
    return _client_for(create_app(protected_resources=['students']), session_factory)


@pytest.fixture
def locked_client(session_factory) -> TestClient:
    """Client with every resource router behind the bearer-token gate."""
    return _client_for(create_app(protected_resources=['students', 'courses', 'teachers']), session_factory)


@pytest.fixture
def register_and_login(client):
    def _register_and_login(name='Alice', email='alice@example.com', password='secret123') -> str:
        response = client.post('/auth/register', json={'name': name, 'email': email, 'password': password})
        assert response.status_code == 201
        response = client.post('/auth/login', json={'email': email, 'password': password})
        assert response.status_code == 200
        return response.json()['token']

    return _register_and_login


@pytest.fixture
def auth_headers(register_and_login) -> dict[str, str]:
    return {'Authorization': f'Bearer {register_and_login()}'}
