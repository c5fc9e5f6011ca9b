"""
Pytest fixtures for PhoneShop backend tests.

Provides application setup on either key-value backend, a test client
and small helpers for building records through the API.
"""

import pytest

from phoneshop import create_app
from phoneshop.extensions import db
from phoneshop.services.kv_store import kv


BASE_CONFIG = {
    'TESTING': True,
    'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    'REQUEST_LOGGING': False,
}


def make_app(**overrides):
    return create_app({**BASE_CONFIG, **overrides})


@pytest.fixture(scope='function')
def app():
    """Application on the in-memory key-value backend (fresh per test)."""
    app = make_app(KV_BACKEND='memory')
    with app.app_context():
        yield app


@pytest.fixture(scope='function')
def sql_app():
    """Application on the SQL key-value backend (SQLite in memory)."""
    app = make_app(KV_BACKEND='sql')
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def store(app):
    """The key-value store facade bound to the test app."""
    return kv


def post_json(client, path: str, payload) -> dict:
    """POST and return the parsed JSON body, asserting success."""
    response = client.post(path, json=payload)
    assert response.status_code == 200, response.get_data(as_text=True)
    body = response.get_json()
    assert body['success'] is True
    return body['data']


def get_data(client, path: str):
    response = client.get(path)
    assert response.status_code == 200, response.get_data(as_text=True)
    return response.get_json()['data']
