import pytest
import requests

import links
from app import create_app
from config import TestingConfig
from db import db
from db.models import User
from tests.fakes import FakeResponse


ROFLZOO_HTML = (
    '<html><head><title>Funny animal pictures, funny animals, funniest dogs</title>'
    '</head><body></body></html>'
)


@pytest.fixture
def pages():
    """Страницы, которые «отдаёт» подменённый requests.get."""
    return {'http://www.roflzoo.com/': ROFLZOO_HTML}


@pytest.fixture(autouse=True)
def fake_requests(monkeypatch, pages):
    def fake_get(url, **kwargs):
        if url not in pages:
            raise requests.ConnectionError(f'no route to {url}')
        page = pages[url]
        return page if isinstance(page, FakeResponse) else FakeResponse(page)

    monkeypatch.setattr(links.requests, 'get', fake_get)


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def user(app):
    user = User(username='Phillip')
    user.set_password('Phillip')
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def auth_client(client, user):
    client.post('/login', json={'username': 'Phillip', 'password': 'Phillip'})
    return client
