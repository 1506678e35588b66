"""
Shared fixtures.

Each test gets a fresh app on an in-memory SQLite database with its app
context pushed, so engine functions and the test client share one session.
"""

from datetime import datetime

import pytest
from werkzeug.security import generate_password_hash

from app import create_app
from models import Item, User, db

PASSWORD = 'secret123'


@pytest.fixture
def app():
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'SECRET_KEY': 'test-secret',
    })
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make_user(email, password=PASSWORD):
        user = User(email=email, password_hash=generate_password_hash(password))
        db.session.add(user)
        db.session.commit()
        return user
    return _make_user


@pytest.fixture
def make_item(app):
    def _make_item(user, amount, item_type, event, created_at=None, memo=None):
        item = Item(
            user_id=user.id,
            amount=amount,
            type=item_type,
            event=event,
            memo=memo,
            created_at=created_at or datetime.now(),
        )
        db.session.add(item)
        db.session.commit()
        return item
    return _make_item


@pytest.fixture
def alice(make_user):
    return make_user('alice@example.com')


@pytest.fixture
def bob(make_user):
    return make_user('bob@example.com')


@pytest.fixture
def login_as(client):
    def _login_as(user):
        with client.session_transaction() as sess:
            sess['user_id'] = user.id
            sess['user_email'] = user.email
    return _login_as


def count_items():
    return db.session.execute(db.select(db.func.count(Item.id))).scalar_one()


def count_users():
    return db.session.execute(db.select(db.func.count(User.id))).scalar_one()
