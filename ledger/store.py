"""Persistence for users and items on top of Flask-SQLAlchemy.

Every function runs in the request's ``db.session``. SQLAlchemy failures are
rolled back, logged with full detail and re-raised as InfrastructureError.
"""
import logging
from functools import wraps

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ledger.errors import InfrastructureError
from models import Item, User, db

logger = logging.getLogger(__name__)


def _persistence(func):
    @wraps(func)
    def wrapped(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception('Persistence failure in %s', func.__name__)
            raise InfrastructureError() from exc
    return wrapped


# ---------------------- Users ----------------------
@_persistence
def find_user(user_id):
    return db.session.get(User, user_id)


@_persistence
def find_user_by_email(email):
    return db.session.execute(db.select(User).filter_by(email=email)).scalar_one_or_none()


@_persistence
def create_user(email, password_hash):
    """Insert a user, or return None when the email is already taken."""
    user = User(email=email, password_hash=password_hash)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return None
    return user


# ---------------------- Items ----------------------
@_persistence
def find_items(owner_id, clauses=()):
    """Owner-scoped items, newest first; equal timestamps keep insertion order."""
    query = (
        db.select(Item)
        .where(Item.user_id == owner_id, *clauses)
        .order_by(Item.created_at.desc(), Item.id.asc())
    )
    return list(db.session.execute(query).scalars())


@_persistence
def find_item(item_id, owner_id):
    query = db.select(Item).where(Item.id == item_id, Item.user_id == owner_id)
    return db.session.execute(query).scalar_one_or_none()


@_persistence
def create_item(**fields):
    item = Item(**fields)
    db.session.add(item)
    db.session.commit()
    return item


@_persistence
def update_item(item, **fields):
    for name, value in fields.items():
        setattr(item, name, value)
    db.session.commit()
    return item


@_persistence
def delete_item(item):
    db.session.delete(item)
    db.session.commit()
