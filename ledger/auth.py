"""Registration and login against the user store.

Failed logins get one message whether or not the email is registered.
"""
import logging

from werkzeug.security import check_password_hash, generate_password_hash

from ledger import messages, store
from ledger.errors import AuthError, ValidationError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def normalize_email(email):
    return (email or '').lower().strip()


def register_user(email, password, confirm_password):
    email = normalize_email(email)
    if not email or not password or not confirm_password:
        raise ValidationError(messages.REGISTER_REQUIRED_FIELDS)
    if password != confirm_password:
        raise ValidationError(messages.REGISTER_PASSWORD_MISMATCH)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(messages.REGISTER_PASSWORD_TOO_SHORT)
    if store.find_user_by_email(email) is not None:
        raise AuthError(messages.REGISTER_EMAIL_TAKEN)
    user = store.create_user(email, generate_password_hash(password))
    if user is None:
        raise AuthError(messages.REGISTER_EMAIL_TAKEN)
    logger.info('Registered user %s', user.id)
    return user


def authenticate(email, password):
    email = normalize_email(email)
    if not email or not password:
        raise ValidationError(messages.LOGIN_REQUIRED_FIELDS)
    user = store.find_user_by_email(email)
    if not user or not check_password_hash(user.password_hash, password):
        logger.info('Failed login attempt')
        raise AuthError(messages.LOGIN_INVALID_CREDENTIALS)
    logger.info('User %s logged in', user.id)
    return user
