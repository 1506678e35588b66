from ledger import messages


class LedgerError(Exception):
    """Base class for errors whose ``message`` is safe to show to the user."""

    default_message = messages.SERVER_ERROR

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(LedgerError):
    pass


class NotFound(LedgerError):
    """Raised for both missing and not-owned items so ownership never leaks."""

    default_message = messages.ITEM_NOT_FOUND


class AuthError(LedgerError):
    default_message = messages.LOGIN_INVALID_CREDENTIALS


class InfrastructureError(LedgerError):
    """Persistence failure. The SQLAlchemy error is kept as ``__cause__``."""
