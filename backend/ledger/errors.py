class LedgerError(Exception):
    """Base error rendered as ``{"error": message}`` with ``status_code``."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Unauthorized(LedgerError):
    status_code = 401


class NotFound(LedgerError):
    status_code = 404


class ValidationError(LedgerError):
    status_code = 400


class StoreError(LedgerError):
    """Any persistence failure. The message is generic; details go to the log."""

    status_code = 500
