"""
Contact errors, mapped to HTTP responses in `api/main.py`.
"""

from __future__ import annotations


class ContactError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ContactValidationError(ContactError):
    status_code = 400


class NothingToUpdateError(ContactValidationError):
    def __init__(self, message: str = "no values to be updated") -> None:
        super().__init__(message)


class ContactNotFoundError(ContactError):
    status_code = 404

    def __init__(self, message: str = "contact not found") -> None:
        super().__init__(message)
