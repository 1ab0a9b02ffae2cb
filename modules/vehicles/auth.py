"""Login gate for the admin console.

The stock authenticator compares against one configured username/password
pair.  Anything with an ``authenticate(username, password) -> bool`` method
can be passed to the login dialog instead.
"""

from __future__ import annotations

import hmac
import logging
from typing import Protocol

from utils.app_settings import VehicleAdminSettings


logger = logging.getLogger(__name__)

LOGIN_ERROR = "Invalid username or password."


class Authenticator(Protocol):
    def authenticate(self, username: str, password: str) -> bool:
        ...


class StaticCredentialAuthenticator:
    def __init__(self, username: str, password: str) -> None:
        self._username = username
        self._password = password

    @classmethod
    def from_settings(cls, settings: VehicleAdminSettings) -> "StaticCredentialAuthenticator":
        return cls(settings.username, settings.password)

    def authenticate(self, username: str, password: str) -> bool:
        ok = hmac.compare_digest(username.encode(), self._username.encode()) and hmac.compare_digest(
            password.encode(), self._password.encode()
        )
        if not ok:
            logger.info("Rejected login for %r", username)
        return ok
