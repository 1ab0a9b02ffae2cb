from __future__ import annotations

from modules.vehicles.auth import LOGIN_ERROR, StaticCredentialAuthenticator
from utils.app_settings import VehicleAdminSettings


def test_default_credentials():
    auth = StaticCredentialAuthenticator.from_settings(VehicleAdminSettings())
    assert auth.authenticate("admin", "123456")
    assert not auth.authenticate("admin", "wrong")
    assert not auth.authenticate("Admin", "123456")
    assert not auth.authenticate("", "")


def test_custom_credentials():
    auth = StaticCredentialAuthenticator("ops", "pässword")
    assert auth.authenticate("ops", "pässword")
    assert LOGIN_ERROR == "Invalid username or password."
