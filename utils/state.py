# utils/state.py

import logging


logger = logging.getLogger(__name__)


class AppState:
    """In-memory session state. Nothing here is persisted between runs."""

    _active_user = None

    @classmethod
    def set_active_user(cls, username):
        logger.debug(
            "[state] set_active_user(%s) (from %s)",
            username,
            getattr(cls, "_active_user", None),
        )
        cls._active_user = username
        # Emit Qt signal for interested panels
        try:
            from utils.app_signals import app_signals
            app_signals.userChanged.emit(username)
        except Exception as e:
            logger.warning("[state] failed to emit userChanged: %s", e)

    @classmethod
    def get_active_user(cls):
        return cls._active_user

    @classmethod
    def is_authenticated(cls):
        return cls._active_user is not None

    @classmethod
    def clear(cls):
        cls.set_active_user(None)
