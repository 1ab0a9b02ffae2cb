from __future__ import annotations

import dataclasses
import logging
import time
from typing import List, Dict, Any

from PySide6.QtCore import QObject, Signal

from notifications.models.notification import Notification, SEVERITIES


logger = logging.getLogger(__name__)

DEFAULT_TOAST_MODE = "auto"
DEFAULT_TOAST_DURATION_MS = 4500
# identical non-error (title, message) pairs inside this window are shown once
THROTTLE_SECONDS = 2.0
MAX_RECENT = 200


class Notifier(QObject):
    """Central service for emitting toast notifications and keeping a feed."""

    notificationCreated = Signal(dict)
    showToast = Signal(dict)
    badgeCountChanged = Signal(int)

    _instance: "Notifier | None" = None

    def __init__(
        self,
        *,
        default_mode: str = DEFAULT_TOAST_MODE,
        default_duration_ms: int = DEFAULT_TOAST_DURATION_MS,
        throttle_seconds: float = THROTTLE_SECONDS,
    ) -> None:
        super().__init__()
        self._recent: List[Dict[str, Any]] = []
        self._badge = 0
        self._throttle: Dict[tuple[str, str], float] = {}
        self._default_mode = default_mode
        self._default_duration = default_duration_ms
        self._throttle_seconds = throttle_seconds

    # ---- Singleton helpers -------------------------------------------------
    @classmethod
    def instance(cls) -> "Notifier":
        if cls._instance is None:
            cls._instance = Notifier()
        return cls._instance

    # ---- Public API --------------------------------------------------------
    def notify(self, note: Notification) -> bool:
        """Publish ``note``; returns False when it was throttled."""

        payload = dataclasses.asdict(note)
        if payload.get("severity") not in SEVERITIES:
            payload["severity"] = "info"
        if payload.get("toast_mode") is None:
            payload["toast_mode"] = self._default_mode
        if payload.get("toast_duration_ms") is None:
            payload["toast_duration_ms"] = self._default_duration

        key = (payload["title"], payload["message"])
        now = time.monotonic()
        self._prune_throttle(now)
        # errors are never throttled: a repeated failure must still be seen
        if payload["severity"] != "error":
            if key in self._throttle:
                logger.debug("Throttled duplicate notification: %s", key)
                return False
            self._throttle[key] = now

        log = logger.warning if payload["severity"] == "error" else logger.info
        log("[%s] %s: %s", payload["source"], payload["title"], payload["message"])

        self._recent.append(payload)
        del self._recent[:-MAX_RECENT]
        self._badge += 1
        self.notificationCreated.emit(payload)
        self.showToast.emit(payload)
        self.badgeCountChanged.emit(self._badge)
        return True

    def recent(self, limit: int = 50) -> List[Dict[str, Any]]:
        return list(reversed(self._recent[-limit:]))

    def clear_badge(self) -> None:
        self._badge = 0
        self.badgeCountChanged.emit(0)

    def _prune_throttle(self, now: float) -> None:
        expired = [key for key, stamp in self._throttle.items() if now - stamp >= self._throttle_seconds]
        for key in expired:
            del self._throttle[key]


# convenient alias
get_notifier = Notifier.instance
