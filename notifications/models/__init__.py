from .notification import Notification, SEVERITIES, Severity, ToastMode

__all__ = ["Notification", "SEVERITIES", "Severity", "ToastMode"]
