from dataclasses import dataclass, field
from time import time
from typing import Optional, Literal

Severity = Literal['info', 'success', 'warning', 'error']
ToastMode = Literal['auto', 'sticky']

SEVERITIES: frozenset = frozenset({'info', 'success', 'warning', 'error'})


@dataclass
class Notification:
    """One user-facing outcome message (rendered as a toast)."""

    title: str
    message: str
    severity: Severity = 'info'
    source: str = 'Vehicle Admin'
    vehicle_id: Optional[int] = None
    toast_mode: Optional[ToastMode] = None
    toast_duration_ms: Optional[int] = None
    ts: float = field(default_factory=time)
