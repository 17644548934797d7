from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import time


class NotificationLevel(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    level: NotificationLevel
    title: str
    message: str
    created_at: float = field(default_factory=time.time)
