# app/core/notifications.py
from enum import Enum

from pydantic import BaseModel

from app.core.logger import logger


class Severity(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class Notification(BaseModel):
    title: str
    message: str
    severity: Severity = Severity.SUCCESS


def notify(title: str, message: str, severity: Severity = Severity.SUCCESS) -> Notification:
    """Build the toast shown to the user for the finished action."""
    logger.debug(f"notify [{severity.value}] {title}: {message}")
    return Notification(title=title, message=message, severity=severity)
