# app/ticket/schemas.py
from enum import Enum

from pydantic import Field, field_validator

from app.core.notifications import Notification
from app.core.schemas import CamelModel


class ApplicationStatus(str, Enum):
    NEW = "New"
    RESOLVED = "Resolved"
    REJECTED = "Rejected"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]

    @property
    def tone(self) -> str:
        return STATUS_TONES[self]


STATUS_LABELS = {
    ApplicationStatus.NEW: "Новая",
    ApplicationStatus.RESOLVED: "Решена",
    ApplicationStatus.REJECTED: "Отклонена",
}

STATUS_TONES = {
    ApplicationStatus.NEW: "primary",
    ApplicationStatus.RESOLVED: "success",
    ApplicationStatus.REJECTED: "destructive",
}


class ApplicationBase(CamelModel):
    title: str
    description: str


class ApplicationCreate(CamelModel):
    # blank values are rejected by the handler with a toast, not by pydantic
    title: str = ""
    description: str = ""


class Application(ApplicationBase):
    id: int
    user_id: int
    status: ApplicationStatus = ApplicationStatus.NEW
    created_at: str


class StatusChange(CamelModel):
    status: ApplicationStatus

    @field_validator("status")
    @classmethod
    def validate_terminal(cls, v: ApplicationStatus) -> ApplicationStatus:
        if v is ApplicationStatus.NEW:
            raise ValueError("Status can only change to Resolved or Rejected")
        return v


class Author(CamelModel):
    full_name: str
    email: str


class ApplicationWithAuthor(Application):
    author: Author | None = None


class ApplicationOut(CamelModel):
    application: Application
    notification: Notification


class ApplicationList(CamelModel):
    items: list[ApplicationWithAuthor] = Field(default_factory=list)
    total: int = 0
