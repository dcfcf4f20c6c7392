# app/ticket/services.py
from datetime import datetime

from app.core.config import get_settings
from app.core.errors import EmptyFieldError, StatusTransitionError
from app.core.logger import logger
from app.core.notifications import Notification, notify
from app.portal.state import PortalState
from app.ticket.schemas import (
    Application,
    ApplicationCreate,
    ApplicationStatus,
    ApplicationWithAuthor,
    Author,
)
from app.user.schemas import User


def format_created_at(moment: datetime | None = None) -> str:
    moment = moment or datetime.now()
    return moment.strftime(get_settings().CREATED_AT_FORMAT)


def create_application(
    state: PortalState, author: User, payload: ApplicationCreate
) -> tuple[Application, Notification]:
    if not payload.title or not payload.description:
        logger.warning(f"User {author.id} submitted an application with blank fields")
        raise EmptyFieldError()

    with state.lock:
        application = Application(
            id=state.next_application_id(),
            user_id=author.id,
            title=payload.title,
            description=payload.description,
            status=ApplicationStatus.NEW,
            created_at=format_created_at(),
        )
        state.applications.append(application)
        state.save_applications()
    logger.info(f"Application {application.id} created by user {author.id}")
    return application, notify("Заявка создана!", "Ожидайте рассмотрения")


def change_status(
    state: PortalState, application_id: int, new_status: ApplicationStatus
) -> tuple[Application, Notification] | None:
    with state.lock:
        current = state.find_application(application_id)
        if current is None:
            return None
        if current.status is not ApplicationStatus.NEW:
            raise StatusTransitionError(application_id, current.status.value)

        updated = current.model_copy(update={"status": new_status})
        state.applications = [updated if a.id == application_id else a for a in state.applications]
        state.save_applications()
    logger.info(f"Application {application_id} marked {new_status.value}")
    return updated, notify("Статус обновлен", f'Заявка помечена как "{new_status.label}"')


def with_author(state: PortalState, application: Application) -> ApplicationWithAuthor:
    user = state.find_user(application.user_id)
    author = Author(full_name=user.full_name, email=user.email) if user else None
    return ApplicationWithAuthor(**application.model_dump(), author=author)


def list_all_with_authors(state: PortalState) -> list[ApplicationWithAuthor]:
    return [with_author(state, a) for a in state.applications]


def list_for_user(state: PortalState, user_id: int) -> list[Application]:
    return [a for a in state.applications if a.user_id == user_id]
