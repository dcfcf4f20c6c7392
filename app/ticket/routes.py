# app/ticket/routes.py
from fastapi import APIRouter, Depends

from app.core.errors import NotFoundError
from app.portal.dependencies import get_portal_state, require_admin, require_resident, require_session
from app.portal.state import PortalState
from app.ticket import services as ticket_service
from app.ticket.schemas import (
    ApplicationCreate,
    ApplicationList,
    ApplicationOut,
    ApplicationWithAuthor,
    StatusChange,
)
from app.user.schemas import User

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.post("/", response_model=ApplicationOut, status_code=201)
def create(
    payload: ApplicationCreate,
    user: User = Depends(require_resident),
    state: PortalState = Depends(get_portal_state),
):
    application, notification = ticket_service.create_application(state, user, payload)
    return ApplicationOut(application=application, notification=notification)


@router.get("/", response_model=ApplicationList)
def list_all(
    user: User = Depends(require_session),
    state: PortalState = Depends(get_portal_state),
):
    if user.is_admin:
        items = ticket_service.list_all_with_authors(state)
    else:
        items = [
            ApplicationWithAuthor(**a.model_dump())
            for a in ticket_service.list_for_user(state, user.id)
        ]
    return ApplicationList(items=items, total=len(items))


@router.patch("/{application_id}/status", response_model=ApplicationOut)
def change_status(
    application_id: int,
    payload: StatusChange,
    _: User = Depends(require_admin),
    state: PortalState = Depends(get_portal_state),
):
    changed = ticket_service.change_status(state, application_id, payload.status)
    if not changed:
        raise NotFoundError(details={"application_id": application_id})
    application, notification = changed
    return ApplicationOut(application=application, notification=notification)
