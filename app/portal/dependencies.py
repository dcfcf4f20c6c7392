"""FastAPI dependencies resolving the portal state and the session role."""

from fastapi import Depends, Request

from app.core.errors import ForbiddenError, NotAuthenticatedError
from app.portal.state import PortalState
from app.portal.view import ViewController
from app.user.schemas import User


def get_portal_state(request: Request) -> PortalState:
    """Return the state loaded at startup (overridden in tests)."""
    return request.app.state.portal


def require_session(state: PortalState = Depends(get_portal_state)) -> User:
    if state.current_user is None:
        raise NotAuthenticatedError()
    return state.current_user


def require_admin(user: User = Depends(require_session)) -> User:
    if not user.is_admin:
        raise ForbiddenError("Действие доступно только администратору")
    return user


def require_resident(user: User = Depends(require_session)) -> User:
    if user.is_admin:
        raise ForbiddenError("Администратор не создает заявки")
    return user


def get_view_controller(request: Request) -> ViewController:
    return request.app.state.view
