# app/user/routes.py
from fastapi import APIRouter, Depends

from app.core.notifications import Notification
from app.portal.dependencies import get_portal_state
from app.portal.state import PortalState
from app.user import services as user_service
from app.user.schemas import AuthResponse, LoginForm, RegisterForm, SessionOut

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=AuthResponse)
def login(form: LoginForm, state: PortalState = Depends(get_portal_state)):
    user, notification = user_service.login(state, form)
    return AuthResponse(user=user, notification=notification)


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(form: RegisterForm, state: PortalState = Depends(get_portal_state)):
    user, notification = user_service.register(state, form)
    return AuthResponse(user=user, notification=notification)


@router.post("/logout", response_model=Notification)
def logout(state: PortalState = Depends(get_portal_state)):
    return user_service.logout(state)


@router.get("/session", response_model=SessionOut)
def session(state: PortalState = Depends(get_portal_state)):
    return SessionOut(user=user_service.current_session(state))
