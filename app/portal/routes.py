# app/portal/routes.py
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.portal.dependencies import get_portal_state, get_view_controller
from app.portal.state import PortalState
from app.portal.view import AuthMode, Screen, SwitchMode, ViewController, render

router = APIRouter(prefix="/view", tags=["View"])


class ModeChange(BaseModel):
    mode: AuthMode


@router.get("", response_model=Screen)
def current_screen(
    state: PortalState = Depends(get_portal_state),
    controller: ViewController = Depends(get_view_controller),
):
    return render(controller.sync(state.current_user), state)


@router.post("/mode", response_model=Screen)
def switch_mode(
    payload: ModeChange,
    state: PortalState = Depends(get_portal_state),
    controller: ViewController = Depends(get_view_controller),
):
    controller.sync(state.current_user)
    return render(controller.dispatch(SwitchMode(mode=payload.mode)), state)
