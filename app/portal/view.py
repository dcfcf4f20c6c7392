"""Screen state machine.

The screen is one of three states. ``transition`` is the only way to move
between them; ``render`` turns a state plus the portal data into the
model a client draws.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from app.portal.state import PortalState
from app.ticket import services as ticket_service
from app.ticket.schemas import Application, ApplicationStatus, Author
from app.core.schemas import CamelModel
from app.user.schemas import User

LOGIN_HINT = "Тестовые данные: admin / password"


class AuthMode(str, Enum):
    LOGIN = "login"
    REGISTER = "register"


# ---- states ----

class Unauthenticated(BaseModel):
    kind: Literal["unauthenticated"] = "unauthenticated"
    mode: AuthMode = AuthMode.LOGIN


class AdminView(BaseModel):
    kind: Literal["admin"] = "admin"
    user_id: int


class ResidentView(BaseModel):
    kind: Literal["resident"] = "resident"
    user_id: int


ViewState = Annotated[Union[Unauthenticated, AdminView, ResidentView], Field(discriminator="kind")]


# ---- events ----

class SwitchMode(BaseModel):
    mode: AuthMode


class LoggedIn(BaseModel):
    user: User


class LoggedOut(BaseModel):
    pass


Event = Union[SwitchMode, LoggedIn, LoggedOut]


def view_for(user: User | None, mode: AuthMode = AuthMode.LOGIN) -> ViewState:
    if user is None:
        return Unauthenticated(mode=mode)
    if user.is_admin:
        return AdminView(user_id=user.id)
    return ResidentView(user_id=user.id)


def transition(view: ViewState, event: Event) -> ViewState:
    if isinstance(event, SwitchMode):
        # tabs exist only on the login screen
        if isinstance(view, Unauthenticated):
            return Unauthenticated(mode=event.mode)
        return view
    if isinstance(event, LoggedIn):
        return view_for(event.user)
    if isinstance(event, LoggedOut):
        return Unauthenticated()
    raise TypeError(f"Unknown view event: {event!r}")


class ViewController:
    """Holds the current screen and keeps it in step with the session."""

    def __init__(self, view: ViewState | None = None):
        self.view: ViewState = view or Unauthenticated()

    def dispatch(self, event: Event) -> ViewState:
        self.view = transition(self.view, event)
        return self.view

    def sync(self, user: User | None) -> ViewState:
        if user is None:
            if not isinstance(self.view, Unauthenticated):
                self.dispatch(LoggedOut())
        elif isinstance(self.view, Unauthenticated) or self.view.user_id != user.id:
            self.dispatch(LoggedIn(user=user))
        return self.view


# ---- rendering ----

class Header(CamelModel):
    full_name: str
    role_label: str


class TicketCard(CamelModel):
    id: int
    title: str
    description: str
    status: ApplicationStatus
    status_label: str
    tone: str
    created_at: str
    author: Author | None = None
    actions: list[ApplicationStatus] = Field(default_factory=list)


class Screen(CamelModel):
    kind: str
    mode: AuthMode | None = None
    login_hint: str | None = None
    header: Header | None = None
    can_create: bool = False
    tickets: list[TicketCard] = Field(default_factory=list)
    empty_message: str | None = None


def ticket_card(application: Application, author: Author | None = None, admin: bool = False) -> TicketCard:
    actions = []
    if admin and application.status is ApplicationStatus.NEW:
        actions = [ApplicationStatus.RESOLVED, ApplicationStatus.REJECTED]
    return TicketCard(
        id=application.id,
        title=application.title,
        description=application.description,
        status=application.status,
        status_label=application.status.label,
        tone=application.status.tone,
        created_at=application.created_at,
        author=author,
        actions=actions,
    )


def render(view: ViewState, state: PortalState) -> Screen:
    if isinstance(view, Unauthenticated):
        return Screen(kind=view.kind, mode=view.mode, login_hint=LOGIN_HINT)

    user = state.find_user(view.user_id) or state.current_user
    header = Header(
        full_name=user.full_name if user else "",
        role_label="Администратор" if isinstance(view, AdminView) else "Пользователь",
    )

    if isinstance(view, AdminView):
        tickets = [
            ticket_card(item, item.author, admin=True)
            for item in ticket_service.list_all_with_authors(state)
        ]
        return Screen(
            kind=view.kind,
            header=header,
            tickets=tickets,
            empty_message=None if tickets else "Заявок пока нет",
        )

    tickets = [ticket_card(a) for a in ticket_service.list_for_user(state, view.user_id)]
    return Screen(
        kind=view.kind,
        header=header,
        can_create=True,
        tickets=tickets,
        empty_message=None if tickets else "У вас пока нет заявок",
    )
