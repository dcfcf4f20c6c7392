# app/user/services.py
from app.core.config import get_settings
from app.core.errors import AlreadyAuthenticatedError, AuthError, ValidationError
from app.core.logger import logger
from app.core.notifications import Notification, Severity, notify
from app.portal.state import PortalState
from app.user.schemas import LoginForm, RegisterForm, User
from app.user.validation import validate_registration


def password_accepted(password: str) -> bool:
    # placeholder check against fixed literals, not real credential storage
    return password in get_settings().ACCEPTED_PASSWORDS


def ensure_signed_out(state: PortalState) -> None:
    if state.current_user is not None:
        raise AlreadyAuthenticatedError(state.current_user.id)


def login(state: PortalState, form: LoginForm) -> tuple[User, Notification]:
    with state.lock:
        ensure_signed_out(state)
        user = state.find_user_by_login(form.login)
        if user is None or not password_accepted(form.password):
            logger.warning(f"Failed login attempt for '{form.login}'")
            raise AuthError()

        state.current_user = user
        state.save_session()
    logger.info(f"User {user.id} ({user.login}) logged in")
    return user, notify("Успешно!", f"Добро пожаловать, {user.full_name}!")


def register(state: PortalState, form: RegisterForm) -> tuple[User, Notification]:
    with state.lock:
        ensure_signed_out(state)
        errors = validate_registration(form, state.users)
        if errors:
            logger.warning(f"Registration rejected for '{form.login}': {sorted(errors)}")
            raise ValidationError(errors)

        user = User(
            id=state.next_user_id(),
            full_name=form.full_name,
            login=form.login,
            email=form.email,
            phone=form.phone,
            is_admin=False,
        )
        state.users.append(user)
        state.save_users()

        state.current_user = user
        state.save_session()
    logger.info(f"User {user.id} ({user.login}) registered")
    return user, notify("Регистрация завершена!", "Добро пожаловать!")


def logout(state: PortalState) -> Notification:
    with state.lock:
        previous = state.current_user
        state.current_user = None
        state.save_session()
    if previous is not None:
        logger.info(f"User {previous.id} ({previous.login}) logged out")
    return notify("Вы вышли", "До встречи!", Severity.INFO)


def current_session(state: PortalState) -> User | None:
    return state.current_user
