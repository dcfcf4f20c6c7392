# app/user/schemas.py
from app.core.notifications import Notification
from app.core.schemas import CamelModel


class User(CamelModel):
    id: int
    full_name: str
    login: str
    email: str
    phone: str
    is_admin: bool = False


class LoginForm(CamelModel):
    login: str = ""
    password: str = ""


class RegisterForm(CamelModel):
    full_name: str = ""
    login: str = ""
    email: str = ""
    phone: str = ""
    password: str = ""
    confirm_password: str = ""


class SessionOut(CamelModel):
    user: User | None = None


class AuthResponse(CamelModel):
    user: User | None = None
    notification: Notification
