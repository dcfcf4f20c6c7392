"""In-memory domain store mirrored to a key-value store.

Collections are read once by ``PortalState.load``; handlers mutate them
and call the matching ``save_*`` method right after.
"""

import threading

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from app.core.config import get_settings
from app.core.logger import logger
from app.core.storage import KeyValueStore, StorageKey
from app.ticket.schemas import Application
from app.user.schemas import User

_user_codec = TypeAdapter(User)
_users_codec = TypeAdapter(list[User])
_applications_codec = TypeAdapter(list[Application])


def seed_users() -> list[User]:
    settings = get_settings()
    return [
        User(
            id=1,
            login=settings.ADMIN_LOGIN,
            full_name=settings.ADMIN_FULL_NAME,
            email=settings.ADMIN_EMAIL,
            phone=settings.ADMIN_PHONE,
            is_admin=True,
        )
    ]


def encode(codec: TypeAdapter, value) -> str:
    return codec.dump_json(value, by_alias=True).decode("utf-8")


def decode(codec: TypeAdapter, raw: str | None, key: StorageKey):
    """Decode a stored value; unreadable entries count as absent."""
    if raw is None:
        return None
    try:
        return codec.validate_json(raw)
    except PydanticValidationError as e:
        logger.warning(f"Ignoring unreadable '{key.value}' entry: {e}")
        return None


class PortalState:
    def __init__(
        self,
        storage: KeyValueStore,
        users: list[User] | None = None,
        applications: list[Application] | None = None,
        current_user: User | None = None,
    ):
        self.storage = storage
        self.users: list[User] = users if users is not None else seed_users()
        self.applications: list[Application] = applications if applications is not None else []
        self.current_user: User | None = current_user
        # held by each handler for its whole mutate-and-flush step
        self.lock = threading.RLock()

    @classmethod
    def load(cls, storage: KeyValueStore) -> "PortalState":
        current_user = decode(_user_codec, storage.get(StorageKey.CURRENT_USER.value), StorageKey.CURRENT_USER)
        users = decode(_users_codec, storage.get(StorageKey.USERS.value), StorageKey.USERS)
        applications = decode(
            _applications_codec, storage.get(StorageKey.APPLICATIONS.value), StorageKey.APPLICATIONS
        )
        state = cls(storage, users=users, applications=applications, current_user=current_user)
        logger.info(
            f"Portal state loaded: {len(state.users)} user(s), "
            f"{len(state.applications)} application(s), "
            f"session={'yes' if state.current_user else 'no'}"
        )
        return state

    # ---- flush ----

    def save_users(self) -> None:
        self.storage.set(StorageKey.USERS.value, encode(_users_codec, self.users))

    def save_applications(self) -> None:
        self.storage.set(StorageKey.APPLICATIONS.value, encode(_applications_codec, self.applications))

    def save_session(self) -> None:
        if self.current_user is None:
            self.storage.remove(StorageKey.CURRENT_USER.value)
        else:
            self.storage.set(StorageKey.CURRENT_USER.value, encode(_user_codec, self.current_user))

    # ---- lookups ----

    def find_user(self, user_id: int) -> User | None:
        return next((u for u in self.users if u.id == user_id), None)

    def find_user_by_login(self, login: str) -> User | None:
        return next((u for u in self.users if u.login == login), None)

    def find_application(self, application_id: int) -> Application | None:
        return next((a for a in self.applications if a.id == application_id), None)

    def next_user_id(self) -> int:
        return len(self.users) + 1

    def next_application_id(self) -> int:
        return len(self.applications) + 1
