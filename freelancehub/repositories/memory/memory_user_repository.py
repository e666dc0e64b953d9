# freelancehub/repositories/memory/memory_user_repository.py
import logging
from typing import List, Optional
from freelancehub.database import models
from freelancehub.database.models._timestamps import utcnow
from freelancehub.domain import UserRole, DEFAULT_ROLE
from freelancehub.repositories.exceptions import DuplicateEmailError
from freelancehub.repositories.interfaces import IUserRepository
from .store import InMemoryStore, clone

logger = logging.getLogger(__name__)


class InMemoryUserRepository(IUserRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    def create(self, user_model: models.User) -> models.User:
        if self.find_by_email(user_model.email):
            raise DuplicateEmailError(f"User with email '{user_model.email}' already exists.")

        user = clone(user_model)
        user.id = self.store.next_user_id()
        user.role = user.role or DEFAULT_ROLE.value
        user.created_at = utcnow()
        self.store.users[user.id] = user
        logger.debug("Inserted user id=%s role=%s", user.id, user.role)
        return clone(user)

    def find_by_id(self, user_id: int) -> Optional[models.User]:
        user = self.store.users.get(user_id)
        return clone(user) if user else None

    def find_by_email(self, email: str) -> Optional[models.User]:
        for user in self.store.users.values():
            if user.email == email:
                return clone(user)
        return None

    def list_clients(self) -> List[models.User]:
        clients = [u for u in self.store.users.values() if u.role == UserRole.CLIENT.value]
        clients.sort(key=lambda u: (u.name, u.id))
        return [clone(u) for u in clients]
