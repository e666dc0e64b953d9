from .store import InMemoryStore
from .memory_user_repository import InMemoryUserRepository
from .memory_project_repository import InMemoryProjectRepository

__all__ = ["InMemoryStore", "InMemoryUserRepository", "InMemoryProjectRepository"]
