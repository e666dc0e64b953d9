from .sqlalchemy_user_repository import SqlalchemyUserRepository
from .sqlalchemy_project_repository import SqlalchemyProjectRepository

__all__ = ["SqlalchemyUserRepository", "SqlalchemyProjectRepository"]
