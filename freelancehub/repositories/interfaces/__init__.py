from .user import IUserRepository
from .project import IProjectRepository, ProjectWithClient, UPDATABLE_FIELDS

__all__ = ["IUserRepository", "IProjectRepository", "ProjectWithClient", "UPDATABLE_FIELDS"]
