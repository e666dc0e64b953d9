from .user import User
from .project import Project

__all__ = ["User", "Project"]
