# freelancehub/repositories/memory/memory_project_repository.py
import logging
from typing import List, Optional, Dict, Any
from freelancehub.database import models
from freelancehub.database.models._timestamps import utcnow
from freelancehub.domain import UserRole, DEFAULT_STATUS, DEFAULT_COMPLETION_PERCENTAGE, placeholder_client
from freelancehub.repositories.interfaces import IProjectRepository, ProjectWithClient, UPDATABLE_FIELDS
from .store import InMemoryStore, clone

logger = logging.getLogger(__name__)


def _newest_first(projects):
    return sorted(projects, key=lambda p: (p.created_at, p.id), reverse=True)


class InMemoryProjectRepository(IProjectRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    def create(self, project_model: models.Project) -> models.Project:
        project = clone(project_model)
        project.id = self.store.next_project_id()
        if project.status is None:
            project.status = DEFAULT_STATUS.value
        if project.completion_percentage is None:
            project.completion_percentage = DEFAULT_COMPLETION_PERCENTAGE
        project.created_at = project.created_at or utcnow()
        project.updated_at = project.created_at
        self.store.projects[project.id] = project
        logger.debug("Inserted project id=%s client_id=%s", project.id, project.client_id)
        return clone(project)

    def find_by_id(self, project_id: int) -> Optional[models.Project]:
        project = self.store.projects.get(project_id)
        return clone(project) if project else None

    def list_all(self) -> List[models.Project]:
        return [clone(p) for p in _newest_first(self.store.projects.values())]

    def list_by_client_id(self, client_id: int) -> List[models.Project]:
        owned = [p for p in self.store.projects.values() if p.client_id == client_id]
        return [clone(p) for p in _newest_first(owned)]

    def list_all_with_clients(self) -> List[ProjectWithClient]:
        result = []
        for project in self.list_all():
            client = self.store.users.get(project.client_id)
            if client and client.role == UserRole.CLIENT.value:
                summary = {"id": client.id, "name": client.name, "email": client.email}
            else:
                summary = placeholder_client()
            result.append((project, summary))
        return result

    def update(self, project_id: int, fields: Dict[str, Any]) -> Optional[models.Project]:
        project = self.store.projects.get(project_id)
        if not project:
            return None
        updated = clone(project)
        for key, value in fields.items():
            if key in UPDATABLE_FIELDS:
                setattr(updated, key, value)
        updated.updated_at = utcnow()
        self.store.projects[project_id] = updated
        logger.debug("Updated project id=%s fields=%s", project_id, sorted(k for k in fields if k in UPDATABLE_FIELDS))
        return clone(updated)

    def delete(self, project_id: int) -> bool:
        deleted = self.store.projects.pop(project_id, None) is not None
        logger.debug("Deleted project id=%s (existed=%s)", project_id, deleted)
        return deleted
