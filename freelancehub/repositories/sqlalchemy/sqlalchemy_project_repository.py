# freelancehub/repositories/sqlalchemy/sqlalchemy_project_repository.py
import logging
from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session
from freelancehub.database import models
from freelancehub.database.models._timestamps import utcnow
from freelancehub.domain import UserRole, DEFAULT_STATUS, DEFAULT_COMPLETION_PERCENTAGE, placeholder_client
from freelancehub.repositories.interfaces import IProjectRepository, ProjectWithClient, UPDATABLE_FIELDS

logger = logging.getLogger(__name__)


class SqlalchemyProjectRepository(IProjectRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def _newest_first(self, query):
        return query.order_by(models.Project.created_at.desc(), models.Project.id.desc())

    def create(self, project_model: models.Project) -> models.Project:
        # 컬럼 default 는 None 이 명시적으로 들어오면 적용되지 않으므로 직접 채웁니다.
        if project_model.status is None:
            project_model.status = DEFAULT_STATUS.value
        if project_model.completion_percentage is None:
            project_model.completion_percentage = DEFAULT_COMPLETION_PERCENTAGE
        now = utcnow()
        project_model.created_at = project_model.created_at or now
        project_model.updated_at = project_model.created_at

        self.db.add(project_model)
        self.db.commit()
        self.db.refresh(project_model)
        logger.debug("Inserted project id=%s client_id=%s", project_model.id, project_model.client_id)
        return project_model

    def find_by_id(self, project_id: int) -> Optional[models.Project]:
        return self.db.query(models.Project).filter(models.Project.id == project_id).first()

    def list_all(self) -> List[models.Project]:
        return self._newest_first(self.db.query(models.Project)).all()

    def list_by_client_id(self, client_id: int) -> List[models.Project]:
        query = self.db.query(models.Project).filter(models.Project.client_id == client_id)
        return self._newest_first(query).all()

    def list_all_with_clients(self) -> List[ProjectWithClient]:
        projects = self.list_all()
        # 프로젝트와 클라이언트를 각각 조회한 뒤 애플리케이션에서 조인합니다.
        rows = (
            self.db.query(models.User.id, models.User.name, models.User.email)
            .filter(models.User.role == UserRole.CLIENT.value)
            .all()
        )
        clients = {row.id: {"id": row.id, "name": row.name, "email": row.email} for row in rows}
        return [(p, dict(clients[p.client_id]) if p.client_id in clients else placeholder_client()) for p in projects]

    def update(self, project_id: int, fields: Dict[str, Any]) -> Optional[models.Project]:
        project = self.find_by_id(project_id)
        if not project:
            return None
        for key, value in fields.items():
            if key in UPDATABLE_FIELDS:
                setattr(project, key, value)
        project.updated_at = utcnow()
        self.db.commit()
        self.db.refresh(project)
        logger.debug("Updated project id=%s fields=%s", project_id, sorted(k for k in fields if k in UPDATABLE_FIELDS))
        return project

    def delete(self, project_id: int) -> bool:
        deleted = self.db.query(models.Project).filter(models.Project.id == project_id).delete()
        self.db.commit()
        logger.debug("Deleted project id=%s (rows=%s)", project_id, deleted)
        return deleted > 0
