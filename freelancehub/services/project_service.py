# freelancehub/services/project_service.py
import logging
from typing import Dict, Any, List, Optional

from freelancehub.database import models
from freelancehub.domain import (
    UserRole, ProjectStatus, DEFAULT_STATUS, DEFAULT_COMPLETION_PERCENTAGE,
    MIN_COMPLETION_PERCENTAGE, MAX_COMPLETION_PERCENTAGE, can_submit_drive_link,
)
from freelancehub.repositories.interfaces import IUserRepository, IProjectRepository
from freelancehub.services.exceptions import ProjectNotFoundError, UserNotFoundError, ValidationError
from freelancehub.services.serializers import (
    serialize_user, serialize_project, serialize_project_with_client, serialize_client_with_projects,
)

logger = logging.getLogger(__name__)

# API(camelCase) 필드명 -> 모델 컬럼명
ADMIN_UPDATE_FIELDS = {
    "name": "name",
    "description": "description",
    "status": "status",
    "completionPercentage": "completion_percentage",
    "notes": "notes",
}


def _status_value(status) -> str:
    value = status.value if isinstance(status, ProjectStatus) else status
    if not isinstance(value, str) or value not in {s.value for s in ProjectStatus}:
        raise ValidationError(f"Unknown project status '{value}'.")
    return value


def _percentage_value(percentage) -> int:
    if isinstance(percentage, bool) or not isinstance(percentage, int):
        raise ValidationError("completionPercentage must be an integer.")
    if not MIN_COMPLETION_PERCENTAGE <= percentage <= MAX_COMPLETION_PERCENTAGE:
        raise ValidationError("completionPercentage must be between 0 and 100.")
    return percentage


def _required_text(value, field: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{field} is required.")
    return value


class ProjectService:
    """프로젝트 생명주기, 역할별 조회 범위, 관리자 통계를 담당합니다."""

    def __init__(self, user_repo: IUserRepository, project_repo: IProjectRepository):
        """
        ProjectService를 초기화합니다.

        Args:
            user_repo: 사용자(클라이언트) 데이터에 접근하기 위한 리포지토리.
            project_repo: 프로젝트 데이터에 접근하기 위한 리포지토리.
        """
        self.user_repo = user_repo
        self.project_repo = project_repo

    # ------------------------------------------------------------------
    # 클라이언트 기능
    # ------------------------------------------------------------------

    def list_client_projects(self, client_id: int) -> List[Dict[str, Any]]:
        """특정 클라이언트가 소유한 프로젝트만 최신순으로 조회합니다."""
        projects = self.project_repo.list_by_client_id(client_id)
        return [serialize_project(p) for p in projects]

    def get_project(self, project_id: int) -> Dict[str, Any]:
        """
        ID로 특정 프로젝트를 조회합니다.

        Raises:
            ProjectNotFoundError: 해당 ID의 프로젝트를 찾을 수 없을 때.
        """
        project = self.project_repo.find_by_id(project_id)
        if not project:
            raise ProjectNotFoundError(f"Project with id '{project_id}' not found.")
        return serialize_project(project)

    def submit_drive_link(self, project_id: int, drive_link: Optional[str], client_id: Optional[int] = None) -> Dict[str, Any]:
        """
        클라이언트가 결과물 드라이브 링크를 제출합니다. drive_link 외의 필드는 바꾸지 않습니다.

        client_id 를 넘기면 해당 클라이언트 소유의 프로젝트인지 확인하고, 아니면 찾을 수 없는 것으로 처리합니다.
        완료(complete) 상태 여부는 여기서 검사하지 않습니다. (화면에서 can_submit_drive_link 로 판단)

        Raises:
            ProjectNotFoundError: 해당 ID의 프로젝트가 없거나 다른 클라이언트의 프로젝트일 때.
        """
        if client_id is not None:
            project = self.project_repo.find_by_id(project_id)
            if not project or project.client_id != client_id:
                raise ProjectNotFoundError(f"Project with id '{project_id}' not found.")

        updated = self.project_repo.update(project_id, {"drive_link": drive_link})
        if not updated:
            raise ProjectNotFoundError(f"Project with id '{project_id}' not found.")
        logger.info("Drive link %s for project %s", "cleared" if drive_link is None else "submitted", project_id)
        return serialize_project(updated)

    @staticmethod
    def can_submit_drive_link(project: Dict[str, Any]) -> bool:
        """직렬화된 프로젝트에 대해 클라이언트가 링크를 수정할 수 있는지 여부 (complete 이면 False)."""
        return can_submit_drive_link(project["status"])

    # ------------------------------------------------------------------
    # 관리자 기능
    # ------------------------------------------------------------------

    def list_projects_with_clients(self) -> List[Dict[str, Any]]:
        """모든 프로젝트를 소유 클라이언트의 공개 정보와 함께 최신순으로 조회합니다."""
        return [serialize_project_with_client(p, c) for p, c in self.project_repo.list_all_with_clients()]

    def list_clients(self) -> List[Dict[str, Any]]:
        """모든 클라이언트를 이름순으로 조회합니다. (비밀번호 제외)"""
        return [serialize_user(u) for u in self.user_repo.list_clients()]

    def create_project(
        self,
        name: str,
        description: str,
        client_id: int,
        status=DEFAULT_STATUS,
        completion_percentage: int = DEFAULT_COMPLETION_PERCENTAGE,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        새로운 프로젝트를 생성하고 클라이언트에게 배정합니다.

        client_id 가 실제 존재하는 클라이언트인지는 확인하지 않습니다.

        Raises:
            ValidationError: 필수 필드가 비었거나 status / completion_percentage 값이 범위를 벗어날 때.
        """
        if isinstance(client_id, bool) or not isinstance(client_id, int) or client_id < 1:
            raise ValidationError("clientId must be a positive integer.")

        new_project = models.Project(
            name=_required_text(name, "name"),
            description=_required_text(description, "description"),
            client_id=client_id,
            status=_status_value(status),
            completion_percentage=_percentage_value(completion_percentage),
            notes=notes,
            drive_link=None,
        )
        created = self.project_repo.create(new_project)
        logger.info("Created project %s for client %s", created.id, created.client_id)
        return serialize_project(created)

    def update_project(self, project_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        """
        관리자가 프로젝트를 부분 수정합니다. changes 의 키는 API 필드명(camelCase)입니다.

        status 와 completionPercentage 는 서로 독립적입니다. 한쪽을 바꿔도 다른 쪽은 그대로입니다.

        Raises:
            ValidationError: 알 수 없는 필드이거나 값이 유효하지 않을 때.
            ProjectNotFoundError: 해당 ID의 프로젝트를 찾을 수 없을 때.
        """
        fields = {}
        for key, value in changes.items():
            if key not in ADMIN_UPDATE_FIELDS:
                raise ValidationError(f"Field '{key}' cannot be updated.")
            if key == "status":
                value = _status_value(value)
            elif key == "completionPercentage":
                value = _percentage_value(value)
            elif key in ("name", "description"):
                value = _required_text(value, key)
            fields[ADMIN_UPDATE_FIELDS[key]] = value

        updated = self.project_repo.update(project_id, fields)
        if not updated:
            raise ProjectNotFoundError(f"Project with id '{project_id}' not found.")
        logger.info("Updated project %s (%s)", project_id, ", ".join(sorted(changes)) or "no fields")
        return serialize_project(updated)

    def delete_project(self, project_id: int) -> bool:
        """
        프로젝트를 즉시 삭제합니다. (소프트 삭제 없음)

        Raises:
            ProjectNotFoundError: 해당 ID의 프로젝트를 찾을 수 없을 때.
        """
        if not self.project_repo.delete(project_id):
            raise ProjectNotFoundError(f"Project with id '{project_id}' not found.")
        logger.info("Deleted project %s", project_id)
        return True

    def get_stats(self) -> Dict[str, int]:
        """관리자 대시보드용 집계: 전체 클라이언트 수와 상태별 프로젝트 수."""
        clients = self.user_repo.list_clients()
        projects = self.project_repo.list_all()
        return {
            "totalClients": len(clients),
            "activeProjects": sum(1 for p in projects if p.status == ProjectStatus.IN_PROGRESS.value),
            "pendingFeedback": sum(1 for p in projects if p.status == ProjectStatus.WAITING_FEEDBACK.value),
            "completed": sum(1 for p in projects if p.status == ProjectStatus.COMPLETE.value),
        }

    def get_client_with_projects(self, client_id: int) -> Dict[str, Any]:
        """
        클라이언트 정보와 소유 프로젝트 목록을 함께 조회합니다.

        Raises:
            UserNotFoundError: 사용자가 없거나 역할이 client 가 아닐 때.
        """
        client = self.user_repo.find_by_id(client_id)
        if not client or client.role != UserRole.CLIENT.value:
            raise UserNotFoundError(f"Client with id '{client_id}' not found.")
        return serialize_client_with_projects(client, self.project_repo.list_by_client_id(client_id))

    def list_clients_with_projects(self) -> List[Dict[str, Any]]:
        """모든 클라이언트를 각자의 프로젝트 목록과 함께 조회합니다."""
        return [
            serialize_client_with_projects(client, self.project_repo.list_by_client_id(client.id))
            for client in self.user_repo.list_clients()
        ]
