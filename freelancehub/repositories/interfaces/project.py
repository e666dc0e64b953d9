# freelancehub/repositories/interfaces/project.py
from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Any, Tuple
from freelancehub.database import models

# (프로젝트, 클라이언트 공개 정보{id, name, email}) 쌍
ProjectWithClient = Tuple[models.Project, Dict[str, Any]]

# update() 로 변경할 수 있는 필드. id, client_id, created_at 은 변경할 수 없습니다.
UPDATABLE_FIELDS = frozenset({
    "name", "description", "status", "completion_percentage", "notes", "drive_link",
})


class IProjectRepository(ABC):
    @abstractmethod
    def create(self, project_model: models.Project) -> models.Project:
        """
        새로운 프로젝트를 저장합니다.
        id, created_at, updated_at 을 할당하고 status / completion_percentage / notes / drive_link
        가 비어 있으면 기본값으로 채운 모델을 반환합니다.
        """
        pass

    @abstractmethod
    def find_by_id(self, project_id: int) -> Optional[models.Project]:
        """고유 ID로 특정 프로젝트를 조회합니다. 없으면 None을 반환합니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.Project]:
        """모든 프로젝트를 최신순(created_at 내림차순)으로 조회합니다."""
        pass

    @abstractmethod
    def list_by_client_id(self, client_id: int) -> List[models.Project]:
        """특정 클라이언트가 소유한 프로젝트만 최신순으로 조회합니다."""
        pass

    @abstractmethod
    def list_all_with_clients(self) -> List[ProjectWithClient]:
        """
        모든 프로젝트를 소유 클라이언트의 공개 정보와 함께 최신순으로 조회합니다.

        Returns:
            (Project, {'id', 'name', 'email'}) 튜플의 리스트.
            클라이언트를 찾을 수 없는 프로젝트도 누락하지 않고 PLACEHOLDER_CLIENT 와 짝지어 반환합니다.
        """
        pass

    @abstractmethod
    def update(self, project_id: int, fields: Dict[str, Any]) -> Optional[models.Project]:
        """
        주어진 필드만 기존 프로젝트에 병합하고 updated_at 을 갱신합니다.
        UPDATABLE_FIELDS 에 없는 키는 무시합니다.

        Returns:
            갱신된 프로젝트. 해당 ID의 프로젝트가 없으면 None (저장소는 변경되지 않음).
        """
        pass

    @abstractmethod
    def delete(self, project_id: int) -> bool:
        """프로젝트를 삭제합니다. 삭제할 레코드가 있었으면 True, 없었으면 False."""
        pass
