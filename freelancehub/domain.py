# freelancehub/domain.py
from enum import Enum
from typing import Dict, Any


class UserRole(str, Enum):
    """사용자 역할. 생성 시 한 번 정해지며 이후 변경하는 API는 없습니다."""
    CLIENT = "client"
    ADMIN = "admin"


class ProjectStatus(str, Enum):
    """
    프로젝트 진행 상태.
    상태 간 전이에는 제약이 없습니다. 관리자는 언제든 어떤 상태로든 바꿀 수 있으며,
    completion_percentage 와도 연동되지 않습니다.
    """
    IN_PROGRESS = "in-progress"
    WAITING_FEEDBACK = "waiting-feedback"
    COMPLETE = "complete"


DEFAULT_ROLE = UserRole.CLIENT
DEFAULT_STATUS = ProjectStatus.IN_PROGRESS
DEFAULT_COMPLETION_PERCENTAGE = 0
MIN_COMPLETION_PERCENTAGE = 0
MAX_COMPLETION_PERCENTAGE = 100

# 관리자 목록 조회 시 client_id 가 가리키는 클라이언트를 찾지 못하면 이 값으로 대체합니다.
PLACEHOLDER_CLIENT: Dict[str, Any] = {"id": 0, "name": "Unknown", "email": "unknown@example.com"}


def placeholder_client() -> Dict[str, Any]:
    return dict(PLACEHOLDER_CLIENT)


def can_submit_drive_link(status: str) -> bool:
    """
    클라이언트가 드라이브 링크를 제출/수정할 수 있는 상태인지 판단합니다.

    완료(complete)된 프로젝트에서는 화면에서 입력을 막기 위한 판단용이며,
    저장소나 API 계층에서는 이 규칙을 강제하지 않습니다.
    """
    return status != ProjectStatus.COMPLETE.value
