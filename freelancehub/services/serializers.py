# freelancehub/services/serializers.py
from datetime import datetime
from typing import Any, Dict, List, Optional

from freelancehub.database import models


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def serialize_user(user: models.User) -> Dict[str, Any]:
    """비밀번호를 제외한 사용자 정보를 JSON 직렬화 가능한 딕셔너리로 변환합니다."""
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "createdAt": _isoformat(user.created_at),
    }


def serialize_session_user(user: models.User) -> Dict[str, Any]:
    """로그인/가입 응답에 담기는 최소 사용자 정보."""
    return {"id": user.id, "email": user.email, "name": user.name, "role": user.role}


def serialize_project(project: models.Project) -> Dict[str, Any]:
    return {
        "id": project.id,
        "name": project.name,
        "description": project.description,
        "status": project.status,
        "completionPercentage": project.completion_percentage,
        "notes": project.notes,
        "driveLink": project.drive_link,
        "clientId": project.client_id,
        "createdAt": _isoformat(project.created_at),
        "updatedAt": _isoformat(project.updated_at),
    }


def serialize_project_with_client(project: models.Project, client: Dict[str, Any]) -> Dict[str, Any]:
    data = serialize_project(project)
    data["client"] = {"id": client["id"], "name": client["name"], "email": client["email"]}
    return data


def serialize_client_with_projects(client: models.User, projects: List[models.Project]) -> Dict[str, Any]:
    return {
        "id": client.id,
        "name": client.name,
        "email": client.email,
        "projects": [serialize_project(p) for p in projects],
    }
