# freelancehub/services/auth_service.py
import logging
from typing import Dict, Any, Optional

from freelancehub.database import models
from freelancehub.domain import UserRole, DEFAULT_ROLE
from freelancehub.repositories.exceptions import DuplicateEmailError
from freelancehub.repositories.interfaces import IUserRepository
from freelancehub.services.exceptions import AuthenticationError, UserAlreadyExistsError, ValidationError
from freelancehub.services.serializers import serialize_session_user

logger = logging.getLogger(__name__)


class AuthService:
    """
    로그인과 회원가입을 처리합니다.

    세션이나 토큰은 발급하지 않습니다. 로그인 응답으로 받은 사용자 정보를 브라우저가 보관하고,
    이후 요청에서 전달하는 clientId 를 서버는 다시 검증하지 않습니다.
    """

    def __init__(self, user_repo: IUserRepository):
        """
        AuthService를 초기화합니다.

        Args:
            user_repo: 사용자 데이터에 접근하기 위한 리포지토리.
        """
        self.user_repo = user_repo

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        이메일/비밀번호를 검증하고 사용자 정보를 반환합니다.
        비밀번호는 해시 없이 저장된 값과 그대로 비교합니다.

        Raises:
            AuthenticationError: 사용자가 없거나 비밀번호가 일치하지 않을 때.
        """
        user = self.user_repo.find_by_email(email)
        if not user or user.password != password:
            logger.info("Login failed for %s", email)
            raise AuthenticationError("Invalid credentials")
        logger.info("User %s logged in (role=%s)", user.id, user.role)
        return {"user": serialize_session_user(user)}

    def signup(self, email: str, password: str, name: str, role: Optional[str] = None) -> Dict[str, Any]:
        """
        새로운 사용자를 생성합니다. 역할을 지정하지 않으면 'client' 입니다.

        Raises:
            ValidationError: 역할 값이 허용되지 않을 때.
            UserAlreadyExistsError: 동일한 이메일의 사용자가 이미 존재할 때.
        """
        role_value = role.value if isinstance(role, UserRole) else (role or DEFAULT_ROLE.value)
        if not isinstance(role_value, str) or role_value not in {r.value for r in UserRole}:
            raise ValidationError(f"Unknown role '{role_value}'.")

        if self.user_repo.find_by_email(email):
            raise UserAlreadyExistsError("User already exists")

        new_user = models.User(email=email, password=password, name=name, role=role_value)
        try:
            created_user = self.user_repo.create(new_user)
        except DuplicateEmailError as e:
            # 중복 확인과 저장 사이에 같은 이메일이 먼저 저장된 경우
            raise UserAlreadyExistsError("User already exists") from e

        logger.info("Created user %s (role=%s)", created_user.id, created_user.role)
        return {"user": serialize_session_user(created_user)}
