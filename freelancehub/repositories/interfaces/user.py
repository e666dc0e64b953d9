# freelancehub/repositories/interfaces/user.py
from abc import ABC, abstractmethod
from typing import List, Optional
from freelancehub.database import models


class IUserRepository(ABC):
    @abstractmethod
    def create(self, user_model: models.User) -> models.User:
        """
        새로운 사용자를 저장하고, id 와 created_at 이 채워진 모델을 반환합니다.
        role 이 비어 있으면 'client' 로 채웁니다.

        Raises:
            DuplicateEmailError: 같은 이메일의 사용자가 이미 존재할 때.
        """
        pass

    @abstractmethod
    def find_by_id(self, user_id: int) -> Optional[models.User]:
        """고유 ID로 특정 사용자를 조회합니다. 없으면 None을 반환합니다."""
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[models.User]:
        """이메일로 특정 사용자를 조회합니다. 없으면 None을 반환합니다."""
        pass

    @abstractmethod
    def list_clients(self) -> List[models.User]:
        """역할이 'client' 인 모든 사용자를 이름 오름차순으로 조회합니다."""
        pass
