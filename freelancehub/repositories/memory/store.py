# freelancehub/repositories/memory/store.py
import itertools
from typing import Dict
from freelancehub.database import models


class InMemoryStore:
    """
    프로세스가 살아있는 동안만 유지되는 인메모리 저장 공간입니다.
    DATABASE_URL 이 없을 때 사용되며, id 는 1부터 단조 증가합니다.

    사용자/프로젝트 리포지토리가 같은 인스턴스를 공유해야 조인 조회가 가능합니다.
    테스트에서는 매번 새 인스턴스를 만들어 격리합니다.
    """
    def __init__(self):
        self.users: Dict[int, models.User] = {}
        self.projects: Dict[int, models.Project] = {}
        self._user_ids = itertools.count(1)
        self._project_ids = itertools.count(1)

    def next_user_id(self) -> int:
        return next(self._user_ids)

    def next_project_id(self) -> int:
        return next(self._project_ids)


def clone(instance):
    """세션에 속하지 않은 모델 인스턴스의 컬럼 값을 복사한 새 인스턴스를 만듭니다."""
    cls = type(instance)
    return cls(**{column.key: getattr(instance, column.key) for column in cls.__table__.columns})
