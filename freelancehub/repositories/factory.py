# freelancehub/repositories/factory.py
import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

from freelancehub.database.database import Base, create_db_engine, create_session_factory
from freelancehub.repositories.interfaces import IUserRepository, IProjectRepository
from freelancehub.repositories.memory import InMemoryStore, InMemoryUserRepository, InMemoryProjectRepository
from freelancehub.repositories.sqlalchemy import SqlalchemyUserRepository, SqlalchemyProjectRepository

logger = logging.getLogger(__name__)

Repositories = Tuple[IUserRepository, IProjectRepository]


class RepositoryProvider:
    """
    요청마다 사용할 리포지토리 쌍을 만들어 주는 팩토리입니다.

    프로세스 시작 시 한 번만 생성되며, 연결 문자열이 있으면 SQLAlchemy 구현을,
    없으면 인메모리 구현을 사용합니다. 두 구현은 같은 인터페이스를 따릅니다.
    """
    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url
        if database_url:
            self.engine = create_db_engine(database_url)
            self.session_factory = create_session_factory(self.engine)
            self.store = None
        else:
            self.engine = None
            self.session_factory = None
            self.store = InMemoryStore()

    @property
    def backend(self) -> str:
        return "sqlalchemy" if self.engine is not None else "memory"

    def create_schema(self) -> None:
        """테이블을 생성합니다. (이미 존재하면 생성하지 않음) 인메모리 저장소에서는 아무것도 하지 않습니다."""
        if self.engine is not None:
            # 모델 모듈을 import 해야 Base.metadata 에 테이블이 등록됩니다.
            from freelancehub.database import models  # noqa: F401
            Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Repositories]:
        """요청 하나의 범위 동안 사용할 (user_repo, project_repo) 를 제공합니다."""
        if self.store is not None:
            yield InMemoryUserRepository(self.store), InMemoryProjectRepository(self.store)
            return

        db_session = self.session_factory()
        try:
            yield SqlalchemyUserRepository(db_session), SqlalchemyProjectRepository(db_session)
        except Exception:
            db_session.rollback()
            raise
        finally:
            db_session.close()

    def dispose(self) -> None:
        if self.engine is not None:
            self.engine.dispose()


def build_repository_provider(database_url: Optional[str]) -> RepositoryProvider:
    provider = RepositoryProvider(database_url)
    logger.info("Using %s storage backend", provider.backend)
    return provider
