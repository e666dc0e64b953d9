# freelancehub/database/database.py
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

# 모든 모델 클래스가 상속받을 Base 클래스
# 이 클래스를 상속받아 모델을 정의하면, SQLAlchemy가 테이블을 인식합니다.
Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """
    연결 문자열로 SQLAlchemy 엔진을 생성합니다.

    SQLite 는 WSGI 서버의 여러 스레드에서 접근하므로 check_same_thread 를 끄고,
    ':memory:' DB 는 모든 세션이 하나의 연결을 공유해야 테이블이 보이므로 StaticPool 을 사용합니다.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    # autocommit=False, autoflush=False로 설정하여, 명시적으로 commit을 호출해야 DB에 반영됩니다.
    # expire_on_commit=False: 커밋 후 세션을 닫아도 반환된 모델의 속성을 읽을 수 있어야 합니다.
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
