# freelancehub/config.py
import os
from dataclasses import dataclass
from typing import Optional

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class Settings:
    """
    프로세스 시작 시 한 번 읽어들이는 애플리케이션 설정입니다.

    Attributes:
        database_url: SQLAlchemy 연결 문자열. 비어 있으면 인메모리 저장소를 사용합니다.
        host: 서버가 바인딩할 주소.
        port: 서버 포트.
        log_level: 루트 로거 레벨 (예: 'INFO', 'DEBUG').
        seed_demo_data: 기본 관리자/데모 클라이언트/데모 프로젝트를 생성할지 여부.
    """
    database_url: Optional[str] = None
    host: str = ""
    port: int = 8000
    log_level: str = "INFO"
    seed_demo_data: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        database_url = os.getenv("DATABASE_URL", "").strip() or None
        try:
            port = int(os.getenv("FREELANCEHUB_PORT", "8000"))
        except ValueError:
            raise ValueError("FREELANCEHUB_PORT must be an integer.")
        return cls(
            database_url=database_url,
            host=os.getenv("FREELANCEHUB_HOST", ""),
            port=port,
            log_level=os.getenv("FREELANCEHUB_LOG_LEVEL", "INFO").upper(),
            seed_demo_data=_env_flag("FREELANCEHUB_SEED_DEMO_DATA", True),
        )

    @property
    def uses_database(self) -> bool:
        return self.database_url is not None
