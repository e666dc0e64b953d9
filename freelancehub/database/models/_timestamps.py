# freelancehub/database/models/_timestamps.py
from datetime import datetime, timezone


def utcnow() -> datetime:
    # DB 컬럼은 timezone 정보 없이 저장되므로 UTC naive datetime 으로 통일합니다.
    return datetime.now(timezone.utc).replace(tzinfo=None)
