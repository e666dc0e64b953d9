# freelancehub/database/models/user.py
from sqlalchemy import Column, Integer, String, DateTime
from ..database import Base
from ...domain import DEFAULT_ROLE
from ._timestamps import utcnow


class User(Base):
    """
    시스템에 로그인하는 사용자를 나타냅니다.
    역할은 'client' 또는 'admin' 중 하나이며, 클라이언트는 자신에게 배정된 프로젝트를 소유합니다.
    비밀번호는 평문으로 저장되고 로그인 시 그대로 비교됩니다.
    """
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)
    name = Column(String, nullable=False)
    role = Column(String, nullable=False, default=DEFAULT_ROLE.value)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role!r}>"
