# freelancehub/database/models/project.py
from sqlalchemy import Column, Integer, String, Text, DateTime
from ..database import Base
from ...domain import DEFAULT_STATUS, DEFAULT_COMPLETION_PERCENTAGE
from ._timestamps import utcnow


class Project(Base):
    """
    관리자가 클라이언트에게 배정하는 작업 단위를 나타냅니다.

    status 와 completion_percentage 는 서로 독립적으로 관리됩니다.
    client_id 에는 외래 키 제약을 두지 않습니다. 존재하지 않는 사용자를 가리켜도 저장되며,
    관리자 목록 조회에서는 대체(placeholder) 클라이언트로 표시됩니다.
    """
    __tablename__ = "projects"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    status = Column(String, nullable=False, default=DEFAULT_STATUS.value)
    completion_percentage = Column(Integer, nullable=False, default=DEFAULT_COMPLETION_PERCENTAGE)
    notes = Column(Text, nullable=True)
    drive_link = Column(String, nullable=True)
    client_id = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Project id={self.id} name={self.name!r} status={self.status!r}>"
