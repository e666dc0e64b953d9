# freelancehub/repositories/sqlalchemy/sqlalchemy_user_repository.py
import logging
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from freelancehub.database import models
from freelancehub.domain import UserRole, DEFAULT_ROLE
from freelancehub.repositories.exceptions import DuplicateEmailError
from freelancehub.repositories.interfaces import IUserRepository

logger = logging.getLogger(__name__)


class SqlalchemyUserRepository(IUserRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, user_model: models.User) -> models.User:
        if user_model.role is None:
            user_model.role = DEFAULT_ROLE.value
        self.db.add(user_model)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            # NOT NULL 등 다른 제약 위반은 그대로 올려 보냅니다.
            if self.find_by_email(user_model.email) is None:
                raise
            raise DuplicateEmailError(f"User with email '{user_model.email}' already exists.") from e
        self.db.refresh(user_model)
        logger.debug("Inserted user id=%s role=%s", user_model.id, user_model.role)
        return user_model

    def find_by_id(self, user_id: int) -> Optional[models.User]:
        return self.db.query(models.User).filter(models.User.id == user_id).first()

    def find_by_email(self, email: str) -> Optional[models.User]:
        return self.db.query(models.User).filter(models.User.email == email).first()

    def list_clients(self) -> List[models.User]:
        return (
            self.db.query(models.User)
            .filter(models.User.role == UserRole.CLIENT.value)
            .order_by(models.User.name.asc(), models.User.id.asc())
            .all()
        )
