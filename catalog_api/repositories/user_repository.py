# catalog_api/repositories/user_repository.py

from sqlalchemy import select
from sqlalchemy.orm import Session

from catalog_api.core.base_repository import ActiveRecordRepository
from catalog_api.infrastructure.database.models.user_model import UserModel


class UserRepository(ActiveRecordRepository[UserModel]):
    model = UserModel
    entity_label = "User"
    duplicate_message = "Email already registered"

    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def find_active_by_email(self, email: str) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.email == email, UserModel.is_active.is_(True))
        return self._session.execute(stmt).scalar_one_or_none()

    # inactive rows keep their email/phone reserved
    def exists_by_email(self, email: str) -> bool:
        return self.exists_by(UserModel.email, email)

    def exists_by_phone_number(self, phone_number: str) -> bool:
        return self.exists_by(UserModel.phone_number, phone_number)
