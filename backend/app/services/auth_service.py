import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import Settings
from ..models.user import User
from ..schemas.auth import LoginRequest, RegisterRequest
from ..utils.error_handlers import DuplicateEmailError, InvalidCredentialsError, UserNotFoundError
from ..utils.jwt import token_for_user
from ..utils.security import hash_password, verify_password
from ..utils.validation import (
    normalize_email,
    validate_email,
    validate_password,
    validate_role,
    validate_string_field,
)

logger = logging.getLogger(__name__)


def user_to_public(user: User) -> dict:
    return {"id": user.id, "name": user.name, "email": user.email, "role": user.role}


class AuthService:
    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings

    def _auth_payload(self, user: User) -> dict:
        return {"token": token_for_user(user.id, self.settings), "user": user_to_public(user)}

    def get_user_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def register(self, payload: RegisterRequest) -> dict:
        name = validate_string_field(payload.name, "Name")
        email = validate_email(payload.email)
        password = validate_password(payload.password)
        role = validate_role(payload.role)

        if self.get_user_by_email(email) is not None:
            raise DuplicateEmailError()

        user = User(name=name, email=email, password=hash_password(password), role=role)
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same email.
            self.db.rollback()
            if self.get_user_by_email(email) is not None:
                raise DuplicateEmailError() from e
            raise
        except SQLAlchemyError:
            self.db.rollback()
            raise

        logger.info("Registered user %s (%s)", user.id, role)
        return self._auth_payload(user)

    def login(self, payload: LoginRequest) -> dict:
        email = normalize_email(payload.email)
        password = validate_password(payload.password)

        user = self.get_user_by_email(email)
        if user is None:
            raise UserNotFoundError()
        if not verify_password(password, user.password):
            logger.warning("Failed login for user %s", user.id)
            raise InvalidCredentialsError()

        logger.info("User %s logged in", user.id)
        return self._auth_payload(user)
