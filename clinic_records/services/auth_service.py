"""
Credential records: username + bcrypt password hash. No tokens are issued.
"""
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from clinic_records.models import User
from .errors import ErrorKind, Result

logger = logging.getLogger(__name__)

MISSING_CREDENTIALS = 'Please provide username and password'


class AuthService:
    def __init__(self, session):
        self.session = session

    def register(self, username, password) -> Result:
        if not username or not password:
            return Result.failure(ErrorKind.MISSING_INPUT, MISSING_CREDENTIALS)

        username = str(username).strip()
        try:
            if self.session.query(User).filter_by(username=username).first():
                return Result.failure(ErrorKind.USER_EXISTS, 'User already exists')

            user = User(username=username)
            user.set_password(password)
            self.session.add(user)
            self.session.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same name
            self.session.rollback()
            return Result.failure(ErrorKind.USER_EXISTS, 'User already exists')
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Registration error: {e}", exc_info=True)
            return Result.failure(ErrorKind.STORAGE_FAILURE, 'Server error during registration')

        logger.info(f"User {username} registered")
        return Result.success(user.to_dict())

    def login(self, username, password) -> Result:
        if not username or not password:
            return Result.failure(ErrorKind.MISSING_INPUT, MISSING_CREDENTIALS)

        try:
            user = self.session.query(User).filter_by(username=str(username).strip()).first()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Login error: {e}", exc_info=True)
            return Result.failure(ErrorKind.STORAGE_FAILURE, 'Server error during login')

        if not user or not user.check_password(password):
            return Result.failure(ErrorKind.INVALID_CREDENTIALS, 'Invalid credentials')
        return Result.success(user.to_dict())
