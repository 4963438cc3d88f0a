"""
User service layer - registration, login and user lookups.
"""

from datetime import datetime, timezone
from typing import List

from starlette.concurrency import run_in_threadpool

from src.config import config
from src.core.auth import create_access_token, hash_password, verify_password
from src.core.errors import DataValidationError, InvalidCredentialsError, NotFoundError
from src.core.logger import logger
from src.models.common import doc_to_model
from src.models.user import TokenResponse, UserDB, UserRegister, UserRole
from src.repositories.user_repository import UserRepository


class UserService:

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def register(self, data: UserRegister) -> UserDB:
        """
        Create a user account with a bcrypt-hashed password.

        Raises:
            DataValidationError: If the username or email is already taken
        """
        email = data.email.lower()
        existing = await self.repository.find_by_username_or_email(data.username, email)
        if existing:
            field = "username" if existing.get("username") == data.username else "email"
            logger.warning(
                f"Registration rejected: duplicate {field}",
                metadata={"event": "register_duplicate", "field": field},
            )
            raise DataValidationError(
                f"A user with this {field} already exists", details={"field": field}
            )

        # CPU-bound, runs outside the event loop
        hashed = await run_in_threadpool(hash_password, data.password)

        now = datetime.now(timezone.utc)
        doc = await self.repository.create(
            {
                "username": data.username,
                "email": email,
                "password": hashed,
                "first_name": data.first_name,
                "last_name": data.last_name,
                "role": UserRole.USER.value,
                "created_at": now,
                "updated_at": now,
            }
        )

        logger.info(
            f"Registered user {doc['_id']}",
            user_id=str(doc["_id"]),
            metadata={"event": "user_registered", "username": data.username},
        )
        return doc_to_model(UserDB, doc)

    async def login(self, email: str, password: str) -> TokenResponse:
        """
        Exchange credentials for a signed access token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
        """
        doc = await self.repository.find_by_email(email)
        if not doc or not await run_in_threadpool(verify_password, password, doc.get("password", "")):
            logger.warning("Login failed", metadata={"event": "login_failed"})
            raise InvalidCredentialsError()

        token = create_access_token(
            user_id=str(doc["_id"]),
            email=doc["email"],
            roles=[doc.get("role", UserRole.USER.value)],
        )
        logger.info("Login succeeded", user_id=str(doc["_id"]), metadata={"event": "login"})
        return TokenResponse(access_token=token, expires_in=config.jwt_expiration_seconds)

    async def get_user(self, user_id: str) -> UserDB:
        doc = await self.repository.find_by_id(user_id)
        if not doc:
            raise NotFoundError("User not found", details={"user_id": user_id})
        return doc_to_model(UserDB, doc)

    async def list_users(self) -> List[UserDB]:
        docs = await self.repository.list_all()
        return [doc_to_model(UserDB, doc) for doc in docs]
