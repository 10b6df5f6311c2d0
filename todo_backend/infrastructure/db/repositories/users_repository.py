from __future__ import annotations

import logging

from sqlalchemy import DateTime, bindparam, text
from sqlalchemy.exc import IntegrityError

from todo_backend.application.ports.user_store_port import UserStorePort
from todo_backend.domain.entities.user import User
from todo_backend.domain.exceptions import DuplicateEmailError
from todo_backend.infrastructure.db.mappers.users_mapper import map_row_to_user, map_user_to_params


logger = logging.getLogger(__name__)

_USER_COLUMNS = """
    id, email, password_hash, username, role, profile_image_path, external_access_token, created_at
"""


def _select(sql: str):
    return text(sql).columns(created_at=DateTime(timezone=True))


class SqlUsersRepository(UserStorePort):
    def __init__(self, engine):
        self._engine = engine

    def get_user_by_id(self, *, user_id: str):
        sql = f"""
            SELECT {_USER_COLUMNS}
            FROM users
            WHERE id = :user_id
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(_select(sql), {"user_id": user_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_user(row)

    def get_user_by_email(self, *, email: str):
        sql = f"""
            SELECT {_USER_COLUMNS}
            FROM users
            WHERE email = :email
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(_select(sql), {"email": email}).mappings().first()
        if row is None:
            return None
        return map_row_to_user(row)

    def exists_by_email(self, *, email: str) -> bool:
        sql = """
            SELECT 1
            FROM users
            WHERE email = :email
            LIMIT 1
        """
        with self._engine.connect() as conn:
            found = conn.execute(text(sql), {"email": email}).first()
        return found is not None

    def save(self, *, user: User) -> User:
        sql = f"""
            INSERT INTO users (
                {_USER_COLUMNS}
            ) VALUES (
                :id, :email, :password_hash, :username, :role,
                :profile_image_path, :external_access_token, :created_at
            )
            ON CONFLICT (id) DO UPDATE SET
                email = excluded.email,
                password_hash = excluded.password_hash,
                username = excluded.username,
                role = excluded.role,
                profile_image_path = excluded.profile_image_path,
                external_access_token = excluded.external_access_token
        """
        statement = text(sql).bindparams(bindparam("created_at", type_=DateTime(timezone=True)))
        try:
            with self._engine.begin() as conn:
                conn.execute(statement, map_user_to_params(user))
        except IntegrityError as exc:
            if "email" not in str(exc.orig).lower():
                raise
            logger.info("users_repository: save_rejected_duplicate_email email=%s", user.email)
            raise DuplicateEmailError("Email already in use.") from exc

        saved = self.get_user_by_id(user_id=user.id)
        if saved is None:
            raise RuntimeError(f"User {user.id} vanished right after save.")
        return saved
