"""
Account persistence.

Accounts are keyed by a lower-cased email. Passwords are bcrypt-hashed before
they reach the database; the plain password is never stored.
"""
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

import bcrypt
from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError

from login_api.core.database import accounts, get_db_session
from login_api.core.errors import ConflictError
from login_api.models.account import Account


def normalize_email(email: str) -> str:
    return email.strip().lower()


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """Verify password against stored hash."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed stored hash
        return False


def _row_to_account(row) -> Account:
    return Account(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        created_at=row.created_at,
    )


class AccountRepository:
    def load_by_email(self, email: str) -> Optional[Account]:
        with get_db_session() as session:
            row = session.execute(
                select(accounts).where(accounts.c.email == normalize_email(email))
            ).first()
            if not row:
                return None
            return _row_to_account(row)

    def add(self, email: str, password: str) -> Account:
        """
        Persist a new account.

        Raises:
            ConflictError: an account with this email already exists
        """
        account = Account(
            id=str(uuid4()),
            email=normalize_email(email),
            password_hash=hash_password(password),
            created_at=datetime.now(timezone.utc),
        )
        try:
            with get_db_session() as session:
                session.execute(insert(accounts).values(**account.model_dump()))
        except IntegrityError:
            raise ConflictError("Account already exists")
        return account
