"""
Credential check backed by the account repository.

Unknown email and wrong password are indistinguishable to the caller: both
return None.
"""
import logging
from typing import Optional

from starlette.concurrency import run_in_threadpool

from login_api.core.tokens import issue_access_token
from login_api.features.accounts.repository import AccountRepository, verify_password

logger = logging.getLogger("login_api")


class AuthUseCase:
    def __init__(self, account_repository: AccountRepository, settings_obj=None):
        self.account_repository = account_repository
        self.settings_obj = settings_obj

    def _check(self, email: str, password: str) -> Optional[str]:
        account = self.account_repository.load_by_email(email)
        if account is None or not verify_password(password, account.password_hash):
            logger.info("auth.rejected")
            return None
        return issue_access_token(account.id, email=account.email, settings_obj=self.settings_obj)

    async def auth(self, email: str, password: str) -> Optional[str]:
        # bcrypt and the DB driver are blocking
        return await run_in_threadpool(self._check, email, password)
