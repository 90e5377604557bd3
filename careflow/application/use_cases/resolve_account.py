from __future__ import annotations

import logging
from uuid import uuid4

from careflow.application.dto.auth import OAuthProfile, ResolveAccountOutput
from careflow.application.ports.account_store_port import AccountStorePort
from careflow.domain.entities.account import AuthProvider
from careflow.domain.exceptions import ConflictError, PersistenceError

from .auth_common import normalize_email, utcnow


logger = logging.getLogger(__name__)


class ResolveAccountUseCase:
    """Look up the local account for an external identity, creating it on first sight.

    Profile data from the first login is kept; repeat logins do not refresh it.
    """

    def __init__(self, *, account_store: AccountStorePort):
        self._account_store = account_store

    def execute(self, *, provider: AuthProvider, profile: OAuthProfile) -> ResolveAccountOutput:
        account = self._account_store.find_by_external_id(
            provider=provider,
            external_id=profile.external_id,
        )
        if account is not None:
            return ResolveAccountOutput(account=account, created=False)

        try:
            account = self._account_store.create_account(
                account_id=str(uuid4()),
                provider=provider,
                external_id=profile.external_id,
                email=normalize_email(profile.email),
                given_name=profile.given_name.strip(),
                family_name=profile.family_name.strip(),
                avatar_url=profile.avatar_url,
                created_at=utcnow(),
            )
        except ConflictError:
            logger.info(
                "resolve_account: conflict_on_create provider=%s, re-reading existing account",
                provider,
            )
            account = self._account_store.find_by_external_id(
                provider=provider,
                external_id=profile.external_id,
            )
            if account is None:
                raise PersistenceError("Account vanished after a conflicting insert.")
            return ResolveAccountOutput(account=account, created=False)

        logger.info("resolve_account: account_created provider=%s account_id=%s", provider, account.id)
        return ResolveAccountOutput(account=account, created=True)
