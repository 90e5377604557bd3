from __future__ import annotations

import logging

from careflow.application.dto.session import BrowserSession
from careflow.application.ports.account_store_port import AccountStorePort
from careflow.application.ports.session_store_port import SessionStorePort
from careflow.application.ports.token_port import TokenPort
from careflow.domain.entities.account import Account
from careflow.domain.entities.session import SessionRecord
from careflow.domain.exceptions import SessionResolutionError

from .auth_common import utcnow


logger = logging.getLogger(__name__)


class SessionCodec:
    """Maps browser sessions to accounts.

    The session only ever carries the account id; the account itself is read
    from the account store on every ``resolve`` call.
    """

    def __init__(
        self,
        *,
        session_store: SessionStorePort,
        account_store: AccountStorePort,
        token_port: TokenPort,
    ):
        self._session_store = session_store
        self._account_store = account_store
        self._token_port = token_port

    def open(self, token: str | None) -> BrowserSession:
        """Load the session for ``token`` or start a new anonymous one."""
        token = (token or "").strip()
        if token:
            session_id = self._token_port.hash_session_token(session_token=token)
            record = self._session_store.get(session_id=session_id)
            if record is not None:
                if not record.is_expired(now=utcnow()):
                    return BrowserSession(token=token, record=record)
                self._session_store.delete(session_id=session_id)
        return self._new_session(account_id=None)

    def attach_account(self, session: BrowserSession, account: Account) -> BrowserSession:
        # A new token is issued so the pre-login identifier never becomes privileged.
        self._session_store.delete(session_id=session.record.id)
        return self._new_session(account_id=account.id)

    def resolve(self, session: BrowserSession) -> Account | None:
        if session.is_anonymous:
            return None
        try:
            return self._require_account(session)
        except SessionResolutionError as exc:
            logger.warning("session_codec: dangling_account_reference detail=%s", exc)
            return None

    def destroy(self, session: BrowserSession) -> BrowserSession:
        self._session_store.delete(session_id=session.record.id)
        return session.mark_destroyed()

    def _require_account(self, session: BrowserSession) -> Account:
        account_id = session.account_id
        account = self._account_store.find_by_id(account_id=account_id)
        if account is None:
            raise SessionResolutionError(f"Account {account_id} referenced by session no longer exists.")
        return account

    def _new_session(self, *, account_id: str | None) -> BrowserSession:
        now = utcnow()
        token = self._token_port.generate_session_token()
        record = SessionRecord(
            id=self._token_port.hash_session_token(session_token=token),
            account_id=account_id,
            created_at=now,
            expires_at=self._token_port.session_expires_at(now=now),
        )
        self._session_store.save(record)
        return BrowserSession(token=token, record=record)
