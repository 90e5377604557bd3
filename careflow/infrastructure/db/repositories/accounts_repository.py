from __future__ import annotations

from datetime import datetime
import logging

from sqlalchemy import DateTime, bindparam, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from careflow.application.ports.account_store_port import AccountStorePort
from careflow.domain.entities.account import Account
from careflow.domain.exceptions import ConflictError, PersistenceError
from careflow.infrastructure.db.mappers.accounts_mapper import map_row_to_account


logger = logging.getLogger(__name__)


_ACCOUNT_COLUMNS = "id, provider, external_id, email, given_name, family_name, avatar_url, created_at"


def _select(sql: str):
    return text(sql).columns(created_at=DateTime(timezone=True))


class SqlAccountsRepository(AccountStorePort):
    def __init__(self, engine: Engine):
        self._engine = engine

    def find_by_external_id(self, *, provider: str, external_id: str) -> Account | None:
        sql = f"""
            SELECT {_ACCOUNT_COLUMNS}
            FROM accounts
            WHERE provider = :provider
              AND external_id = :external_id
            LIMIT 1
        """
        try:
            with self._engine.connect() as conn:
                row = conn.execute(
                    _select(sql),
                    {
                        "provider": provider,
                        "external_id": external_id,
                    },
                ).mappings().first()
        except SQLAlchemyError as exc:
            raise self._persistence_error("find_by_external_id", exc) from exc
        if row is None:
            return None
        return map_row_to_account(row)

    def find_by_id(self, *, account_id: str) -> Account | None:
        sql = f"""
            SELECT {_ACCOUNT_COLUMNS}
            FROM accounts
            WHERE id = :account_id
            LIMIT 1
        """
        try:
            with self._engine.connect() as conn:
                row = conn.execute(_select(sql), {"account_id": account_id}).mappings().first()
        except SQLAlchemyError as exc:
            raise self._persistence_error("find_by_id", exc) from exc
        if row is None:
            return None
        return map_row_to_account(row)

    def create_account(
        self,
        *,
        account_id: str,
        provider: str,
        external_id: str,
        email: str,
        given_name: str,
        family_name: str,
        avatar_url: str,
        created_at: datetime,
    ) -> Account:
        insert_sql = text(
            """
            INSERT INTO accounts (
                id, provider, external_id, email, given_name, family_name, avatar_url, created_at
            ) VALUES (
                :id, :provider, :external_id, :email, :given_name, :family_name, :avatar_url, :created_at
            )
            """
        ).bindparams(bindparam("created_at", type_=DateTime(timezone=True)))
        select_sql = f"""
            SELECT {_ACCOUNT_COLUMNS}
            FROM accounts
            WHERE id = :id
        """
        params = {
            "id": account_id,
            "provider": provider,
            "external_id": external_id,
            "email": email,
            "given_name": given_name,
            "family_name": family_name,
            "avatar_url": avatar_url,
            "created_at": created_at,
        }
        try:
            with self._engine.begin() as conn:
                conn.execute(insert_sql, params)
                row = conn.execute(_select(select_sql), {"id": account_id}).mappings().one()
        except IntegrityError as exc:
            raise ConflictError(
                f"Account for provider '{provider}' and this external id already exists."
            ) from exc
        except SQLAlchemyError as exc:
            raise self._persistence_error("create_account", exc) from exc
        return map_row_to_account(row)

    def _persistence_error(self, operation: str, exc: SQLAlchemyError) -> PersistenceError:
        logger.error(
            "accounts_repository: persistence_failed operation=%s error=%s",
            operation,
            exc.__class__.__name__,
        )
        return PersistenceError(f"Account store failed during {operation}.")
