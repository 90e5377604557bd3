from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy import text

from careflow.application.use_cases.resolve_account import ResolveAccountUseCase
from careflow.domain.exceptions import ConflictError, PersistenceError
from careflow.infrastructure.db.engine import create_schema
from careflow.infrastructure.db.repositories.accounts_repository import SqlAccountsRepository

from conftest import make_profile, make_sqlite_engine


CREATED_AT = datetime(2026, 3, 1, 12, 30, tzinfo=timezone.utc)


def _repository(with_schema: bool = True) -> SqlAccountsRepository:
    engine = make_sqlite_engine()
    if with_schema:
        create_schema(engine)
    return SqlAccountsRepository(engine)


def _create(repository: SqlAccountsRepository, account_id: str = "account-1", external_id: str = "ext-123"):
    return repository.create_account(
        account_id=account_id,
        provider="google",
        external_id=external_id,
        email="ada@example.com",
        given_name="Ada",
        family_name="Lovelace",
        avatar_url="https://images.example.test/ada.png",
        created_at=CREATED_AT,
    )


def test_create_account_then_find_by_both_keys():
    repository = _repository()

    created = _create(repository)

    assert created.id == "account-1"
    assert created.created_at == CREATED_AT
    assert repository.find_by_id(account_id="account-1") == created
    assert repository.find_by_external_id(provider="google", external_id="ext-123") == created


def test_unknown_account_is_none():
    repository = _repository()

    assert repository.find_by_id(account_id="missing") is None
    assert repository.find_by_external_id(provider="google", external_id="missing") is None


def test_duplicate_external_id_raises_conflict():
    repository = _repository()
    _create(repository)

    with pytest.raises(ConflictError):
        _create(repository, account_id="account-2")

    assert repository.find_by_id(account_id="account-2") is None


def test_storage_failure_raises_persistence_error():
    repository = _repository(with_schema=False)

    with pytest.raises(PersistenceError):
        repository.find_by_id(account_id="account-1")


class RacingSqlAccountsRepository(SqlAccountsRepository):
    """Another request commits the same identity right after our first lookup."""

    def __init__(self, engine):
        super().__init__(engine)
        self.lookups = 0

    def find_by_external_id(self, *, provider: str, external_id: str):
        self.lookups += 1
        found = super().find_by_external_id(provider=provider, external_id=external_id)
        if self.lookups == 1:
            _create(self, account_id="winner-account", external_id=external_id)
        return found


def test_concurrent_first_login_rereads_row_inserted_by_other_request():
    engine = make_sqlite_engine()
    create_schema(engine)
    repository = RacingSqlAccountsRepository(engine)

    output = ResolveAccountUseCase(account_store=repository).execute(
        provider="google",
        profile=make_profile("ext-race"),
    )

    assert output.created is False
    assert output.account.id == "winner-account"
    assert repository.lookups == 2
    with engine.connect() as conn:
        assert conn.execute(text("SELECT COUNT(*) FROM accounts")).scalar_one() == 1
