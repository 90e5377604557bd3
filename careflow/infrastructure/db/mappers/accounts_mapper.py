from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from careflow.domain.entities.account import Account


def _as_str(value: Any) -> str:
    return str(value)


def _as_aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def map_row_to_account(row: Mapping[str, Any]) -> Account:
    return Account(
        id=_as_str(row["id"]),
        provider=row["provider"],
        external_id=row["external_id"],
        email=row["email"],
        given_name=row["given_name"],
        family_name=row["family_name"],
        avatar_url=row["avatar_url"],
        created_at=_as_aware(row["created_at"]),
    )
