from typing import Dict, Set
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from auth_service.domain.base import utc_now
from auth_service.domain.entities import Session


def exclude_keys(data: Dict, keys: Set[str]) -> Dict:
    return {k: v for k, v in data.items() if k not in keys}


def bearer(tokens: Dict) -> Dict[str, str]:
    return {"Authorization": f"Bearer {tokens['access_token']}"}


async def count_active_sessions(db_session, user_id: UUID) -> int:
    stmt = (
        select(func.count())
        .select_from(Session)
        .where(
            Session.user_id == user_id,
            Session.revoked_at.is_(None),
            Session.expires_at > utc_now(),
        )
    )
    result = await db_session.exec(stmt)
    return result.one()
