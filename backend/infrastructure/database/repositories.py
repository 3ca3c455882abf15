"""
SQLAlchemy implementations of the core repository interfaces.

Each call runs in its own short session so that a handle insert is
committed (or rolled back) before the allocator sees its outcome.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain.content import ContentItem, ContentKind
from core.domain.subscription import Subscription, SubscriptionStatus
from core.domain.user import Handle, Principal
from core.errors import HandleAlreadyAssignedError, RepositoryError
from core.interfaces.repositories import (
    ContentRepository,
    HandleRepository,
    InsertOutcome,
    PrincipalRepository,
    SubscriptionRepository,
)
from infrastructure.database.models import Content as ContentModel
from infrastructure.database.models import Handle as HandleModel
from infrastructure.database.models import Subscription as SubscriptionModel
from infrastructure.database.models import User as UserModel

logger = logging.getLogger(__name__)


def _to_principal(user: UserModel) -> Principal:
    return Principal(id=user.id, role=user.role, display_name=user.name, email=user.email)


def _to_handle(row: HandleModel) -> Handle:
    return Handle(value=row.value, owner_id=row.owner_id, created_at=row.created_at)


class _SessionRepository:
    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def _scalar(self, stmt):
        try:
            async with self._session_maker() as session:
                result = await session.execute(stmt)
                return result.scalars().first()
        except SQLAlchemyError as e:
            raise RepositoryError(str(e)) from e


class SqlPrincipalRepository(_SessionRepository, PrincipalRepository):
    async def get_by_id(self, principal_id: str) -> Principal | None:
        user = await self._scalar(select(UserModel).where(UserModel.id == principal_id))
        return _to_principal(user) if user else None

    async def list_without_handle(self, limit: int = 100) -> list[Principal]:
        stmt = (
            select(UserModel)
            .outerjoin(HandleModel, HandleModel.owner_id == UserModel.id)
            .where(HandleModel.id.is_(None))
            .order_by(UserModel.created_at, UserModel.id)
            .limit(limit)
        )
        try:
            async with self._session_maker() as session:
                result = await session.execute(stmt)
                return [_to_principal(u) for u in result.scalars().all()]
        except SQLAlchemyError as e:
            raise RepositoryError(str(e)) from e


class SqlContentRepository(_SessionRepository, ContentRepository):
    async def find_content_by_id(
        self, content_id: str, kind: ContentKind | None = None
    ) -> ContentItem | None:
        stmt = select(ContentModel).where(ContentModel.id == content_id)
        if kind is not None:
            stmt = stmt.where(ContentModel.kind == kind.value)
        row = await self._scalar(stmt)
        if row is None:
            return None
        return ContentItem(
            id=row.id,
            owner_id=row.owner_id,
            is_premium=row.is_premium,
            kind=row.kind,
            title=row.title,
        )


class SqlSubscriptionRepository(_SessionRepository, SubscriptionRepository):
    async def find_active_subscription(
        self, subscriber_id: str, creator_id: str
    ) -> Subscription | None:
        # Duplicate active rows are tolerated; any one of them is enough
        stmt = (
            select(SubscriptionModel)
            .where(
                SubscriptionModel.subscriber_id == subscriber_id,
                SubscriptionModel.creator_id == creator_id,
                SubscriptionModel.status == SubscriptionStatus.ACTIVE.value,
            )
            .limit(1)
        )
        row = await self._scalar(stmt)
        if row is None:
            return None
        return Subscription(
            id=row.id,
            subscriber_id=row.subscriber_id,
            creator_id=row.creator_id,
            status=row.status,
            created_at=row.created_at,
        )


class SqlHandleRepository(_SessionRepository, HandleRepository):
    async def try_insert_handle(self, value: str, owner_id: str) -> InsertOutcome:
        try:
            async with self._session_maker() as session:
                async with session.begin():
                    session.add(HandleModel(value=value, owner_id=owner_id))
        except IntegrityError as e:
            # The transaction is already rolled back; work out which constraint fired
            if await self.find_handle_by_owner(owner_id) is not None:
                raise HandleAlreadyAssignedError(owner_id) from e
            if await self.find_handle_by_value(value) is None:
                raise RepositoryError(f"Handle insert rejected: {e.orig}") from e
            logger.debug("Handle %s already taken", value)
            return InsertOutcome.CONFLICT
        except SQLAlchemyError as e:
            raise RepositoryError(str(e)) from e
        return InsertOutcome.INSERTED

    async def find_handle_by_owner(self, owner_id: str) -> Handle | None:
        row = await self._scalar(select(HandleModel).where(HandleModel.owner_id == owner_id))
        return _to_handle(row) if row else None

    async def find_handle_by_value(self, value: str) -> Handle | None:
        row = await self._scalar(
            select(HandleModel).where(func.lower(HandleModel.value) == value.lower())
        )
        return _to_handle(row) if row else None
