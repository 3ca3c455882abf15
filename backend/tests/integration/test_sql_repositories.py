"""
Integration tests for the SQLAlchemy repositories on in-memory SQLite.

Covers:
- Atomic insert-if-absent on the case-insensitive handle index
- Owner uniqueness surfacing as HandleAlreadyAssignedError
- Active subscription lookup with duplicate / historical rows
- End-to-end access checks and handle allocation through the services
"""

from uuid import uuid4

import pytest
from sqlalchemy import func, select

from core.domain import ContentKind
from core.errors import HandleAlreadyAssignedError
from core.interfaces.repositories import InsertOutcome
from infrastructure.database.models import Content, Handle, Subscription, User
from infrastructure.database.repositories import (
    SqlContentRepository,
    SqlHandleRepository,
    SqlPrincipalRepository,
    SqlSubscriptionRepository,
)
from services.content_access import ContentAccessService
from services.handle_service import HandleService

pytestmark = pytest.mark.asyncio


async def _add(session_maker, *rows):
    async with session_maker() as session:
        session.add_all(rows)
        await session.commit()
    return rows


def _user(name: str = "Test User", role: str = "user") -> User:
    return User(id=str(uuid4()), email=f"{uuid4().hex}@example.com", name=name, role=role)


async def _handle_count(session_maker) -> int:
    async with session_maker() as session:
        return await session.scalar(select(func.count()).select_from(Handle))


# ============================================================================
# Handle repository
# ============================================================================


class TestSqlHandleRepository:
    async def test_insert_then_conflict_ignoring_case(self, session_maker):
        a, b = await _add(session_maker, _user(), _user())
        repo = SqlHandleRepository(session_maker)

        assert await repo.try_insert_handle("johndoe", a.id) == InsertOutcome.INSERTED
        assert await repo.try_insert_handle("JohnDoe", b.id) == InsertOutcome.CONFLICT

        assert await _handle_count(session_maker) == 1
        found = await repo.find_handle_by_value("JOHNDOE")
        assert found.owner_id == a.id
        assert await repo.find_handle_by_owner(b.id) is None

    async def test_second_handle_for_owner_is_rejected(self, session_maker):
        (a,) = await _add(session_maker, _user())
        repo = SqlHandleRepository(session_maker)
        await repo.try_insert_handle("first", a.id)

        with pytest.raises(HandleAlreadyAssignedError):
            await repo.try_insert_handle("second", a.id)

        assert await _handle_count(session_maker) == 1

    async def test_serialized_allocation_sequence(self, session_maker, test_settings):
        users = await _add(session_maker, *(_user() for _ in range(3)))
        service = HandleService(
            handles=SqlHandleRepository(session_maker),
            principals=SqlPrincipalRepository(session_maker),
            settings=test_settings,
        )

        results = [await service.allocate_handle("Jane!!", u.id) for u in users]

        assert [r.handle for r in results] == ["jane", "jane1", "jane2"]

    async def test_exhaustion_leaves_no_rows(self, session_maker, test_settings):
        users = await _add(session_maker, *(_user() for _ in range(4)))
        repo = SqlHandleRepository(session_maker)
        for value, owner in zip(["x", "x1", "x2"], users):
            await repo.try_insert_handle(value, owner.id)
        service = HandleService(
            handles=repo,
            principals=SqlPrincipalRepository(session_maker),
            settings=test_settings.model_copy(update={"handle_max_suffix_attempts": 3}),
        )

        result = await service.allocate_handle("x", users[3].id)

        assert result.error == "allocation_exhausted"
        assert await _handle_count(session_maker) == 3


# ============================================================================
# Principal / subscription / content repositories
# ============================================================================


class TestSqlReadRepositories:
    async def test_principal_mapping(self, session_maker):
        (u,) = await _add(session_maker, _user(name="Ada", role="creator"))
        principal = await SqlPrincipalRepository(session_maker).get_by_id(u.id)
        assert principal.id == u.id
        assert principal.role == "creator"
        assert principal.display_name == "Ada"
        assert await SqlPrincipalRepository(session_maker).get_by_id("missing") is None

    async def test_list_without_handle(self, session_maker):
        with_handle, without = await _add(session_maker, _user(), _user())
        await SqlHandleRepository(session_maker).try_insert_handle("taken", with_handle.id)

        pending = await SqlPrincipalRepository(session_maker).list_without_handle()

        assert [p.id for p in pending] == [without.id]

    async def test_active_subscription_among_history(self, session_maker):
        fan, creator = await _add(session_maker, _user(), _user(role="creator"))
        await _add(
            session_maker,
            Subscription(subscriber_id=fan.id, creator_id=creator.id, status="canceled"),
            Subscription(subscriber_id=fan.id, creator_id=creator.id, status="active"),
            Subscription(subscriber_id=fan.id, creator_id=creator.id, status="active"),
        )
        repo = SqlSubscriptionRepository(session_maker)

        found = await repo.find_active_subscription(fan.id, creator.id)
        assert found is not None and found.is_active
        assert await repo.find_active_subscription(creator.id, fan.id) is None

    async def test_only_inactive_rows_return_none(self, session_maker):
        fan, creator = await _add(session_maker, _user(), _user(role="creator"))
        await _add(
            session_maker,
            Subscription(subscriber_id=fan.id, creator_id=creator.id, status="expired"),
        )
        repo = SqlSubscriptionRepository(session_maker)
        assert await repo.find_active_subscription(fan.id, creator.id) is None

    async def test_content_kind_filter(self, session_maker):
        (creator,) = await _add(session_maker, _user(role="creator"))
        (vr,) = await _add(
            session_maker,
            Content(id=str(uuid4()), owner_id=creator.id, kind="vr", is_premium=True),
        )
        repo = SqlContentRepository(session_maker)

        item = await repo.find_content_by_id(vr.id)
        assert item.kind == ContentKind.VR
        assert item.is_premium
        assert await repo.find_content_by_id(vr.id, ContentKind.VR) is not None
        assert await repo.find_content_by_id(vr.id, ContentKind.POST) is None


# ============================================================================
# End-to-end access check
# ============================================================================


async def test_check_access_end_to_end(session_maker):
    fan, creator, admin = await _add(
        session_maker, _user(), _user(role="creator"), _user(role="admin")
    )
    (post,) = await _add(
        session_maker,
        Content(id=str(uuid4()), owner_id=creator.id, is_premium=True, title="Members only"),
    )
    service = ContentAccessService(
        principals=SqlPrincipalRepository(session_maker),
        content=SqlContentRepository(session_maker),
        subscriptions=SqlSubscriptionRepository(session_maker),
    )

    denied = await service.check_access(fan.id, post.id)
    assert denied.allowed is False
    assert denied.payload == {"content_id": post.id, "creator_id": creator.id}

    assert (await service.check_access(admin.id, post.id)).allowed
    assert (await service.check_access(creator.id, post.id)).allowed

    await _add(
        session_maker,
        Subscription(subscriber_id=fan.id, creator_id=creator.id, status="active"),
    )
    assert (await service.check_access(fan.id, post.id)).reason_code == "active_subscription"
