"""Tests for BaseService write operations against the test database."""

import uuid

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from flithub.models.user_role import UserRole
from flithub.schemas.enums import AppRole
from flithub.services.base import BaseService
from flithub.services.exceptions import WriteError
from flithub.services.provider_service import ProviderService
from flithub.services.resource_service import ResourceService

USER_ID = uuid.UUID("55555555-5555-5555-5555-555555555555")


class TestInsert:
    """Tests for BaseService.insert()."""

    @pytest.mark.asyncio
    async def test_insert_returns_stored_record(self, db_session: AsyncSession):
        provider = await ProviderService(db_session).insert({"name": "MABS"})

        assert provider.id is not None
        assert provider.uuid is not None
        assert provider.country == "Ireland"

    @pytest.mark.asyncio
    async def test_rejected_insert_raises_write_error(self, db_session: AsyncSession):
        service = BaseService(db_session, UserRole)
        await service.insert({"user_id": USER_ID, "role": AppRole.ADMIN})

        with pytest.raises(WriteError) as exc_info:
            await service.insert({"user_id": USER_ID, "role": AppRole.ADMIN})

        assert exc_info.value.entity == "UserRole"
        assert "UNIQUE" in exc_info.value.message.upper()

    @pytest.mark.asyncio
    async def test_session_usable_after_failure(self, db_session: AsyncSession):
        service = BaseService(db_session, UserRole)
        await service.insert({"user_id": USER_ID, "role": AppRole.ADMIN})
        with pytest.raises(WriteError):
            await service.insert({"user_id": USER_ID, "role": AppRole.ADMIN})

        await service.insert({"user_id": USER_ID, "role": AppRole.SUBMITTER})

        result = await db_session.execute(select(UserRole.role).where(UserRole.user_id == USER_ID))
        assert sorted(result.scalars().all()) == ["admin", "submitter"]


class TestUpdateByUuid:
    """Tests for BaseService.update_by_uuid()."""

    @pytest.mark.asyncio
    async def test_update(self, db_session: AsyncSession, make_provider):
        provider = await make_provider("MABS")
        service = ProviderService(db_session)

        await service.update_by_uuid(provider.uuid, {"description": "Money advice"})

        await db_session.refresh(provider)
        assert provider.description == "Money advice"

    @pytest.mark.asyncio
    async def test_missing_record(self, db_session: AsyncSession):
        missing = uuid.uuid4()

        with pytest.raises(WriteError) as exc_info:
            await ProviderService(db_session).update_by_uuid(missing, {"description": "x"})

        assert exc_info.value.message == f"Provider with identifier '{missing}' no longer exists"


class TestDriverErrors:
    """Values the driver cannot bind become WriteError, not a crash."""

    @pytest.mark.asyncio
    async def test_integer_overflow_on_insert(self, db_session: AsyncSession):
        service = ResourceService(db_session)
        values = {
            "title": "Endless",
            "description": "Too long to store",
            "resource_type": "video",
            "duration_minutes": 10**20,
        }

        with pytest.raises(WriteError) as exc_info:
            await service.insert(values)

        assert exc_info.value.entity == "Resource"

        saved = await service.insert({**values, "duration_minutes": 90})
        assert saved.duration_minutes == 90

    @pytest.mark.asyncio
    async def test_integer_overflow_on_update(self, db_session: AsyncSession, make_resource):
        resource = await make_resource("Budget Basics", duration_minutes=30)
        service = ResourceService(db_session)

        with pytest.raises(WriteError):
            await service.update_by_uuid(resource.uuid, {"duration_minutes": 10**20})

        await service.update_by_uuid(resource.uuid, {"duration_minutes": 45})
        await db_session.refresh(resource)
        assert resource.duration_minutes == 45
