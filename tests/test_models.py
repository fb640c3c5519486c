"""Tests for the shared timestamp columns."""

import pytest
from sqlalchemy import DateTime

from tenant_notes.models import Note, Tenant, User
from tenant_notes.models.base import utcnow
from tenant_notes.models.tenant import SubscriptionPlan


def test_utcnow_is_timezone_aware():
    assert utcnow().utcoffset() is not None
    assert utcnow().utcoffset().total_seconds() == 0


@pytest.mark.parametrize("model", [Tenant, User, Note])
def test_timestamp_columns_store_time_zone(model):
    for name in ("created_at", "updated_at"):
        column = model.__table__.c[name]
        assert isinstance(column.type, DateTime)
        assert column.type.timezone is True
        assert column.nullable is False


@pytest.mark.asyncio
async def test_insert_and_update_stamp_rows(session):
    tenant = Tenant(name="Initech", slug="initech")
    session.add(tenant)
    await session.commit()
    await session.refresh(tenant)
    created = tenant.created_at
    assert created is not None

    tenant.plan = SubscriptionPlan.PRO
    tenant.updated_at = utcnow()
    session.add(tenant)
    await session.commit()
    await session.refresh(tenant)

    assert tenant.plan == SubscriptionPlan.PRO
    assert tenant.created_at == created
