"""Shared fixtures for the audit log tests."""

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from audit.models import AuditLog


@pytest.fixture
def make_log(db):
    """Create an audit row, optionally backdated by ``age``."""

    def _make(action="update", table_name="providers", record_id="p-1",
              old_data=None, new_data=None, actor_email="ana@vestasolutions.com",
              age=None):
        entry = AuditLog.objects.create(
            action=action,
            table_name=table_name,
            record_id=record_id,
            old_data=old_data,
            new_data=new_data,
            actor_email=actor_email,
        )
        if age is not None:
            # created_at is auto_now_add; queryset updates bypass the immutable save()
            AuditLog.objects.filter(pk=entry.pk).update(created_at=timezone.now() - age)
            entry = AuditLog.objects.get(pk=entry.pk)
        return entry

    return _make


@pytest.fixture
def user(db):
    return get_user_model().objects.create_user(
        username="ana", email="ana@vestasolutions.com", password="s3cret-pass!"
    )


@pytest.fixture
def api_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def anon_client():
    return APIClient()
