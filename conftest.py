"""
Common test fixtures for Django REST Framework API tests.

Provides fixtures for creating an admin user and a session-authenticated
client, plus the channel, company and mapping records most API and sync
tests start from.
"""
import pytest
from django.contrib.auth.models import User

from integrations.models import HubspotCompany, SlackChannel
from mappings.models import Mapping, MappingSlackChannel


@pytest.fixture
def user(db):
    """Create a test admin user."""
    return User.objects.create_user(
        username="admin@example.com",
        password="pass12345",
        email="admin@example.com",
        first_name="Ada",
        last_name="Admin",
        is_staff=True,
    )


@pytest.fixture
def auth_client(client, db, user):
    """Authenticate the Django test client with a session cookie."""
    client.force_login(user)
    return client


@pytest.fixture
def channel(db):
    return SlackChannel.objects.create(channel_id="C0001", name="acme-support")


@pytest.fixture
def company(db):
    return HubspotCompany.objects.create(company_id="9001", name="Acme Corp")


@pytest.fixture
def mapping(db, channel, company):
    """A daily mapping from ``channel`` to ``company``."""
    m = Mapping.objects.create(title="Acme", cadence="daily", hubspot_company=company)
    MappingSlackChannel.objects.create(mapping=m, slack_channel=channel)
    return m
