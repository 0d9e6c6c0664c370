from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from camps.models import Camp, Role, User

from .utils import client_for


@pytest.fixture
def admin_user(db):
    return User.objects.create(email='admin@medi-ease.test', role=Role.ADMIN, name='Camp Admin')


@pytest.fixture
def participant(db):
    return User.objects.create(email='rahim@medi-ease.test', role=Role.PARTICIPANT, name='Rahim')


@pytest.fixture
def other_participant(db):
    return User.objects.create(email='karim@medi-ease.test', role=Role.PARTICIPANT, name='Karim')


@pytest.fixture
def anon_client():
    return APIClient()


@pytest.fixture
def admin_client(admin_user):
    return client_for(admin_user.email)


@pytest.fixture
def participant_client(participant):
    return client_for(participant.email)


@pytest.fixture
def camp(admin_user):
    return Camp.objects.create(
        name='Eye Care Camp',
        fee=Decimal('20.00'),
        location='Dhaka',
        healthcare_professional='Dr. Nasrin',
        created_by=admin_user.email,
    )
