import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.programs.models import Season, Pool, Product
from apps.registrations.models import Participant, Registration


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return an admin user."""
    return User.objects.create_user(
        username='office',
        password='TestPass123!',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def viewer(db):
    """Create and return a read-only viewer."""
    return User.objects.create_user(
        username='lifeguard',
        password='TestPass123!',
    )


def _jwt_client(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def authenticated_client(user):
    """Return an API client authenticated as the admin."""
    return _jwt_client(user)


@pytest.fixture
def viewer_client(viewer):
    """Return an API client authenticated as the viewer."""
    return _jwt_client(viewer)


@pytest.fixture
def season(db):
    return Season.objects.create(
        name='Winter 2024',
        start_date=date(2024, 1, 1),
        end_date=date(2024, 3, 31),
    )


@pytest.fixture
def product(db, season):
    """Sunday and Tuesday course, four meetings from 2024-01-07, price 500."""
    pool = Pool.objects.create(name='Main Pool', season=season)
    return Product.objects.create(
        name='Beginners',
        season=season,
        pool=pool,
        start_date=date(2024, 1, 7),
        days_of_week=['sunday', 'tuesday'],
        meetings_count=4,
        price=Decimal('500.00'),
        max_participants=2,
    )


@pytest.fixture
def participant(db):
    return Participant.objects.create(
        first_name='Noa',
        last_name='Levi',
        id_number='123456782',
        phone='050-1234567',
    )


@pytest.fixture
def other_participant(db):
    return Participant.objects.create(
        first_name='Omer',
        last_name='Cohen',
        id_number='987654321',
        phone='052-7654321',
    )


@pytest.fixture
def registration(db, product, participant):
    """Registration owing the full product price."""
    return Registration.objects.create(
        product=product,
        participant=participant,
        required_amount=Decimal('500.00'),
    )
