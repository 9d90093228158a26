import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.programs.models import Season, Pool, Product


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
    """Create and return a test season."""
    return Season.objects.create(
        name='Winter 2024',
        start_date=date(2024, 1, 1),
        end_date=date(2024, 3, 31),
    )


@pytest.fixture
def pool(db, season):
    """Create and return a test pool."""
    return Pool.objects.create(name='Main Pool', season=season)


@pytest.fixture
def product(db, season, pool):
    """Sunday and Tuesday course with four meetings starting 2024-01-07."""
    return Product.objects.create(
        name='Beginners',
        type='course',
        season=season,
        pool=pool,
        start_date=date(2024, 1, 7),
        days_of_week=['sunday', 'tuesday'],
        meetings_count=4,
        price=Decimal('500.00'),
        max_participants=8,
    )
