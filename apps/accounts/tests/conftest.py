import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole


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
        display_name='Office Manager',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def viewer(db):
    """Create and return a read-only viewer."""
    return User.objects.create_user(
        username='lifeguard',
        password='TestPass123!',
        display_name='Lifeguard',
    )


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    return User.objects.create_user(
        username='former',
        password='TestPass123!',
        is_active=False,
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
