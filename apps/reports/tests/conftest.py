import uuid
import pytest
from datetime import date, time
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.programs.models import Season, Pool, Product
from apps.registrations.models import Participant, Registration, Payment, PaymentKind
from apps.reports.services import RegistrationSnapshot


# =============================================================================
# In-memory entities (no database)
# =============================================================================

@pytest.fixture
def memory_season():
    return Season(id=uuid.uuid4(), name='Winter 2024', start_date=date(2024, 1, 1), end_date=date(2024, 3, 31))


@pytest.fixture
def memory_product(memory_season):
    """Sunday/Tuesday course from 2024-01-07, four meetings, eight places."""
    return Product(
        id=uuid.uuid4(),
        name='Beginners',
        type='course',
        season_id=memory_season.id,
        start_date=date(2024, 1, 7),
        end_date=date(2024, 1, 16),
        start_time=time(17, 0),
        days_of_week=['sunday', 'tuesday'],
        meetings_count=4,
        price=Decimal('500.00'),
        max_participants=8,
    )


def make_participant(first_name, last_name, id_number):
    return Participant(
        id=uuid.uuid4(),
        first_name=first_name,
        last_name=last_name,
        id_number=id_number,
        phone='050-0000000',
    )


def make_registration(product, participant, required='500.00', discount=None, approved=False):
    return Registration(
        id=uuid.uuid4(),
        product_id=product.id,
        participant_id=participant.id,
        required_amount=Decimal(required),
        discount_amount=Decimal(discount) if discount is not None else None,
        discount_approved=approved,
        registration_date=date(2023, 12, 20),
    )


def make_payment(registration, amount, receipt='', kind=PaymentKind.PAYMENT):
    return Payment(
        id=uuid.uuid4(),
        registration_id=registration.id,
        kind=kind,
        amount=Decimal(amount),
        receipt_number=receipt,
        payment_date=date(2024, 1, 7),
    )


@pytest.fixture
def cohort(memory_season, memory_product):
    """
    Three registrations in one product:

    - noa: 500 owed, paid 300 (PARTIAL)
    - omer: 500 owed, 100 discount approved, paid 400 + a discount row (FULL_DISCOUNTED)
    - yael: 500 owed, paid 600 (OVER)
    """
    noa = make_participant('Noa', 'Levi', '123456782')
    omer = make_participant('Omer', 'Cohen', '987654321')
    yael = make_participant('Yael', 'Bar', '555555555')

    registrations = [
        make_registration(memory_product, noa),
        make_registration(memory_product, omer, discount='100', approved=True),
        make_registration(memory_product, yael),
    ]
    payments = {
        registrations[0].id: [make_payment(registrations[0], '300', 'R-1')],
        registrations[1].id: [
            make_payment(registrations[1], '250', 'R-2'),
            make_payment(registrations[1], '150', 'R-3'),
            make_payment(registrations[1], '100', 'DISC', kind=PaymentKind.DISCOUNT),
        ],
        registrations[2].id: [make_payment(registrations[2], '600', 'R-4')],
    }
    snapshot = RegistrationSnapshot(
        participants={p.id: p for p in (noa, omer, yael)},
        products={memory_product.id: memory_product},
        seasons={memory_season.id: memory_season},
        payments_by_registration=payments,
    )
    return registrations, snapshot


# =============================================================================
# Database fixtures
# =============================================================================

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
def pool(db, season):
    return Pool.objects.create(name='Main Pool', season=season)


@pytest.fixture
def product(db, season, pool):
    return Product.objects.create(
        name='Beginners',
        season=season,
        pool=pool,
        start_date=date(2024, 1, 7),
        start_time=time(17, 0),
        days_of_week=['sunday', 'tuesday'],
        meetings_count=4,
        price=Decimal('500.00'),
        max_participants=4,
    )


@pytest.fixture
def other_product(db, season, pool):
    return Product.objects.create(
        name='Advanced',
        season=season,
        pool=pool,
        start_date=date(2024, 1, 8),
        start_time=time(16, 0),
        days_of_week=['monday'],
        meetings_count=6,
        price=Decimal('700.00'),
        max_participants=5,
    )


@pytest.fixture
def registrations(db, product, other_product):
    """
    Stored registrations:

    - Noa in Beginners: 500, paid 300 (R-1)
    - Omer in Beginners: 500, discount 100 approved, paid 400 (R-2)
    - Yael in Advanced: 700, paid 700 (R-3)
    """
    noa = Participant.objects.create(first_name='Noa', last_name='Levi', id_number='123456782')
    omer = Participant.objects.create(first_name='Omer', last_name='Cohen', id_number='987654321')
    yael = Participant.objects.create(first_name='Yael', last_name='Bar', id_number='555555555')

    r_noa = Registration.objects.create(product=product, participant=noa, required_amount=Decimal('500'))
    r_omer = Registration.objects.create(
        product=product,
        participant=omer,
        required_amount=Decimal('500'),
        discount_amount=Decimal('100'),
        discount_approved=True,
    )
    r_yael = Registration.objects.create(product=other_product, participant=yael, required_amount=Decimal('700'))

    Payment.objects.create(registration=r_noa, amount=Decimal('300'), receipt_number='R-1')
    Payment.objects.create(registration=r_omer, amount=Decimal('400'), receipt_number='R-2')
    Payment.objects.create(registration=r_yael, amount=Decimal('700'), receipt_number='R-3')

    return {'noa': r_noa, 'omer': r_omer, 'yael': r_yael}
