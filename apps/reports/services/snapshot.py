"""
Batched, read-only snapshot of the entities a report needs.

``RegistrationSnapshot.load`` runs one query per entity type for a whole
set of registrations; the pure report functions then resolve links
through the snapshot and never touch the database themselves.
"""

from collections import defaultdict
from types import MappingProxyType

from apps.programs.models import Product, Season
from apps.registrations.models import Participant, Payment

from .exceptions import MissingLinkageError


class RegistrationSnapshot:
    """
    Immutable lookup tables keyed by primary key.

    Args:
        participants: ``{id: Participant}``
        products: ``{id: Product}``
        seasons: ``{id: Season}``
        payments_by_registration: ``{registration_id: [Payment, ...]}``
            with every payment kind; report code filters real money itself.

    Example:
        >>> registrations = list(Registration.objects.filter(product__season=season))
        >>> snapshot = RegistrationSnapshot.load(registrations)
        >>> snapshot.product_for(registrations[0]).name
        'Beginners'
    """

    __slots__ = ('participants', 'products', 'seasons', 'payments_by_registration')

    def __init__(self, *, participants=None, products=None, seasons=None, payments_by_registration=None):
        self.participants = MappingProxyType(dict(participants or {}))
        self.products = MappingProxyType(dict(products or {}))
        self.seasons = MappingProxyType(dict(seasons or {}))
        self.payments_by_registration = MappingProxyType({
            registration_id: tuple(payments)
            for registration_id, payments in (payments_by_registration or {}).items()
        })

    @classmethod
    def load(cls, registrations) -> 'RegistrationSnapshot':
        """Fetch participants, products, seasons and payments for ``registrations``."""
        registration_ids = [r.id for r in registrations]
        participant_ids = {r.participant_id for r in registrations}
        product_ids = {r.product_id for r in registrations}

        products = Product.objects.in_bulk(product_ids)
        season_ids = {p.season_id for p in products.values()}

        payments_by_registration = defaultdict(list)
        for payment in Payment.objects.filter(registration_id__in=registration_ids):
            payments_by_registration[payment.registration_id].append(payment)

        return cls(
            participants=Participant.objects.in_bulk(participant_ids),
            products=products,
            seasons=Season.objects.in_bulk(season_ids),
            payments_by_registration=payments_by_registration,
        )

    def participant_for(self, registration):
        participant = self.participants.get(registration.participant_id)
        if participant is None:
            raise MissingLinkageError(registration.id, 'participant')
        return participant

    def product_for(self, registration):
        product = self.products.get(registration.product_id)
        if product is None:
            raise MissingLinkageError(registration.id, 'product')
        return product

    def season_for(self, registration):
        season = self.seasons.get(self.product_for(registration).season_id)
        if season is None:
            raise MissingLinkageError(registration.id, 'season')
        return season

    def payments_for(self, registration) -> tuple:
        return self.payments_by_registration.get(registration.id, ())

    def resolve(self, registration) -> tuple:
        """
        ``(participant, product, season)`` for a registration.

        Raises:
            MissingLinkageError: If any of the three is not in the snapshot.
        """
        return (
            self.participant_for(registration),
            self.product_for(registration),
            self.season_for(registration),
        )
