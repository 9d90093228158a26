"""
Registrations app services layer.

Services contain business logic for enrollments, payments, discounts and
health declarations. State-changing operations use transactions and row
locks where capacity or accumulated amounts are involved.
"""

from .exceptions import (
    RegistrationsServiceError,
    InvalidAmountError,
    DuplicateRegistrationError,
    ProductFullError,
    PaymentNotFoundError,
    DeclarationNotFoundError,
    DeclarationAlreadySignedError,
)

from .payment_status import (
    evaluate,
    effective_required_amount,
    real_payments,
    total_paid,
    to_amount,
)

from .registration_management import (
    register_participant,
    search_participants,
)

from .payment_management import (
    add_payment,
    apply_discount,
    revoke_discount,
    delete_payment,
    get_registration_status,
)

from .health_declarations import (
    create_declaration_link,
    get_declaration_by_token,
    mark_declaration_sent,
    submit_declaration,
)

__all__ = [
    # Exceptions
    'RegistrationsServiceError',
    'InvalidAmountError',
    'DuplicateRegistrationError',
    'ProductFullError',
    'PaymentNotFoundError',
    'DeclarationNotFoundError',
    'DeclarationAlreadySignedError',
    # Payment Status Evaluator
    'evaluate',
    'effective_required_amount',
    'real_payments',
    'total_paid',
    'to_amount',
    # Registrations
    'register_participant',
    'search_participants',
    # Payments and discounts
    'add_payment',
    'apply_discount',
    'revoke_discount',
    'delete_payment',
    'get_registration_status',
    # Health declarations
    'create_declaration_link',
    'get_declaration_by_token',
    'mark_declaration_sent',
    'submit_declaration',
]
