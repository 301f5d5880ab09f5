"""
Customers services - Business logic layer.

- Customer registration and search
- Membership enrolment
- Loyalty balance changes (ledgered, row-locked)
"""

from .customer_management import (
    create_customer,
    get_customer,
    search_customers,
)

from .memberships import (
    get_active_membership,
    membership_terms,
    enroll_customer,
)

from .loyalty import (
    apply_loyalty_delta,
    adjust_points,
)

from .exceptions import (
    CustomersServiceError,
    DuplicateCustomerError,
    InsufficientPointsError,
    InvalidPointsError,
    PlanNotAvailableError,
    CustomerNotFoundError,
    MembershipPlanNotFoundError,
)

__all__ = [
    # Customer Management
    'create_customer',
    'get_customer',
    'search_customers',
    # Memberships
    'get_active_membership',
    'membership_terms',
    'enroll_customer',
    # Loyalty
    'apply_loyalty_delta',
    'adjust_points',
    # Exceptions
    'CustomersServiceError',
    'DuplicateCustomerError',
    'InsufficientPointsError',
    'InvalidPointsError',
    'PlanNotAvailableError',
    'CustomerNotFoundError',
    'MembershipPlanNotFoundError',
]
