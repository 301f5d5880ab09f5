"""
Domain exceptions for customers services.

Exception Hierarchy:
    CustomersServiceError (base)
    ├── DuplicateCustomerError
    ├── InsufficientPointsError
    ├── InvalidPointsError
    └── PlanNotAvailableError

    CustomerNotFoundError (APIException, 404)
    MembershipPlanNotFoundError (APIException, 404)
"""
from rest_framework.exceptions import APIException


class CustomersServiceError(Exception):
    """Base exception for customers services."""
    pass


class DuplicateCustomerError(CustomersServiceError):
    """Raised when the mobile number is already registered."""
    pass


class InsufficientPointsError(CustomersServiceError):
    """Raised when a loyalty change would take the balance below zero."""
    pass


class InvalidPointsError(CustomersServiceError):
    """Raised when a points amount is negative or not a whole number."""
    pass


class PlanNotAvailableError(CustomersServiceError):
    """Raised when enrolling in an inactive plan."""
    pass


class CustomerNotFoundError(APIException):
    """Customer not found."""
    status_code = 404
    default_detail = 'Customer not found.'
    default_code = 'customer_not_found'


class MembershipPlanNotFoundError(APIException):
    """Membership plan not found."""
    status_code = 404
    default_detail = 'Membership plan not found.'
    default_code = 'membership_plan_not_found'
