from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'customers'

# Note: plans must be registered BEFORE empty prefix to avoid URL conflicts
router = DefaultRouter()
router.register(r'plans', views.MembershipPlanViewSet, basename='plan')
router.register(r'', views.CustomerViewSet, basename='customer')

urlpatterns = [
    # Customer routes
    # GET    /api/customers/                   - List customers (?search=)
    # POST   /api/customers/                   - Register customer
    # GET    /api/customers/{id}/              - Customer profile
    # PATCH  /api/customers/{id}/              - Update contact details
    # GET    /api/customers/search/?q=         - Counter lookup
    # GET    /api/customers/{id}/memberships/  - Enrolment history
    # GET    /api/customers/{id}/loyalty/      - Loyalty ledger
    # POST   /api/customers/{id}/loyalty/      - Manual points correction
    # POST   /api/customers/{id}/enroll/       - Enrol in plan

    # Plan routes
    # GET/POST           /api/customers/plans/
    # GET/PATCH/DELETE   /api/customers/plans/{id}/
    path('', include(router.urls)),
]
