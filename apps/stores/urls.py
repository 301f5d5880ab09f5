from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'stores'

router = DefaultRouter()
router.register(r'', views.StoreViewSet, basename='store')

urlpatterns = [
    # Store ViewSet routes
    # GET    /api/stores/                    - List accessible stores
    # POST   /api/stores/                    - Create store (super admin)
    # GET    /api/stores/{id}/               - Get store
    # PATCH  /api/stores/{id}/               - Update store (super admin)
    # DELETE /api/stores/{id}/               - Deactivate store (super admin)

    # Custom store actions
    # GET    /api/stores/{id}/staff/         - List staff
    # POST   /api/stores/{id}/staff/assign/  - Assign staff
    # POST   /api/stores/{id}/staff/remove/  - Remove staff
    # GET    /api/stores/{id}/tax/           - Tax configuration
    # PUT    /api/stores/{id}/tax/           - Replace tax configuration
    # GET    /api/stores/{id}/loyalty/       - Loyalty settings
    # PATCH  /api/stores/{id}/loyalty/       - Update loyalty settings
    path('', include(router.urls)),
]
