from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'billing'

router = DefaultRouter()
router.register(r'transactions', views.TransactionViewSet, basename='transaction')

urlpatterns = [
    # POST   /api/billing/quote/                                 - Price a cart
    path('quote/', views.quote, name='quote'),

    # GET    /api/billing/transactions/                          - List transactions
    # POST   /api/billing/transactions/                          - Check out a cart
    # GET    /api/billing/transactions/{id}/                     - Transaction details
    # GET    /api/billing/transactions/by-invoice/{invoice}/     - Lookup by invoice number
    path('', include(router.urls)),
]
