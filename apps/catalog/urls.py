from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'catalog'

router = DefaultRouter()
router.register(r'services', views.ServiceViewSet, basename='service')
router.register(r'products', views.ProductViewSet, basename='product')
router.register(r'service-categories', views.ServiceCategoryViewSet, basename='service-category')
router.register(r'product-categories', views.ProductCategoryViewSet, basename='product-category')

urlpatterns = [
    # GET/POST            /api/catalog/services/
    # GET/PATCH/DELETE    /api/catalog/services/{id}/
    # GET/POST            /api/catalog/products/
    # GET                 /api/catalog/products/scan/{barcode}/
    # GET                 /api/catalog/products/low-stock/?store={id}
    # POST                /api/catalog/products/{id}/restock/
    # GET/POST            /api/catalog/service-categories/
    # GET/POST            /api/catalog/product-categories/
    path('', include(router.urls)),
]
