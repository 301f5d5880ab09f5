from rest_framework import serializers
from .models import ServiceCategory, ProductCategory, Service, Product


class StoreScopedSerializer(serializers.ModelSerializer):
    """Catalog rows stay in the store they were created in."""

    def validate_store(self, value):
        if self.instance is not None and value != self.instance.store:
            raise serializers.ValidationError("Catalog items cannot be moved to another store.")
        return value

    def validate(self, attrs):
        store = attrs.get('store') or getattr(self.instance, 'store', None)
        category = attrs.get('category')
        if category is not None and store is not None and category.store_id != store.id:
            raise serializers.ValidationError({'category': 'Category belongs to another store.'})
        return attrs


class ServiceCategorySerializer(StoreScopedSerializer):

    class Meta:
        model = ServiceCategory
        fields = ['id', 'store', 'name', 'description', 'created_at']
        read_only_fields = ['id', 'created_at']


class ProductCategorySerializer(StoreScopedSerializer):

    class Meta:
        model = ProductCategory
        fields = ['id', 'store', 'name', 'description', 'created_at']
        read_only_fields = ['id', 'created_at']


class ServiceSerializer(StoreScopedSerializer):
    """Serializer for salon services."""

    category_name = serializers.CharField(source='category.name', read_only=True, default=None)

    class Meta:
        model = Service
        fields = [
            'id',
            'store',
            'category',
            'category_name',
            'name',
            'description',
            'price',
            'duration_minutes',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'category_name', 'created_at', 'updated_at']


class ProductSerializer(StoreScopedSerializer):
    """Serializer for retail products."""

    category_name = serializers.CharField(source='category.name', read_only=True, default=None)
    is_low_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id',
            'store',
            'category',
            'category_name',
            'name',
            'description',
            'price',
            'cost',
            'barcode',
            'brand',
            'stock',
            'min_stock',
            'is_low_stock',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'category_name', 'is_low_stock', 'created_at', 'updated_at']

    def validate_barcode(self, value):
        # Empty barcode stored as NULL so the unique constraint ignores it
        return value or None


class RestockSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)
