from rest_framework import serializers

from apps.api.schemas import PaginationSerializer


class CategorySerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField()
    description = serializers.CharField(allow_null=True, required=False)


class ProductSummarySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    description = serializers.CharField()
    price = serializers.CharField()
    categoryId = serializers.IntegerField(source="category_id")
    categoryName = serializers.CharField(source="category_name")
    sellerId = serializers.IntegerField(source="seller_id")
    sellerName = serializers.CharField(source="seller_name")
    countryOfOrigin = serializers.CharField(source="country_of_origin")
    featured = serializers.BooleanField()
    stockQuantity = serializers.IntegerField(source="stock_quantity")
    discount = serializers.CharField()
    createdAt = serializers.CharField(source="created_at", allow_null=True)
    primaryImage = serializers.CharField(source="primary_image", allow_null=True)
    avgRating = serializers.FloatField(source="avg_rating", allow_null=True)
    reviewCount = serializers.IntegerField(source="review_count")


class ProductListResultSerializer(serializers.Serializer):
    products = ProductSummarySerializer(many=True, source="items")
    pagination = PaginationSerializer()


class ProductImageSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    imagePath = serializers.CharField(source="image_path")
    isPrimary = serializers.BooleanField(source="is_primary")


class ReviewSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    rating = serializers.IntegerField()
    title = serializers.CharField(allow_blank=True)
    content = serializers.CharField(allow_blank=True)
    userId = serializers.IntegerField(source="user_id")
    userName = serializers.CharField(source="user_name")
    profileImage = serializers.CharField(source="profile_image", allow_null=True)
    createdAt = serializers.CharField(source="created_at", allow_null=True)


class ProductDetailSerializer(ProductSummarySerializer):
    categoryDescription = serializers.CharField(
        source="category_description", allow_null=True
    )
    weight = serializers.CharField(allow_null=True)
    weightUnit = serializers.CharField(source="weight_unit", allow_blank=True)
    manufactureDate = serializers.CharField(source="manufacture_date", allow_null=True)
    expiryDate = serializers.CharField(source="expiry_date", allow_null=True)
    images = ProductImageSerializer(many=True)
    reviews = ReviewSerializer(many=True)


class ReviewPageSerializer(serializers.Serializer):
    productId = serializers.IntegerField(source="product_id")
    reviews = ReviewSerializer(many=True)
    pagination = PaginationSerializer()
