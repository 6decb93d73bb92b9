from django.conf import settings
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.api.schemas import paginated_response, ErrorResponseSerializer
from apps.api.utils import not_found
from apps.common import get_logger
from .container import build_product_service, build_category_service
from .pagination import MAX_PAGE, clamp_limit, clamp_page
from .queries import ProductListQuery
from .query_builder import SORT_COLUMNS, SORT_ORDERS
from .serializers import (
    CategorySerializer,
    ProductDetailSerializer,
    ProductListResultSerializer,
    ProductSummarySerializer,
    ReviewPageSerializer,
)

logger = get_logger(__name__).bind(component="catalog", layer="view")

NOT_FOUND_RESPONSE = OpenApiResponse(response=ErrorResponseSerializer)
SERVER_ERROR_RESPONSE = OpenApiResponse(
    response=ErrorResponseSerializer, description="Database query failed"
)

PAGINATION_PARAMETERS = [
    OpenApiParameter("page", int, description=f"1-based page number, clamped to [1, {MAX_PAGE}]"),
    OpenApiParameter("limit", int, description="Page size; clamped to [1, CATALOG_MAX_LIMIT]"),
]

PRODUCT_LIST_PARAMETERS = PAGINATION_PARAMETERS + [
    OpenApiParameter("category_id", int, description="Only products in this category"),
    OpenApiParameter("seller_id", int, description="Only products from this seller; non-numeric values are ignored"),
    OpenApiParameter("min_price", float, description="Inclusive lower price bound"),
    OpenApiParameter("max_price", float, description="Inclusive upper price bound"),
    OpenApiParameter("country_of_origin", str, description="Exact country match"),
    OpenApiParameter("featured", bool, description="true/false"),
    OpenApiParameter("search", str, description="Substring of product name, description or category name"),
    OpenApiParameter("exclude_id", int, description="Leave this product out"),
    OpenApiParameter("sort_by", str, enum=sorted(SORT_COLUMNS), description="Defaults to created_at"),
    OpenApiParameter("sort_order", str, enum=list(SORT_ORDERS), description="Defaults to DESC"),
]


@extend_schema(tags=["Catalog"])
class ProductListView(APIView):
    permission_classes = [AllowAny]
    service = build_product_service()
    log = logger.bind(view="ProductListView")

    @extend_schema(
        operation_id="products_list",
        summary="List products",
        description="Filter, sort and paginate the product catalog.",
        parameters=PRODUCT_LIST_PARAMETERS,
        responses={
            200: paginated_response(ProductSummarySerializer, items_key="products"),
            500: SERVER_ERROR_RESPONSE,
        },
    )
    def get(self, request):
        query = ProductListQuery.from_raw(request.query_params)
        self.log.debug(
            "Handling product list request",
            page=query.page,
            limit=query.limit,
            filters=query.active_filters(),
        )
        result = self.service.list_products(query)
        return Response(ProductListResultSerializer(result).data)


@extend_schema(tags=["Catalog"])
class ProductDetailView(APIView):
    permission_classes = [AllowAny]
    service = build_product_service()
    log = logger.bind(view="ProductDetailView")

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        responses={200: ProductDetailSerializer, 404: NOT_FOUND_RESPONSE},
    )
    def get(self, request, product_id: int):
        self.log.debug("Fetching product detail", product_id=product_id)
        dto = self.service.get_product(product_id)
        if not dto:
            return not_found("Product", product_id)
        return Response(ProductDetailSerializer(dto).data)


@extend_schema(tags=["Catalog"])
class ProductRelatedView(APIView):
    permission_classes = [AllowAny]
    service = build_product_service()
    log = logger.bind(view="ProductRelatedView")

    @extend_schema(
        operation_id="products_related",
        summary="Related products",
        description="Random products from the same category, excluding the product itself.",
        parameters=[
            OpenApiParameter("product_id", int, OpenApiParameter.PATH),
            OpenApiParameter("limit", int, description="Number of products (default 4)"),
        ],
        responses={200: ProductSummarySerializer(many=True), 404: NOT_FOUND_RESPONSE},
    )
    def get(self, request, product_id: int):
        limit = clamp_limit(
            request.query_params.get("limit"), default=settings.CATALOG_RELATED_LIMIT
        )
        items = self.service.related_products(product_id, limit)
        if items is None:
            return not_found("Product", product_id)
        return Response(ProductSummarySerializer(items, many=True).data)


@extend_schema(tags=["Catalog"])
class ProductReviewListView(APIView):
    permission_classes = [AllowAny]
    service = build_product_service()
    log = logger.bind(view="ProductReviewListView")

    @extend_schema(
        operation_id="products_reviews_list",
        summary="List product reviews",
        description="Newest reviews first.",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)]
        + PAGINATION_PARAMETERS,
        responses={
            200: ReviewPageSerializer,
            404: NOT_FOUND_RESPONSE,
        },
    )
    def get(self, request, product_id: int):
        page = clamp_page(request.query_params.get("page"))
        limit = clamp_limit(
            request.query_params.get("limit"), default=settings.CATALOG_REVIEWS_LIMIT
        )
        self.log.debug("Listing reviews", product_id=product_id, page=page, limit=limit)
        result = self.service.list_reviews(product_id, page, limit)
        if result is None:
            return not_found("Product", product_id)
        return Response(ReviewPageSerializer(result).data)


@extend_schema(tags=["Catalog"])
class CategoryListView(APIView):
    permission_classes = [AllowAny]
    service = build_category_service()
    log = logger.bind(view="CategoryListView")

    @extend_schema(
        summary="List categories", responses={200: CategorySerializer(many=True)}
    )
    def get(self, request):
        self.log.debug("Listing categories")
        data = self.service.list_categories()
        return Response(CategorySerializer(data, many=True).data)


@extend_schema(tags=["Catalog"])
class CategoryDetailView(APIView):
    permission_classes = [AllowAny]
    service = build_category_service()
    log = logger.bind(view="CategoryDetailView")

    @extend_schema(
        summary="Get category",
        parameters=[OpenApiParameter("category_id", int, OpenApiParameter.PATH)],
        responses={200: CategorySerializer, 404: NOT_FOUND_RESPONSE},
    )
    def get(self, request, category_id: int):
        dto = self.service.get_category(category_id)
        if not dto:
            return not_found("Category", category_id)
        return Response(CategorySerializer(dto).data)


@extend_schema(tags=["Catalog"])
class CategoryProductListView(APIView):
    permission_classes = [AllowAny]
    service = build_category_service()
    log = logger.bind(view="CategoryProductListView")

    @extend_schema(
        operation_id="categories_products_list",
        summary="List products in a category",
        description="Products sorted by name.",
        parameters=[OpenApiParameter("category_id", int, OpenApiParameter.PATH)]
        + PAGINATION_PARAMETERS,
        responses={
            200: paginated_response(ProductSummarySerializer, items_key="products"),
            404: NOT_FOUND_RESPONSE,
        },
    )
    def get(self, request, category_id: int):
        page = clamp_page(request.query_params.get("page"))
        limit = clamp_limit(request.query_params.get("limit"))
        result = self.service.list_category_products(category_id, page, limit)
        if result is None:
            return not_found("Category", category_id)
        return Response(ProductListResultSerializer(result).data)
