from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class CategoryDTO:
    id: int
    name: str
    description: Optional[str] = None


@dataclass
class ProductSummaryDTO:
    id: int
    name: str
    description: str
    price: str
    category_id: int
    category_name: str
    seller_id: int
    seller_name: str
    country_of_origin: str
    featured: bool
    stock_quantity: int
    discount: str
    created_at: Optional[str]
    primary_image: Optional[str]
    avg_rating: Optional[float]
    review_count: int


@dataclass
class PaginationDTO:
    total: int
    page: int
    limit: int
    pages: int


@dataclass
class ProductListResultDTO:
    items: List[ProductSummaryDTO]
    pagination: PaginationDTO


@dataclass
class ProductImageDTO:
    id: int
    image_path: str
    is_primary: bool


@dataclass
class ReviewDTO:
    id: int
    rating: int
    title: str
    content: str
    user_id: int
    user_name: str
    profile_image: Optional[str]
    created_at: Optional[str]


@dataclass
class ReviewPageDTO:
    product_id: int
    reviews: List[ReviewDTO]
    pagination: PaginationDTO


@dataclass
class ProductDetailDTO(ProductSummaryDTO):
    category_description: Optional[str] = None
    weight: Optional[str] = None
    weight_unit: str = ""
    manufacture_date: Optional[str] = None
    expiry_date: Optional[str] = None
    images: List[ProductImageDTO] = field(default_factory=list)
    reviews: List[ReviewDTO] = field(default_factory=list)
