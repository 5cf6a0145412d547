from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from artisan_alley.db.models import AuthenticityStatus


class OrmCamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class CategoryResponse(OrmCamelModel):
    id: str
    name: str
    description: Optional[str] = None
    slug: str


class ArtistSummary(OrmCamelModel):
    id: str
    name: str
    verified_status: bool = False
    artist_portfolio: Optional[Dict[str, Any]] = None


class ProductResponse(OrmCamelModel):
    id: str
    title: str
    description: str
    category_id: str
    price: Decimal
    stock: int
    artist_id: str
    images: List[str] = []
    story: Optional[str] = None
    dimensions: Optional[str] = None
    medium: Optional[str] = None
    year: Optional[int] = None
    style: Optional[str] = None
    authenticity_status: AuthenticityStatus
    authenticity_score: Optional[float] = None
    verification_id: Optional[str] = None
    version: int
    created_at: Optional[datetime] = None


class ProductDetailResponse(ProductResponse):
    artist: Optional[ArtistSummary] = None
    artist_undertaking: Optional[Dict[str, Any]] = None


class PendingVerificationsResponse(BaseModel):
    artists: List[ArtistSummary]
    products: List[ProductResponse]


class TrustUpdateResponse(OrmCamelModel):
    """Trust fields of a product after an override or direct AI check."""
    id: str
    authenticity_status: AuthenticityStatus
    authenticity_score: Optional[float] = None
    verification_id: Optional[str] = None
    version: int


class ArtistProfileResponse(ArtistSummary):
    products: List[ProductResponse] = []


class AdminStatsResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_users: int
    total_products: int
    pending_artist_verifications: int
    pending_product_verifications: int
