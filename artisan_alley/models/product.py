from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

ExperienceBracket = Literal["1-2", "3-5", "6-10", "10+"]


class CamelRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductCreate(CamelRequest):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    category_id: str = Field(..., min_length=1)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    stock: int = Field(1, ge=0)
    images: List[str] = Field(default_factory=list, description="Image URLs")
    dimensions: Optional[str] = None
    medium: Optional[str] = None
    year: Optional[int] = None
    style: Optional[str] = None


class VerificationSubmission(CamelRequest):
    """
    An artist's request to verify one of their products.

    The free-text fields are only checked for presence by the scorer.
    """
    product_id: str = Field(..., min_length=1)
    experience_years: Optional[ExperienceBracket] = None
    specialization: Optional[str] = None
    tools_used: Optional[str] = None
    creation_time: Optional[str] = None
    undertaking_accepted: bool = False

    @field_validator("experience_years", mode="before")
    @classmethod
    def blank_experience_is_unset(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class AiVerifyRequest(CamelRequest):
    product_id: str = Field(..., min_length=1)
    # Analysed instead of the stored product images when given
    image_urls: Optional[List[str]] = None


class AdminVerifyProductRequest(CamelRequest):
    product_id: str = Field(..., min_length=1)
    approved: bool
    expected_version: Optional[int] = Field(None, ge=1, description="Reject the write if the product has changed")


class AdminVerifyArtistRequest(CamelRequest):
    artist_id: str = Field(..., min_length=1)
    approved: bool
