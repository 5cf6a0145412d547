from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from artisan_alley.db.models import AuthenticityStatus
from artisan_alley.schemas.product import TrustUpdateResponse


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuthenticityAnalysis(CamelModel):
    handcrafted_indicators: List[str]
    material_analysis: str
    tool_marks: str
    overall_assessment: str


class AuthenticityVerification(CamelModel):
    """Result of the image authenticity pre-score."""
    authenticity_score: float = Field(..., ge=0, le=100, description="Raw AI pre-score, one decimal")
    verification_id: str
    analysis: AuthenticityAnalysis
    confidence: float = Field(..., ge=0, le=1, description="Model confidence, two decimals")


class VerificationOutcome(AuthenticityVerification):
    """Pre-score merged with the composite score returned to the artist."""
    final_score: int
    status: AuthenticityStatus
    message: str


class AiCheckResponse(BaseModel):
    product: TrustUpdateResponse
    verification: AuthenticityVerification
