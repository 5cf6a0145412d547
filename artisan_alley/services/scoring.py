from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple, Optional, Union
import logging

from artisan_alley.db.models import AuthenticityStatus

logger = logging.getLogger(__name__)

AI_WEIGHT = Decimal("0.70")
EXPERIENCE_WEIGHT = Decimal("0.15")
DETAILS_WEIGHT = Decimal("0.15")

EXPERIENCE_SCORES = {
    "10+": 100,
    "6-10": 85,
    "3-5": 70,
}
DEFAULT_EXPERIENCE_SCORE = 50

COMPLETE_DETAILS_SCORE = 90
INCOMPLETE_DETAILS_SCORE = 60

VERIFIED_THRESHOLD = 85
REVIEW_THRESHOLD = 65

STATUS_MESSAGES = {
    AuthenticityStatus.VERIFIED: "Product verified as authentic handmade artwork",
    AuthenticityStatus.PENDING: "Product under review - additional verification may be required",
    AuthenticityStatus.REJECTED: "Product needs improvement - please ensure all details are accurate",
}


class ScoreResult(NamedTuple):
    final_score: int
    status: AuthenticityStatus
    message: str
    experience_score: int
    details_score: int


def experience_score(experience_years: Optional[str]) -> int:
    """Map a declared experience bracket to its score; unknown or unset brackets score 50."""
    return EXPERIENCE_SCORES.get(experience_years or "", DEFAULT_EXPERIENCE_SCORE)


def details_score(tools_used: Optional[str], specialization: Optional[str], creation_time: Optional[str]) -> int:
    """90 when every declaration field is filled in, 60 otherwise. Content is not inspected."""
    if all(field and field.strip() for field in (tools_used, specialization, creation_time)):
        return COMPLETE_DETAILS_SCORE
    return INCOMPLETE_DETAILS_SCORE


def classify(final_score: Union[int, float, Decimal]) -> AuthenticityStatus:
    """
    Classify a composite score into a trust status.

    Both thresholds are strict: exactly 85 stays under review and
    exactly 65 is rejected.
    """
    if final_score > VERIFIED_THRESHOLD:
        return AuthenticityStatus.VERIFIED
    if final_score > REVIEW_THRESHOLD:
        return AuthenticityStatus.PENDING
    return AuthenticityStatus.REJECTED


def calculate_authenticity_score(
    ai_score: Union[int, float, Decimal],
    experience_years: Optional[str] = None,
    tools_used: Optional[str] = None,
    specialization: Optional[str] = None,
    creation_time: Optional[str] = None,
) -> ScoreResult:
    """
    Combine the AI pre-score with the artist's declaration into one score.

    Formula: round(ai_score*0.70 + experience*0.15 + details*0.15)

    The sum is computed in decimal arithmetic and rounded half up, so a
    weighted sum of 91.5 always yields 92. The result is clamped to 0..100.

    Args:
        ai_score: Authenticity pre-score from the image analysis (0 to 100).
        experience_years: One of "1-2", "3-5", "6-10", "10+", or None.
        tools_used: Free-text tools declaration.
        specialization: Free-text specialization declaration.
        creation_time: Declared creation time bracket.

    Returns:
        ScoreResult with the final score, its status and the status message.
    """
    exp = experience_score(experience_years)
    details = details_score(tools_used, specialization, creation_time)

    weighted = (
        Decimal(str(ai_score)) * AI_WEIGHT
        + Decimal(exp) * EXPERIENCE_WEIGHT
        + Decimal(details) * DETAILS_WEIGHT
    )
    final_score = int(weighted.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    if not 0 <= final_score <= 100:
        logger.warning("Authenticity score %s out of range for ai_score=%s, clamping", final_score, ai_score)
        final_score = max(0, min(100, final_score))

    status = classify(final_score)
    logger.debug(
        "Scored submission: ai=%s experience=%s details=%s final=%s status=%s",
        ai_score, exp, details, final_score, status.value
    )
    return ScoreResult(
        final_score=final_score,
        status=status,
        message=STATUS_MESSAGES[status],
        experience_score=exp,
        details_score=details,
    )
