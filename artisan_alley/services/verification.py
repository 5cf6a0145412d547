# artisan_alley/services/verification.py

import logging
import random
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, NamedTuple, Optional

from sqlalchemy.orm import Session

from artisan_alley.db.models import AuthenticityStatus, Product, User
from artisan_alley.models.product import VerificationSubmission
from artisan_alley.schemas.verification import AuthenticityVerification, VerificationOutcome
from artisan_alley.services.ai.authenticity import verify_authenticity
from artisan_alley.services.scoring import calculate_authenticity_score
from artisan_alley.services.trust_state import apply_trust_transition, get_product_or_raise

logger = logging.getLogger(__name__)

UNKNOWN_ARTIST = "Unknown Artist"
DEFAULT_MEDIUM = "Mixed Media"

# A direct AI check marks the product verified above this raw score
AI_CHECK_VERIFIED_THRESHOLD = 90


class UndertakingNotAcceptedError(Exception):
    """Raised when a verification is submitted without the signed undertaking."""


class NotProductOwnerError(Exception):
    """Raised when the caller may not verify the product."""

    def __init__(self, product_id: str, caller_id: str):
        super().__init__(f"User {caller_id} does not own product {product_id}")
        self.product_id = product_id
        self.caller_id = caller_id


class AiCheckResult(NamedTuple):
    product: Product
    verification: AuthenticityVerification


def build_undertaking(submission: VerificationSubmission, client_host: Optional[str]) -> Dict[str, Any]:
    """Snapshot of the artist's declaration as stored on the product."""
    return {
        "signed": True,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "experienceYears": submission.experience_years,
        "specialization": submission.specialization,
        "toolsUsed": submission.tools_used,
        "creationTime": submission.creation_time,
        "ipAddress": client_host or "unknown",
    }


def _analyse(
    db: Session,
    product: Product,
    rng: Optional[random.Random],
    image_urls: Optional[List[str]] = None,
) -> AuthenticityVerification:
    artist = db.query(User).filter(User.id == product.artist_id).first()
    if not artist:
        logger.warning(f"Artist {product.artist_id} of product {product.id} not found, continuing as '{UNKNOWN_ARTIST}'")

    return verify_authenticity(
        image_urls=image_urls or product.images or [],
        product_title=product.title,
        medium=product.medium or DEFAULT_MEDIUM,
        artist_name=artist.name if artist else UNKNOWN_ARTIST,
        rng=rng,
    )


def submit_product_verification(
    db: Session,
    submission: VerificationSubmission,
    caller_id: str,
    client_host: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> VerificationOutcome:
    """
    Run an artist's verification submission end to end.

    The pre-score and the declaration are combined by the scorer and the
    result is written through the trust transition, conditional on the
    product version read here. Resubmitting recomputes everything and
    overwrites the previous result with a fresh verification id.

    Raises:
        UndertakingNotAcceptedError: the undertaking was not accepted
        ProductNotFoundError: no product with the submitted id
        NotProductOwnerError: the caller is not the product's artist
        ConcurrentTrustUpdateError: the product changed during the run
    """
    if not submission.undertaking_accepted:
        logger.warning(f"User {caller_id} submitted verification for {submission.product_id} without undertaking")
        raise UndertakingNotAcceptedError("Artist undertaking must be accepted to submit for verification")

    product = get_product_or_raise(db, submission.product_id)
    if product.artist_id != caller_id:
        raise NotProductOwnerError(product.id, caller_id)
    read_version = product.version

    verification = _analyse(db, product, rng)
    score = calculate_authenticity_score(
        verification.authenticity_score,
        experience_years=submission.experience_years,
        tools_used=submission.tools_used,
        specialization=submission.specialization,
        creation_time=submission.creation_time,
    )

    apply_trust_transition(
        db,
        product,
        score.status,
        score=score.final_score,
        verification_id=verification.verification_id,
        undertaking=build_undertaking(submission, client_host),
        expected_version=read_version,
    )
    logger.info(
        f"Product {product.id} verification {verification.verification_id}: "
        f"final score {score.final_score}, status {score.status.value}"
    )

    return VerificationOutcome(
        **verification.model_dump(),
        final_score=score.final_score,
        status=score.status,
        message=score.message,
    )


def run_ai_check(
    db: Session,
    product_id: str,
    caller_id: str,
    caller_roles: Iterable[str],
    rng: Optional[random.Random] = None,
    image_urls: Optional[List[str]] = None,
) -> AiCheckResult:
    """
    Score a product on the AI pre-score alone, without a declaration.

    The raw pre-score is stored; above 90 the product becomes verified,
    otherwise pending. ``image_urls``, when given, are analysed in place of
    the product's stored images.

    Raises:
        ProductNotFoundError: no product with that id
        NotProductOwnerError: the caller is neither the artist nor an admin
        ConcurrentTrustUpdateError: the product changed during the run
    """
    product = get_product_or_raise(db, product_id)
    if product.artist_id != caller_id and "admin" not in caller_roles:
        raise NotProductOwnerError(product.id, caller_id)

    verification = _analyse(db, product, rng, image_urls=image_urls)
    if verification.authenticity_score > AI_CHECK_VERIFIED_THRESHOLD:
        status = AuthenticityStatus.VERIFIED
    else:
        status = AuthenticityStatus.PENDING

    product = apply_trust_transition(
        db,
        product,
        status,
        score=verification.authenticity_score,
        verification_id=verification.verification_id,
        expected_version=product.version,
    )
    return AiCheckResult(product=product, verification=verification)
