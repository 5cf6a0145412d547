import logging
import random
import string
import time
from typing import Optional, Sequence

from artisan_alley.schemas.verification import AuthenticityAnalysis, AuthenticityVerification

logger = logging.getLogger(__name__)

BASE36_ALPHABET = string.digits + string.ascii_uppercase

HANDCRAFTED_INDICATORS = [
    "Visible tool marks consistent with handcrafting",
    "Natural material variations",
    "Unique artistic fingerprint detected",
    "Absence of mass production patterns",
]

MIN_SCORE = 85
SCORE_SPREAD = 14
MIN_CONFIDENCE = 0.80
CONFIDENCE_SPREAD = 0.19


def new_verification_id(rng: Optional[random.Random] = None) -> str:
    """Return an id of the form AUTH-<unix millis>-<4 base36 chars>."""
    rng = rng or random
    suffix = "".join(rng.choice(BASE36_ALPHABET) for _ in range(4))
    return f"AUTH-{int(time.time() * 1000)}-{suffix}"


def _truncate(value: float, places: int) -> float:
    factor = 10 ** places
    return int(value * factor) / factor


def verify_authenticity(
    image_urls: Sequence[str],
    product_title: str,
    medium: str,
    artist_name: str,
    rng: Optional[random.Random] = None,
) -> AuthenticityVerification:
    """
    Simulated image analysis producing an authenticity pre-score.

    The score always lies in [85, 99) and the confidence in [0.80, 0.99).
    Pass a seeded ``random.Random`` as ``rng`` for reproducible results.
    """
    rng = rng or random.Random()

    score = _truncate(MIN_SCORE + rng.random() * SCORE_SPREAD, 1)
    confidence = _truncate(MIN_CONFIDENCE + rng.random() * CONFIDENCE_SPREAD, 2)
    verification_id = new_verification_id(rng)

    logger.info(
        f"Authenticity pre-score for '{product_title}' ({len(image_urls)} images): "
        f"score={score} confidence={confidence} id={verification_id}"
    )
    return AuthenticityVerification(
        authenticity_score=score,
        verification_id=verification_id,
        confidence=confidence,
        analysis=AuthenticityAnalysis(
            handcrafted_indicators=list(HANDCRAFTED_INDICATORS),
            material_analysis=(
                f"Analysis confirms genuine {medium} materials with properties consistent with handcrafted artwork."
            ),
            tool_marks="Distinctive tool marks and surface textures indicate manual creation process.",
            overall_assessment=(
                f"This {medium} piece shows strong indicators of authentic handcrafted creation by {artist_name}."
            ),
        ),
    )
