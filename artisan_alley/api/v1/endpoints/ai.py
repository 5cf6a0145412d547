from typing import Any, Dict
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from artisan_alley.db.session import get_db
from artisan_alley.middleware.auth import get_current_user
from artisan_alley.models.product import AiVerifyRequest
from artisan_alley.schemas.product import TrustUpdateResponse
from artisan_alley.schemas.story import ProductStory, StoryRequest
from artisan_alley.schemas.verification import AiCheckResponse
from artisan_alley.services.ai.story import StoryGenerationRequest, StoryGenerator, get_story_generator
from artisan_alley.services.product_service import ProductService
from artisan_alley.services.trust_state import ConcurrentTrustUpdateError, ProductNotFoundError
from artisan_alley.services.verification import (
    DEFAULT_MEDIUM,
    UNKNOWN_ARTIST,
    NotProductOwnerError,
    run_ai_check,
)

router = APIRouter()

logger = logging.getLogger(__name__)


@router.post("/story", response_model=ProductStory)
async def generate_story(
    story_request: StoryRequest,
    db: Session = Depends(get_db),
    generator: StoryGenerator = Depends(get_story_generator)
):
    """
    Generate a story for a product and store its narrative on the product.

    Story generation never fails; an unavailable model yields a generic story.

    Raises:
        HTTPException: 404 if the product doesn't exist
                    500 if the story can't be saved
    """
    product_service = ProductService(db)
    product = product_service.get_product(story_request.product_id, with_artist=True)
    if not product:
        logger.warning(f"Story requested for unknown product {story_request.product_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "PRODUCT_NOT_FOUND", "message": "Product not found"}
        )

    artist = product.artist
    portfolio = (artist.artist_portfolio if artist else None) or {}
    story = await generator.generate(StoryGenerationRequest(
        product_title=product.title,
        product_description=product.description,
        artist_name=artist.name if artist else UNKNOWN_ARTIST,
        artist_bio=portfolio.get("bio"),
        medium=product.medium or DEFAULT_MEDIUM,
        style=product.style,
        location=portfolio.get("location"),
    ))

    try:
        product_service.set_story(product, story.ai_story)
    except Exception as e:
        logger.error(f"Failed to save story for product {product.id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "STORY_GENERATION_FAILED", "message": "Failed to generate story"}
        )

    logger.info(f"Story stored for product {product.id}")
    return story


@router.post("/verify", response_model=AiCheckResponse)
def ai_verify(
    body: AiVerifyRequest,
    db: Session = Depends(get_db),
    current_user: Dict[str, Any] = Depends(get_current_user)
):
    """
    Run the AI authenticity check alone on a product.

    Only the product's artist or an admin may run it.
    """
    user_id = current_user["userId"]
    logger.info(f"User {user_id} running AI check on product {body.product_id}")
    try:
        result = run_ai_check(
            db, body.product_id, user_id, current_user.get("roles", []), image_urls=body.image_urls
        )
    except ProductNotFoundError:
        logger.warning(f"AI check requested for unknown product {body.product_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "PRODUCT_NOT_FOUND", "message": "Product not found"}
        )
    except NotProductOwnerError as e:
        logger.warning(str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "INSUFFICIENT_PERMISSIONS", "message": "Insufficient permissions"}
        )
    except ConcurrentTrustUpdateError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": "CONCURRENT_UPDATE", "message": "Product was modified concurrently, please retry"}
        )
    except Exception as e:
        logger.error(f"AI verification failed for product {body.product_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "AI_VERIFICATION_FAILED", "message": "Failed to verify authenticity"}
        )

    return AiCheckResponse(
        product=TrustUpdateResponse.model_validate(result.product),
        verification=result.verification,
    )
