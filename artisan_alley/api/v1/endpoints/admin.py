from typing import Any, Dict
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from artisan_alley.db.models import AuthenticityStatus
from artisan_alley.db.session import get_db
from artisan_alley.middleware.auth import require_roles
from artisan_alley.models.product import AdminVerifyArtistRequest, AdminVerifyProductRequest
from artisan_alley.schemas.product import (
    AdminStatsResponse,
    ArtistSummary,
    PendingVerificationsResponse,
    ProductResponse,
    TrustUpdateResponse,
)
from artisan_alley.services.product_service import ProductService
from artisan_alley.services.trust_state import (
    ConcurrentTrustUpdateError,
    ProductNotFoundError,
    apply_trust_transition,
    get_product_or_raise,
)
from artisan_alley.services.user_service import UserService

router = APIRouter()

logger = logging.getLogger(__name__)

admin_required = require_roles("admin")


@router.post("/verifyProduct", response_model=TrustUpdateResponse)
def verify_product(
    body: AdminVerifyProductRequest,
    db: Session = Depends(get_db),
    current_user: Dict[str, Any] = Depends(admin_required)
):
    """
    Approve or reject a product directly, without scoring.

    The score and verification id are left as they are. Pass
    ``expectedVersion`` to refuse the override if the product changed since
    the admin loaded it.

    Raises:
        HTTPException: 404 if the product doesn't exist
                    409 if the product version doesn't match
                    500 if there's a server error
    """
    new_status = AuthenticityStatus.VERIFIED if body.approved else AuthenticityStatus.REJECTED
    logger.info(f"Admin {current_user['userId']} setting product {body.product_id} to {new_status.value}")
    try:
        product = get_product_or_raise(db, body.product_id)
        return apply_trust_transition(db, product, new_status, expected_version=body.expected_version)
    except ProductNotFoundError:
        logger.warning(f"Admin override for unknown product {body.product_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "PRODUCT_NOT_FOUND", "message": "Product not found"}
        )
    except ConcurrentTrustUpdateError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": "CONCURRENT_UPDATE", "message": "Product was modified concurrently, please reload"}
        )
    except Exception as e:
        logger.error(f"Admin override failed for product {body.product_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "VERIFICATION_UPDATE_FAILED", "message": "Failed to update product verification"}
        )


@router.post("/verifyArtist", response_model=ArtistSummary)
def verify_artist(
    body: AdminVerifyArtistRequest,
    db: Session = Depends(get_db),
    current_user: Dict[str, Any] = Depends(admin_required)
):
    logger.info(f"Admin {current_user['userId']} setting artist {body.artist_id} verified={body.approved}")
    try:
        artist = UserService(db).set_artist_verified(body.artist_id, body.approved)
    except Exception as e:
        logger.error(f"Failed to update artist {body.artist_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "VERIFICATION_UPDATE_FAILED", "message": "Failed to update artist verification"}
        )

    if not artist:
        logger.warning(f"Admin verification for unknown artist {body.artist_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "ARTIST_NOT_FOUND", "message": "Artist not found"}
        )
    return artist


@router.get("/verifications/pending", response_model=PendingVerificationsResponse)
def pending_verifications(
    db: Session = Depends(get_db),
    current_user: Dict[str, Any] = Depends(admin_required)
):
    """Unverified artists and products still pending review."""
    artists = UserService(db).list_unverified_artists()
    products = ProductService(db).list_pending()
    logger.info(f"Pending verifications: {len(artists)} artists, {len(products)} products")
    return PendingVerificationsResponse(
        artists=[ArtistSummary.model_validate(a) for a in artists],
        products=[ProductResponse.model_validate(p) for p in products],
    )


@router.get("/stats", response_model=AdminStatsResponse)
def admin_stats(
    db: Session = Depends(get_db),
    current_user: Dict[str, Any] = Depends(admin_required)
):
    """Account and catalogue totals for the admin dashboard."""
    users = UserService(db)
    products = ProductService(db)
    try:
        stats = AdminStatsResponse(
            total_users=len(users.list_users()),
            total_products=products.count_products(),
            pending_artist_verifications=len(users.list_unverified_artists()),
            pending_product_verifications=len(products.list_pending()),
        )
    except Exception as e:
        logger.error(f"Failed to compute admin stats: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "STATS_RETRIEVAL_FAILED", "message": "Failed to fetch stats"}
        )
    logger.info(f"Admin {current_user['userId']} fetched stats")
    return stats
