from typing import Any, Dict
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from artisan_alley.db.session import get_db
from artisan_alley.middleware.auth import require_roles
from artisan_alley.models.product import VerificationSubmission
from artisan_alley.schemas.verification import VerificationOutcome
from artisan_alley.services.trust_state import ConcurrentTrustUpdateError, ProductNotFoundError
from artisan_alley.services.verification import (
    NotProductOwnerError,
    UndertakingNotAcceptedError,
    submit_product_verification,
)

router = APIRouter()

logger = logging.getLogger(__name__)


@router.post("/verify-product", response_model=VerificationOutcome)
def verify_product(
    submission: VerificationSubmission,
    request: Request,
    db: Session = Depends(get_db),
    current_user: Dict[str, Any] = Depends(require_roles("artist"))
):
    """
    Submit one of the caller's products for authenticity verification.

    Args:
        submission: Declaration and signed undertaking from the artist
        request: Incoming request, used for the submitter's address
        db: Database session
        current_user: Authenticated artist context from JWT

    Returns:
        The AI analysis merged with the final score, status and message

    Raises:
        HTTPException: 400 if the undertaking was not accepted
                    403 if the caller does not own the product
                    404 if the product doesn't exist
                    409 if the product changed during verification
                    500 if there's a server error
    """
    user_id = current_user["userId"]
    logger.info(f"Artist {user_id} submitting product {submission.product_id} for verification")

    client_host = request.client.host if request.client else None
    try:
        outcome = submit_product_verification(db, submission, user_id, client_host)
    except UndertakingNotAcceptedError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "UNDERTAKING_REQUIRED", "message": str(e)}
        )
    except ProductNotFoundError:
        logger.warning(f"Verification requested for unknown product {submission.product_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "PRODUCT_NOT_FOUND", "message": "Product not found"}
        )
    except NotProductOwnerError as e:
        logger.warning(str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "NOT_PRODUCT_OWNER", "message": "You can only verify your own products"}
        )
    except ConcurrentTrustUpdateError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": "CONCURRENT_UPDATE", "message": "Product was modified concurrently, please retry"}
        )
    except Exception as e:
        logger.error(f"Unexpected error verifying product {submission.product_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "VERIFICATION_FAILED", "message": "Failed to verify product"}
        )

    logger.info(f"Product {submission.product_id} verification complete: {outcome.status.value}")
    return outcome
