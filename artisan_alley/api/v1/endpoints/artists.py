from typing import Any, Dict, List
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from artisan_alley.db.session import get_db
from artisan_alley.middleware.auth import require_roles
from artisan_alley.schemas.product import ArtistProfileResponse, ArtistSummary, ProductResponse
from artisan_alley.services.product_service import ProductService
from artisan_alley.services.user_service import UserService

router = APIRouter()

logger = logging.getLogger(__name__)


# Declared before /{artist_id} so "products" is not read as an id
@router.get("/products", response_model=List[ProductResponse])
def my_products(
    db: Session = Depends(get_db),
    current_user: Dict[str, Any] = Depends(require_roles("artist"))
):
    """Products owned by the calling artist, any verification status."""
    products = ProductService(db).list_products(artist_id=current_user["userId"])
    logger.info(f"Artist {current_user['userId']} listed {len(products)} own products")
    return products


@router.get("/{artist_id}", response_model=ArtistProfileResponse)
def get_artist(artist_id: str, db: Session = Depends(get_db)):
    """
    Public artist profile with the artist's products.

    Raises:
        HTTPException: 404 if no user has that ID or the user is not an artist
    """
    artist = UserService(db).get_user(artist_id)
    if not artist or artist.role != "artist":
        logger.warning(f"Artist not found: {artist_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "ARTIST_NOT_FOUND", "message": "Artist not found"}
        )

    products = ProductService(db).list_products(artist_id=artist.id)
    return ArtistProfileResponse(
        **ArtistSummary.model_validate(artist).model_dump(),
        products=[ProductResponse.model_validate(p) for p in products],
    )
