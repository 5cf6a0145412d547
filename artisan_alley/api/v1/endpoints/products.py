from typing import Any, Dict, List, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from artisan_alley.db.session import get_db
from artisan_alley.middleware.auth import require_roles
from artisan_alley.models.product import ProductCreate
from artisan_alley.schemas.product import CategoryResponse, ProductDetailResponse, ProductResponse
from artisan_alley.services.product_service import ProductService

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("/categories", response_model=List[CategoryResponse])
def list_categories(db: Session = Depends(get_db)):
    try:
        return ProductService(db).list_categories()
    except Exception as e:
        logger.error(f"Database error while listing categories: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "CATEGORY_RETRIEVAL_FAILED", "message": "Failed to fetch categories"}
        )


@router.get("/products", response_model=List[ProductResponse])
def list_products(
    category_id: Optional[str] = Query(None, alias="categoryId"),
    artist_id: Optional[str] = Query(None, alias="artistId"),
    limit: Optional[int] = Query(None, ge=1, le=100),
    offset: Optional[int] = Query(None, ge=0),
    db: Session = Depends(get_db)
):
    """
    List products, newest first.

    Args:
        category_id: Only products in this category
        artist_id: Only products by this artist
        limit: Maximum number of products
        offset: Number of products to skip
        db: Database session
    """
    try:
        products = ProductService(db).list_products(category_id, artist_id, limit, offset)
        logger.info(f"Found {len(products)} products (categoryId={category_id}, artistId={artist_id})")
        return products
    except Exception as e:
        logger.error(f"Database error while listing products: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "PRODUCT_RETRIEVAL_FAILED", "message": "Failed to fetch products"}
        )


@router.get("/products/{product_id}", response_model=ProductDetailResponse)
def get_product(product_id: str, db: Session = Depends(get_db)):
    product = ProductService(db).get_product(product_id, with_artist=True)
    if not product:
        logger.warning(f"Product not found: {product_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "PRODUCT_NOT_FOUND", "message": "Product not found"}
        )
    return product


@router.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db),
    current_user: Dict[str, Any] = Depends(require_roles("artist"))
):
    """
    Create a product owned by the calling artist. It starts pending, unscored.

    Raises:
        HTTPException: 404 if the category doesn't exist
                    500 if there's a server error
    """
    logger.info(f"Artist {current_user['userId']} creating product '{product_data.title}'")
    try:
        return ProductService(db).create_product(current_user["userId"], product_data)
    except LookupError as e:
        logger.warning(str(e))
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "CATEGORY_NOT_FOUND", "message": "Category not found"}
        )
    except Exception as e:
        logger.error(f"Error creating product: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "PRODUCT_CREATION_FAILED", "message": "Failed to create product"}
        )
