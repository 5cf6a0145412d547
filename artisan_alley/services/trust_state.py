from decimal import Decimal
from typing import Any, Dict, Optional, Union
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from artisan_alley.db.models import AuthenticityStatus, Product

logger = logging.getLogger(__name__)


class ProductNotFoundError(Exception):
    """Raised when a referenced product does not exist."""

    def __init__(self, product_id: str):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class ConcurrentTrustUpdateError(Exception):
    """Raised when a product's trust fields changed between read and write."""

    def __init__(self, product_id: str, expected_version: Optional[int] = None, actual_version: Optional[int] = None):
        super().__init__(
            f"Product {product_id} was modified concurrently "
            f"(expected version {expected_version}, found {actual_version})"
        )
        self.product_id = product_id
        self.expected_version = expected_version
        self.actual_version = actual_version


def get_product_or_raise(db: Session, product_id: str) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise ProductNotFoundError(product_id)
    return product


def apply_trust_transition(
    db: Session,
    product: Product,
    status: AuthenticityStatus,
    score: Optional[Union[int, float, Decimal]] = None,
    verification_id: Optional[str] = None,
    undertaking: Optional[Dict[str, Any]] = None,
    expected_version: Optional[int] = None,
) -> Product:
    """
    Write a product's trust fields. This is the only code path that does so.

    ``score``, ``verification_id`` and ``undertaking`` are left untouched when
    None, so an admin override changes the status alone. Any status may follow
    any other.

    The ORM version column makes the UPDATE conditional on the version that
    was loaded, so a write committed by someone else in between raises
    instead of being overwritten. ``expected_version`` additionally pins the
    version the caller saw in an earlier request.

    Raises:
        ConcurrentTrustUpdateError: the product changed since it was read
        SQLAlchemyError: any other database failure, after rollback
    """
    if expected_version is not None and product.version != expected_version:
        logger.warning(
            f"Version mismatch on product {product.id}: expected {expected_version}, found {product.version}"
        )
        raise ConcurrentTrustUpdateError(product.id, expected_version, product.version)

    product_id = product.id
    previous = product.authenticity_status
    read_version = product.version

    product.authenticity_status = AuthenticityStatus(status).value
    if score is not None:
        product.authenticity_score = Decimal(str(score))
    if verification_id is not None:
        product.verification_id = verification_id
    if undertaking is not None:
        product.artist_undertaking = undertaking

    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        logger.warning(f"Concurrent trust update detected on product {product_id} at version {read_version}")
        raise ConcurrentTrustUpdateError(product_id, read_version)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"SQLAlchemyError when updating trust state for product {product_id}: {str(e)}", exc_info=True)
        raise

    db.refresh(product)
    logger.info(
        f"Product {product_id} trust status {previous} -> {product.authenticity_status} "
        f"(score={product.authenticity_score}, version={product.version})"
    )
    return product
