from typing import List, Optional
import logging

from sqlalchemy.orm import Session, joinedload

from artisan_alley.db.models import AuthenticityStatus, Category, Product
from artisan_alley.models.product import ProductCreate

logger = logging.getLogger(__name__)


class ProductService:
    """Catalogue reads and writes that do not touch trust state."""

    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: str, with_artist: bool = False) -> Optional[Product]:
        query = self.db.query(Product)
        if with_artist:
            query = query.options(joinedload(Product.artist))
        return query.filter(Product.id == product_id).first()

    def list_products(
        self,
        category_id: Optional[str] = None,
        artist_id: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Product]:
        return Product.filter(self.db, category_id=category_id, artist_id=artist_id, limit=limit, offset=offset).all()

    def count_products(self) -> int:
        return self.db.query(Product).count()

    def list_categories(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name).all()

    def list_pending(self) -> List[Product]:
        return (
            self.db.query(Product)
            .filter(Product.authenticity_status == AuthenticityStatus.PENDING.value)
            .order_by(Product.created_at.desc())
            .all()
        )

    def create_product(self, artist_id: str, data: ProductCreate) -> Product:
        """
        Create a product owned by ``artist_id``.

        New products start pending with no score and no verification id.

        Raises:
            LookupError: if the category does not exist
        """
        if not self.db.query(Category).filter(Category.id == data.category_id).first():
            raise LookupError(f"Category {data.category_id} not found")

        product = Product(
            artist_id=artist_id,
            authenticity_status=AuthenticityStatus.PENDING.value,
            **data.model_dump(),
        )
        try:
            self.db.add(product)
            self.db.commit()
            self.db.refresh(product)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error creating product for artist {artist_id}: {str(e)}")
            raise
        logger.info(f"Artist {artist_id} created product {product.id}")
        return product

    def set_story(self, product: Product, story: str) -> Product:
        try:
            product.story = story
            self.db.commit()
            self.db.refresh(product)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error saving story for product {product.id}: {str(e)}")
            raise
        return product
