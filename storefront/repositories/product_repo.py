# storefront/repositories/product_repo.py
import uuid
from typing import Iterable

from sqlmodel import Session, select, col

from storefront.models.product import Product


class ProductRepository:
    """
    Data access layer for Product.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, product_id: uuid.UUID) -> Product | None:
        return session.get(Product, product_id)

    def get_many(
        self,
        session: Session,
        product_ids: Iterable[uuid.UUID],
    ) -> list[Product]:
        """Bulk fetch; ids without a matching row are simply absent."""
        ids = list(product_ids)
        if not ids:
            return []
        stmt = select(Product).where(col(Product.id).in_(ids))
        return list(session.exec(stmt).all())

    def list_all(self, session: Session) -> list[Product]:
        stmt = select(Product).order_by(Product.created_at)
        return list(session.exec(stmt).all())

    def create(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def update(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def delete(self, session: Session, product: Product) -> None:
        session.delete(product)
        session.commit()
