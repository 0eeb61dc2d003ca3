"""Product workflow: paginated CRUD with audit stamping, item listing and the access hook."""

import logging
import math
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from product_api.core.config import settings
from product_api.core.errors import NotFound, ValidationError
from product_api.models import Item, Product
from product_api.schemas.auth import Principal
from product_api.schemas.product import ItemResponse, ProductPage, ProductResponse

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("product_api.access")

PRODUCT_NAME_MAX_LEN = 255

# products.id is a 32-bit INTEGER column; larger ids cannot exist and would overflow the driver.
PRODUCT_ID_MAX = 2**31 - 1


def _find_product(session: Session, product_id: int) -> Product:
    if not 1 <= product_id <= PRODUCT_ID_MAX:
        raise NotFound(f"Product not found with id: {product_id}")
    product = session.get(Product, product_id)
    if product is None:
        raise NotFound(f"Product not found with id: {product_id}")
    return product


def _clean_name(name: str) -> str:
    if not name or not name.strip():
        raise ValidationError("Product name is required")
    if len(name) > PRODUCT_NAME_MAX_LEN:
        raise ValidationError(
            f"Product name must not exceed {PRODUCT_NAME_MAX_LEN} characters"
        )
    return name


def list_products(session: Session, page: int, size: int) -> ProductPage:
    """Return one zero-based page of products ordered by id ascending."""
    if page < 0:
        raise ValidationError("page must be >= 0")
    if size < 1 or size > settings.PAGE_SIZE_MAX:
        raise ValidationError(f"size must be between 1 and {settings.PAGE_SIZE_MAX}")

    total = session.query(Product).count()
    offset = page * size
    rows: list[Product] = []
    # Pages past the end are empty; skip the query so huge offsets never reach the driver.
    if offset < total:
        rows = (
            session.query(Product)
            .order_by(Product.id.asc())
            .offset(offset)
            .limit(size)
            .all()
        )
    return ProductPage(
        content=[ProductResponse.model_validate(p) for p in rows],
        page=page,
        size=size,
        total_elements=total,
        total_pages=math.ceil(total / size) if total else 0,
    )


def get_product(session: Session, product_id: int) -> ProductResponse:
    return ProductResponse.model_validate(_find_product(session, product_id))


def create_product(session: Session, name: str, principal: Principal) -> ProductResponse:
    """Persist a product owned by principal; created_on is stamped once here."""
    product = Product(
        product_name=_clean_name(name),
        created_by=principal.username,
        created_on=datetime.now(UTC),
    )
    session.add(product)
    session.commit()
    session.refresh(product)
    logger.info("Product created: id=%s by=%s", product.id, principal.username)
    return ProductResponse.model_validate(product)


def update_product(
    session: Session, product_id: int, name: str, principal: Principal
) -> ProductResponse:
    """Rename a product and stamp modified_by/modified_on."""
    product = _find_product(session, product_id)
    product.product_name = _clean_name(name)
    product.modified_by = principal.username
    product.modified_on = datetime.now(UTC)
    session.commit()
    session.refresh(product)
    logger.info("Product updated: id=%s by=%s", product.id, principal.username)
    return ProductResponse.model_validate(product)


def delete_product(session: Session, product_id: int) -> None:
    """Delete a product and all of its items in one transaction."""
    product = _find_product(session, product_id)
    try:
        items_deleted = (
            session.query(Item)
            .filter(Item.product_id == product.id)
            .delete(synchronize_session="fetch")
        )
        session.delete(product)
        session.commit()
    except Exception:
        session.rollback()
        raise
    logger.info("Product deleted: id=%s items_deleted=%s", product_id, items_deleted)


def list_items(session: Session, product_id: int) -> list[ItemResponse]:
    """Items of a product, in no particular order."""
    _find_product(session, product_id)
    items = session.query(Item).filter(Item.product_id == product_id).all()
    return [ItemResponse.model_validate(i) for i in items]


def add_item(session: Session, product_id: int, quantity: int) -> ItemResponse:
    """Attach a stock item to a product. Raises ValidationError for negative quantities."""
    if quantity < 0:
        raise ValidationError("Quantity must be >= 0")
    product = _find_product(session, product_id)
    item = Item(product_id=product.id, quantity=quantity)
    session.add(item)
    session.commit()
    session.refresh(item)
    return ItemResponse.model_validate(item)


def record_access(product_id: int) -> None:
    """
    Fire-and-forget observability hook for product reads.

    Runs after the response is sent; failures are logged and never reach the caller.
    Handler errors are already absorbed by logging.Handler.handleError; the guard
    covers errors raised by the logger call itself, such as a failing filter.
    """
    try:
        access_logger.info("Product accessed: id=%s", product_id)
    except Exception:
        logger.exception("Recording access failed for product_id=%s", product_id)
