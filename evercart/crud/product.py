from typing import List, Optional
from sqlalchemy.orm import Session
from evercart.models.product import Product
from evercart.schemas.product import ProductCreate, ProductUpdate

#  Create a product
def create_product(db: Session, data: ProductCreate) -> Product:
    product = Product(**data.model_dump(exclude={"email"}))
    db.add(product)
    db.commit()
    db.refresh(product)
    return product

#  Filtered catalog listing, newest first
def list_products(
    db: Session,
    search: Optional[str] = None,
    category: Optional[str] = None,
    brand: Optional[str] = None,
    min_rating: Optional[float] = None,
    max_price: Optional[float] = None,
    available_only: bool = False,
) -> List[Product]:
    query = db.query(Product)
    if search:
        query = query.filter(Product.name.ilike(f"%{search}%"))
    if category:
        query = query.filter(Product.category == category)
    if brand:
        query = query.filter(Product.brand == brand)
    if min_rating is not None:
        query = query.filter(Product.rating >= min_rating)
    if max_price is not None:
        query = query.filter(Product.price <= max_price)
    if available_only:
        query = query.filter(Product.availability.is_(True))
    return query.order_by(Product.created_at.desc(), Product.id.desc()).all()

#  Get one product
def get_product_by_id(db: Session, product_id: int) -> Optional[Product]:
    return db.query(Product).filter(Product.id == product_id).first()

def get_products_by_ids(db: Session, product_ids: List[int]) -> dict:
    if not product_ids:
        return {}
    products = db.query(Product).filter(Product.id.in_(product_ids)).all()
    return {product.id: product for product in products}

def distinct_categories(db: Session) -> List[str]:
    rows = db.query(Product.category).distinct().order_by(Product.category).all()
    return [category for (category,) in rows]

def distinct_brands(db: Session) -> List[str]:
    rows = db.query(Product.brand).distinct().order_by(Product.brand).all()
    return [brand for (brand,) in rows]

#  Update product, only the fields the admin sent
def update_product(db: Session, product_id: int, data: ProductUpdate) -> Optional[Product]:
    product = get_product_by_id(db, product_id)
    if not product:
        return None

    update_data = data.model_dump(exclude={"email"}, exclude_unset=True, exclude_none=True)
    for key, value in update_data.items():
        setattr(product, key, value)

    db.commit()
    db.refresh(product)
    return product

#  Delete product; order snapshots keep their copy of it
def delete_product(db: Session, product_id: int) -> Optional[dict]:
    product = get_product_by_id(db, product_id)
    if not product:
        return None

    deleted = {"id": product.id, "name": product.name}
    db.delete(product)
    db.commit()
    return deleted
