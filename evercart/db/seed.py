"""
Catalog seeding.

Creates the tables and loads the sample catalog when the product table is
empty. Run with ``python -m evercart.db.seed``.
"""

import logging
from sqlalchemy import case, func
from sqlalchemy.orm import Session

from evercart.crud import product as crud_product
from evercart.db.base import Base
from evercart.db.session import SessionLocal, engine
from evercart.models.product import Product

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS = [
    {"name": "Wireless Headphones", "category": "Electronics", "price": 99.99, "brand": "AudioX", "rating": 4.5, "availability": True,
     "description": "High-quality wireless headphones with noise cancellation, superior sound, and comfortable ear cups for extended listening.",
     "image": "https://plus.unsplash.com/premium_photo-1677158265072-5d15db9e23b2"},
    {"name": "Smartwatch", "category": "Electronics", "price": 199.99, "brand": "TechGear", "rating": 4.2, "availability": True,
     "description": "Track your fitness and receive notifications on the go. Features heart rate monitoring, GPS, and long battery life.",
     "image": "https://images.unsplash.com/photo-1660844817855-3ecc7ef21f12"},
    {"name": "Running Shoes", "category": "Footwear", "price": 75.00, "brand": "SportFit", "rating": 4.8, "availability": False,
     "description": "Comfortable and durable running shoes for all terrains. Engineered for maximum shock absorption and breathability.",
     "image": "https://images.unsplash.com/photo-1543508282-6319a3e2621f"},
    {"name": "Leather Wallet", "category": "Accessories", "price": 45.50, "brand": "LuxuryCraft", "rating": 4.0, "availability": True,
     "description": "Genuine leather wallet with multiple card slots and a coin pouch. Handcrafted for durability and style.",
     "image": "https://plus.unsplash.com/premium_photo-1681589453747-53fd893fa420"},
    {"name": "Portable Bluetooth Speaker", "category": "Electronics", "price": 59.99, "brand": "SoundBlast", "rating": 4.6, "availability": True,
     "description": "Compact and powerful speaker for on-the-go music. Delivers rich, clear sound with deep bass.",
     "image": "https://images.unsplash.com/photo-1545454675-3531b543be5d"},
    {"name": "Yoga Mat", "category": "Fitness", "price": 25.00, "brand": "ZenLife", "rating": 4.3, "availability": True,
     "description": "Non-slip yoga mat for comfortable workouts. Made from eco-friendly materials, perfect for all levels.",
     "image": "https://plus.unsplash.com/premium_photo-1667739346017-fbc9cd35d666"},
    {"name": "Designer Handbag", "category": "Fashion", "price": 120.00, "brand": "ChicStyle", "rating": 4.7, "availability": True,
     "description": "Elegant handbag for everyday use and special occasions. Features a spacious interior and stylish metallic accents.",
     "image": "https://images.unsplash.com/photo-1584917865442-de89df76afd3"},
    {"name": "Gaming Mouse", "category": "Electronics", "price": 35.00, "brand": "GamePro", "rating": 4.1, "availability": True,
     "description": "Ergonomic gaming mouse with customizable DPI settings and programmable buttons for competitive play.",
     "image": "https://images.unsplash.com/photo-1629429408209-1f912961dbd8"},
    {"name": "Coffee Maker", "category": "Home Appliances", "price": 85.00, "brand": "BrewMaster", "rating": 4.4, "availability": True,
     "description": "Programmable coffee maker for fresh brews every morning. Includes a reusable filter and a pause-and-serve function.",
     "image": "https://images.unsplash.com/photo-1608354580875-30bd4168b351"},
    {"name": "Smartphone Tripod", "category": "Photography", "price": 18.00, "brand": "CaptureIt", "rating": 3.9, "availability": True,
     "description": "Adjustable tripod for stable smartphone photography. Lightweight and portable, perfect for vlogging and selfies.",
     "image": "https://images.unsplash.com/photo-1576299090369-9067e4adca28"},
    {"name": "Robot Vacuum", "category": "Household", "price": 299.99, "brand": "CleanBot", "rating": 4.7, "availability": True,
     "description": "Automated vacuum cleaner for effortless floor cleaning. Smart navigation and app control.",
     "image": "https://images.unsplash.com/photo-1558317374-067fb5f30001"},
    {"name": "Organic Cotton Towels", "category": "Household", "price": 35.00, "brand": "EcoComfort", "rating": 4.6, "availability": True,
     "description": "Soft and absorbent organic cotton towels for your bathroom. Sustainable and luxurious.",
     "image": "https://images.unsplash.com/photo-1523471826770-c437b4636fe6"},
    {"name": "Reusable Water Bottle", "category": "Daily Usage", "price": 15.99, "brand": "HydrateEco", "rating": 4.9, "availability": True,
     "description": "Durable and eco-friendly stainless steel water bottle. Perfect for daily hydration on the go.",
     "image": "https://images.unsplash.com/photo-1544003484-3cd181d17917"},
    {"name": "Bamboo Toothbrush Set", "category": "Daily Usage", "price": 8.50, "brand": "GreenSmile", "rating": 4.8, "availability": True,
     "description": "Biodegradable bamboo toothbrushes for a sustainable oral care routine. Pack of 4.",
     "image": "https://images.unsplash.com/photo-1589365252845-092198ba5334"},
    {"name": "Noise-Cancelling Earbuds", "category": "Electronics", "price": 129.99, "brand": "SoundPod", "rating": 4.3, "availability": True,
     "description": "Compact noise-cancelling earbuds with crystal clear audio and comfortable fit.",
     "image": "https://images.unsplash.com/photo-1615281612781-4b972bd4e3fe"},
]


def seed_products(db: Session) -> int:
    """Insert the sample catalog into an empty product table; return how many rows were added."""
    existing = db.query(func.count(Product.id)).scalar()
    if existing:
        logger.info("Database already has %d products, skipping seed", existing)
        return 0

    db.add_all([Product(**data) for data in SAMPLE_PRODUCTS])
    db.commit()
    logger.info("Added %d sample products", len(SAMPLE_PRODUCTS))
    return len(SAMPLE_PRODUCTS)


def log_catalog_stats(db: Session) -> None:
    total, available, avg_price, avg_rating, min_price, max_price = db.query(
        func.count(Product.id),
        func.sum(case((Product.availability.is_(True), 1), else_=0)),
        func.avg(Product.price),
        func.avg(Product.rating),
        func.min(Product.price),
        func.max(Product.price),
    ).one()
    if not total:
        return

    logger.info("Total products: %d (%d available)", total, available or 0)
    logger.info("Price range: %.2f - %.2f, average %.2f", min_price, max_price, avg_price)
    logger.info("Average rating: %.1f", avg_rating)
    per_category = (
        db.query(Product.category, func.count(Product.id))
        .group_by(Product.category)
        .order_by(Product.category)
        .all()
    )
    logger.info("Products per category:")
    for category, count in per_category:
        logger.info("  %s: %d", category, count)
    logger.info("Brands: %s", ", ".join(crud_product.distinct_brands(db)))


def main():
    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_products(db)
        log_catalog_stats(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
