# storefront/db/seed.py
"""Sample catalog loaded at startup when the store is empty."""
import logging

from storefront.domain.models.product import Product
from storefront.domain.models.user import Preferences, User

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS = [
    Product(product_id="1", name="Wireless Noise-Cancelling Headphones", brand="SoundMaster", price=299, original_price=349,
            image="headphones.jpg", category="electronics", tags=["audio", "wireless", "premium"], eco_score=4.2),
    Product(product_id="2", name='Ultra HD Smart TV 55"', brand="VisionPlus", price=799, original_price=899,
            image="tv.jpg", category="electronics", tags=["home", "entertainment"], eco_score=3.8),
    Product(product_id="3", name="Ergonomic Office Chair", brand="ComfortPro", price=249, original_price=299,
            image="chair.jpg", category="furniture", tags=["office", "comfort"], eco_score=7.1),
    Product(product_id="4", name="Smartphone Pro Max", brand="FruitPhone", price=1099, original_price=1199,
            image="phone.jpg", category="electronics", tags=["mobile", "premium"], eco_score=5.5),
    Product(product_id="5", name="Bamboo Toothbrush Set", brand="EcoLife", price=12.99, original_price=15.99,
            image="toothbrush.jpg", category="personal-care", tags=["eco", "sustainable"], eco_score=9.8),
    Product(product_id="6", name="Recycled Laptop Backpack", brand="GreenGear", price=59.99, original_price=69.99,
            image="backpack.jpg", category="accessories", tags=["eco", "travel"], eco_score=8.7),
    Product(product_id="7", name="Solar Powered Charger", brand="SunPower", price=39.99, original_price=49.99,
            image="charger.jpg", category="electronics", tags=["eco", "outdoor"], eco_score=9.2),
    Product(product_id="8", name="Organic Cotton T-Shirt", brand="PureWear", price=24.99, original_price=29.99,
            image="tshirt.jpg", category="clothing", tags=["eco", "fashion"], eco_score=8.4),
]

SAMPLE_USERS = [
    User(
        user_id="1",
        name="AI Shopper",
        preferences=Preferences(style="modern", price_range=(0, 500), eco_preference="high"),
    ),
]


async def seed_if_empty(products, users) -> int:
    """Insert the sample data through the repositories if no product exists yet."""
    if await products.count() > 0:
        logger.info("seed skipped: catalog already populated")
        return 0
    for p in SAMPLE_PRODUCTS:
        await products.save(p)
    for u in SAMPLE_USERS:
        await users.save(u)
    logger.info("seed done products=%s users=%s", len(SAMPLE_PRODUCTS), len(SAMPLE_USERS))
    return len(SAMPLE_PRODUCTS)
