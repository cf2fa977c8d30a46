from fastapi import FastAPI
from storefront.core.config import get_settings
from storefront.core.errors import register_exception_handlers
from storefront.core.lifespan import lifespan
from storefront.api.v1.routers.health import router as health_router
from storefront.api.v1.routers.products import router as products_router
from storefront.api.v1.routers.cart import router as cart_router
from storefront.api.v1.routers.users import router as users_router
from storefront.api.v1.routers.classify import router as classify_router
from storefront.core.logging import configure_logging

from fastapi.middleware.cors import CORSMiddleware
import logging

settings = get_settings()
configure_logging(level=logging.DEBUG if settings.DEBUG else logging.INFO)

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
register_exception_handlers(app)

# ------- CORS -------
# ALLOWED_ORIGINS from settings (CSV). Example:
# ALLOWED_ORIGINS="https://shop.example.com,https://www.shop.example.com"

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)

# ------- Routes -------
app.include_router(health_router)
app.include_router(products_router, prefix=settings.api_prefix)   # catalog
app.include_router(cart_router, prefix=settings.api_prefix)       # carts
app.include_router(users_router, prefix=settings.api_prefix)      # profiles, preferences, recommendations
app.include_router(classify_router, prefix=settings.api_prefix)   # classifier + assistant
