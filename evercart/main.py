import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from evercart.core.config import settings
from evercart.db.base import Base
from evercart.db.session import engine
from evercart.api.routes_auth import router as auth_router
from evercart.api.routes_product import router as product_router
from evercart.api.routes_cart import router as cart_router
from evercart.api.routes_order import router as order_router
from evercart.api.routes_admin import router as admin_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(
    title="evercart-api",
    description="Storefront backend: catalog, accounts, carts, orders and the admin panel",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

Base.metadata.create_all(bind=engine)

# Register endpoints
app.include_router(auth_router, prefix="/api", tags=["Auth"])
app.include_router(product_router, prefix="/api", tags=["Product"])
app.include_router(cart_router, prefix="/api/cart", tags=["Cart"])
app.include_router(order_router, prefix="/api/orders", tags=["Order"])
app.include_router(admin_router, prefix="/api/admin", tags=["Admin"])


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/")
def root():
    return {"message": "EverCart API running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
