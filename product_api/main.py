# product_api/main.py
import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request

from . import core
from .config import Settings, settings as default_settings
from .database import ProductStore
from .errors import product_not_found
from .handlers import register_error_handlers
from .logging_config import setup_logging
from .middleware import get_store, log_requests, require_api_key, validated_product
from .models import Message, Product, ProductIn, ProductMessage, ProductPage, SearchResult, Statistics

logger = logging.getLogger(__name__)


def _lookup_id(raw_id: str) -> int:
    product_id = core.parse_product_id(raw_id)
    if product_id is None:
        raise product_not_found(raw_id)
    return product_id


def create_app(store: Optional[ProductStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the product API around ``store`` (seeded by default) and ``settings``."""
    settings = settings or default_settings
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        redirect_slashes=False,
        version=settings.api_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )
    app.state.store = store if store is not None else ProductStore()
    app.state.settings = settings

    app.middleware("http")(log_requests)
    register_error_handlers(app)

    # ---------------------------
    # Root
    # ---------------------------
    @app.get("/", response_model=Message)
    async def hello():
        return Message(message="Hello World")

    # ---------------------------
    # Product reads
    # ---------------------------
    @app.get("/api/products", response_model=ProductPage)
    async def list_products(request: Request, category: Optional[str] = None,
                            store: ProductStore = Depends(get_store)):
        # raw strings: bad page/limit values fall back to defaults instead of a 422
        params = request.query_params
        return core.list_products(store.list(), category, params.get("page"), params.get("limit"))

    # search and statistics must be registered before /{product_id}
    @app.get("/api/products/search", response_model=SearchResult)
    async def search_products(name: Optional[str] = None, store: ProductStore = Depends(get_store)):
        return core.search_products(store.list(), name)

    @app.get("/api/products/statistics", response_model=Statistics)
    async def product_statistics(store: ProductStore = Depends(get_store)):
        return core.product_statistics(store.list())

    @app.get("/api/products/{product_id}", response_model=Product)
    async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
        return store.get(_lookup_id(product_id))

    # ---------------------------
    # Product writes
    # ---------------------------
    @app.post("/api/products", response_model=ProductMessage, status_code=201,
              dependencies=[Depends(require_api_key)])
    async def create_product(payload: ProductIn = Depends(validated_product),
                             store: ProductStore = Depends(get_store)):
        product = store.create(payload)
        logger.info("Created product %d", product.id)
        return ProductMessage(message="Product created successfully", product=product)

    @app.put("/api/products/{product_id}", response_model=ProductMessage,
             dependencies=[Depends(require_api_key)])
    async def update_product(product_id: str, payload: ProductIn = Depends(validated_product),
                             store: ProductStore = Depends(get_store)):
        product = store.update(_lookup_id(product_id), payload)
        logger.info("Updated product %d", product.id)
        return ProductMessage(message="Product updated successfully", product=product)

    @app.delete("/api/products/{product_id}", response_model=ProductMessage,
                dependencies=[Depends(require_api_key)])
    async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
        product = store.delete(_lookup_id(product_id))
        logger.info("Deleted product %d", product.id)
        return ProductMessage(message="Product deleted successfully", product=product)

    return app


# Module-level app for ``uvicorn product_api.main:app``.
app = create_app()


def run() -> None:
    import uvicorn

    logger.info("Server is running on http://%s:%d", default_settings.host, default_settings.port)
    uvicorn.run(app, host=default_settings.host, port=default_settings.port,
                log_level=default_settings.log_level.lower())
