"""
Pharmacy storefront REST API.

Run with:
    uvicorn storefront.service:create_app --factory --reload --port 8000
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterable, Iterator, List, Optional, Type, TypeVar

from fastapi import APIRouter, Body, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from .config import Settings, settings
from .errors import APIError, InternalError, NotFoundError, RequestValidationFailed
from .logger import get_logger
from .schemas import (
    CartItem,
    CartItemCreate,
    CartItemWithMedicine,
    CartQuantityUpdate,
    CartSummary,
    Category,
    MedicineDetail,
    MedicineWithCategory,
    Review,
    ReviewCreate,
)
from .storage import CartUpdate, MemStorage
from .translations import DEFAULT_LANGUAGE, TRANSLATIONS, translate

logger = get_logger("storefront.api")

ModelT = TypeVar("ModelT", bound=BaseModel)

_LOCATION_KINDS = {"body", "query", "path", "header"}


def field_errors(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic error dicts into ``{"field", "message"}`` pairs."""
    flattened = []
    for err in errors:
        loc = list(err.get("loc", ()))
        if loc and loc[0] in _LOCATION_KINDS:
            loc = loc[1:]
        flattened.append({"field": ".".join(str(part) for part in loc), "message": err.get("msg", "")})
    return flattened


def parse_body(model: Type[ModelT], payload: Dict[str, Any], message: str) -> ModelT:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise RequestValidationFailed(message, errors=field_errors(exc.errors())) from exc


@contextmanager
def failure_message(message: str) -> Iterator[None]:
    """Turn any non-API exception raised by the store into a 500 with ``message``."""
    try:
        yield
    except APIError:
        raise
    except Exception as exc:
        logger.exception(message)
        raise InternalError(message) from exc


def build_router(store: MemStorage, cfg: Settings) -> APIRouter:
    router = APIRouter()

    def session_id(request: Request) -> str:
        return request.headers.get(cfg.session_header) or cfg.anonymous_session

    # Categories

    @router.get("/categories", response_model=List[Category])
    def list_categories():
        with failure_message("Failed to fetch categories"):
            return store.list_categories()

    @router.get("/categories/{slug}", response_model=Category)
    def get_category(slug: str):
        with failure_message("Failed to fetch category"):
            category = store.get_category_by_slug(slug)
            if category is None:
                raise NotFoundError("Category not found")
            return category

    # Medicines

    @router.get("/medicines", response_model=List[MedicineWithCategory])
    def list_medicines(
        category_id: Optional[str] = Query(None),
        category_id_camel: Optional[str] = Query(None, alias="categoryId"),
        search: Optional[str] = Query(None),
        limit: Optional[int] = Query(None, ge=1),
    ):
        with failure_message("Failed to fetch medicines"):
            return store.list_medicines(
                category_id=category_id or category_id_camel, search=search, limit=limit
            )

    @router.get("/medicines/{medicine_id}", response_model=MedicineDetail)
    def get_medicine(medicine_id: str):
        with failure_message("Failed to fetch medicine"):
            medicine = store.get_medicine(medicine_id)
            if medicine is None:
                raise NotFoundError("Medicine not found")
            return medicine

    # Reviews

    @router.get("/medicines/{medicine_id}/reviews", response_model=List[Review])
    def list_reviews(medicine_id: str):
        with failure_message("Failed to fetch reviews"):
            return store.list_reviews(medicine_id)

    @router.post("/medicines/{medicine_id}/reviews", response_model=Review, status_code=201)
    def submit_review(medicine_id: str, payload: Dict[str, Any] = Body(...)):
        with failure_message("Failed to create review"):
            review = parse_body(ReviewCreate, {**payload, "medicine_id": medicine_id}, "Invalid review data")
            return store.submit_review(review)

    # Cart

    @router.get("/cart", response_model=List[CartItemWithMedicine])
    def get_cart(session: str = Depends(session_id)):
        with failure_message("Failed to fetch cart items"):
            return store.list_cart_items(session)

    @router.get("/cart/summary", response_model=CartSummary)
    def get_cart_summary(session: str = Depends(session_id)):
        with failure_message("Failed to summarize cart"):
            return store.cart_summary(session)

    @router.post("/cart", response_model=CartItem, status_code=201)
    def add_to_cart(payload: Dict[str, Any] = Body(...), session: str = Depends(session_id)):
        with failure_message("Failed to add item to cart"):
            item = parse_body(CartItemCreate, {**payload, "session_id": session}, "Invalid cart item data")
            return store.add_to_cart(item)

    @router.put("/cart/{medicine_id}", response_model=None)
    def update_cart_item(
        medicine_id: str,
        payload: Dict[str, Any] = Body(...),
        session: str = Depends(session_id),
    ):
        with failure_message("Failed to update cart item"):
            update = parse_body(CartQuantityUpdate, payload, "Invalid quantity")
            outcome, item = store.update_quantity(session, medicine_id, update.quantity)
            if outcome is CartUpdate.NOT_FOUND:
                raise NotFoundError("Cart item not found")
            if outcome is CartUpdate.REMOVED:
                return {"message": "Item removed from cart"}
            return item

    @router.delete("/cart/{medicine_id}")
    def remove_cart_item(medicine_id: str, session: str = Depends(session_id)):
        with failure_message("Failed to remove item from cart"):
            if not store.remove_item(session, medicine_id):
                raise NotFoundError("Cart item not found")
            return {"message": "Item removed from cart"}

    @router.delete("/cart")
    def clear_cart(session: str = Depends(session_id)):
        with failure_message("Failed to clear cart"):
            removed = store.clear_cart(session)
            return {"message": "Cart cleared", "removed": removed}

    # Static UI strings

    @router.get("/translations/{language}")
    def get_translations(language: str) -> Dict[str, str]:
        if language not in TRANSLATIONS:
            raise NotFoundError("Language not supported")
        # every English key is present; untranslated keys come back as the key
        return {key: translate(key, language) for key in TRANSLATIONS[DEFAULT_LANGUAGE]}

    return router


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(APIError)
    async def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid request data", "errors": field_errors(exc.errors())},
        )


def create_app(storage: Optional[MemStorage] = None, app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the API around an explicitly constructed store (seeded from YAML by default)."""
    cfg = app_settings or settings
    store = storage if storage is not None else MemStorage.from_seed_file(cfg.seed_path)

    app = FastAPI(title="HealWell Pharmacy API", version="1.0.0")
    app.state.storage = store
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(build_router(store, cfg), prefix=cfg.api_prefix)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "timestamp": datetime.now().isoformat()}

    return app
