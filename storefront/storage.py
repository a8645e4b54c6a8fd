"""
In-memory store for the pharmacy catalog, carts, reviews and users.

One ``MemStorage`` is built at process start and handed to the API layer.
Every public method runs under a single re-entrant lock so that the
check-then-write sequences (cart merge, quantity update, rating recompute,
stock update) are atomic when handlers run on a thread pool.
"""

from __future__ import annotations

import threading
import uuid
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from . import inventory
from .config import load_seed_catalog
from .errors import CatalogIntegrityError, ConflictError
from .logger import get_logger
from .schemas import (
    CartItem,
    CartItemCreate,
    CartItemWithMedicine,
    CartSummary,
    Category,
    CategoryCreate,
    Medicine,
    MedicineCreate,
    MedicineDetail,
    MedicineWithCategory,
    Review,
    ReviewCreate,
    User,
    UserCreate,
)

logger = get_logger("storefront.storage")


class CartUpdate(str, Enum):
    UPDATED = "updated"
    REMOVED = "removed"
    NOT_FOUND = "not_found"


def _new_id() -> str:
    return str(uuid.uuid4())


class MemStorage:
    """Process-lifetime store; entity maps keep insertion order."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._users: Dict[str, User] = {}
        self._categories: Dict[str, Category] = {}
        self._medicines: Dict[str, Medicine] = {}
        self._reviews: Dict[str, Review] = {}
        self._cart_items: Dict[str, CartItem] = {}

    @classmethod
    def from_seed_file(cls, path: str | Path | None = None) -> "MemStorage":
        """Build a store populated from the YAML seed catalog."""
        data = load_seed_catalog(path)
        storage = cls()
        storage.seed(data["categories"], data["medicines"], data["reviews"])
        return storage

    def seed(
        self,
        categories: Iterable[Mapping[str, Any] | Category] = (),
        medicines: Iterable[Mapping[str, Any] | Medicine] = (),
        reviews: Iterable[Mapping[str, Any] | Review] = (),
    ) -> None:
        """Load fixed-id records, keeping their stored rating aggregates as given."""
        with self._lock:
            for raw in categories:
                category = Category.model_validate(raw)
                self._categories[category.id] = category
            for raw in medicines:
                medicine = Medicine.model_validate(raw)
                if medicine.category_id not in self._categories:
                    raise CatalogIntegrityError(
                        f"Medicine '{medicine.id}' references unknown category '{medicine.category_id}'"
                    )
                self._medicines[medicine.id] = medicine
            for raw in reviews:
                review = Review.model_validate(raw)
                self._reviews[review.id] = review
            logger.info(
                "Seeded %d categories, %d medicines, %d reviews",
                len(self._categories),
                len(self._medicines),
                len(self._reviews),
            )

    # Users

    def get_user(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            return next((u for u in self._users.values() if u.username == username), None)

    def create_user(self, data: UserCreate) -> User:
        with self._lock:
            for existing in self._users.values():
                if existing.username == data.username:
                    raise ConflictError(f"Username '{data.username}' is already taken")
                if existing.email.lower() == data.email.lower():
                    raise ConflictError(f"Email '{data.email}' is already registered")
            user = User(id=_new_id(), **data.model_dump())
            self._users[user.id] = user
            return user

    # Categories

    def list_categories(self) -> List[Category]:
        with self._lock:
            return list(self._categories.values())

    def get_category_by_slug(self, slug: str) -> Optional[Category]:
        with self._lock:
            return next((c for c in self._categories.values() if c.slug == slug), None)

    def create_category(self, data: CategoryCreate) -> Category:
        with self._lock:
            if any(c.slug == data.slug for c in self._categories.values()):
                raise ConflictError(f"Category slug '{data.slug}' already exists")
            category = Category(id=_new_id(), **data.model_dump())
            self._categories[category.id] = category
            return category

    # Medicines

    def list_medicines(
        self,
        category_id: Optional[str] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[MedicineWithCategory]:
        """Active medicines filtered by category and a case-insensitive search term."""
        with self._lock:
            medicines = [m for m in self._medicines.values() if m.is_active]

            if category_id:
                medicines = [m for m in medicines if m.category_id == category_id]

            if search:
                term = search.lower()
                medicines = [
                    m
                    for m in medicines
                    if term in m.name.lower()
                    or term in m.description.lower()
                    or (m.composition is not None and term in m.composition.lower())
                ]

            if limit is not None:
                medicines = medicines[:limit]

            return [self._with_category(m) for m in medicines]

    def get_medicine(self, medicine_id: str) -> Optional[MedicineDetail]:
        """Look up by id regardless of ``is_active``; None if the medicine or its category is gone."""
        with self._lock:
            medicine = self._medicines.get(medicine_id)
            if medicine is None:
                return None
            category = self._categories.get(medicine.category_id)
            if category is None:
                return None
            return MedicineDetail(
                **medicine.model_dump(),
                category=category,
                reviews=self._reviews_for(medicine_id),
            )

    def create_medicine(self, data: MedicineCreate) -> Medicine:
        with self._lock:
            if data.category_id not in self._categories:
                raise CatalogIntegrityError(f"Unknown category '{data.category_id}'")
            medicine = Medicine(id=_new_id(), **data.model_dump())
            self._medicines[medicine.id] = medicine
            return medicine

    def update_stock(self, medicine_id: str, stock_count: int) -> Optional[Medicine]:
        with self._lock:
            medicine = self._medicines.get(medicine_id)
            if medicine is None:
                return None
            updated = medicine.model_copy(update={"stock_count": stock_count})
            self._medicines[medicine_id] = updated
            return updated

    def _with_category(self, medicine: Medicine) -> MedicineWithCategory:
        category = self._categories.get(medicine.category_id)
        if category is None:
            raise CatalogIntegrityError(
                f"Medicine '{medicine.id}' references missing category '{medicine.category_id}'"
            )
        return MedicineWithCategory(**medicine.model_dump(), category=category)

    # Reviews

    def list_reviews(self, medicine_id: str) -> List[Review]:
        with self._lock:
            return self._reviews_for(medicine_id)

    def submit_review(self, data: ReviewCreate) -> Review:
        """Store a review and refresh the medicine's rating aggregates."""
        with self._lock:
            review = Review(id=_new_id(), **data.model_dump())
            self._reviews[review.id] = review

            medicine = self._medicines.get(data.medicine_id)
            if medicine is None:
                logger.warning("Review %s stored for unknown medicine '%s'", review.id, data.medicine_id)
                return review

            ratings = [r.rating for r in self._reviews_for(data.medicine_id)]
            self._medicines[medicine.id] = medicine.model_copy(
                update={
                    "average_rating": inventory.average_rating(ratings),
                    "review_count": len(ratings),
                }
            )
            return review

    def _reviews_for(self, medicine_id: str) -> List[Review]:
        return [r for r in self._reviews.values() if r.medicine_id == medicine_id]

    # Cart

    def list_cart_items(self, session_id: str) -> List[CartItemWithMedicine]:
        with self._lock:
            joined: List[CartItemWithMedicine] = []
            for item in self._cart_items.values():
                if item.session_id != session_id:
                    continue
                medicine = self._medicines.get(item.medicine_id)
                if medicine is None:
                    logger.warning(
                        "Skipping cart item %s in session '%s': medicine '%s' not found",
                        item.id,
                        session_id,
                        item.medicine_id,
                    )
                    continue
                joined.append(CartItemWithMedicine(**item.model_dump(), medicine=medicine))
            return joined

    def add_to_cart(self, data: CartItemCreate) -> CartItem:
        """Merge into an existing (session, medicine) line or start a new one."""
        with self._lock:
            existing = self._find_cart_item(data.session_id, data.medicine_id)
            if existing is not None:
                updated = existing.model_copy(update={"quantity": existing.quantity + data.quantity})
                self._cart_items[existing.id] = updated
                return updated

            item = CartItem(id=_new_id(), **data.model_dump())
            self._cart_items[item.id] = item
            return item

    def update_quantity(
        self, session_id: str, medicine_id: str, quantity: int
    ) -> Tuple[CartUpdate, Optional[CartItem]]:
        with self._lock:
            item = self._find_cart_item(session_id, medicine_id)
            if item is None:
                return CartUpdate.NOT_FOUND, None

            if quantity <= 0:
                del self._cart_items[item.id]
                return CartUpdate.REMOVED, None

            updated = item.model_copy(update={"quantity": quantity})
            self._cart_items[item.id] = updated
            return CartUpdate.UPDATED, updated

    def remove_item(self, session_id: str, medicine_id: str) -> bool:
        with self._lock:
            item = self._find_cart_item(session_id, medicine_id)
            if item is None:
                return False
            del self._cart_items[item.id]
            return True

    def clear_cart(self, session_id: str) -> int:
        """Drop every line in the session; returns how many were removed."""
        with self._lock:
            doomed = [key for key, item in self._cart_items.items() if item.session_id == session_id]
            for key in doomed:
                del self._cart_items[key]
            return len(doomed)

    def cart_summary(self, session_id: str) -> CartSummary:
        items = self.list_cart_items(session_id)
        return CartSummary(count=inventory.cart_count(items), total=inventory.cart_total(items))

    def _find_cart_item(self, session_id: str, medicine_id: str) -> Optional[CartItem]:
        return next(
            (
                item
                for item in self._cart_items.values()
                if item.session_id == session_id and item.medicine_id == medicine_id
            ),
            None,
        )
