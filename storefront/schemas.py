from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from . import inventory
from .inventory import CENTS, StockStatus


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CategoryCreate(BaseModel):
    name: str
    slug: str
    icon: str
    description: Optional[str] = None
    item_count: int = 0


class Category(CategoryCreate):
    id: str


class MedicineCreate(BaseModel):
    name: str
    description: str
    category_id: str
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    original_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    stock_count: int = Field(..., ge=0)
    stock_threshold: int = Field(10, ge=0)
    image_url: Optional[str] = None
    manufacturer: Optional[str] = None
    composition: Optional[str] = None
    dosage: Optional[str] = None
    pack_size: Optional[str] = None
    requires_prescription: bool = False
    is_active: bool = True

    @field_validator("price", "original_price")
    @classmethod
    def _two_places(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        return value.quantize(CENTS) if value is not None else None


class Medicine(MedicineCreate):
    id: str
    average_rating: Decimal = Field(Decimal("0.0"), ge=0, le=5)
    review_count: int = 0
    created_at: datetime = Field(default_factory=utcnow)

    @computed_field
    @property
    def stock_status(self) -> StockStatus:
        return inventory.stock_status(self.stock_count, self.stock_threshold)

    @computed_field
    @property
    def stock_label_key(self) -> str:
        return self.stock_status.label_key

    @computed_field
    @property
    def stock_percentage(self) -> float:
        return inventory.stock_percentage(self.stock_count)

    @computed_field
    @property
    def discount_percent(self) -> Optional[int]:
        return inventory.discount_percent(self.price, self.original_price)


class MedicineWithCategory(Medicine):
    category: Category


class ReviewCreate(BaseModel):
    """Review submission; names and comments are trimmed before length checks."""

    model_config = ConfigDict(str_strip_whitespace=True)

    medicine_id: str
    user_id: Optional[str] = None
    customer_name: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5, strict=True)
    comment: str = Field(..., min_length=1)
    is_verified: bool = False


class Review(ReviewCreate):
    id: str
    created_at: datetime = Field(default_factory=utcnow)


class MedicineDetail(MedicineWithCategory):
    reviews: List[Review] = Field(default_factory=list)


class CartItemCreate(BaseModel):
    session_id: str
    medicine_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1, strict=True)


class CartItem(CartItemCreate):
    id: str
    created_at: datetime = Field(default_factory=utcnow)


class CartItemWithMedicine(CartItem):
    medicine: Medicine


class CartQuantityUpdate(BaseModel):
    quantity: int = Field(..., ge=0, strict=True)


class CartSummary(BaseModel):
    count: int
    total: Decimal


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str


class User(UserCreate):
    id: str
    created_at: datetime = Field(default_factory=utcnow)
