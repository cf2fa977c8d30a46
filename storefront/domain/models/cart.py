from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List
import uuid

from storefront.domain.models.product import ProductSummary

def _new_item_id() -> str:
    return uuid.uuid4().hex

class CartLineItem(BaseModel):
    item_id: str = Field(default_factory=_new_item_id)
    product_id: str
    quantity: int = Field(ge=1)
    price_at_addition: float = Field(ge=0)  # snapshot, never refreshed from the catalog

class Cart(BaseModel):
    user_id: str
    items: List[CartLineItem] = []
    discount: float = Field(default=0, ge=0)
    coupon_code: Optional[str] = None
    version: int = 0  # 0 = never saved

    def find_item(self, item_id: str) -> Optional[CartLineItem]:
        return next((i for i in self.items if i.item_id == item_id), None)

    def find_product(self, product_id: str) -> Optional[CartLineItem]:
        return next((i for i in self.items if i.product_id == product_id), None)

class CartItemView(BaseModel):
    item_id: str
    product_id: str
    quantity: int
    price_at_addition: float
    product: Optional[ProductSummary] = None  # None if the product left the catalog

    # wire shape is camelCase (productId, priceAtAddition); attributes stay snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class CartView(BaseModel):
    items: List[CartItemView] = []
    subtotal: float = 0
    discount: float = 0
    total: float = 0

    model_config = {"frozen": True}
