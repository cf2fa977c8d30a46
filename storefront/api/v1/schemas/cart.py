# api/v1/schemas/cart.py
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional

class AddItemIn(BaseModel):
    product_id: str
    # missing -> 1; explicit non-positive values are rejected by the cart service
    quantity: Optional[int] = None

    # accepts {"productId": ...} as well as {"product_id": ...}
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class UpdateQuantityIn(BaseModel):
    quantity: int = Field(..., description="New quantity for the line (>= 1)")
