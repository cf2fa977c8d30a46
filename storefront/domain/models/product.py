from pydantic import BaseModel, Field
from typing import Optional, List

class Product(BaseModel):
    product_id: str
    name: str
    brand: Optional[str] = None
    price: float = Field(ge=0)
    original_price: Optional[float] = None
    category: str
    tags: List[str] = []
    eco_score: float = Field(default=0, ge=0, le=10)
    image: Optional[str] = None

    model_config = {"frozen": True}  # catalog is read-only

    def summary(self) -> "ProductSummary":
        return ProductSummary(id=self.product_id, name=self.name, price=self.price, image=self.image)

class ProductSummary(BaseModel):
    """Display projection attached to cart lines."""
    id: str
    name: str
    price: float
    image: Optional[str] = None
    model_config = {"frozen": True}
