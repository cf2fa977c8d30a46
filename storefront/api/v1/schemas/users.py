# api/v1/schemas/users.py
from pydantic import BaseModel, Field, model_validator
from typing import Literal, Optional, Tuple

from storefront.domain.models.user import Preferences

class PreferencesIn(BaseModel):
    style: Optional[str] = None
    price_range: Tuple[float, float] = Field(..., description="[min, max] inclusive, min <= max")
    eco_preference: Optional[Literal["low", "medium", "high"]] = None

    @model_validator(mode="after")
    def _check_range(self):
        lo, hi = self.price_range
        if lo < 0:
            raise ValueError("price_range min must be >= 0")
        if lo > hi:
            raise ValueError("price_range min must not exceed max")
        return self

    def to_domain(self) -> Preferences:
        return Preferences(style=self.style, price_range=self.price_range, eco_preference=self.eco_preference)
