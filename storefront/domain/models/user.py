from pydantic import BaseModel
from typing import Optional, List, Tuple

class Preferences(BaseModel):
    # style is stored and returned but no ranking step reads it yet
    style: Optional[str] = None
    price_range: Optional[Tuple[float, float]] = None
    # "low" | "medium" | "high"; other stored values disable eco filtering
    eco_preference: Optional[str] = None

class User(BaseModel):
    user_id: str
    name: str
    preferences: Preferences = Preferences()
    wishlist: List[str] = []
