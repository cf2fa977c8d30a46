# api/v1/schemas/classify.py
from pydantic import BaseModel, Field
from typing import Dict, List, Optional

class ClassifyIn(BaseModel):
    text: Optional[str] = None  # accepted, not used by the heuristic
    categories: List[str] = Field(..., description="Category labels to score every product against")

class ClassifyResult(BaseModel):
    product: str
    scores: Dict[str, float]

class ClassifyOut(BaseModel):
    results: List[ClassifyResult]

class AssistantIn(BaseModel):
    message: str

class AssistantOut(BaseModel):
    response: str
