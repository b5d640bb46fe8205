# finance_analyzer/schemas/category.py
from typing import Optional
from pydantic import Field
import uuid

from finance_analyzer.schemas.common import CamelModel

HEX_COLOR_PATTERN = r"^#([A-Fa-f0-9]{6})$"

class CategoryRequest(CamelModel):
    name: str = Field(..., min_length=2, max_length=50)
    description: Optional[str] = Field(None, max_length=200)
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN, description="Hex color, e.g. #FF5733")

class CategoryResponse(CamelModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    is_default: bool = False
