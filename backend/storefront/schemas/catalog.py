"""
Storefront Backend: Catalog Response Schemas
=============================================

What:  API representations of products and categories.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CategoryResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    description: Optional[str] = None


class ProductResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    description: Optional[str] = None
    price: float
    category_id: Optional[str] = Field(default=None, description="Owning category, if any")
