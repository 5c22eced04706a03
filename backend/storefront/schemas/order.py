"""
Storefront Backend: Order Schemas
==================================

What:  Pydantic models for the nested order shape used on the wire and in
       the service layer.
How:   snake_case attributes in Python, camelCase keys in JSON
       (`userId`, `totalAmount`, `productId`). An order's line items travel
       in the `products` array.

Example:
    {
        "id": "o1",
        "userId": "u1",
        "totalAmount": 30,
        "products": [
            {"productId": "p1", "quantity": 2},
            {"productId": "p2", "quantity": 1}
        ]
    }
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class LineItem(BaseModel):
    """One product + quantity entry owned by exactly one order."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: str = Field(description="Referenced product id (not checked for existence)")
    # Positive values expected; not enforced
    quantity: int = Field(description="Units ordered")


class Order(BaseModel):
    """
    An order header plus its ordered line items.

    An Order with an empty `items` list is a real order that has no items.
    It is never used to stand in for "order not found" (that is None).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(description="Caller-supplied unique order id")
    user_id: str = Field(description="Owning user id (not checked for existence)")
    total_amount: float = Field(description="Order total")
    items: List[LineItem] = Field(
        default_factory=list,
        alias="products",
        description="Line items in insertion order",
    )

    @field_validator("items", mode="before")
    @classmethod
    def null_items_as_empty(cls, v):
        """`"products": null` is an order without items, same as leaving it out."""
        return [] if v is None else v
