"""
Storefront Backend: Order Writer
=================================

What:  Decomposes a nested Order into the rows that persist it.
How:   Builds transient ORM objects, header first, then one OrderItem per
       line item in list order. Nothing is added to a session here.
Who:   Called by the persistence gateway's insert_order.

Item ids are positional: the i-th line item of order "o1" becomes row
"o1_i" (0-based). Re-writing an order without deleting it first therefore
collides with the rows of the earlier write.
"""

from typing import List, Union

from storefront.models.order import OrderHeader, OrderItem
from storefront.schemas.order import Order

WriteOperation = Union[OrderHeader, OrderItem]


def line_item_id(order_id: str, position: int) -> str:
    return f"{order_id}_{position}"


def plan_order_writes(order: Order) -> List[WriteOperation]:
    """
    Return the insert plan for *order*.

    The plan always has exactly 1 + len(order.items) entries: the header,
    then the items in list order. An order without items is just the header.
    """
    plan: List[WriteOperation] = [
        OrderHeader(id=order.id, user_id=order.user_id, total_amount=order.total_amount)
    ]
    for position, item in enumerate(order.items):
        plan.append(
            OrderItem(
                id=line_item_id(order.id, position),
                order_id=order.id,
                product_id=item.product_id,
                quantity=item.quantity,
            )
        )
    return plan
