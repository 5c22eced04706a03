"""
Storefront Backend: Row Decoder
================================

What:  Turns the flat result of `orders LEFT JOIN order_items` back into
       nested Order entities.
How:   One pass over the rows, grouping by order id in an insertion-ordered
       dict. Pure functions, no I/O.
Who:   Called by the persistence gateway after every order read.

Input shape (one row per order/item pair):

    id   userId  totalAmount  productId  quantity
    o1   u1      30           p1         2
    o1   u1      30           p2         1
    o2   u1      0            NULL       NULL       ← order without items

Output:

    [Order(o1, items=[p1×2, p2×1]), Order(o2, items=[])]

A NULL productId is the outer join's "no match" marker. It yields an order
with no items, never a malformed item and never a missing order.
"""

from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence

from storefront.schemas.order import LineItem, Order


class OrderJoinRow(NamedTuple):
    """
    One row of the orders/order_items outer join.

    The gateway selects its columns under these labels, so SQLAlchemy
    `Row` objects from that query can be passed to the decoder as-is.
    """

    id: str
    user_id: str
    total_amount: float
    product_id: Optional[str] = None
    quantity: Optional[int] = None


def _order_header(row: OrderJoinRow) -> Order:
    return Order(id=row.id, user_id=row.user_id, total_amount=row.total_amount, items=[])


def _line_item(row: OrderJoinRow) -> Optional[LineItem]:
    if row.product_id is None:
        return None
    return LineItem(product_id=row.product_id, quantity=row.quantity)


def decode_orders(rows: Iterable[OrderJoinRow]) -> List[Order]:
    """
    Group flat join rows into orders, preserving first-seen order.

    Grouping is by order id, not by adjacency: if the same id shows up again
    after other orders' rows, its items are merged into the order created on
    first sight. Item order within an order follows row order.

    Args:
        rows: Join rows, normally ordered by order id

    Returns:
        One Order per distinct id; empty list for empty input.
    """
    orders: Dict[str, Order] = {}
    for row in rows:
        order = orders.get(row.id)
        if order is None:
            order = orders[row.id] = _order_header(row)
        item = _line_item(row)
        if item is not None:
            order.items.append(item)
    return list(orders.values())


def decode_order(rows: Sequence[OrderJoinRow]) -> Optional[Order]:
    """
    Decode the rows of a single, already-known order.

    Returns None when there are no rows (order not found). A found order
    with no items comes back as an Order with an empty `items` list.
    """
    if not rows:
        return None
    order = _order_header(rows[0])
    for row in rows:
        item = _line_item(row)
        if item is not None:
            order.items.append(item)
    return order
