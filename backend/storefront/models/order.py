"""
Storefront Backend: Order SQLAlchemy Models
============================================

What:  ORM models for the `orders` (order header) and `order_items` tables.
Who:   Built by the order writer, queried and deleted by the persistence gateway.

Table Design:
    orders
        id           caller-supplied string, primary key
        userId       owning user; NOT a foreign key (existence is not checked)
        totalAmount  numeric

    order_items
        id           "{orderId}_{position}", synthesized at write time
        orderId      → orders.id (ownership: items are removed before the header)
        productId    product reference; NOT a foreign key
        quantity     integer

    Item ids are positional, not stable identities: writing the same order
    twice without deleting it in between collides on the primary key.
"""

from sqlalchemy import ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from storefront.database import Base


class OrderHeader(Base):
    """Scalar fields of an order; line items live in `order_items`."""

    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    user_id: Mapped[str] = mapped_column("userId", String(255), nullable=False, index=True)
    total_amount: Mapped[float] = mapped_column(
        "totalAmount", Numeric(12, 2, asdecimal=False), nullable=False
    )

    def __repr__(self) -> str:
        return f"<OrderHeader(id='{self.id}', user_id='{self.user_id}')>"


class OrderItem(Base):
    __tablename__ = "order_items"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    order_id: Mapped[str] = mapped_column(
        "orderId", String(255), ForeignKey("orders.id"), nullable=False, index=True
    )
    product_id: Mapped[str] = mapped_column("productId", String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<OrderItem(id='{self.id}', order_id='{self.order_id}')>"
