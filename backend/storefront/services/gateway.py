"""
Storefront Backend: Persistence Gateway
========================================

What:  The thin execution layer between the routes and the relational store.
How:   Builds parameterized SQLAlchemy statements, runs them on a session
       borrowed from the shared session factory, and reshapes order results
       through the row decoder / order writer.
Who:   Injected into route handlers via `get_gateway`.

Outcomes of every operation:
    success    → entity, list of entities, or None for writes
    not found  → None (single-entity lookups only; never an exception)
    failure    → DatabaseError (the triggering SQLAlchemy error is __cause__)

The gateway does not log, retry, or translate anything into HTTP terms.

Write ordering (insert_order / delete_order):
    Statements are issued one at a time, each awaited before the next:
        insert: header → item 0 → item 1 → ...
        delete: all items → header
    By default each statement commits on its own, so a failure part-way
    leaves the earlier statements in place and raises PartialWriteError.
    With transactional_writes=True the same statements run inside one
    transaction and a failure leaves nothing behind.
"""

from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from sqlalchemy import delete, func, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.config import settings
from storefront.database import async_session_factory
from storefront.exceptions import DatabaseError, PartialWriteError
from storefront.models.catalog import Category, Product
from storefront.models.order import OrderHeader, OrderItem
from storefront.models.user import User
from storefront.schemas.catalog import CategoryResponse, ProductResponse
from storefront.schemas.order import Order
from storefront.schemas.user import UserPatch, UserResponse
from storefront.services.order_writer import plan_order_writes
from storefront.services.row_decoder import decode_order, decode_orders

# Errors that count as a query failure: SQLAlchemy-wrapped driver errors plus
# raw socket errors some drivers raise while connecting
QUERY_FAILURES = (SQLAlchemyError, OSError)


@contextmanager
def query_failure(operation: str, **context: Any) -> Iterator[None]:
    """Re-raise store failures inside the block as DatabaseError."""
    try:
        yield
    except QUERY_FAILURES as e:
        raise DatabaseError(
            context={"operation": operation, "error_type": type(e).__name__, **context},
        ) from e


def _order_rows():
    """
    SELECT for the orders/order_items outer join, labelled as OrderJoinRow.

    Items are ordered by (length(id), id). Item ids share the "{orderId}_"
    prefix, so this is their numeric position order ("o1_2" before "o1_10").
    """
    return (
        select(
            OrderHeader.id.label("id"),
            OrderHeader.user_id.label("user_id"),
            OrderHeader.total_amount.label("total_amount"),
            OrderItem.product_id.label("product_id"),
            OrderItem.quantity.label("quantity"),
        )
        .select_from(OrderHeader)
        .outerjoin(OrderItem, OrderItem.order_id == OrderHeader.id)
        .order_by(OrderHeader.id, func.length(OrderItem.id), OrderItem.id)
    )


def _product(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        category_id=product.category_id,
    )


class PersistenceGateway:
    """
    Executes the service's read and write operations against the store.

    One instance per process, shared by all in-flight requests. Each
    operation opens its own session from the factory, so concurrent
    requests never share a session object; they share the engine and its
    connections. No in-process locking is applied.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        transactional_writes: bool = False,
    ):
        self._session_factory = session_factory
        self.transactional_writes = transactional_writes

    # ── Health ────────────────────────────────────────────────────────────

    async def ping(self) -> None:
        with query_failure("ping"):
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))

    # ── Catalog ───────────────────────────────────────────────────────────

    async def get_product(self, product_id: str) -> Optional[ProductResponse]:
        with query_failure("get_product", product_id=product_id):
            async with self._session_factory() as session:
                result = await session.execute(select(Product).where(Product.id == product_id))
                product = result.scalar_one_or_none()
        return _product(product) if product is not None else None

    async def get_random_product(self) -> Optional[ProductResponse]:
        """
        Return an arbitrary product.

        Selection is ORDER BY random() LIMIT 1; no distribution is promised.
        None only when the products table is empty.
        """
        with query_failure("get_random_product"):
            async with self._session_factory() as session:
                result = await session.execute(
                    select(Product).order_by(func.random()).limit(1)
                )
                product = result.scalar_one_or_none()
        return _product(product) if product is not None else None

    async def list_products(self, category_id: Optional[str] = None) -> List[ProductResponse]:
        """List products, restricted to *category_id* when one is given (empty = all)."""
        query = select(Product).order_by(Product.id)
        if category_id:
            query = query.where(Product.category_id == category_id)
        with query_failure("list_products", category_id=category_id):
            async with self._session_factory() as session:
                result = await session.execute(query)
                products = result.scalars().all()
        return [_product(product) for product in products]

    async def list_categories(self) -> List[CategoryResponse]:
        with query_failure("list_categories"):
            async with self._session_factory() as session:
                result = await session.execute(select(Category).order_by(Category.id))
                categories = result.scalars().all()
        return [
            CategoryResponse(id=c.id, name=c.name, description=c.description)
            for c in categories
        ]

    # ── Orders: reads ─────────────────────────────────────────────────────

    async def list_orders(self) -> List[Order]:
        """All orders with their items, ordered by order id."""
        with query_failure("list_orders"):
            async with self._session_factory() as session:
                result = await session.execute(_order_rows())
                rows = result.all()
        return decode_orders(rows)

    async def list_orders_by_user(self, user_id: str) -> List[Order]:
        """One user's orders with their items, ordered by order id."""
        query = _order_rows().where(OrderHeader.user_id == user_id)
        with query_failure("list_orders_by_user", user_id=user_id):
            async with self._session_factory() as session:
                result = await session.execute(query)
                rows = result.all()
        return decode_orders(rows)

    async def get_order(self, order_id: str) -> Optional[Order]:
        """
        Fetch one order with its items.

        Returns None when no order has this id. An order that exists but has
        no items is returned with an empty `items` list.
        """
        query = _order_rows().where(OrderHeader.id == order_id)
        with query_failure("get_order", order_id=order_id):
            async with self._session_factory() as session:
                result = await session.execute(query)
                rows = result.all()
        return decode_order(rows)

    # ── Users ─────────────────────────────────────────────────────────────

    async def get_user(self, user_id: str) -> Optional[UserResponse]:
        # Explicit column list: the password column is never selected
        query = select(User.id, User.email, User.name).where(User.id == user_id)
        with query_failure("get_user", user_id=user_id):
            async with self._session_factory() as session:
                result = await session.execute(query)
                row = result.one_or_none()
        if row is None:
            return None
        return UserResponse(id=row.id, email=row.email, name=row.name)

    async def list_users(self) -> List[UserResponse]:
        query = select(User.id, User.email, User.name).order_by(User.id)
        with query_failure("list_users"):
            async with self._session_factory() as session:
                result = await session.execute(query)
                rows = result.all()
        return [UserResponse(id=row.id, email=row.email, name=row.name) for row in rows]

    async def update_user(self, patch: UserPatch) -> None:
        """
        Apply the fields present in *patch* to the user row.

        Only email and/or password are touched, and only when supplied (an
        explicit None is supplied and written as NULL). A patch with neither
        is a no-op: no session is opened and no query is issued. Updating a user
        id that does not exist matches zero rows and is not an error.
        """
        changes = patch.changes
        if not changes:
            return

        with query_failure("update_user", user_id=patch.id, fields=sorted(changes)):
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(
                        update(User).where(User.id == patch.id).values(**changes)
                    )

    # ── Orders: writes ────────────────────────────────────────────────────

    async def insert_order(self, order: Order) -> None:
        """
        Persist *order*: one header insert, then one insert per line item.

        Raises:
            DatabaseError:     the header insert itself failed (nothing written)
            PartialWriteError: a later insert failed; header and earlier items
                               remain (non-transactional mode only)
        """
        plan = plan_order_writes(order)
        async with self._session_factory() as session:
            if self.transactional_writes:
                with query_failure("insert_order", order_id=order.id):
                    async with session.begin():
                        for record in plan:
                            session.add(record)
                            await session.flush()
                return

            for completed, record in enumerate(plan):
                try:
                    async with session.begin():
                        session.add(record)
                except QUERY_FAILURES as e:
                    if completed == 0:
                        raise DatabaseError(
                            context={
                                "operation": "insert_order",
                                "order_id": order.id,
                                "error_type": type(e).__name__,
                            },
                        ) from e
                    raise PartialWriteError(
                        order_id=order.id,
                        completed_steps=completed,
                        total_steps=len(plan),
                        context={"operation": "insert_order", "error_type": type(e).__name__},
                    ) from e

    async def delete_order(self, order_id: str) -> None:
        """
        Remove an order: all of its item rows first, then the header row.

        Deleting an id that does not exist matches zero rows and is not an
        error. If the header delete fails after the items were removed
        (non-transactional mode), PartialWriteError is raised and the
        item-less header stays.
        """
        statements = [
            delete(OrderItem).where(OrderItem.order_id == order_id),
            delete(OrderHeader).where(OrderHeader.id == order_id),
        ]
        async with self._session_factory() as session:
            if self.transactional_writes:
                with query_failure("delete_order", order_id=order_id):
                    async with session.begin():
                        for statement in statements:
                            await session.execute(statement)
                return

            for completed, statement in enumerate(statements):
                try:
                    async with session.begin():
                        await session.execute(statement)
                except QUERY_FAILURES as e:
                    if completed == 0:
                        raise DatabaseError(
                            context={
                                "operation": "delete_order",
                                "order_id": order_id,
                                "error_type": type(e).__name__,
                            },
                        ) from e
                    raise PartialWriteError(
                        order_id=order_id,
                        completed_steps=completed,
                        total_steps=len(statements),
                        context={"operation": "delete_order", "error_type": type(e).__name__},
                    ) from e


# ── Singleton Instance ────────────────────────────────────────────────────
gateway = PersistenceGateway(
    async_session_factory,
    transactional_writes=settings.transactional_writes,
)


def get_gateway() -> PersistenceGateway:
    """FastAPI dependency returning the process-wide gateway."""
    return gateway
