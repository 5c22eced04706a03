"""
Storefront Backend: Order Route Handlers
=========================================

What:  Read, create and delete orders.
How:   Orders travel as the nested shape (header + `products` array); the
       gateway does the flattening and re-grouping.

Status codes:
    GET    → 200, 404 for an unknown order id
    POST   → 201 with an empty body
    DELETE → 204
    Missing user id on GET /orders → 400
    Any store failure → 500 (global handler)
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from storefront.exceptions import NotFoundError, ValidationError
from storefront.schemas.common import ErrorResponse
from storefront.schemas.order import Order
from storefront.services.gateway import PersistenceGateway, get_gateway

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Orders"])


@router.get(
    "/allorders",
    response_model=List[Order],
    summary="List every order with its line items",
)
async def list_orders(
    gateway: PersistenceGateway = Depends(get_gateway),
) -> List[Order]:
    return await gateway.list_orders()


@router.get(
    "/orders",
    response_model=List[Order],
    responses={400: {"description": "No user id provided", "model": ErrorResponse}},
    summary="List one user's orders",
)
async def list_orders_by_user(
    user_id: Optional[str] = Query(default=None, alias="id", description="Owning user id"),
    gateway: PersistenceGateway = Depends(get_gateway),
) -> List[Order]:
    if not user_id:
        raise ValidationError(message="No user id provided", field="id")
    return await gateway.list_orders_by_user(user_id)


@router.get(
    "/order/{order_id}",
    response_model=Order,
    responses={404: {"description": "Order not found", "model": ErrorResponse}},
    summary="Get one order with its line items",
)
async def get_order(
    order_id: str,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> Order:
    order = await gateway.get_order(order_id)
    if order is None:
        raise NotFoundError(resource="order", resource_id=order_id)
    return order


@router.post(
    "/orders",
    status_code=201,
    response_class=Response,
    responses={500: {"description": "Order could not be written", "model": ErrorResponse}},
    summary="Create an order",
)
async def create_order(
    order: Order,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> Response:
    await gateway.insert_order(order)
    logger.info("Order %s created with %d item(s)", order.id, len(order.items))
    return Response(status_code=201)


@router.delete(
    "/order/{order_id}",
    status_code=204,
    response_class=Response,
    responses={500: {"description": "Failed to delete order", "model": ErrorResponse}},
    summary="Delete an order and its line items",
)
async def delete_order(
    order_id: str,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> Response:
    await gateway.delete_order(order_id)
    return Response(status_code=204)
