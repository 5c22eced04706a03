"""
Storefront Backend: Catalog Route Handlers
===========================================

What:  Read-only product and category endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from storefront.exceptions import NotFoundError
from storefront.schemas.catalog import CategoryResponse, ProductResponse
from storefront.schemas.common import ErrorResponse
from storefront.services.gateway import PersistenceGateway, get_gateway

router = APIRouter(tags=["Catalog"])


@router.get(
    "/product/{product_id}",
    response_model=ProductResponse,
    responses={404: {"description": "Product not found", "model": ErrorResponse}},
    summary="Get a product by id",
)
async def get_product(
    product_id: str,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> ProductResponse:
    product = await gateway.get_product(product_id)
    if product is None:
        raise NotFoundError(resource="product", resource_id=product_id)
    return product


@router.get(
    "/randomproduct",
    response_model=ProductResponse,
    responses={404: {"description": "No products at all", "model": ErrorResponse}},
    summary="Get an arbitrary product",
)
async def get_random_product(
    gateway: PersistenceGateway = Depends(get_gateway),
) -> ProductResponse:
    product = await gateway.get_random_product()
    if product is None:
        raise NotFoundError(resource="product")
    return product


@router.get(
    "/products",
    response_model=List[ProductResponse],
    summary="List products, optionally by category",
)
async def list_products(
    category_id: Optional[str] = Query(
        default=None,
        alias="categoryId",
        description="Only products of this category; omit or leave empty for all",
    ),
    gateway: PersistenceGateway = Depends(get_gateway),
) -> List[ProductResponse]:
    return await gateway.list_products(category_id)


@router.get(
    "/categories",
    response_model=List[CategoryResponse],
    summary="List categories",
)
async def list_categories(
    gateway: PersistenceGateway = Depends(get_gateway),
) -> List[CategoryResponse]:
    return await gateway.list_categories()
