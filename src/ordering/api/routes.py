"""FastAPI routes for the Ordering domain: cart and checkout."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AddToCartRequest,
    CartLineSchema,
    CartResponse,
    CartViewResponse,
    CheckoutRequest,
    OrderSummaryResponse,
    SetSelectionRequest,
    UpdateCartQuantityRequest,
)
from ordering.cart.management import CartService
from ordering.domain import ordering
from ordering.projections.cart_view import CartView
from storefront.context import Storefront
from storefront.web import get_storefront

cart_router = APIRouter(prefix="/cart", tags=["cart"])


def _cart_response(service: CartService) -> CartResponse:
    cart = service.cart()
    lines = list(cart.lines)
    return CartResponse(
        cart_id=str(cart.id),
        lines=[CartLineSchema.from_line(line) for line in lines],
        count=len(lines),
        total=cart.total(),
    )


@cart_router.get("", response_model=CartResponse)
async def view_cart(storefront: Storefront = Depends(get_storefront)) -> CartResponse:
    return _cart_response(storefront.cart)


@cart_router.get("/view", response_model=CartViewResponse)
async def cart_view(storefront: Storefront = Depends(get_storefront)) -> CartViewResponse:
    cart_id = storefront.cart.cart_id
    with ordering.domain_context():
        view = current_domain.repository_for(CartView).get_or_none(cart_id)
    if view is None:
        return CartViewResponse(cart_id=cart_id, lines=[], line_count=0, total=0)
    return CartViewResponse.from_view(view)


@cart_router.post("/items", response_model=CartResponse)
async def add_cart_item(body: AddToCartRequest, storefront: Storefront = Depends(get_storefront)) -> CartResponse:
    storefront.cart.add_to_cart(body.product_id)
    return _cart_response(storefront.cart)


@cart_router.patch("/items/{product_id}", response_model=CartResponse)
async def update_cart_item_quantity(
    product_id: str,
    body: UpdateCartQuantityRequest,
    storefront: Storefront = Depends(get_storefront),
) -> CartResponse:
    storefront.cart.update_quantity(product_id, body.delta)
    return _cart_response(storefront.cart)


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(product_id: str, storefront: Storefront = Depends(get_storefront)) -> CartResponse:
    storefront.cart.remove_from_cart(product_id)
    return _cart_response(storefront.cart)


@cart_router.put("/items/{product_id}/selection", response_model=CartResponse)
async def set_cart_item_selection(
    product_id: str,
    body: SetSelectionRequest,
    storefront: Storefront = Depends(get_storefront),
) -> CartResponse:
    storefront.cart.set_selection(product_id, body.field, body.value)
    return _cart_response(storefront.cart)


@cart_router.post("/checkout", status_code=201, response_model=OrderSummaryResponse)
async def checkout_cart(body: CheckoutRequest, storefront: Storefront = Depends(get_storefront)) -> OrderSummaryResponse:
    summary = storefront.checkout.checkout(body.delivery_address)
    return OrderSummaryResponse.from_summary(summary)
