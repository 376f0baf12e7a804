"""Storefront Cart — buyer identity update vs. cart creation, user errors, cart cookie."""

import pytest

from storefront_identity.core.errors import RemoteAPIError, RemoteUserError
from storefront_identity.infrastructure.storefront_cart import StorefrontCart
from tests.fakes import FakeStorefront, user_error


async def test_existing_cart_updates_buyer_identity():
    storefront = FakeStorefront().respond(
        "cartBuyerIdentityUpdate",
        {"cartBuyerIdentityUpdate": {"cart": {"id": "gid://shopify/Cart/c2"}, "userErrors": []}},
    )
    cart = StorefrontCart(storefront, "gid://shopify/Cart/c1")

    result = await cart.update_buyer_identity({"customerAccessToken": "tok"})

    assert result == {"cart": {"id": "gid://shopify/Cart/c2"}}
    assert storefront.variables_for("cartBuyerIdentityUpdate") == {
        "cartId": "gid://shopify/Cart/c1",
        "buyerIdentity": {"customerAccessToken": "tok"},
    }
    assert cart.cart_id == "gid://shopify/Cart/c2"


async def test_missing_cart_is_created_with_buyer_identity():
    storefront = FakeStorefront().respond(
        "cartCreate",
        {"cartCreate": {"cart": {"id": "gid://shopify/Cart/new"}, "userErrors": []}},
    )
    cart = StorefrontCart(storefront, None)

    result = await cart.update_buyer_identity({"customerAccessToken": "tok"})

    assert result["cart"]["id"] == "gid://shopify/Cart/new"
    assert storefront.operations == ["cartCreate"]


async def test_user_errors_raise_remote_user_error():
    storefront = FakeStorefront().respond(
        "cartBuyerIdentityUpdate",
        {"cartBuyerIdentityUpdate": {"cart": None, "userErrors": [user_error("Cart not found")]}},
    )
    with pytest.raises(RemoteUserError):
        await StorefrontCart(storefront, "c1").update_buyer_identity({})


async def test_missing_cart_in_response_raises():
    storefront = FakeStorefront().respond(
        "cartBuyerIdentityUpdate", {"cartBuyerIdentityUpdate": {"userErrors": []}},
    )
    with pytest.raises(RemoteAPIError):
        await StorefrontCart(storefront, "c1").update_buyer_identity({})


def test_set_cart_id_returns_one_cookie_header():
    cart = StorefrontCart(FakeStorefront(), None, cookie_name="cart", secure=False)
    headers = cart.set_cart_id("gid://shopify/Cart/c9")
    assert len(headers) == 1
    name, value = headers[0]
    assert name == "Set-Cookie"
    assert value.startswith("cart=")
    assert "c9" in value
