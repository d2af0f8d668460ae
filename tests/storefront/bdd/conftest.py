"""Shared BDD fixtures and step definitions for the storefront session."""

import pytest
from pytest_bdd import given, parsers, then

from storefront.scheduling import ManualClock, ManualTimer
from storefront.session import Storefront


@pytest.fixture()
def catalog_entries():
    return []


@pytest.fixture()
def error():
    """Container for the exception raised by the last shopper action."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a catalog item "{item_id}" priced {price:d} with {stock:d} in stock'))
def _(catalog_entries, item_id, price, stock):
    catalog_entries.append({"id": item_id, "name": f"Item {item_id}", "price": price, "stock": stock})


@given("a shopping session is opened", target_fixture="shop")
def _(catalog_entries):
    clock = ManualClock()
    return Storefront(clock=clock, timer=ManualTimer(clock), catalog=catalog_entries, session_id="sess-bdd")


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the action fails with "{kind}"'))
def _(error, kind):
    assert error["exc"] is not None, f"Expected {kind} but nothing was raised"
    assert type(error["exc"]).__name__ == kind


@then(parsers.cfparse('the cart holds {quantity:d} of "{item_id}"'))
def _(shop, quantity, item_id):
    assert shop.cart().line_for(item_id).quantity == quantity


@then(parsers.cfparse("the cart total is {total:d}"))
def _(shop, total):
    assert shop.cart().total() == total


@then("the cart is empty")
def _(shop):
    assert shop.cart().is_empty()


@then("no order is pending")
def _(shop):
    assert shop.pending_order() is None


@then(parsers.cfparse('the stock of "{item_id}" is {stock:d}'))
def _(shop, item_id, stock):
    assert shop.stock_levels()[item_id] == stock


@then(parsers.cfparse('the history shows {count:d} "{status}" order with total {total:d}'))
def _(shop, count, status, total):
    history = shop.history()
    assert len(history) == count
    assert history[-1].status == status
    assert history[-1].total == total
