import random

import pytest

from storefront.cart.store import Cart
from storefront.catalog.products import CATALOG, PRODUCTS, get_product


def test_add_same_product_twice_gives_one_line():
    cart = Cart()
    product = get_product("2")
    cart.add(product)
    cart.add(product)
    assert len(cart.lines) == 1
    assert cart.lines[0].quantity == 2


def test_headphones_and_coffee_maker_totals(headphones, coffee_maker):
    cart = Cart()
    cart.add(headphones)
    cart.add(coffee_maker)
    assert cart.total_price() == pytest.approx(289.98)
    assert cart.total_items() == 2


def test_set_quantity_zero_equals_remove(headphones, coffee_maker):
    a, b = Cart(), Cart()
    for cart in (a, b):
        cart.add(headphones)
        cart.add(coffee_maker)
    a.set_quantity(headphones.id, 0)
    b.remove(headphones.id)
    assert a.to_dict() == b.to_dict() == {coffee_maker.id: 1}


def test_set_quantity_negative_removes_line(headphones):
    cart = Cart()
    cart.add(headphones)
    cart.set_quantity(headphones.id, -3)
    assert cart.is_empty


def test_set_quantity_replaces_quantity(headphones):
    cart = Cart()
    cart.add(headphones)
    cart.set_quantity(headphones.id, 5)
    assert cart.get(headphones.id).quantity == 5
    assert cart.total_items() == 5


def test_unknown_ids_are_noops(headphones):
    cart = Cart()
    cart.add(headphones)
    cart.remove("999")
    cart.set_quantity("999", 4)
    assert cart.to_dict() == {headphones.id: 1}


def test_lines_keep_insertion_order():
    cart = Cart()
    for pid in ("3", "1", "4"):
        cart.add(get_product(pid))
    cart.add(get_product("3"))
    assert [line.product.id for line in cart.lines] == ["3", "1", "4"]


def test_random_operation_sequences_keep_invariants():
    rng = random.Random(1234)
    cart = Cart()
    ids = [p.id for p in PRODUCTS] + ["404"]
    for _ in range(500):
        op = rng.choice(("add", "remove", "set"))
        pid = rng.choice(ids)
        if op == "add" and pid in CATALOG:
            cart.add(CATALOG[pid])
        elif op == "remove":
            cart.remove(pid)
        else:
            cart.set_quantity(pid, rng.randint(-2, 6))

        quantities = [line.quantity for line in cart.lines]
        assert cart.total_items() == sum(quantities)
        assert cart.total_items() >= 0
        assert all(q >= 1 for q in quantities)
        assert len({line.product.id for line in cart.lines}) == len(cart.lines)


def test_from_dict_drops_unknown_and_invalid_entries():
    cart = Cart.from_dict({"1": 2, "404": 1, "3": 0, "4": "abc", "2": "3"}, CATALOG)
    assert cart.to_dict() == {"1": 2, "2": 3}


def test_clear_empties_cart(headphones):
    cart = Cart()
    cart.add(headphones)
    cart.clear()
    assert cart.is_empty
    assert cart.total_price() == 0
