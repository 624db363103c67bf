import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import logging
import pytest
from cart_core.cart import Cart, CartState
from cart_core.domain import Item, Percentage, Product, QuantityPairing
from cart_core.errors import ValidationError


@pytest.fixture
def cart():
    return Cart()


@pytest.fixture
def product_a():
    return {"title": "Adidas running shoes - men", "price": 35388}


@pytest.fixture
def product_b():
    return {"title": "Adidas running shoes - women", "price": 41872}


# ============ get_total() ============


def test_new_cart_total_is_zero(cart):
    assert cart.get_total().get_amount() == 0
    assert cart.state is CartState.EMPTY


def test_total_multiplies_quantity_and_price(cart, product_a):
    cart.add({"product": product_a, "quantity": 2})
    assert cart.get_total().get_amount() == 70776
    assert cart.state is CartState.POPULATED


def test_adding_same_product_replaces(cart, product_a):
    """Повторный add заменяет позицию, а не суммирует"""
    cart.add({"product": product_a, "quantity": 2})
    cart.add({"product": product_a, "quantity": 1})

    assert len(cart) == 1
    assert cart.get_total().get_amount() == 35388


def test_replace_drops_previous_conditions(cart, product_a):
    cart.add({"product": product_a, "quantity": 4, "condition": {"quantity": 2}})
    cart.add({"product": product_a, "quantity": 4})
    assert cart.get_total().get_amount() == 35388 * 4


def test_replaced_item_moves_to_end(cart, product_a, product_b):
    cart.add({"product": product_a, "quantity": 1})
    cart.add({"product": product_b, "quantity": 1})
    cart.add({"product": product_a, "quantity": 3})
    assert [i.key for i in cart.items] == [product_b["title"], product_a["title"]]


def test_total_after_add_and_remove(cart, product_a, product_b):
    cart.add({"product": product_a, "quantity": 2})
    cart.add({"product": product_b, "quantity": 1})

    cart.remove(product_a)

    assert cart.get_total().get_amount() == 41872


def test_remove_accepts_product_and_key(cart, product_a, product_b):
    cart.add({"product": product_a, "quantity": 1})
    cart.add({"product": product_b, "quantity": 1})

    cart.remove(Product(**product_a))
    cart.remove(product_b["title"])

    assert cart.state is CartState.EMPTY
    assert cart.get_total().get_amount() == 0


def test_remove_absent_product_is_noop(cart, product_a, product_b, caplog):
    cart.add({"product": product_a, "quantity": 2})

    with caplog.at_level(logging.DEBUG, logger="cart_core.cart"):
        cart.remove(product_b)
        cart.remove(product_b)

    assert cart.get_total().get_amount() == 70776
    assert "not in the cart" in caplog.text


def test_add_item_instance(cart):
    item = Item(Product("Cap", 1500), 3, (QuantityPairing(2),))
    added = cart.add(item)
    assert added == item
    assert "Cap" in cart
    assert cart.get_total().get_amount() == 3000


# ============ summary() / checkout() ============


def test_checkout_returns_total_and_items(cart, product_a, product_b):
    cart.add({"product": product_a, "quantity": 2})
    cart.add({"product": product_b, "quantity": 3})

    snapshot = cart.checkout()

    assert snapshot["total"] == 70776 + 125616
    assert snapshot["formatted"] == "R$1,963.92"
    assert [(i.product.title, i.quantity) for i in snapshot["items"]] == [
        (product_a["title"], 2),
        (product_b["title"], 3),
    ]


def test_summary_does_not_reset(cart, product_a, product_b):
    cart.add({"product": product_a, "quantity": 5})
    cart.add({"product": product_b, "quantity": 3})

    summary = cart.summary()

    assert summary["total"] == 302556
    assert len(summary["items"]) == 2
    assert cart.get_total().get_amount() > 0


def test_summary_formatted_amount(cart, product_a, product_b):
    cart.add({"product": product_a, "quantity": 5})
    cart.add({"product": product_b, "quantity": 3})

    assert cart.summary()["formatted"] == "R$3,025.56"


def test_checkout_resets_cart(cart, product_b):
    cart.add({"product": product_b, "quantity": 3})

    cart.checkout()

    assert cart.get_total().get_amount() == 0
    assert cart.state is CartState.EMPTY
    assert cart.items == ()


def test_checkout_on_empty_cart(cart):
    snapshot = cart.checkout()
    assert snapshot == {"total": 0, "formatted": "R$0.00", "items": ()}
    assert cart.checkout() == snapshot


def test_checkout_snapshot_survives_later_adds(cart, product_a, product_b):
    cart.add({"product": product_a, "quantity": 1})
    snapshot = cart.checkout()
    cart.add({"product": product_b, "quantity": 1})
    assert len(snapshot["items"]) == 1
    assert snapshot["items"][0].key == product_a["title"]


def test_checkout_logs_total(cart, product_a, caplog):
    cart.add({"product": product_a, "quantity": 2})
    with caplog.at_level(logging.INFO, logger="cart_core.cart"):
        cart.checkout()
    assert "R$707.76" in caplog.text


def test_carts_are_independent(product_a):
    first, second = Cart(), Cart()
    first.add({"product": product_a, "quantity": 1})
    assert second.get_total().get_amount() == 0


def test_clear(cart, product_a):
    cart.add({"product": product_a, "quantity": 1})
    cart.clear()
    assert cart.state is CartState.EMPTY


# ============ Условия скидок ============


def test_percentage_discount_above_minimum(cart, product_a):
    cart.add({"product": product_a, "condition": {"percentage": 30, "minimum": 2}, "quantity": 3})
    assert cart.get_total().get_amount() == 74315


def test_pairing_discount_even_quantity(cart, product_a):
    cart.add({"product": product_a, "condition": {"quantity": 2}, "quantity": 4})
    assert cart.get_total().get_amount() == 70776


def test_pairing_discount_odd_quantity(cart, product_a):
    cart.add({"product": product_a, "condition": {"quantity": 2}, "quantity": 5})
    assert cart.get_total().get_amount() == 106164


def test_percentage_not_applied_at_or_below_minimum(cart, product_a):
    cart.add({"product": product_a, "condition": {"percentage": 30, "minimum": 2}, "quantity": 2})
    assert cart.get_total().get_amount() == 70776


def test_pairing_not_applied_for_single_unit(cart, product_a):
    cart.add({"product": product_a, "condition": {"quantity": 2}, "quantity": 1})
    assert cart.get_total().get_amount() == 35388


def test_best_of_two_conditions_first_case(cart, product_a):
    cart.add(
        {
            "product": product_a,
            "condition": [{"percentage": 30, "minimum": 2}, {"quantity": 2}],
            "quantity": 5,
        }
    )
    assert cart.get_total().get_amount() == 106164


def test_best_of_two_conditions_second_case(cart, product_a):
    cart.add(
        {
            "product": product_a,
            "condition": [{"percentage": 80, "minimum": 2}, {"quantity": 2}],
            "quantity": 5,
        }
    )
    assert cart.get_total().get_amount() == 35388


def test_item_conditions_are_normalized(cart, product_a):
    item = cart.add({"product": product_a, "condition": Percentage(30, 2), "quantity": 3})
    assert item.conditions == (Percentage(30, 2),)


# ============ Валидация ============


@pytest.mark.parametrize("quantity", [0, -1, 1.5, "2", None, True])
def test_add_rejects_bad_quantity(cart, product_a, quantity):
    with pytest.raises(ValidationError):
        cart.add({"product": product_a, "quantity": quantity})
    assert cart.state is CartState.EMPTY


@pytest.mark.parametrize(
    "product",
    [
        None,
        {"title": "No price"},
        {"price": 100},
        {"title": "", "price": 100},
        {"title": "Negative", "price": -1},
        {"title": "Float", "price": 9.99},
    ],
)
def test_add_rejects_bad_product(cart, product):
    with pytest.raises(ValidationError):
        cart.add({"product": product, "quantity": 1})


def test_add_rejects_missing_product(cart):
    with pytest.raises(ValidationError, match="product"):
        cart.add({"quantity": 1})


@pytest.mark.parametrize(
    "condition",
    [
        {"percentage": 101, "minimum": 0},
        {"percentage": -5, "minimum": 0},
        {"percentage": 10, "minimum": -1},
        {"quantity": 3},
        {"quantity": 0},
        {"group_size": 1},
        {"unknown": 1},
    ],
)
def test_add_rejects_bad_condition(cart, product_a, condition):
    with pytest.raises(ValidationError):
        cart.add({"product": product_a, "quantity": 2, "condition": condition})


def test_failed_add_keeps_previous_item(cart, product_a):
    cart.add({"product": product_a, "quantity": 2})
    with pytest.raises(ValidationError):
        cart.add({"product": product_a, "quantity": 0})
    assert cart.get_total().get_amount() == 70776


def test_remove_rejects_unkeyable_product(cart):
    with pytest.raises(ValidationError):
        cart.remove(42)


def test_huge_price_with_percentage_keeps_cart_usable(cart):
    price = 10**30 + 1
    cart.add({"product": {"title": "x", "price": price}, "quantity": 1, "condition": {"percentage": 30}})

    assert cart.get_total().get_amount() == (price * 70 + 50) // 100
    assert cart.checkout()["total"] == (price * 70 + 50) // 100
    assert cart.state is CartState.EMPTY
