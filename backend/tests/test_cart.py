"""Cart: line merging, quantities, totals and storage persistence."""

import json
from decimal import Decimal

import pytest
from pydantic import ValidationError

from pagebuilder.services.cart import Cart, FileStorage, MemoryStorage, line_key

SHIRT = {"id": "P1", "title": "Shirt", "price": "100.00", "images": ["a.jpg"]}
CAP = {"id": "P2", "title": "Cap", "price": "50.00"}


def test_same_product_and_options_merge_into_one_line():
    cart = Cart()
    cart.add_to_cart(SHIRT, 1, "Black", "M")
    cart.add_to_cart(SHIRT, 2, "Black", "M")

    assert len(cart.lines) == 1
    assert cart.lines[0].quantity == 3


def test_different_options_are_separate_lines():
    cart = Cart()
    cart.add_to_cart(SHIRT, 1, "Black", "M")
    cart.add_to_cart(SHIRT, 1, "White", "M")
    cart.add_to_cart(SHIRT, 1, "Black", None)

    assert len(cart.lines) == 3


def test_adding_opens_the_cart():
    cart = Cart()
    assert cart.is_open is False
    cart.add_to_cart(CAP)
    assert cart.is_open is True


def test_visibility_controls():
    cart = Cart()
    cart.toggle()
    assert cart.is_open is True
    cart.close()
    assert cart.is_open is False
    cart.open()
    cart.toggle()
    assert cart.is_open is False


def test_update_quantity_below_one_removes_line():
    cart = Cart()
    cart.add_to_cart(SHIRT, 2, "Black", "M")
    cart.update_quantity(line_key("P1", "Black", "M"), 0)
    assert cart.lines == []


def test_update_quantity_sets_value():
    cart = Cart()
    cart.add_to_cart(CAP)
    cart.update_quantity(line_key("P2", None, None), 4)
    assert cart.count == 4


def test_update_quantity_for_unknown_line_is_ignored():
    cart = Cart()
    cart.add_to_cart(CAP)
    cart.update_quantity(line_key("P9", None, None), 4)
    assert cart.count == 1


def test_remove_only_touches_matching_line():
    cart = Cart()
    cart.add_to_cart(SHIRT, 1, "Black", "M")
    cart.add_to_cart(CAP)
    cart.remove_from_cart(line_key("P1", "Black", "M"))
    assert [line.id for line in cart.lines] == ["P2"]


def test_total_and_count():
    cart = Cart()
    cart.add_to_cart(SHIRT, 2)
    cart.add_to_cart(CAP)

    assert cart.total == Decimal("250.00")
    assert cart.count == 3


def test_clear_cart_empties_storage_too():
    storage = MemoryStorage()
    cart = Cart(storage, key="cart")
    cart.add_to_cart(CAP)
    cart.clear_cart()

    assert cart.lines == []
    assert json.loads(storage.items["cart"]) == []


def test_cart_survives_a_reload():
    storage = MemoryStorage()
    cart = Cart(storage, key="cart")
    cart.add_to_cart(SHIRT, 2, "Black", "M")

    restored = Cart(storage, key="cart")

    [line] = restored.lines
    assert line.key == ("P1", "Black", "M")
    assert line.quantity == 2
    assert line.model_extra["images"] == ["a.jpg"]
    assert restored.is_open is False


def test_stored_lines_use_client_field_names():
    storage = MemoryStorage()
    Cart(storage, key="cart").add_to_cart(SHIRT, 1, "Black", "M")

    [stored] = json.loads(storage.items["cart"])
    assert stored["selectedColor"] == "Black"
    assert stored["selectedSize"] == "M"
    assert "addedAt" in stored


def test_corrupt_storage_starts_empty():
    storage = MemoryStorage({"cart": "{not json"})
    assert Cart(storage, key="cart").lines == []


def test_non_list_storage_starts_empty():
    storage = MemoryStorage({"cart": json.dumps({"id": "P1"})})
    assert Cart(storage, key="cart").lines == []


def test_invalid_line_starts_empty():
    storage = MemoryStorage({"cart": json.dumps([{"title": "no id", "quantity": 0}])})
    assert Cart(storage, key="cart").lines == []


def test_file_storage_round_trip(tmp_path):
    path = tmp_path / "cart.json"
    Cart(FileStorage(path), key="cart").add_to_cart(CAP, 3)

    restored = Cart(FileStorage(path), key="cart")

    assert restored.count == 3
    assert json.loads(path.read_text())["cart"]


def test_file_storage_recovers_from_garbage(tmp_path):
    path = tmp_path / "cart.json"
    path.write_text("garbage")

    cart = Cart(FileStorage(path), key="cart")
    assert cart.lines == []
    cart.add_to_cart(CAP)

    assert Cart(FileStorage(path), key="cart").count == 1


def test_failed_save_keeps_cart_in_memory():
    class BrokenStorage(MemoryStorage):
        def set_item(self, key, value):
            raise OSError("disk full")

    cart = Cart(BrokenStorage(), key="cart")
    cart.add_to_cart(CAP)

    assert cart.count == 1


@pytest.mark.parametrize("quantity", [0, -1])
def test_adding_a_non_positive_quantity_is_rejected(quantity):
    cart = Cart()
    cart.add_to_cart(SHIRT, 1, "Black", "M")

    with pytest.raises(ValueError):
        cart.add_to_cart(SHIRT, quantity, "Black", "M")
    with pytest.raises(ValueError):
        cart.add_to_cart(CAP, quantity)

    assert [(line.key, line.quantity) for line in cart.lines] == [(("P1", "Black", "M"), 1)]


def test_rejected_add_keeps_every_stored_line():
    storage = MemoryStorage()
    cart = Cart(storage, key="cart")
    cart.add_to_cart(SHIRT, 2)
    cart.add_to_cart(CAP)

    with pytest.raises(ValueError):
        cart.add_to_cart(SHIRT, -2)

    restored = Cart(storage, key="cart")
    assert [(line.id, line.quantity) for line in restored.lines] == [("P1", 2), ("P2", 1)]


def test_line_quantity_cannot_be_assigned_below_one():
    cart = Cart()
    line = cart.add_to_cart(CAP)
    with pytest.raises(ValidationError):
        line.quantity = 0
