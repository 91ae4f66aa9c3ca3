# Cart store behaviour against a real (in-memory) database

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from evercart.crud import cart as crud_cart
from evercart.db.base import Base
from evercart.models.cart import Cart, CartItem

OWNER = "shopper@example.com"


def _quantities(db, owner=OWNER):
    cart = crud_cart.get_cart_by_email(db, owner)
    db.refresh(cart)
    return {item.product_id: item.quantity for item in cart.items}


def test_add_creates_cart_lazily(db, make_product):
    product = make_product()
    assert crud_cart.get_cart_by_email(db, OWNER) is None

    crud_cart.add_to_cart(db, OWNER, product.id)

    assert _quantities(db) == {product.id: 1}


def test_repeated_adds_accumulate(db, make_product):
    product = make_product()
    for quantity in (2, 3, 5):
        crud_cart.add_to_cart(db, OWNER, product.id, quantity)

    assert _quantities(db) == {product.id: 10}
    assert db.query(CartItem).count() == 1


@pytest.mark.parametrize("quantity", [0, -1])
def test_add_rejects_non_positive_quantity(db, make_product, quantity):
    product = make_product()
    with pytest.raises(ValueError):
        crud_cart.add_to_cart(db, OWNER, product.id, quantity)
    assert crud_cart.get_cart_by_email(db, OWNER) is None


def test_add_does_not_check_product_exists(db):
    crud_cart.add_to_cart(db, OWNER, 9999, 1)

    lines = crud_cart.get_cart(db, OWNER)
    assert len(lines) == 1
    item, product = lines[0]
    assert item.product_id == 9999
    assert product is None


def test_read_missing_cart_is_empty(db):
    assert crud_cart.get_cart(db, "nobody@example.com") == []


def test_read_joins_products(db, make_product):
    mouse = make_product(name="Gaming Mouse", price=35.0)
    crud_cart.add_to_cart(db, OWNER, mouse.id, 2)

    [(item, product)] = crud_cart.get_cart(db, OWNER)
    assert item.quantity == 2
    assert product.name == "Gaming Mouse"


def test_update_sets_quantity_exactly(db, make_product):
    product = make_product()
    crud_cart.add_to_cart(db, OWNER, product.id, 4)

    crud_cart.update_cart_item(db, OWNER, product.id, 2)

    assert _quantities(db) == {product.id: 2}


@pytest.mark.parametrize("quantity", [0, -3])
def test_update_to_non_positive_removes_only_that_line(db, make_product, quantity):
    keep = make_product(name="Keep")
    drop = make_product(name="Drop")
    crud_cart.add_to_cart(db, OWNER, keep.id, 1)
    crud_cart.add_to_cart(db, OWNER, drop.id, 3)

    crud_cart.update_cart_item(db, OWNER, drop.id, quantity)

    assert _quantities(db) == {keep.id: 1}


def test_update_missing_cart_or_line(db, make_product):
    product = make_product()
    with pytest.raises(crud_cart.CartNotFound):
        crud_cart.update_cart_item(db, OWNER, product.id, 1)

    crud_cart.add_to_cart(db, OWNER, product.id, 1)
    with pytest.raises(crud_cart.CartItemNotFound):
        crud_cart.update_cart_item(db, OWNER, product.id + 1, 1)


def test_remove_line(db, make_product):
    a = make_product(name="A")
    b = make_product(name="B")
    crud_cart.add_to_cart(db, OWNER, a.id, 1)
    crud_cart.add_to_cart(db, OWNER, b.id, 1)

    crud_cart.remove_from_cart(db, OWNER, a.id)

    assert _quantities(db) == {b.id: 1}


def test_remove_absent_line_leaves_cart_untouched(db, make_product):
    a = make_product(name="A")
    crud_cart.add_to_cart(db, OWNER, a.id, 2)

    with pytest.raises(crud_cart.CartItemNotFound):
        crud_cart.remove_from_cart(db, OWNER, a.id + 100)

    assert _quantities(db) == {a.id: 2}


def test_remove_without_cart(db):
    with pytest.raises(crud_cart.CartNotFound):
        crud_cart.remove_from_cart(db, OWNER, 1)


def test_clear_reports_distinct_line_count(db, make_product):
    a = make_product(name="A")
    b = make_product(name="B")
    crud_cart.add_to_cart(db, OWNER, a.id, 2)
    crud_cart.add_to_cart(db, OWNER, b.id, 1)

    assert crud_cart.clear_cart(db, OWNER) == 2
    assert _quantities(db) == {}
    # the cart record itself survives
    assert db.query(Cart).filter(Cart.user_email == OWNER).count() == 1


def test_clear_without_cart_creates_empty_one(db):
    assert crud_cart.clear_cart(db, OWNER) == 0
    assert crud_cart.get_cart_by_email(db, OWNER) is not None
    assert crud_cart.clear_cart(db, OWNER) == 0


def test_carts_are_per_owner(db, make_product):
    product = make_product()
    crud_cart.add_to_cart(db, OWNER, product.id, 1)
    crud_cart.add_to_cart(db, "other@example.com", product.id, 7)

    assert _quantities(db) == {product.id: 1}
    assert _quantities(db, "other@example.com") == {product.id: 7}


# ----------------------- Races -----------------------
# These need a file-backed database so two sessions hold separate connections.

@pytest.fixture
def file_sessions(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'carts.db'}", connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


def test_concurrent_insert_of_same_line_becomes_increment(file_sessions, monkeypatch):
    session = file_sessions()
    crud_cart.get_or_create_cart(session, OWNER)
    session.commit()

    real_increment = crud_cart._increment_line
    calls = []

    def increment_after_rival_insert(db, cart_id, product_id, quantity):
        calls.append(quantity)
        if len(calls) == 1:
            rival = file_sessions()
            rival.add(CartItem(cart_id=cart_id, product_id=product_id, quantity=2))
            rival.commit()
            rival.close()
            return False
        return real_increment(db, cart_id, product_id, quantity)

    monkeypatch.setattr(crud_cart, "_increment_line", increment_after_rival_insert)

    crud_cart.add_to_cart(session, OWNER, 7, 3)

    assert calls == [3, 3]
    assert session.query(CartItem.product_id, CartItem.quantity).all() == [(7, 5)]
    session.close()


def test_concurrent_cart_creation_reuses_existing_cart(file_sessions, monkeypatch):
    session = file_sessions()
    real_get = crud_cart.get_cart_by_email
    rival_cart_ids = []

    def get_after_rival_create(db, user_email):
        if not rival_cart_ids:
            rival = file_sessions()
            cart = Cart(user_email=user_email)
            rival.add(cart)
            rival.commit()
            rival_cart_ids.append(cart.id)
            rival.close()
            return None
        return real_get(db, user_email)

    monkeypatch.setattr(crud_cart, "get_cart_by_email", get_after_rival_create)

    cart = crud_cart.get_or_create_cart(session, OWNER)

    assert cart.id == rival_cart_ids[0]
    assert session.query(Cart).filter(Cart.user_email == OWNER).count() == 1
    session.close()
