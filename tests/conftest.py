"""Shared fixtures: a small catalog, orders and shoppers served by in-memory repositories."""

from typing import List

import pytest

from app.domain.models.order import Order
from app.domain.models.product import Category, Product
from app.domain.models.user import CartLine, Shopper
from tests.fakes import FakeOrderRepo, FakeProductRepo, FakeUserRepo, make_order, make_product


@pytest.fixture
def catalog() -> List[Product]:
    return [
        make_product("laptop", category=Category.ELECTRONICS, brand="Apple", price=999.99,
                     average_rating=4.8, sales=234, tags=["computer", "work"]),
        make_product("phone", category=Category.ELECTRONICS, brand="Samsung", price=799.0,
                     average_rating=4.5, sales=500, views=900, tags=["mobile"]),
        make_product("headphones", category=Category.ELECTRONICS, brand="Sony", price=199.0,
                     average_rating=4.5, sales=120, tags=["audio", "summer"]),
        make_product("tent", category=Category.SPORTS_OUTDOORS, brand="Coleman", price=150.0,
                     average_rating=4.2, sales=80, tags=["outdoor", "summer"]),
        make_product("novel", category=Category.BOOKS_MEDIA, brand="Penguin", price=15.0,
                     average_rating=4.9, sales=1000, tags=["fiction"]),
        make_product("blocks", category=Category.TOYS_GAMES, brand="Lego", price=60.0,
                     average_rating=4.7, sales=300, tags=["gifts"]),
        make_product("old-tv", category=Category.ELECTRONICS, brand="Sony", price=300.0,
                     average_rating=3.0, sales=10, status="discontinued"),
    ]


@pytest.fixture
def orders() -> List[Order]:
    return [
        make_order("o1", "alice", ("laptop", 999.99, 2)),
        make_order("o2", "bob", ("laptop", 950.0, 1), ("headphones", 199.0, 1)),
        make_order("o3", "bob", ("novel", 15.0, 1), ("headphones", 189.0, 1)),
        make_order("o4", "carol", ("laptop", 999.99, 1), ("tent", 150.0, 1)),
        make_order("o5", "dave", ("phone", 799.0, 1), ("novel", 15.0, 3)),
        make_order("o6", "erin", ("laptop", 999.99, 1), ("old-tv", 300.0, 1)),
        make_order("o7", "carol", ("headphones", 199.0, 1), is_paid=False),
    ]


@pytest.fixture
def shoppers() -> List[Shopper]:
    return [
        Shopper(user_id="alice", wishlist=["headphones"], cart=[CartLine(product_id="tent")]),
        Shopper(user_id="newbie"),
        Shopper(user_id="bob"),
    ]


@pytest.fixture
def product_repo(catalog) -> FakeProductRepo:
    return FakeProductRepo(catalog)


@pytest.fixture
def order_repo(orders) -> FakeOrderRepo:
    return FakeOrderRepo(orders)


@pytest.fixture
def user_repo(shoppers) -> FakeUserRepo:
    return FakeUserRepo(shoppers)
