"""Tests for the content-based (attribute matching) scorer."""

import asyncio

import pytest

from app.domain.models.preferences import PreferenceSnapshot, PriceRange
from app.domain.models.product import Category
from app.domain.services.content_svc import (
    get_content_recommendations,
    price_bonus,
    quality_bonus,
    rank_content_candidates,
    score_product,
)
from tests.fakes import FakeProductRepo, make_product


def _snapshot(categories=(), brands=(), avg=0.0):
    return PreferenceSnapshot(
        categories=list(categories),
        brands=list(brands),
        price_range=PriceRange(avg=avg, max=avg or None),
    )


def test_category_rank_bonus_is_strictly_decreasing():
    snapshot = _snapshot(categories=[Category.ELECTRONICS, Category.BOOKS_MEDIA, Category.TOYS_GAMES])
    common = dict(brand="Nobody", average_rating=0, sales=0)

    first = score_product(make_product("1", category=Category.ELECTRONICS, **common), snapshot)
    second = score_product(make_product("2", category=Category.BOOKS_MEDIA, **common), snapshot)
    third = score_product(make_product("3", category=Category.TOYS_GAMES, **common), snapshot)
    other = score_product(make_product("4", category=Category.AUTOMOTIVE, **common), snapshot)

    assert (first, second, third, other) == (9, 6, 3, 0)


def test_only_top_three_preferences_count():
    snapshot = _snapshot(
        categories=[Category.ELECTRONICS, Category.BOOKS_MEDIA, Category.TOYS_GAMES, Category.AUTOMOTIVE],
        brands=["a", "b", "c", "d"],
    )
    product = make_product("p", category=Category.AUTOMOTIVE, brand="d", average_rating=0, sales=0)

    assert score_product(product, snapshot) == 0


def test_brand_rank_bonus():
    snapshot = _snapshot(brands=["Apple", "Sony"])
    common = dict(category=Category.AUTOMOTIVE, average_rating=0, sales=0)

    assert score_product(make_product("1", brand="Apple", **common), snapshot) == 6
    assert score_product(make_product("2", brand="Sony", **common), snapshot) == 4


def test_price_bonus():
    assert price_bonus(100.0, 100.0) == pytest.approx(2.0)
    assert price_bonus(150.0, 100.0) == pytest.approx(1.5)
    assert price_bonus(400.0, 100.0) == 0.0
    # no purchase history: no division by zero, no bonus
    assert price_bonus(100.0, 0.0) == 0.0


def test_quality_bonus_caps_sales_contribution():
    assert quality_bonus(make_product("a", average_rating=4.0, sales=50)) == pytest.approx(4.5)
    assert quality_bonus(make_product("b", average_rating=4.0, sales=10_000)) == pytest.approx(6.0)


def test_matching_category_ranks_above_unrelated_products():
    snapshot = _snapshot(categories=[Category.ELECTRONICS], brands=["Apple"], avg=999.99)
    same = dict(average_rating=4.0, sales=100)
    products = [
        make_product("book", category=Category.BOOKS_MEDIA, brand="Penguin", price=999.99, **same),
        make_product("tv", category=Category.ELECTRONICS, brand="LG", price=10.0, **same),
        make_product("toy", category=Category.TOYS_GAMES, brand="Lego", price=999.99, **same),
    ]

    ranked = rank_content_candidates(products, snapshot, limit=3)

    assert ranked[0].product_id == "tv"
    assert all(r.recommendation_type == "content-based" for r in ranked)


def test_rank_content_candidates_truncates_and_sorts():
    snapshot = _snapshot(categories=[Category.ELECTRONICS])
    products = [make_product(str(i), average_rating=i % 5, sales=0) for i in range(8)]

    ranked = rank_content_candidates(products, snapshot, limit=3)

    assert len(ranked) == 3
    scores = [r.recommendation_score for r in ranked]
    assert scores == sorted(scores, reverse=True)


def test_cold_start_returns_top_rated_active_products(product_repo):
    items = asyncio.run(get_content_recommendations(product_repo, snapshot=_snapshot(), limit=4))

    assert [i.product_id for i in items] == ["novel", "laptop", "blocks", "phone"]
    assert all(i.recommendation_score == 0 for i in items)


def test_cold_start_on_empty_catalog_is_empty():
    items = asyncio.run(get_content_recommendations(FakeProductRepo([]), snapshot=_snapshot(), limit=4))

    assert items == []


def test_candidates_come_from_preferred_categories_or_brands(product_repo):
    snapshot = _snapshot(categories=[Category.SPORTS_OUTDOORS], brands=["Lego"], avg=100.0)

    items = asyncio.run(get_content_recommendations(product_repo, snapshot=snapshot, limit=10))

    assert [i.product_id for i in items] == ["tent", "blocks"]


def test_inactive_products_are_never_candidates(product_repo):
    snapshot = _snapshot(categories=[Category.ELECTRONICS], brands=["Sony"], avg=300.0)

    items = asyncio.run(get_content_recommendations(product_repo, snapshot=snapshot, limit=10))

    assert "old-tv" not in {i.product_id for i in items}
    assert {i.product_id for i in items} == {"laptop", "phone", "headphones"}


def test_content_scoring_is_deterministic(product_repo):
    snapshot = _snapshot(categories=[Category.ELECTRONICS, Category.BOOKS_MEDIA], brands=["Sony"], avg=200.0)

    first = asyncio.run(get_content_recommendations(product_repo, snapshot=snapshot, limit=5))
    second = asyncio.run(get_content_recommendations(product_repo, snapshot=snapshot, limit=5))

    assert [(i.product_id, i.recommendation_score) for i in first] == [
        (i.product_id, i.recommendation_score) for i in second
    ]
