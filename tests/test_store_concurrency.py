"""The store-wide lock under many threads."""

from concurrent.futures import ThreadPoolExecutor

from conftest import make_item, place_orders
from shopfront.core.errors import DiscountNotActive, DiscountNotEligible, StoreError


def test_parallel_adds_to_same_sku_sum_up(store):
    def add(_):
        store.add_item("shared", make_item(quantity=1))

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(add, range(400)))

    assert store.view_cart("shared").items["SKU1"].quantity == 400


def test_parallel_checkouts_record_every_order(store):
    users = [f"u{i}" for i in range(50)]
    for user in users:
        store.add_item(user, make_item(quantity=2, price=1.5))

    with ThreadPoolExecutor(max_workers=8) as pool:
        orders = list(pool.map(store.checkout, users))

    stats = store.stats()
    assert stats.total_orders == 50
    assert stats.total_items_sold == 100
    assert stats.gross_revenue == 150.0
    assert len({o.id for o in orders}) == 50
    assert store.ledger.rederive() == store.ledger.totals()


def test_code_is_redeemed_exactly_once_under_contention(store):
    place_orders(store, 3)
    code = store.generate_discount().code

    users = [f"rush-{i}" for i in range(20)]
    for user in users:
        store.add_item(user, make_item(price=20.0))

    def attempt(user):
        try:
            return store.checkout(user, code)
        except StoreError as exc:
            return exc

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(attempt, users))

    winners = [r for r in results if not isinstance(r, Exception)]
    losers = [r for r in results if isinstance(r, Exception)]
    assert len(winners) == 1
    assert winners[0].discount_value == 2.0
    assert all(isinstance(r, DiscountNotActive) for r in losers)

    stats = store.stats()
    assert stats.total_orders == 4
    assert stats.total_discount_given == 2.0


def test_generate_races_produce_a_single_code(store):
    place_orders(store, 3)

    def attempt(_):
        try:
            return store.generate_discount()
        except DiscountNotEligible as exc:
            return exc

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(attempt, range(16)))

    codes = [r for r in results if not isinstance(r, Exception)]
    assert len(codes) == 1
    assert len(store.stats().discount_codes) == 1
