"""Unit tests for the StockLedger domain service."""

import threading

import pytest

from stockledger.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from tests.fakes import World, stock


def _world(*records) -> World:
    return World(list(records))


class TestGet:

    def test_get_by_pair(self):
        world = _world(stock(1, "1", "WH1", 100))
        assert world.ledger.get("1", "WH1").quantity == 100

    def test_missing_pair_raises_not_found(self):
        world = _world()
        with pytest.raises(EntityNotFoundError, match="No stock record"):
            world.ledger.get("1", "WH1")

    def test_missing_id_raises_not_found(self):
        world = _world()
        with pytest.raises(EntityNotFoundError, match="#42 not found"):
            world.ledger.get_by_id(42)


class TestTotalAvailable:

    def test_sums_available_across_warehouses(self):
        world = _world(stock(1, "1", "WH1", 100, reserved=10), stock(2, "1", "WH2", 50, reserved=5))
        assert world.ledger.total_available("1") == 135

    def test_zero_when_product_not_stocked(self):
        assert _world().ledger.total_available("1") == 0

    def test_list_for_product(self):
        world = _world(stock(1, "1", "WH1", 1), stock(2, "1", "WH2", 2), stock(3, "2", "WH1", 3))
        assert {r.id for r in world.ledger.list_for_product("1")} == {1, 2}


class TestCreate:

    def test_creates_record_with_defaults(self):
        world = _world()
        record = world.ledger.create("1", "WH1", 25)
        assert record.id is not None
        assert (record.quantity, record.reserved_quantity) == (25, 0)
        assert (record.reorder_level, record.reorder_quantity) == (10, 50)

    def test_custom_thresholds(self):
        record = _world().ledger.create("1", "WH1", 25, reorder_level=3, reorder_quantity=7)
        assert (record.reorder_level, record.reorder_quantity) == (3, 7)

    def test_unknown_product_rejected(self):
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            _world().ledger.create("99", "WH1", 10)

    def test_unknown_warehouse_rejected(self):
        with pytest.raises(EntityNotFoundError, match="Warehouse not found"):
            _world().ledger.create("1", "NOPE", 10)

    def test_duplicate_pair_conflicts(self):
        world = _world(stock(1, "1", "WH1", 100))
        with pytest.raises(ConflictError, match="already exists"):
            world.ledger.create("1", "WH1", 5)

    def test_negative_initial_quantity_rejected(self):
        with pytest.raises(ValidationError, match="non-negative"):
            _world().ledger.create("1", "WH1", -1)


class TestIncreaseDecrease:

    def test_increase_adds_to_quantity(self):
        world = _world(stock(1, "1", "WH1", 100, reserved=20))
        world.ledger.increase(1, 15)
        assert world.levels(1) == (115, 20)

    @pytest.mark.parametrize("amount", [0, -5])
    def test_non_positive_amounts_rejected(self, amount):
        world = _world(stock(1, "1", "WH1", 100))
        with pytest.raises(ValidationError, match="must be positive"):
            world.ledger.increase(1, amount)
        with pytest.raises(ValidationError, match="must be positive"):
            world.ledger.decrease(1, amount)
        assert world.levels(1) == (100, 0)

    def test_decrease_removes_from_quantity(self):
        world = _world(stock(1, "1", "WH1", 100))
        world.ledger.decrease(1, 40)
        assert world.levels(1) == (60, 0)

    def test_decrease_beyond_quantity_rejected(self):
        world = _world(stock(1, "1", "WH1", 10))
        with pytest.raises(InsufficientStockError):
            world.ledger.decrease(1, 11)
        assert world.levels(1) == (10, 0)

    def test_decrease_cannot_remove_reserved_units(self):
        world = _world(stock(1, "1", "WH1", 100, reserved=30))
        with pytest.raises(InsufficientStockError, match="70 available"):
            world.ledger.decrease(1, 80)
        assert world.levels(1) == (100, 30)

    def test_unknown_record_raises_not_found(self):
        with pytest.raises(EntityNotFoundError):
            _world().ledger.increase(7, 1)


class TestReserveRelease:

    def test_reserve_release_scenario(self):
        world = _world(stock(1, "1", "WH1", 100))

        assert world.ledger.reserve(1, 30) is True
        assert world.levels(1) == (100, 30)

        assert world.ledger.reserve(1, 80) is False
        assert world.levels(1) == (100, 30)

        world.ledger.release(1, 30)
        assert world.levels(1) == (100, 0)

    def test_reserve_everything_available(self):
        world = _world(stock(1, "1", "WH1", 10))
        assert world.ledger.reserve(1, 10) is True
        assert world.ledger.get_by_id(1).available_quantity == 0

    def test_reserve_zero_rejected(self):
        world = _world(stock(1, "1", "WH1", 10))
        with pytest.raises(ValidationError):
            world.ledger.reserve(1, 0)

    def test_release_more_than_reserved_rejected(self):
        world = _world(stock(1, "1", "WH1", 100, reserved=10))
        with pytest.raises(ValidationError, match="only 10 reserved"):
            world.ledger.release(1, 11)
        assert world.levels(1) == (100, 10)


class TestUncommit:

    def test_restores_quantity_and_reservation_together(self):
        world = _world(stock(1, "1", "WH1", 100, reserved=30))
        world.ledger.commit(1, 30)
        world.ledger.uncommit(1, 30)
        assert world.levels(1) == (100, 30)

    def test_non_positive_rejected(self):
        world = _world(stock(1, "1", "WH1", 100))
        with pytest.raises(ValidationError, match="must be positive"):
            world.ledger.uncommit(1, 0)


class TestCommit:

    def test_commit_moves_reservation_out_of_quantity(self):
        world = _world(stock(1, "1", "WH1", 100, reserved=30))
        before = world.ledger.get_by_id(1).available_quantity
        world.ledger.commit(1, 30)
        assert world.levels(1) == (70, 0)
        assert world.ledger.get_by_id(1).available_quantity == before

    def test_commit_without_reservation_rejected(self):
        world = _world(stock(1, "1", "WH1", 100, reserved=5))
        with pytest.raises(ValidationError, match="Cannot commit"):
            world.ledger.commit(1, 6)
        assert world.levels(1) == (100, 5)


class TestItemsNeedingReorder:

    def test_only_records_at_or_below_level(self):
        world = _world(
            stock(1, "1", "WH1", 100, reserved=0, reorder_level=10),
            stock(2, "2", "WH1", 20, reserved=10, reorder_level=10),
            stock(3, "3", "WH1", 5, reorder_level=10),
        )
        assert {r.id for r in world.ledger.items_needing_reorder()} == {2, 3}


class TestConcurrency:

    def test_concurrent_reservations_never_oversell(self):
        world = _world(stock(1, "1", "WH1", 100))
        results: list[bool] = []
        lock = threading.Lock()

        def worker():
            ok = world.ledger.reserve(1, 3)
            with lock:
                results.append(ok)

        threads = [threading.Thread(target=worker) for _ in range(60)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        quantity, reserved = world.levels(1)
        assert results.count(True) == 33
        assert reserved == 99
        assert 0 <= reserved <= quantity

    def test_mixed_operations_keep_invariant(self):
        world = _world(stock(1, "1", "WH1", 50))

        def churn():
            for _ in range(200):
                if world.ledger.reserve(1, 2):
                    world.ledger.commit(1, 1)
                    world.ledger.release(1, 1)
                    world.ledger.increase(1, 1)

        threads = [threading.Thread(target=churn) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        quantity, reserved = world.levels(1)
        assert reserved == 0
        assert quantity == 50
