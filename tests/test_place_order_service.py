from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest
from returns.maybe import Nothing, Some

from foodstack_orders.adapters.outbound.file_orders import FileOrderStore
from foodstack_orders.adapters.outbound.in_memory_orders import InMemoryOrderStore
from foodstack_orders.core.domain.model.errors import StorageError
from foodstack_orders.core.domain.model.order import OrderRequest, OrderRequestItem
from foodstack_orders.core.domain.model.validation import ValidationCode
from foodstack_orders.core.domain.service.place_order_service import (
    PlaceOrderDeps,
    PlaceOrderService,
)
from foodstack_orders.core.ports.inbound.place_order import (
    Accepted,
    DuplicateEcho,
    PlacementStatus,
    RejectedDuplicateConflict,
    RejectedInvalid,
    RejectedUnknownMeal,
)


def _request(request_id, *pairs):
    return OrderRequest(
        request_id=request_id,
        meals=tuple(OrderRequestItem(meal_id=m, quantity=q) for m, q in pairs),
    )


class CountingCatalog:
    def __init__(self, inner):
        self.inner = inner
        self.calls = 0

    def get_all_menus(self):
        self.calls += 1
        return self.inner.get_all_menus()

    def get_menu(self, menu_id):
        return self.inner.get_menu(menu_id)

    def get_menu_ids(self):
        return self.inner.get_menu_ids()


class ExplodingStore(InMemoryOrderStore):
    def add(self, order):
        raise StorageError(message="disk full", path="/orders")


# ---- acceptance --------------------------------------------------------------


def test_valid_request_is_accepted_and_retrievable(service, store, lookup):
    outcome = service.place_order(_request("req-success", ("meal-1", 1), ("meal-2", 2)))

    assert isinstance(outcome, Accepted)
    assert outcome.status is PlacementStatus.SUCCESS
    order = outcome.order
    assert order.order_id.value
    assert order.request_id == "req-success"
    assert order.request.meals == (
        OrderRequestItem(meal_id="meal-1", quantity=1),
        OrderRequestItem(meal_id="meal-2", quantity=2),
    )

    by_id = lookup.get_order_by_order_id(order.order_id.value)
    by_request = lookup.get_order_by_request_id("req-success")
    assert by_id.unwrap().order_id == order.order_id
    assert by_request.unwrap().order_id == order.order_id
    assert by_request.unwrap().request == order.request


def test_zero_quantity_items_are_dropped(service):
    outcome = service.place_order(_request("req-1", ("meal-1", 2), ("meal-2", 0)))

    assert outcome.order.request.meals == (OrderRequestItem(meal_id="meal-1", quantity=2),)


def test_order_time_comes_from_clock(store, catalog):
    fixed = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    service = PlaceOrderService(
        PlaceOrderDeps(orders=store, menus=catalog, clock=lambda: fixed)
    )

    outcome = service.place_order(_request("req-1", ("meal-1", 1)))

    assert outcome.order.order_time == fixed


def test_meal_lookup_is_case_insensitive(service):
    outcome = service.place_order(_request("req-1", ("MEAL-1", 1)))

    assert isinstance(outcome, Accepted)


def test_each_placement_gets_a_new_order_id(service, store):
    first = service.place_order(_request("req-1", ("meal-1", 1)))
    second = service.place_order(_request("req-2", ("meal-1", 1)))

    assert first.order.order_id != second.order.order_id
    assert len(store.list_all()) == 2


# ---- rejections --------------------------------------------------------------


def test_invalid_request_is_rejected_without_side_effects(store, catalog):
    counting = CountingCatalog(catalog)
    service = PlaceOrderService(PlaceOrderDeps(orders=store, menus=counting))

    outcome = service.place_order(_request("", ("meal-1", -1)))

    assert isinstance(outcome, RejectedInvalid)
    assert outcome.status is PlacementStatus.INVALID_ORDER_REQUEST
    assert [e.code for e in outcome.errors] == [
        ValidationCode.MISSING_REQUEST_ID,
        ValidationCode.QUANTITY_NEGATIVE,
    ]
    assert counting.calls == 0
    assert store.list_all() == ()


def test_null_request_is_rejected(service):
    outcome = service.place_order(None)

    assert isinstance(outcome, RejectedInvalid)
    assert [e.code for e in outcome.errors] == [ValidationCode.NULL_REQUEST]
    assert outcome.message == "Order request is invalid."


def test_unknown_meal_is_rejected_and_nothing_persisted(service, store):
    outcome = service.place_order(_request("req-1", ("meal-1", 1), ("ghost", 2)))

    assert isinstance(outcome, RejectedUnknownMeal)
    assert outcome.status is PlacementStatus.MEAL_NOT_VALID
    assert outcome.invalid_meals == ("ghost",)
    assert store.list_all() == ()


def test_unknown_meal_with_zero_quantity_is_ignored(service):
    outcome = service.place_order(_request("req-1", ("meal-1", 1), ("ghost", 0)))

    assert isinstance(outcome, Accepted)


# ---- idempotency ---------------------------------------------------------------


def test_same_request_twice_echoes_existing_order(service, store):
    request = _request("req-1", ("meal-1", 1), ("meal-2", 2))

    first = service.place_order(request)
    count_after_first = len(store.list_all())
    second = service.place_order(request)

    assert isinstance(first, Accepted)
    assert isinstance(second, DuplicateEcho)
    assert second.status is PlacementStatus.EXISTING_ORDER
    assert second.existing_order.order_id == first.order.order_id
    assert len(store.list_all()) == count_after_first == 1


def test_same_request_id_different_content_conflicts(service, store, lookup):
    first = service.place_order(_request("R", ("meal-1", 1)))
    second = service.place_order(_request("R", ("meal-1", 2)))

    assert isinstance(second, RejectedDuplicateConflict)
    assert second.status is PlacementStatus.ORDER_CONFLICT
    assert second.existing_order.order_id == first.order.order_id
    assert len(store.list_all()) == 1
    assert lookup.get_order_by_request_id("R").unwrap().request.meals == (
        OrderRequestItem(meal_id="meal-1", quantity=1),
    )


def test_request_id_match_is_case_insensitive(service, store):
    first = service.place_order(_request("req-abc", ("meal-1", 1)))
    second = service.place_order(_request("REQ-ABC", ("meal-1", 1)))

    assert isinstance(second, DuplicateEcho)
    assert second.existing_order.order_id == first.order.order_id
    assert len(store.list_all()) == 1


def test_duplicate_check_is_order_independent(service):
    first = service.place_order(_request("req-1", ("meal-1", 1), ("meal-2", 2)))

    duplication = service.check_duplication(_request("req-1", ("meal-2", 2), ("meal-1", 1)))

    assert duplication is not None
    assert duplication.is_conflict is False
    assert duplication.existing_order.order_id == first.order.order_id


def test_existing_order_short_circuits_catalog(store, catalog):
    counting = CountingCatalog(catalog)
    service = PlaceOrderService(PlaceOrderDeps(orders=store, menus=counting))
    request = _request("req-1", ("meal-1", 1))
    service.place_order(request)

    catalog.menus.clear()
    outcome = service.place_order(request)

    assert isinstance(outcome, DuplicateEcho)
    assert counting.calls == 1


def test_catalog_is_read_on_every_placement(store, catalog):
    counting = CountingCatalog(catalog)
    service = PlaceOrderService(PlaceOrderDeps(orders=store, menus=counting))

    service.place_order(_request("req-1", ("meal-1", 1)))
    catalog.menus.clear()
    outcome = service.place_order(_request("req-2", ("meal-1", 1)))

    assert counting.calls == 2
    assert isinstance(outcome, RejectedUnknownMeal)


def test_check_duplication_without_usable_request_id(service):
    assert service.check_duplication(None) is None
    assert service.check_duplication(_request("  ", ("meal-1", 1))) is None
    assert service.check_duplication(_request("never-seen", ("meal-1", 1))) is None


def test_validate_parameters(service):
    assert service.validate_parameters(_request("req-1", ("meal-1", 1))) is None

    rejected = service.validate_parameters(_request("req-1", ("meal-1", 0)))
    assert isinstance(rejected, RejectedInvalid)
    assert [e.code for e in rejected.errors] == [ValidationCode.ALL_ZERO_QUANTITY]


def test_concurrent_placements_create_one_order(service, store):
    request = _request("req-race", ("meal-1", 1))

    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(lambda _: service.place_order(request), range(16)))

    accepted = [o for o in outcomes if isinstance(o, Accepted)]
    echoes = [o for o in outcomes if isinstance(o, DuplicateEcho)]
    assert len(accepted) == 1
    assert len(echoes) == 15
    assert {e.existing_order.order_id for e in echoes} == {accepted[0].order.order_id}
    assert len(store.list_all()) == 1
    assert service.deps.locks.active() == 0


def test_placement_sees_orders_placed_by_another_process(tmp_path, catalog):
    root = tmp_path / "orders"
    server = PlaceOrderService(PlaceOrderDeps(orders=FileOrderStore(root), menus=catalog))
    shell = PlaceOrderService(PlaceOrderDeps(orders=FileOrderStore(root), menus=catalog))
    server.place_order(_request("warmup", ("meal-1", 1)))

    first = shell.place_order(_request("R", ("meal-1", 1)))
    second = server.place_order(_request("R", ("meal-1", 2)))

    assert isinstance(first, Accepted)
    assert isinstance(second, RejectedDuplicateConflict)
    assert second.existing_order.order_id == first.order.order_id
    assert len(FileOrderStore(root).list_all()) == 2


# ---- storage ---------------------------------------------------------------------


def test_storage_errors_propagate(catalog):
    service = PlaceOrderService(PlaceOrderDeps(orders=ExplodingStore(), menus=catalog))

    with pytest.raises(StorageError):
        service.place_order(_request("req-1", ("meal-1", 1)))


def test_lookups_return_nothing_when_absent(lookup):
    assert lookup.get_order_by_order_id("0" * 32) == Nothing
    assert lookup.get_order_by_request_id("missing") == Nothing
    assert lookup.get_order_by_order_id("  ") == Nothing
    assert lookup.get_order_by_request_id("") == Nothing


def test_lookup_wraps_found_order(service, lookup):
    outcome = service.place_order(_request("req-1", ("meal-1", 1)))

    found = lookup.get_order_by_order_id(outcome.order.order_id.value)

    assert isinstance(found, Some)
