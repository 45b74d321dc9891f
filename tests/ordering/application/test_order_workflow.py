"""Application tests for order lookups and lifecycle transitions."""

import pytest
from storefront.ordering.order.order import OrderStatus
from storefront.shared.exceptions import InvalidStateError, NotFoundError


@pytest.fixture
def place_order(catalogue, make_cart, order_service):
    def _place_order(customer_id="cust-001", product_id="P001", quantity=2):
        cart = make_cart(customer_id)
        cart.add_item(catalogue.get_item(product_id), quantity)
        return order_service.create_order(cart, "1 Main St")

    return _place_order


class TestQueries:
    def test_get_order(self, order_service, place_order):
        order = place_order()
        assert order_service.get_order(order.id) == order

    def test_get_order_twice_returns_equal_snapshots(self, order_service, place_order):
        order = place_order()
        assert order_service.get_order(order.id) == order_service.get_order(order.id)

    def test_get_unknown_order(self, order_service):
        with pytest.raises(NotFoundError) as exc:
            order_service.get_order("ORD999999")
        assert exc.value.messages == {"order_id": ["Order not found: ORD999999"]}

    def test_returned_order_is_detached(self, order_service, place_order):
        order = place_order()
        order.status = OrderStatus.CANCELLED
        assert order_service.get_order(order.id).status == OrderStatus.PENDING

    def test_orders_for_customer(self, order_service, place_order):
        first = place_order("cust-001", "P004", 1)
        place_order("cust-002", "P004", 1)
        third = place_order("cust-001", "P005", 1)

        orders = order_service.orders_for_customer("cust-001")
        assert [order.id for order in orders] == [first.id, third.id]
        assert order_service.orders_for_customer("cust-404") == []

    def test_orders_for_customer_includes_every_status(self, order_service, place_order):
        first = place_order("cust-001", "P004", 1)
        place_order("cust-001", "P005", 1)
        order_service.cancel(first.id)
        statuses = {order.status for order in order_service.orders_for_customer("cust-001")}
        assert statuses == {OrderStatus.CANCELLED, OrderStatus.PENDING}

    def test_list_all_and_count(self, order_service, place_order):
        place_order("cust-001", "P004", 1)
        place_order("cust-002", "P004", 1)
        assert order_service.order_count() == 2
        assert len(order_service.list_all()) == 2


class TestLifecycle:
    def test_confirm_ship_deliver(self, order_service, place_order):
        order = place_order()
        assert order_service.confirm(order.id).status == OrderStatus.CONFIRMED
        assert order_service.ship(order.id).status == OrderStatus.SHIPPED
        assert order_service.deliver(order.id).status == OrderStatus.DELIVERED
        assert order_service.get_order(order.id).status == OrderStatus.DELIVERED

    def test_ship_pending_order(self, order_service, place_order):
        order = place_order()
        with pytest.raises(InvalidStateError):
            order_service.ship(order.id)
        assert order_service.get_order(order.id).status == OrderStatus.PENDING

    def test_confirm_shipped_order(self, order_service, place_order):
        order = place_order()
        order_service.confirm(order.id)
        order_service.ship(order.id)
        with pytest.raises(InvalidStateError):
            order_service.confirm(order.id)

    def test_deliver_confirmed_order(self, order_service, place_order):
        order = place_order()
        order_service.confirm(order.id)
        with pytest.raises(InvalidStateError):
            order_service.deliver(order.id)

    @pytest.mark.parametrize("transition", ["confirm", "ship", "deliver", "cancel"])
    def test_transition_unknown_order(self, order_service, transition):
        with pytest.raises(NotFoundError):
            getattr(order_service, transition)("ORD999999")

    def test_transitions_do_not_touch_stock(self, catalogue, order_service, place_order):
        order = place_order()
        order_service.confirm(order.id)
        order_service.ship(order.id)
        order_service.deliver(order.id)
        assert catalogue.get_item("P001").stock_quantity == 8
