import unittest
from datetime import datetime, timezone

from storefront.core.errors import NotFoundError, ValidationError
from storefront.schemas.order import OrderCreate
from storefront.services import order_service

from support import add_order, add_product, make_session_factory


class OrderServiceTest(unittest.TestCase):
    def setUp(self):
        self.engine, Session = make_session_factory()
        self.db = Session()
        self.product = add_product(self.db, stock=3)

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def _payload(self, **overrides):
        values = dict(
            product_id=self.product.id,
            customer_name="Awa Diop",
            customer_phone="+221 77 123 45 67",
            customer_location="Dakar, Plateau",
        )
        values.update(overrides)
        return values

    def test_submit_order_creates_pending_order(self):
        now = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)
        order_id = order_service.submit_order(self.db, OrderCreate(**self._payload()), now=now)

        order = order_service.get_order(self.db, order_id)
        self.assertEqual(order.status, "pending")
        self.assertEqual(order.customer_name, "Awa Diop")
        self.assertEqual(order.order_date.replace(tzinfo=timezone.utc), now)
        self.assertIsNone(order.delivered_date)
        # stock is informational only
        self.assertEqual(self.product.stock, 3)

    def test_string_product_id_is_accepted(self):
        order_id = order_service.submit_order(self.db, self._payload(product_id=" {} ".format(self.product.id)))
        self.assertEqual(order_service.get_order(self.db, order_id).product_id, self.product.id)

    def test_missing_fields_are_listed(self):
        with self.assertRaises(ValidationError) as ctx:
            order_service.submit_order(
                self.db,
                self._payload(customer_phone="   ", customer_location=None),
            )
        self.assertEqual(ctx.exception.fields, ["customer_phone", "customer_location"])
        self.assertIn("customer_phone", ctx.exception.message)

    def test_empty_payload_lists_every_field(self):
        with self.assertRaises(ValidationError) as ctx:
            order_service.submit_order(self.db, {})
        self.assertEqual(
            ctx.exception.fields,
            ["product_id", "customer_name", "customer_phone", "customer_location"],
        )

    def test_unknown_product_is_not_found(self):
        with self.assertRaises(NotFoundError):
            order_service.submit_order(self.db, self._payload(product_id=999))
        self.assertEqual(order_service.list_orders(self.db), [])

    def test_malformed_product_id_is_rejected(self):
        for value in ("abc", "0", "-4", "1.5"):
            with self.subTest(value=value):
                with self.assertRaises(ValidationError):
                    order_service.submit_order(self.db, self._payload(product_id=value))

    def test_status_transitions(self):
        order = add_order(self.db, self.product)
        delivered_at = datetime(2026, 10, 20, tzinfo=timezone.utc)

        order = order_service.update_order_status(self.db, order.id, " Delivered ", now=delivered_at)
        self.assertEqual(order.status, "delivered")
        self.assertIsNotNone(order.delivered_date)

        order = order_service.update_order_status(self.db, order.id, "cancelled")
        self.assertEqual(order.status, "cancelled")
        self.assertIsNone(order.delivered_date)

        with self.assertRaises(ValidationError):
            order_service.update_order_status(self.db, order.id, "shipped")

    def test_list_orders_filters_by_status(self):
        first = add_order(self.db, self.product, order_date=datetime(2026, 10, 1, tzinfo=timezone.utc))
        second = add_order(self.db, self.product, order_date=datetime(2026, 10, 2, tzinfo=timezone.utc))
        add_order(self.db, self.product, status="delivered")

        pending = order_service.list_orders(self.db, status="pending")
        self.assertEqual([order.id for order in pending], [second.id, first.id])
        self.assertEqual(len(order_service.list_orders(self.db)), 3)
        self.assertEqual(len(order_service.list_orders(self.db, limit=1)), 1)
        with self.assertRaises(ValidationError):
            order_service.list_orders(self.db, status="lost")

    def test_missing_order_is_not_found(self):
        with self.assertRaises(NotFoundError):
            order_service.get_order(self.db, 42)


if __name__ == "__main__":
    unittest.main()
