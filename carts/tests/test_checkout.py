"""
Tests for resolving the cart being checked out.
"""

from django.test import RequestFactory, SimpleTestCase
from django.urls import resolve, reverse

from carts.checkout import get_checkout_order_id


class CheckoutOrderIdTestCase(SimpleTestCase):
    """Test cases for get_checkout_order_id."""

    def setUp(self):
        """Set up test data."""
        self.factory = RequestFactory()

    def _request(self, path):
        request = self.factory.get(path)
        request.resolver_match = resolve(path)
        return request

    def test_checkout_route(self):
        """Test the order id is read from the checkout route."""
        request = self._request(reverse("carts:checkout", kwargs={"order_id": 12}))

        self.assertEqual(get_checkout_order_id(request), 12)

    def test_other_route(self):
        """Test other routes have no checkout order."""
        request = self._request(reverse("carts:cart"))

        self.assertIsNone(get_checkout_order_id(request))

    def test_unresolved_request(self):
        """Test requests without a route match have no checkout order."""
        self.assertIsNone(get_checkout_order_id(self.factory.get("/")))
        self.assertIsNone(get_checkout_order_id(None))
