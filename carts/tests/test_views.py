"""
Tests for cart views.
"""

from decimal import Decimal

from django.test import Client, TestCase
from django.urls import reverse

from carts.models import Order

from .test_helpers import create_product_type, create_test_user, create_variant


class CartViewsTestCase(TestCase):
    """Test cases for cart views."""

    def setUp(self):
        """Set up test data."""
        self.client = Client()
        self.user = create_test_user()
        self.variant = create_variant(create_product_type())

    def test_health_check(self):
        """Test the health check endpoint."""
        response = self.client.get(reverse("carts:health"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")

    def test_cart_view_empty(self):
        """Test viewing empty cart."""
        response = self.client.get(reverse("carts:cart"))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Your cart is empty")

    def test_cart_view_with_items(self):
        """Test viewing cart with items."""
        self.client.post(reverse("carts:add_to_cart"), {"variant_id": self.variant.pk, "quantity": 2})

        response = self.client.get(reverse("carts:cart"))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Test T-Shirt")

    def test_add_to_cart_view_anonymous(self):
        """Test adding item to an anonymous cart."""
        response = self.client.post(
            reverse("carts:add_to_cart"), {"variant_id": self.variant.pk, "quantity": 2}
        )

        self.assertRedirects(response, reverse("carts:cart"))
        cart = Order.objects.get()
        self.assertIsNone(cart.user)
        self.assertIn(cart.pk, self.client.session["carts"])
        self.assertEqual(cart.get_total_quantity(), Decimal("2"))

    def test_add_to_cart_view_reuses_cart(self):
        """Test adding twice uses the same cart and line."""
        self.client.force_login(self.user)

        self.client.post(reverse("carts:add_to_cart"), {"variant_id": self.variant.pk})
        self.client.post(reverse("carts:add_to_cart"), {"variant_id": self.variant.pk})

        cart = Order.objects.get(user=self.user)
        self.assertEqual(cart.items.count(), 1)
        self.assertEqual(cart.get_total_quantity(), Decimal("2"))

    def test_add_to_cart_ajax(self):
        """Test adding to cart via AJAX returns JSON."""
        response = self.client.post(
            reverse("carts:add_to_cart"),
            {"variant_id": self.variant.pk, "quantity": 3},
            HTTP_X_REQUESTED_WITH="XMLHttpRequest",
        )

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data["success"])
        self.assertEqual(Decimal(data["cart_count"]), Decimal("3"))

    def test_add_to_cart_invalid_variant_ajax(self):
        """Test adding an unknown variant returns an error."""
        response = self.client.post(
            reverse("carts:add_to_cart"),
            {"variant_id": 99999},
            HTTP_X_REQUESTED_WITH="XMLHttpRequest",
        )

        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()["success"])
        self.assertFalse(Order.objects.exists())

    def test_add_to_cart_requires_post(self):
        """Test the add to cart endpoint rejects GET."""
        response = self.client.get(reverse("carts:add_to_cart"))

        self.assertEqual(response.status_code, 405)

    def test_checkout_unknown_cart(self):
        """Test checking out a missing cart is not found."""
        response = self.client.get(reverse("carts:checkout", kwargs={"order_id": 99999}))

        self.assertEqual(response.status_code, 404)
