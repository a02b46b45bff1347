"""
Tests for the cart provider and anonymous cart session tracking.
"""

from django.contrib.sessions.backends.db import SessionStore
from django.test import TestCase

from carts.cart_provider import CartProvider
from carts.cart_session import CartSession
from carts.models import Order

from .test_helpers import create_test_user


class CartSessionTestCase(TestCase):
    """Test cases for CartSession."""

    def setUp(self):
        """Set up test data."""
        self.session = SessionStore()
        self.cart_session = CartSession(self.session)

    def test_add_and_delete_cart_id(self):
        """Test tracking cart ids in the session."""
        self.cart_session.add_cart_id(3)
        self.cart_session.add_cart_id(5)
        self.cart_session.add_cart_id(3)

        self.assertEqual(self.cart_session.get_cart_ids(), [3, 5])
        self.assertTrue(self.cart_session.has_cart_id(5))

        self.cart_session.delete_cart_id(3)
        self.cart_session.delete_cart_id(5)

        self.assertEqual(self.cart_session.get_cart_ids(), [])
        self.assertNotIn('carts', self.session)

    def test_survives_session_key_cycle(self):
        """Test tracked carts are kept when the session key changes on login."""
        self.cart_session.add_cart_id(7)
        self.session.save()
        old_key = self.session.session_key

        self.session.cycle_key()

        self.assertNotEqual(self.session.session_key, old_key)
        self.assertEqual(CartSession(self.session).get_cart_ids(), [7])


class CartProviderTestCase(TestCase):
    """Test cases for CartProvider."""

    def setUp(self):
        """Set up test data."""
        self.provider = CartProvider()
        self.user = create_test_user()
        self.session = SessionStore()

    def test_create_cart_for_user(self):
        """Test creating a cart for an authenticated user."""
        cart = self.provider.create_cart(user=self.user)

        self.assertEqual(cart.user, self.user)
        self.assertEqual(cart.email, self.user.email)
        self.assertTrue(cart.is_cart)
        self.assertEqual(self.provider.get_carts(self.user), [cart])

    def test_create_cart_for_session(self):
        """Test creating a cart for an anonymous session."""
        cart = self.provider.create_cart('gift', session=self.session)

        self.assertIsNone(cart.user)
        self.assertEqual(cart.bundle(), 'gift')
        self.assertEqual(CartSession(self.session).get_cart_ids(), [cart.pk])
        self.assertEqual(self.provider.get_carts(session=self.session), [cart])

    def test_create_cart_without_owner(self):
        """Test creating a cart without user or session raises error."""
        with self.assertRaises(ValueError):
            self.provider.create_cart()

    def test_get_carts_newest_first(self):
        """Test carts are returned newest first."""
        first = self.provider.create_cart(user=self.user)
        second = self.provider.create_cart(user=self.user)
        third = self.provider.create_cart('gift', user=self.user)

        carts = self.provider.get_carts(self.user)

        self.assertEqual([cart.pk for cart in carts], [third.pk, second.pk, first.pk])

    def test_get_carts_excludes_placed_orders(self):
        """Test placed orders and other users' carts are not carts of the user."""
        cart = self.provider.create_cart(user=self.user)
        placed = self.provider.create_cart(user=self.user)
        self.provider.finalize_cart(placed)
        self.provider.create_cart(user=create_test_user(email='other@example.com'))

        self.assertEqual(self.provider.get_carts(self.user), [cart])

    def test_get_carts_none(self):
        """Test a user without carts gets an empty list."""
        self.assertEqual(self.provider.get_carts(self.user), [])
        self.assertEqual(self.provider.get_carts(session=self.session), [])
        self.assertEqual(self.provider.get_carts(), [])

    def test_get_cart_by_type(self):
        """Test getting the newest cart of one order type."""
        self.provider.create_cart(user=self.user)
        gift = self.provider.create_cart('gift', user=self.user)

        self.assertEqual(self.provider.get_cart('gift', user=self.user), gift)
        self.assertIsNone(self.provider.get_cart('subscription', user=self.user))

    def test_session_carts_exclude_assigned(self):
        """Test a session no longer sees a cart once it belongs to a user."""
        cart = self.provider.create_cart(session=self.session)
        Order.objects.filter(pk=cart.pk).update(user=self.user)

        self.assertEqual(self.provider.get_carts(session=self.session), [])

    def test_user_carts_are_memoised(self):
        """Test cart ids are cached until clear_caches is called."""
        self.provider.get_carts(self.user)
        # Bypass the ORM signals so the cache is not cleared
        Order.objects.bulk_create([Order(user=self.user)])

        self.assertEqual(self.provider.get_carts(self.user), [])

        self.provider.clear_caches()
        self.assertEqual(len(self.provider.get_carts(self.user)), 1)

    def test_caches_cleared_when_order_saved(self):
        """Test saving an order elsewhere clears the shared provider cache."""
        from carts.cart_provider import get_cart_provider

        provider = get_cart_provider()
        provider.get_carts(self.user)

        cart = Order.objects.create(user=self.user)

        self.assertEqual(provider.get_carts(self.user), [cart])
