"""
Cart provider: creates carts and loads the carts of a user or anonymous session.
"""

import logging

from .cart_session import CartSession
from .models import Order, OrderState

logger = logging.getLogger(__name__)


def _is_authenticated(user):
    return user is not None and getattr(user, 'is_authenticated', False)


class CartProvider:
    """
    Loads carts for users and anonymous sessions.

    Cart ids of authenticated users are memoised per provider. Callers that
    need to see carts created or assigned earlier in the same request must
    call clear_caches() before get_carts(); the provider also clears itself
    whenever an order is saved or deleted (see signals).
    """

    def __init__(self):
        self._cart_ids = {}

    def create_cart(self, order_type=Order.DEFAULT_TYPE, user=None, session=None):
        """
        Create a new cart for a user or an anonymous session.

        Args:
            order_type: The order type (bundle) of the cart
            user: Authenticated user owning the cart (optional)
            session: Session of the anonymous owner (required without user)

        Returns:
            Order: The new cart
        """
        if _is_authenticated(user):
            cart = Order.objects.create(
                order_type=order_type,
                user=user,
                email=user.email or '',
                is_cart=True,
            )
        elif session is not None:
            cart = Order.objects.create(order_type=order_type, is_cart=True)
            CartSession(session).add_cart_id(cart.pk)
        else:
            raise ValueError("Must provide either user or session")

        self.clear_caches()
        logger.info(f"Created {order_type} cart {cart.pk}")
        return cart

    def get_cart(self, order_type=Order.DEFAULT_TYPE, user=None, session=None):
        """Return the newest cart of the given type, or None."""
        for cart in self.get_carts(user=user, session=session):
            if cart.bundle() == order_type:
                return cart
        return None

    def get_carts(self, user=None, session=None):
        """
        Return the active carts of a user or anonymous session.

        Carts are returned newest first.
        """
        ids = self.get_cart_ids(user=user, session=session)
        if not ids:
            return []
        carts = Order.objects.in_bulk(ids)
        return [carts[cart_id] for cart_id in ids if cart_id in carts]

    def get_cart_ids(self, user=None, session=None):
        if _is_authenticated(user):
            if user.pk not in self._cart_ids:
                self._cart_ids[user.pk] = list(
                    Order.objects.filter(user=user, is_cart=True)
                    .order_by('-created_at', '-id')
                    .values_list('id', flat=True)
                )
            return list(self._cart_ids[user.pk])

        if session is None:
            return []

        tracked = CartSession(session).get_cart_ids()
        if not tracked:
            return []
        return list(
            Order.objects.filter(id__in=tracked, user__isnull=True, is_cart=True)
            .order_by('-created_at', '-id')
            .values_list('id', flat=True)
        )

    def finalize_cart(self, cart, save_cart=True):
        """Turn a cart into a placed order."""
        cart.is_cart = False
        cart.state = OrderState.COMPLETED
        if save_cart:
            cart.save()
        self.clear_caches()
        return cart

    def clear_caches(self):
        self._cart_ids = {}


_cart_provider = None


def get_cart_provider():
    """Return the process-wide cart provider."""
    global _cart_provider
    if _cart_provider is None:
        _cart_provider = CartProvider()
    return _cart_provider
