"""
Signal handlers for the carts app.
"""

from django.conf import settings
from django.contrib.auth.signals import user_logged_in
from django.core.signals import request_started
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .cart_provider import get_cart_provider
from .checkout import get_checkout_order_id
from .models import Order
from .order_assignment import OrderAssignment, order_assigned
from .unifier import CartUnifier


@receiver(user_logged_in)
def combine_carts_on_login(sender, request, user, **kwargs):
    """
    Assign the anonymous session's carts to the user who just logged in,
    then consolidate all of their carts.
    """
    if request is None or not hasattr(request, 'session'):
        return

    cart_provider = get_cart_provider()
    anonymous_carts = cart_provider.get_carts(session=request.session)
    if anonymous_carts:
        OrderAssignment().assign_multiple(anonymous_carts, user, request=request)

    if getattr(settings, 'COMBINE_CARTS_ON_LOGIN', True):
        checkout_order_id = get_checkout_order_id(request)
        CartUnifier(cart_provider=cart_provider).combine_user_carts(user, checkout_order_id)


@receiver(order_assigned)
def combine_assigned_cart(sender, order, user, request=None, **kwargs):
    """Merge a freshly assigned cart with the user's main cart."""
    if not order.is_cart or not getattr(settings, 'COMBINE_CARTS_ON_ASSIGN', True):
        return

    CartUnifier().assign_cart(order, user, get_checkout_order_id(request))


@receiver(request_started)
@receiver(post_save, sender=Order)
@receiver(post_delete, sender=Order)
def clear_cart_provider_caches(sender, **kwargs):
    """Cart ids are memoised per request and only while no order changes."""
    get_cart_provider().clear_caches()
