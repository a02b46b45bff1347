"""
Transfers ownership of orders (usually anonymous carts) to a user.
"""

import logging

from django.dispatch import Signal

from .cart_session import CartSession

logger = logging.getLogger(__name__)

# Sent after an order has been assigned to a user.
# Arguments: order, user, request (may be None)
order_assigned = Signal()


class OrderAssignment:
    def assign(self, order, user, request=None):
        """
        Assign an order to a user and notify listeners.

        Args:
            order: The order to assign
            user: The new owner
            request: The current request; its session stops tracking the order
        """
        order.user = user
        order.email = user.email or order.email
        order.save()

        if request is not None and hasattr(request, 'session'):
            CartSession(request.session).delete_cart_id(order.pk)

        logger.info(f"Assigned order {order.pk} to user {user.pk}")
        order_assigned.send(sender=order.__class__, order=order, user=user, request=request)

    def assign_multiple(self, orders, user, request=None):
        for order in orders:
            self.assign(order, user, request=request)
