"""
Cart manager: adds, updates and removes line items of a cart.
"""

import logging
from decimal import Decimal

from django.contrib.contenttypes.models import ContentType
from django.db import transaction

from .models import OrderItem, ProductVariant

logger = logging.getLogger(__name__)


class OrderItemMatcher:
    """Finds an existing line item equivalent to a new one."""

    def match(self, item, items):
        """
        Return the first of `items` that references the same purchased
        entity as `item`, or None.

        Items whose purchased entity no longer resolves never match.
        """
        if item.get_purchased_entity() is None:
            return None

        for existing in items:
            if existing.pk is not None and existing.pk == item.pk:
                continue
            if (
                existing.purchased_entity_type_id == item.purchased_entity_type_id
                and existing.purchased_entity_id == item.purchased_entity_id
                and existing.get_purchased_entity() is not None
            ):
                return existing
        return None


class CartManager:
    def __init__(self, matcher=None):
        self.matcher = matcher or OrderItemMatcher()

    def create_order_item(self, purchased_entity, quantity=1):
        """
        Build an unsaved line item for a product variant.

        Raises:
            ValueError: if the variant is inactive or the quantity is not positive
        """
        quantity = Decimal(quantity)
        if quantity <= 0:
            raise ValueError("Quantity must be a positive number")
        if not isinstance(purchased_entity, ProductVariant):
            raise ValueError("Only product variants can be added to a cart")
        if not purchased_entity.is_active or not purchased_entity.product.is_active:
            raise ValueError("Product variant not found or inactive")

        return OrderItem(
            purchased_entity_type=ContentType.objects.get_for_model(purchased_entity),
            purchased_entity_id=purchased_entity.pk,
            title=str(purchased_entity),
            quantity=quantity,
            unit_price=purchased_entity.price,
        )

    def add_entity(self, cart, purchased_entity, quantity=1, combine=True):
        """
        Add a purchased entity to the cart.

        Returns:
            OrderItem: The line holding the entity after the addition
        """
        item = self.create_order_item(purchased_entity, quantity)
        return self.add_order_item(cart, item, combine=combine)

    def add_order_item(self, cart, item, combine=True, save_cart=True):
        """
        Add a line item to the cart.

        With combine, an equivalent line already in the cart absorbs the
        item's quantity and the item itself is discarded. Otherwise the item
        becomes a distinct line of the cart.

        Returns:
            OrderItem: The surviving line
        """
        matching = None
        if combine:
            matching = self.matcher.match(item, cart.get_items())

        with transaction.atomic():
            if matching is not None:
                matching.quantity = matching.quantity + item.quantity
                matching.save()
                if item.pk is not None:
                    item.delete()
                logger.debug(f"Combined item into line {matching.pk} of cart {cart.pk}")
                result = matching
            else:
                item.order = cart
                item.save()
                result = item

            if save_cart:
                cart.save()

        return result

    def update_order_item(self, cart, item, quantity, save_cart=True):
        """
        Set the quantity of a line item. A quantity <= 0 removes it.

        Returns:
            OrderItem or None if removed
        """
        quantity = Decimal(quantity)
        if quantity <= 0:
            self.remove_order_item(cart, item, save_cart=save_cart)
            return None

        item.quantity = quantity
        item.save()
        if save_cart:
            cart.save()
        return item

    def remove_order_item(self, cart, item, save_cart=True):
        cart.remove_item(item)
        item.delete()
        if save_cart:
            cart.save()

    def empty_cart(self, cart, save_cart=True):
        """Remove all items from a cart."""
        cart.items.all().delete()
        if save_cart:
            cart.save()


_cart_manager = None


def get_cart_manager():
    """Return the process-wide cart manager."""
    global _cart_manager
    if _cart_manager is None:
        _cart_manager = CartManager()
    return _cart_manager
