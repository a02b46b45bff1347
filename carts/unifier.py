"""
Cart unification.

Merges carts of the same order type belonging to one user, e.g. the cart a
customer filled anonymously with the cart kept on their account.
"""

import logging

from .cart_manager import get_cart_manager
from .cart_provider import get_cart_provider
from .models import ProductDisplay, ProductVariant

logger = logging.getLogger(__name__)

VARIATIONS_COMPONENT = 'variations'


def get_combine_setting(product):
    """
    Return whether identical line items of this product are combined.

    Read from the "variations" component of the product type's default
    display. Without a display or without the component, items combine.
    """
    display = ProductDisplay.load(product.product_type_id)
    if display is None:
        return True

    component = display.get_component(VARIATIONS_COMPONENT)
    if component is None:
        return True
    return bool((component.get('settings') or {}).get('combine'))


def resolve_direction(cart_a, cart_b, checkout_order_id=None):
    """
    Decide which of two carts survives a merge.

    Returns (destination, source). cart_a is the destination unless cart_b
    is the cart being checked out, which must never be emptied.
    """
    if checkout_order_id is not None and cart_b.pk == checkout_order_id:
        return cart_b, cart_a
    return cart_a, cart_b


class CartUnifier:
    """
    Combines a user's carts, one main cart per order type.

    Args:
        cart_provider: Loads the carts of a user (defaults to the shared provider)
        cart_manager: Adds line items to carts (defaults to the shared manager)
    """

    def __init__(self, cart_provider=None, cart_manager=None):
        self.cart_provider = cart_provider or get_cart_provider()
        self.cart_manager = cart_manager or get_cart_manager()

    def get_main_carts(self, user, checkout_order_id=None):
        """
        Return the main carts of a user, one per order type.

        The provider loads carts newest first and later carts overwrite
        earlier ones, so the oldest cart of each type is its main cart. A
        cart of the user that is being checked out takes precedence.

        Returns:
            dict: order type -> cart, or None if the user has no cart
        """
        # Carts may have been created or assigned earlier in this request.
        self.cart_provider.clear_caches()
        carts = self.cart_provider.get_carts(user)
        if not carts:
            return None

        carts_per_type = {}
        for cart in carts:
            carts_per_type[cart.bundle()] = cart

        checkout_cart = self.get_cart_requested_for_checkout(carts, checkout_order_id)
        if checkout_cart is not None:
            carts_per_type[checkout_cart.bundle()] = checkout_cart

        return carts_per_type

    def assign_cart(self, cart, user, checkout_order_id=None):
        """
        Move the items of a newly assigned cart into the user's main cart.

        If the assigned cart is being checked out, the main cart is merged
        into it instead. Neither cart is deleted.
        """
        requested_for_checkout = self.is_cart_requested_for_checkout(cart, checkout_order_id)
        # A cart at checkout would be its own main cart; pull in the oldest one.
        main_carts = self.get_main_carts(
            user, None if requested_for_checkout else checkout_order_id
        )
        if not main_carts:
            return

        for main_cart in main_carts.values():
            if cart.bundle() != main_cart.bundle():
                continue
            if requested_for_checkout:
                self.combine_carts(cart, main_cart, False, checkout_order_id)
            else:
                self.combine_carts(main_cart, cart, False, checkout_order_id)

    def combine_user_carts(self, user, checkout_order_id=None):
        """Combine all of a user's carts into their main carts."""
        main_carts = self.get_main_carts(user, checkout_order_id)
        if not main_carts:
            return

        for main_cart in main_carts.values():
            for cart in self.cart_provider.get_carts(user):
                if cart.bundle() != main_cart.bundle():
                    continue
                self.combine_carts(main_cart, cart, True, checkout_order_id)

    def combine_carts(self, main_cart, other_cart, delete=False, checkout_order_id=None):
        """
        Combine another cart into the main cart.

        Args:
            main_cart: The cart receiving the items
            other_cart: The cart giving up its items
            delete: True to delete the other cart when finished, False to
                save it as empty
            checkout_order_id: Id of the order being checked out, if any.
                That cart always ends up as the destination.
        """
        if main_cart.pk == other_cart.pk:
            return

        main_cart, other_cart = resolve_direction(main_cart, other_cart, checkout_order_id)

        items = other_cart.get_items()
        for item in items:
            other_cart.remove_item(item)
            item.order = main_cart
            combine = self.should_combine_item(item)
            self.cart_manager.add_order_item(main_cart, item, combine, save_cart=False)

        main_cart.save()

        logger.info(
            f"Moved {len(items)} item(s) from cart {other_cart.pk} into cart {main_cart.pk}"
        )

        if delete:
            other_cart.delete()
        else:
            other_cart.save()

    def should_combine_item(self, item):
        """
        Determine if a line item should be combined with like items.

        Items whose purchased entity is not a product variant anymore
        (e.g. it was deleted) are never combined.
        """
        purchased_entity = item.get_purchased_entity()
        if not isinstance(purchased_entity, ProductVariant):
            return False

        return get_combine_setting(purchased_entity.get_product())

    def get_cart_requested_for_checkout(self, carts, checkout_order_id=None):
        """Return the cart among `carts` that is being checked out, or None."""
        if checkout_order_id is None:
            return None
        for cart in carts:
            if self.is_cart_requested_for_checkout(cart, checkout_order_id):
                return cart
        return None

    def is_cart_requested_for_checkout(self, cart, checkout_order_id=None):
        return checkout_order_id is not None and cart.pk == checkout_order_id
