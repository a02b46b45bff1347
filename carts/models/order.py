from decimal import Decimal

from django.conf import settings
from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.core.validators import MinValueValidator
from django.db import models

__all__ = ['OrderState', 'Order', 'OrderItem']


class OrderState(models.TextChoices):
    DRAFT = 'draft', 'Draft'
    COMPLETED = 'completed', 'Completed'
    CANCELED = 'canceled', 'Canceled'


class Order(models.Model):
    """
    An order; a draft order flagged with is_cart is a shopping cart.

    Fields:
        order_type: the bundle tag; carts of different types are never merged
        user: owner of the cart, NULL while it belongs to an anonymous session
        is_cart: a live cart that has not been placed as an order yet
        created_at: when the cart was first created; decides the main cart
        updated_at: when the cart was last updated
    """
    DEFAULT_TYPE = 'default'

    order_type = models.CharField(max_length=32, default=DEFAULT_TYPE, db_index=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name='orders'
    )
    email = models.EmailField(blank=True)
    state = models.CharField(
        max_length=20,
        choices=OrderState.choices,
        default=OrderState.DRAFT
    )
    is_cart = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f'Order #{self.pk} ({self.order_type})'

    def bundle(self):
        return self.order_type

    def get_items(self):
        """Return the order's line items in the order they were added."""
        if self.pk is None:
            return []
        return list(self.items.order_by('created_at', 'id'))

    def has_items(self):
        return self.pk is not None and self.items.exists()

    def remove_item(self, item):
        """
        Detach a line item from this order.

        Only the in-memory reference is cleared; whoever receives the item
        is responsible for saving or deleting it.
        """
        if item.order_id == self.pk:
            item.order = None
        return self

    def get_total_quantity(self):
        return sum((item.quantity for item in self.get_items()), Decimal('0'))


class OrderItem(models.Model):
    """
    A line item: a quantity of one purchased entity inside an order.

    The purchased entity is a generic relation so that any purchasable
    model can be referenced; it resolves to None once the referenced
    object has been deleted.
    """
    order = models.ForeignKey(
        Order,
        null=True,
        blank=True,
        related_name='items',
        on_delete=models.CASCADE  # delete line items if the order is deleted
    )
    purchased_entity_type = models.ForeignKey(
        ContentType,
        null=True,
        blank=True,
        on_delete=models.SET_NULL
    )
    purchased_entity_id = models.PositiveIntegerField(null=True, blank=True)
    purchased_entity = GenericForeignKey('purchased_entity_type', 'purchased_entity_id')

    title = models.CharField(max_length=255, blank=True)
    quantity = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('1'),
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    unit_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True
    )
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.title or f'Order item #{self.pk}'

    def get_purchased_entity(self):
        """Return the purchased entity, or None if it no longer resolves."""
        if self.purchased_entity_type_id is None or self.purchased_entity_id is None:
            return None
        return self.purchased_entity

    def get_order(self):
        return self.order

    def get_quantity(self):
        return self.quantity

    def set_quantity(self, quantity):
        self.quantity = Decimal(quantity)
        return self

    def get_total_price(self):
        if self.unit_price is None:
            return None
        return self.unit_price * self.quantity
