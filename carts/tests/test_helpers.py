"""
Test helpers and utilities.
"""
from decimal import Decimal

from django.contrib.auth import get_user_model

from carts.models import Product, ProductDisplay, ProductType, ProductVariant

User = get_user_model()


def create_test_user(email='test@example.com', password='testpass123', **kwargs):
    """
    Helper to create a test user with email.
    Django's default User model requires username, so we use email as username.
    """
    username = kwargs.pop('username', email.split('@')[0])
    return User.objects.create_user(
        username=username,
        email=email,
        password=password,
        **kwargs
    )


def create_product_type(name='Apparel', slug=None):
    return ProductType.objects.create(name=name, slug=slug or name.lower().replace(' ', '-'))


def create_variant(product_type, name='Test T-Shirt', slug=None, price='29.99', **kwargs):
    """Create a product with a single active variant."""
    product = Product.objects.create(
        name=name,
        slug=slug or name.lower().replace(' ', '-'),
        product_type=product_type,
    )
    return ProductVariant.objects.create(product=product, price=Decimal(price), **kwargs)


def set_combine(product_type, combine):
    """Configure whether like items of a product type combine in carts."""
    display, _ = ProductDisplay.objects.get_or_create(product_type=product_type)
    display.set_component('variations', {'combine': combine})
    display.save()
    return display
