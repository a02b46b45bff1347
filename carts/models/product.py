from django.db import models

__all__ = ['ProductType', 'Product', 'ProductVariant', 'ProductDisplay']


class ProductType(models.Model):
    """
    Classifies products (e.g. "Apparel", "Gift Card").

    Display configuration, including whether identical line items are
    combined in a cart, is attached per product type.
    """
    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(unique=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name


class Product(models.Model):
    """
    A core product concept (e.g., "Classic T-Shirt"), regardless of variants.
    """
    name = models.CharField(max_length=255)
    slug = models.SlugField(unique=True, db_index=True)
    product_type = models.ForeignKey(
        ProductType,
        on_delete=models.PROTECT,
        related_name='products'
    )
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name


class ProductVariant(models.Model):
    """
    A purchasable configuration of a product.

    Variants are the only purchased entities that take part in the
    combination policy lookup.
    """
    product = models.ForeignKey(
        Product,
        related_name='variants',
        on_delete=models.CASCADE
    )
    sku = models.CharField(
        max_length=50,
        blank=True,
        unique=True,
        null=True,
        help_text='Stock Keeping Unit - auto-generated if blank'
    )
    title = models.CharField(max_length=255, blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        if self.title:
            return f'{self.product.name} - {self.title}'
        return self.product.name

    def get_product(self):
        return self.product

    def save(self, *args, **kwargs):
        # Auto-generate SKU if not provided
        if not self.sku:
            parts = [self.product.slug[:15].upper().replace('-', '')]
            if self.title:
                parts.append(self.title[:8].upper().replace(' ', ''))
            base = '-'.join(parts)

            sku = base
            suffix = 2
            while ProductVariant.objects.filter(sku=sku).exclude(pk=self.pk).exists():
                sku = f'{base}-{suffix}'
                suffix += 1
            self.sku = sku
        super().save(*args, **kwargs)


class ProductDisplay(models.Model):
    """
    Display configuration for products of one type.

    Fields:
        product_type: the product type this display belongs to
        mode: the view mode; carts only read the "default" one
        components: mapping of component name to its configuration,
            e.g. {"variations": {"settings": {"combine": false}}}
    """
    DEFAULT_MODE = 'default'

    product_type = models.ForeignKey(
        ProductType,
        on_delete=models.CASCADE,
        related_name='displays'
    )
    mode = models.CharField(max_length=32, default=DEFAULT_MODE)
    components = models.JSONField(default=dict, blank=True)

    class Meta:
        unique_together = ['product_type', 'mode']

    def __str__(self):
        return f'{self.product_type}.{self.mode}'

    @classmethod
    def load(cls, product_type, mode=DEFAULT_MODE):
        """Return the display for a product type, or None if it has none."""
        return cls.objects.filter(product_type=product_type, mode=mode).first()

    def get_component(self, name):
        """Return a component's configuration, or None when it is hidden."""
        component = (self.components or {}).get(name)
        return component or None

    def set_component(self, name, settings=None):
        self.components = dict(self.components or {})
        self.components[name] = {'settings': dict(settings or {})}
        return self

    def remove_component(self, name):
        self.components = {
            key: value for key, value in (self.components or {}).items()
            if key != name
        }
        return self
