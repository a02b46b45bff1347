from django.contrib import admin
from django.utils.html import format_html

from .models import (
    Order,
    OrderItem,
    Product,
    ProductDisplay,
    ProductType,
    ProductVariant,
)
from .unifier import VARIATIONS_COMPONENT


@admin.register(ProductType)
class ProductTypeAdmin(admin.ModelAdmin):
    list_display = ("name", "slug")
    prepopulated_fields = {"slug": ("name",)}


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "product_type", "is_active")
    list_filter = ("product_type", "is_active")


@admin.register(ProductVariant)
class ProductVariantAdmin(admin.ModelAdmin):
    list_display = ("product", "sku", "price", "is_active")
    search_fields = ("sku", "product__name")


@admin.register(ProductDisplay)
class ProductDisplayAdmin(admin.ModelAdmin):
    """
    Display configuration per product type.
    The "variations" component decides whether like items combine in carts.
    """

    list_display = ("product_type", "mode", "combine_badge")
    list_filter = ("mode",)

    def combine_badge(self, obj):
        """Show the effective combine setting."""
        component = obj.get_component(VARIATIONS_COMPONENT)
        if component is None:
            return format_html('<span style="color: #6c757d;">Combine (default)</span>')
        if (component.get("settings") or {}).get("combine"):
            return format_html('<span style="color: #28a745;">Combine</span>')
        return format_html('<span style="color: #dc3545;">Keep separate</span>')

    combine_badge.short_description = "Like items"


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ("title", "quantity", "unit_price", "purchased_entity_type", "purchased_entity_id")


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "order_type", "user", "state", "is_cart", "item_count", "created_at")
    list_filter = ("order_type", "state", "is_cart")
    search_fields = ("email", "user__username", "user__email")
    readonly_fields = ("created_at", "updated_at")
    inlines = [OrderItemInline]

    def item_count(self, obj):
        return obj.items.count()

    item_count.short_description = "Items"
