from django.urls import path

from . import views

app_name = "carts"

urlpatterns = [
    # Health checks (for monitoring)
    path("health/", views.health_check, name="health"),
    # Cart management
    path("cart/", views.cart_view, name="cart"),
    path("cart/add/", views.add_to_cart_view, name="add_to_cart"),
    # Checkout
    path("checkout/<int:order_id>/", views.checkout_view, name="checkout"),
]
