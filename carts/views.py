"""
Views for cart and checkout functionality.
"""

import logging

from django.contrib import messages
from django.contrib.auth import login
from django.contrib.auth.forms import AuthenticationForm
from django.http import Http404, JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_http_methods, require_POST

from .cart_manager import get_cart_manager
from .cart_provider import get_cart_provider
from .models import Order, ProductVariant
from .unifier import get_combine_setting

logger = logging.getLogger(__name__)


def _cart_owner(request):
    if request.user.is_authenticated:
        return {"user": request.user}

    # Ensure session exists
    if not request.session.session_key:
        request.session.create()
    return {"session": request.session}


def health_check(request):
    """
    Basic health check endpoint for monitoring.
    Returns 200 OK if application is running.
    """
    return JsonResponse({"status": "healthy", "service": "combine-carts"})


def cart_view(request):
    """
    Display the shopping carts of the current user or session.
    """
    carts = get_cart_provider().get_carts(**_cart_owner(request))
    context = {
        "carts": [(cart, cart.get_items()) for cart in carts],
    }
    return render(request, "carts/cart.html", context)


@require_POST
def add_to_cart_view(request):
    """
    Add a product variant to the cart.
    Expects POST data: variant_id, quantity (optional, defaults to 1)
    """
    variant_id = request.POST.get("variant_id")
    is_ajax = request.headers.get("X-Requested-With") == "XMLHttpRequest"

    if not variant_id:
        messages.error(request, "Please select a product variant.")
        if is_ajax:
            return JsonResponse({"success": False, "error": "Missing variant_id"}, status=400)
        return redirect("carts:cart")

    try:
        quantity = int(request.POST.get("quantity", 1))
        variant = ProductVariant.objects.select_related("product").filter(id=variant_id).first()
        if variant is None:
            raise ValueError("Product variant not found or inactive")

        owner = _cart_owner(request)
        cart_provider = get_cart_provider()
        order_type = request.POST.get("order_type", Order.DEFAULT_TYPE)
        cart = cart_provider.get_cart(order_type, **owner)
        if cart is None:
            cart = cart_provider.create_cart(order_type, **owner)

        item = get_cart_manager().add_entity(
            cart, variant, quantity, combine=get_combine_setting(variant.product)
        )
        logger.info(f"Added variant {variant_id} to cart {cart.pk} (qty: {quantity})")

        if is_ajax:
            return JsonResponse(
                {
                    "success": True,
                    "cart_id": cart.pk,
                    "item_id": item.pk,
                    "cart_count": str(cart.get_total_quantity()),
                }
            )

        messages.success(request, f"Added {variant} to your cart!")
        return redirect("carts:cart")

    except ValueError as e:
        messages.error(request, str(e))
        logger.error(f"Error adding to cart: {e}")

        if is_ajax:
            return JsonResponse({"success": False, "error": str(e)}, status=400)

        return redirect("carts:cart")


@require_http_methods(["GET", "POST"])
def checkout_view(request, order_id):
    """
    Checkout form for one cart.

    Anonymous customers can log in from here; their carts are then
    combined with the account's carts while this cart stays the one
    being checked out.
    """
    order = get_object_or_404(Order, pk=order_id, is_cart=True)
    if request.user.is_authenticated:
        if order.user_id != request.user.pk:
            raise Http404("Cart not found")
    elif order.user_id is not None or order.pk not in get_cart_provider().get_cart_ids(
        session=request.session
    ):
        raise Http404("Cart not found")

    form = None
    if not request.user.is_authenticated:
        form = AuthenticationForm(request, data=request.POST or None)
        if request.method == "POST" and form.is_valid():
            login(request, form.get_user())
            logger.info(f"User {request.user.pk} logged in at checkout of cart {order.pk}")
            return redirect("carts:checkout", order_id=order.pk)

    context = {
        "cart": order,
        "cart_items": order.get_items(),
        "form": form,
    }
    return render(request, "carts/checkout.html", context)
