"""
Resolves which cart, if any, the current request is checking out.
"""

CHECKOUT_ROUTE = 'carts:checkout'
ORDER_PARAMETER = 'order_id'


def get_checkout_order_id(request):
    """
    Return the id of the order shown by the checkout form, or None.

    Only requests routed to the checkout form that carry an order id count.
    """
    match = getattr(request, 'resolver_match', None) if request is not None else None
    if match is None or match.view_name != CHECKOUT_ROUTE:
        return None

    order_id = match.kwargs.get(ORDER_PARAMETER)
    if order_id is None:
        return None
    return int(order_id)
