"""
Anonymous cart tracking.

Carts created before login are remembered in the session data rather than
by session key, since Django cycles the session key when a user logs in.
"""

SESSION_KEY = 'carts'


class CartSession:
    """Stores the ids of the carts owned by an anonymous session."""

    def __init__(self, session):
        self.session = session

    def get_cart_ids(self):
        return list(self.session.get(SESSION_KEY, []))

    def add_cart_id(self, cart_id):
        ids = self.get_cart_ids()
        if cart_id not in ids:
            ids.append(cart_id)
            self._store(ids)

    def has_cart_id(self, cart_id):
        return cart_id in self.get_cart_ids()

    def delete_cart_id(self, cart_id):
        ids = self.get_cart_ids()
        if cart_id in ids:
            ids.remove(cart_id)
            self._store(ids)

    def _store(self, ids):
        if ids:
            self.session[SESSION_KEY] = ids
        else:
            self.session.pop(SESSION_KEY, None)
        self.session.modified = True
