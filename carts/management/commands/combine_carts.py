"""
Management command to combine duplicate carts.

Finds users owning more than one cart of the same order type and merges
those carts into the user's main cart, deleting the emptied ones.

Usage:
    python manage.py combine_carts
    python manage.py combine_carts --user=42
    python manage.py combine_carts --user=jane@example.com --dry-run
"""

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db.models import Count

from carts.models import Order
from carts.unifier import CartUnifier

User = get_user_model()


class Command(BaseCommand):
    help = "Combine users' carts into one main cart per order type"

    def add_arguments(self, parser):
        parser.add_argument(
            "--user",
            help="Only combine the carts of this user (id, username or email)",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show which carts would be combined without changing anything",
        )

    def handle(self, *args, **options):
        dry_run = options["dry_run"]

        if options["user"]:
            users = [self._get_user(options["user"])]
        else:
            duplicates = (
                Order.objects.filter(is_cart=True, user__isnull=False)
                .order_by()
                .values("user", "order_type")
                .annotate(carts=Count("id"))
                .filter(carts__gt=1)
            )
            user_ids = {row["user"] for row in duplicates}
            users = list(User.objects.filter(pk__in=user_ids).order_by("pk"))

        if not users:
            self.stdout.write(self.style.SUCCESS("No carts to combine."))
            return

        unifier = CartUnifier()
        unifier.cart_provider.clear_caches()
        combined = 0

        for user in users:
            carts = unifier.cart_provider.get_carts(user)
            if len(carts) < 2:
                continue

            if dry_run:
                cart_ids = ", ".join(f"#{cart.pk} ({cart.order_type})" for cart in carts)
                self.stdout.write(f"  - User {user.pk}: {cart_ids}")
            else:
                unifier.combine_user_carts(user)
            combined += 1

        if dry_run:
            self.stdout.write(
                self.style.WARNING(f"[DRY RUN] Would combine carts of {combined} user(s).")
            )
        else:
            self.stdout.write(self.style.SUCCESS(f"Combined carts of {combined} user(s)."))

    def _get_user(self, value):
        lookup = {"pk": value} if value.isdigit() else {"email": value}
        user = User.objects.filter(**lookup).first()
        if user is None and not value.isdigit():
            user = User.objects.filter(username=value).first()
        if user is None:
            raise CommandError(f"User '{value}' not found")
        return user
