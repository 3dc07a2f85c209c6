from __future__ import annotations

from datetime import datetime, timezone

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from modules.invites.models import Invite
from modules.products.models import Product, ProductSize

KRATOM_DESCRIPTION = (
    "Premium kratom leaf tea. Available in Red, Green, or White strains. "
    "Mix & match strains available."
)
FLAVORED_DESCRIPTION = (
    "Premium kratom leaf tea with flavoring. Available in Red, Green, or "
    "White strains. Mix & match strains available."
)
KAVA_DESCRIPTION = "Traditional kava root beverage"

CATALOG = [
    ("Kratom Tea - Unflavored (Red/Green/White)", ProductSize.HALF_GALLON, KRATOM_DESCRIPTION, 2500),
    ("Kratom Tea - Unflavored (Red/Green/White)", ProductSize.GALLON, KRATOM_DESCRIPTION, 4000),
    ("Kratom Tea - Flavored (Red/Green/White)", ProductSize.HALF_GALLON, FLAVORED_DESCRIPTION, 3000),
    ("Kratom Tea - Flavored (Red/Green/White)", ProductSize.GALLON, FLAVORED_DESCRIPTION, 5000),
    ("Kava", ProductSize.HALF_GALLON, KAVA_DESCRIPTION, 3000),
    ("Kava", ProductSize.GALLON, KAVA_DESCRIPTION, 5000),
]

WELCOME_INVITE = {
    "code": "WELCOME2024",
    "max_uses": 100,
    "expires_at": datetime(2030, 12, 31, tzinfo=timezone.utc),
}


class Command(BaseCommand):
    help = "Seed database with the drink menu, a staff account and the welcome invite."

    def add_arguments(self, parser):
        parser.add_argument(
            "--staff-password",
            default="manager123",
            help="Password for the 'manager' staff account.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users(options["staff_password"])
        products = self._seed_products()
        invite_created = self._seed_invite()

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"products={len(products)}, "
                f"invites={int(invite_created)}"
            )
        )

    def _seed_users(self, staff_password: str) -> int:
        User = get_user_model()
        created = 0
        if not User.objects.filter(username="manager").exists():
            User.objects.create_user(
                "manager", password=staff_password, is_staff=True
            )
            created += 1
        return created

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        for sort_order, (name, size, description, price_cents) in enumerate(
            CATALOG, start=1
        ):
            product, _ = Product.objects.update_or_create(
                name=name,
                size=size,
                defaults={
                    "description": description,
                    "price_cents": price_cents,
                    "sort_order": sort_order,
                    "active": True,
                },
            )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_invite(self) -> bool:
        _, created = Invite.objects.get_or_create(
            code=WELCOME_INVITE["code"],
            defaults={
                "max_uses": WELCOME_INVITE["max_uses"],
                "expires_at": WELCOME_INVITE["expires_at"],
            },
        )
        return created
