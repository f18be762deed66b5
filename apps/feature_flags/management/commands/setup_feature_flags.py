"""
Management command to set up the platform's default feature flags.
"""

from django.core.management.base import BaseCommand

from apps.core.models import Location
from apps.feature_flags.models import FeatureFlag

SALON = Location.SALON
RETAIL = Location.RETAIL
RESTAURANT = Location.RESTAURANT
HYBRID = Location.HYBRID

DEFAULT_FLAGS = [
    {
        "key": "usesServices",
        "description": "Service menu for appointment-based businesses",
        "default_value": True,
        "target_verticals": [SALON, HYBRID],
    },
    {
        "key": "usesAppointments",
        "description": "Appointment booking and calendar",
        "default_value": True,
        "target_verticals": [SALON, HYBRID],
    },
    {
        "key": "usesScheduling",
        "description": "Staff scheduling",
        "default_value": False,
        "target_verticals": [SALON, HYBRID, RESTAURANT],
    },
    {
        "key": "usesCommissions",
        "description": "Commission tracking for service providers",
        "default_value": False,
        "target_verticals": [SALON, HYBRID],
    },
    {
        "key": "usesInventory",
        "description": "Product and stock management",
        "default_value": True,
        "target_verticals": [],
    },
    {
        "key": "usesRetailProducts",
        "description": "Sell retail products at the register",
        "default_value": True,
        "target_verticals": [RETAIL, HYBRID, SALON],
    },
    {
        "key": "usesVirtualKeypad",
        "description": "On-screen keypad for open-price items",
        "default_value": False,
        "target_verticals": [RETAIL, RESTAURANT],
    },
    {
        "key": "usesTipping",
        "description": "Tip prompts on card payments",
        "default_value": False,
        "target_verticals": [SALON, RESTAURANT, HYBRID],
    },
    {
        "key": "usesLoyalty",
        "description": "Loyalty points program",
        "default_value": False,
        "target_verticals": [],
    },
    {
        "key": "usesGiftCards",
        "description": "Gift card sales and redemption",
        "default_value": False,
        "target_verticals": [],
    },
    {
        "key": "usesMemberships",
        "description": "Recurring memberships and packages",
        "default_value": False,
        "target_verticals": [SALON, HYBRID],
    },
    {
        "key": "usesEmailMarketing",
        "description": "Email campaigns",
        "default_value": False,
        "target_verticals": [],
    },
    {
        "key": "usesSMSMarketing",
        "description": "SMS campaigns",
        "default_value": False,
        "target_verticals": [],
    },
    {
        "key": "usesReviewManagement",
        "description": "Review requests and reputation management",
        "default_value": False,
        "target_verticals": [],
    },
    {
        "key": "usesTimeTracking",
        "description": "Employee clock-in and time tracking",
        "default_value": True,
        "target_verticals": [],
    },
    {
        "key": "usesDualPricing",
        "description": "Separate cash and card prices",
        "default_value": False,
        "target_verticals": [],
    },
]


class Command(BaseCommand):
    help = "Set up the default feature flags for the platform"

    def handle(self, *args, **options):
        self.stdout.write("Setting up feature flags...")

        created_count = 0
        for flag_data in DEFAULT_FLAGS:
            flag, created = FeatureFlag.objects.get_or_create(
                key=flag_data["key"],
                defaults={
                    "description": flag_data["description"],
                    "default_value": flag_data["default_value"],
                    "target_verticals": sorted(flag_data["target_verticals"]),
                },
            )
            if created:
                created_count += 1
                self.stdout.write(self.style.SUCCESS(f"✓ Created flag: {flag.key}"))
                continue

            # Existing rows keep their operator-set value and status
            verticals = sorted(flag_data["target_verticals"])
            if flag.description != flag_data["description"] or flag.target_verticals != verticals:
                flag.description = flag_data["description"]
                flag.target_verticals = verticals
                flag.save()
            self.stdout.write(self.style.WARNING(f"⚠ Flag already exists: {flag.key}"))

        self.stdout.write(
            self.style.SUCCESS(
                f"\nFeature flags set up: {created_count} created, "
                f"{len(DEFAULT_FLAGS) - created_count} already present"
            )
        )
