"""
Management command to print the resolved feature flags for a context.

Usage:
    python manage.py resolve_feature_flags --station <id>
    python manage.py resolve_feature_flags --location <id>
    python manage.py resolve_feature_flags --business-type SALON --franchisor <id>
"""

import json
import uuid

from django.core.management.base import BaseCommand, CommandError

from apps.core.models import Location, Station
from apps.feature_flags.context import ResolutionContext
from apps.feature_flags.services import compute_feature_flags
from apps.feature_flags.store import FlagStore
from apps.feature_flags.version import VersionOracle


class Command(BaseCommand):
    help = "Print the feature flag envelope a station or location would receive"

    def add_arguments(self, parser):
        parser.add_argument("--station", help="Station id")
        parser.add_argument("--location", help="Location id")
        parser.add_argument("--business-type", help="Business type for a hand-built context")
        parser.add_argument("--franchisor", help="Franchisor id for a hand-built context")
        parser.add_argument("--franchise", help="Franchise id for a hand-built context")
        parser.add_argument(
            "--database",
            default="default",
            help="Database alias to read flags from (default: default)",
        )

    def handle(self, *args, **options):
        context = self.build_context(options)
        using = options["database"]

        envelope = compute_feature_flags(
            context,
            store=FlagStore(using=using),
            oracle=VersionOracle(using=using),
        )
        self.stdout.write(json.dumps(envelope, indent=2, sort_keys=True))

    def build_context(self, options):
        using = options["database"]

        if options["station"]:
            station = (
                Station.objects.using(using)
                .select_related("location__franchise")
                .filter(pk=self._parse_id(options["station"]))
                .first()
            )
            if station is None:
                raise CommandError(f"Station not found: {options['station']}")
            return ResolutionContext.for_station(station)

        if options["location"]:
            location = (
                Location.objects.using(using)
                .select_related("franchise")
                .filter(pk=self._parse_id(options["location"]))
                .first()
            )
            if location is None:
                raise CommandError(f"Location not found: {options['location']}")
            return ResolutionContext.for_location(location)

        if options["business_type"]:
            return ResolutionContext(
                business_type=options["business_type"],
                franchise_id=options["franchise"],
                franchisor_id=options["franchisor"],
            )

        raise CommandError("Provide --station, --location or --business-type")

    @staticmethod
    def _parse_id(raw_id):
        try:
            return uuid.UUID(raw_id)
        except ValueError:
            raise CommandError(f"Invalid id: {raw_id}") from None
