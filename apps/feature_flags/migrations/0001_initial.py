import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("core", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="FeatureFlag",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "key",
                    models.CharField(
                        help_text="Identifier clients look the flag up by (e.g., 'usesLoyalty')",
                        max_length=100,
                        unique=True,
                        validators=[
                            django.core.validators.RegexValidator(
                                message="Flag keys start with a letter and contain only letters, digits, '_', '.' or '-'.",
                                regex="^[A-Za-z][A-Za-z0-9_.-]*$",
                            )
                        ],
                    ),
                ),
                (
                    "description",
                    models.TextField(blank=True, help_text="What the flag turns on"),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("ACTIVE", "Active"), ("INACTIVE", "Inactive")],
                        default="ACTIVE",
                        help_text="Only active flags are resolved",
                        max_length=20,
                    ),
                ),
                (
                    "default_value",
                    models.BooleanField(
                        default=False, help_text="Value used when no override applies"
                    ),
                ),
                (
                    "target_verticals",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="Business types the flag exists for (e.g., ['SALON']). Empty means every vertical.",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Feature Flag",
                "verbose_name_plural": "Feature Flags",
                "db_table": "feature_flags",
                "ordering": ["key"],
                "indexes": [
                    models.Index(fields=["status"], name="flag_status_idx"),
                    models.Index(fields=["updated_at"], name="flag_updated_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="FeatureFlagOverride",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "scope_type",
                    models.CharField(
                        choices=[
                            ("FRANCHISOR", "Franchisor"),
                            ("FRANCHISEE_BUSINESS", "Franchise"),
                            ("LOCATION", "Location"),
                            ("STATION", "Station"),
                        ],
                        help_text="Hierarchy level the override applies to",
                        max_length=32,
                    ),
                ),
                (
                    "scope_id",
                    models.CharField(
                        help_text="Id of the franchisor, franchise, location or station",
                        max_length=64,
                    ),
                ),
                (
                    "value",
                    models.BooleanField(help_text="Value the flag takes inside this scope"),
                ),
                (
                    "notes",
                    models.TextField(
                        blank=True,
                        help_text="Reason for override (e.g., pilot location, early access)",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="created_flag_overrides",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "flag",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="overrides",
                        to="feature_flags.featureflag",
                    ),
                ),
            ],
            options={
                "verbose_name": "Feature Flag Override",
                "verbose_name_plural": "Feature Flag Overrides",
                "db_table": "feature_flag_overrides",
                "indexes": [
                    models.Index(fields=["scope_type", "scope_id"], name="override_scope_idx"),
                    models.Index(fields=["updated_at"], name="override_updated_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("flag", "scope_type", "scope_id"),
                        name="unique_flag_override_per_scope",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="FeatureFlagHistory",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("flag_key", models.CharField(max_length=100)),
                (
                    "scope_type",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("FRANCHISOR", "Franchisor"),
                            ("FRANCHISEE_BUSINESS", "Franchise"),
                            ("LOCATION", "Location"),
                            ("STATION", "Station"),
                        ],
                        help_text="Scope of the override, blank for flag-level changes",
                        max_length=32,
                    ),
                ),
                ("scope_id", models.CharField(blank=True, max_length=64)),
                (
                    "action",
                    models.CharField(
                        choices=[
                            ("created", "Created"),
                            ("updated", "Updated"),
                            ("deleted", "Deleted"),
                            ("override_set", "Override Set"),
                            ("override_removed", "Override Removed"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "old_value",
                    models.JSONField(blank=True, help_text="Previous state before change", null=True),
                ),
                (
                    "new_value",
                    models.JSONField(blank=True, help_text="New state after change", null=True),
                ),
                ("timestamp", models.DateTimeField(auto_now_add=True)),
                (
                    "changed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="flag_changes",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Feature Flag History",
                "verbose_name_plural": "Feature Flag History",
                "db_table": "feature_flag_history",
                "ordering": ["-timestamp"],
                "indexes": [
                    models.Index(fields=["flag_key", "timestamp"], name="flag_history_key_idx"),
                    models.Index(fields=["action"], name="flag_history_action_idx"),
                ],
            },
        ),
    ]
