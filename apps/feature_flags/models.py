"""
Feature flag models.

Flags are created and edited by platform operators. Each flag has a default
value, optional vertical targeting and any number of scoped overrides; the
resolution engine only ever reads these tables.
"""

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import RegexValidator
from django.db import models

from apps.core.models import Franchise, Franchisor, Location, Station

from .constants import FlagStatus, ScopeType

# Closed mapping from override scope to the entity its scope_id points at
SCOPE_MODELS = {
    ScopeType.FRANCHISOR: Franchisor,
    ScopeType.FRANCHISEE_BUSINESS: Franchise,
    ScopeType.LOCATION: Location,
    ScopeType.STATION: Station,
}

flag_key_validator = RegexValidator(
    regex=r"^[A-Za-z][A-Za-z0-9_.-]*$",
    message="Flag keys start with a letter and contain only letters, digits, '_', '.' or '-'.",
)


class FeatureFlag(models.Model):
    """
    A named boolean capability switch with a default value.
    """

    key = models.CharField(
        max_length=100,
        unique=True,
        validators=[flag_key_validator],
        help_text="Identifier clients look the flag up by (e.g., 'usesLoyalty')",
    )

    description = models.TextField(blank=True, help_text="What the flag turns on")

    status = models.CharField(
        max_length=20,
        choices=FlagStatus.choices,
        default=FlagStatus.ACTIVE,
        help_text="Only active flags are resolved",
    )

    default_value = models.BooleanField(
        default=False,
        help_text="Value used when no override applies",
    )

    target_verticals = models.JSONField(
        default=list,
        blank=True,
        help_text=(
            "Business types the flag exists for (e.g., ['SALON']). "
            "Empty means every vertical."
        ),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "feature_flags"
        ordering = ["key"]
        indexes = [
            models.Index(fields=["status"], name="flag_status_idx"),
            models.Index(fields=["updated_at"], name="flag_updated_idx"),
        ]
        verbose_name = "Feature Flag"
        verbose_name_plural = "Feature Flags"

    def __str__(self):
        return f"{self.key} ({self.status})"

    def clean(self):
        super().clean()
        verticals = self.target_verticals
        if verticals in (None, ""):
            self.target_verticals = []
            return
        if not isinstance(verticals, list) or not all(isinstance(v, str) for v in verticals):
            raise ValidationError({"target_verticals": "Must be a list of business types."})

        known = {choice for choice, _ in Location.BUSINESS_TYPE_CHOICES}
        normalized = [v.strip().upper() for v in verticals]
        unknown = sorted(set(normalized) - known)
        if unknown:
            raise ValidationError(
                {"target_verticals": f"Unknown business types: {', '.join(unknown)}"}
            )
        self.target_verticals = sorted(set(normalized))

    def snapshot(self):
        """JSON-friendly state used by the change history."""
        return {
            "status": self.status,
            "default_value": self.default_value,
            "target_verticals": list(self.target_verticals or []),
        }


class FeatureFlagOverride(models.Model):
    """
    A scoped exception to a flag's default, attached to one node of the
    franchise hierarchy.
    """

    flag = models.ForeignKey(
        FeatureFlag,
        on_delete=models.CASCADE,
        related_name="overrides",
    )

    scope_type = models.CharField(
        max_length=32,
        choices=ScopeType.choices,
        help_text="Hierarchy level the override applies to",
    )

    scope_id = models.CharField(
        max_length=64,
        help_text="Id of the franchisor, franchise, location or station",
    )

    value = models.BooleanField(help_text="Value the flag takes inside this scope")

    notes = models.TextField(
        blank=True,
        help_text="Reason for override (e.g., pilot location, early access)",
    )

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_flag_overrides",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "feature_flag_overrides"
        constraints = [
            models.UniqueConstraint(
                fields=["flag", "scope_type", "scope_id"],
                name="unique_flag_override_per_scope",
            ),
        ]
        indexes = [
            models.Index(fields=["scope_type", "scope_id"], name="override_scope_idx"),
            models.Index(fields=["updated_at"], name="override_updated_idx"),
        ]
        verbose_name = "Feature Flag Override"
        verbose_name_plural = "Feature Flag Overrides"

    def __str__(self):
        return f"{self.flag.key} @ {self.scope_type}:{self.scope_id} = {self.value}"

    def clean(self):
        """
        Ensure scope_id names an existing entity of the scope type and store
        it in the canonical form contexts use.
        """
        super().clean()
        model = SCOPE_MODELS.get(self.scope_type)
        if model is None:
            raise ValidationError({"scope_type": f"Unknown scope type: {self.scope_type}"})

        scope_id = (self.scope_id or "").strip()
        try:
            scope_uuid = uuid.UUID(scope_id)
        except ValueError:
            raise ValidationError({"scope_id": f"'{scope_id}' is not a valid id."}) from None

        if not model.objects.filter(pk=scope_uuid).exists():
            raise ValidationError(
                {"scope_id": f"No {model._meta.verbose_name} with id {scope_id}."}
            )
        self.scope_id = str(scope_uuid)

    def snapshot(self):
        return {
            "scope_type": self.scope_type,
            "scope_id": self.scope_id,
            "value": self.value,
        }


class FeatureFlagHistory(models.Model):
    """
    Audit trail of flag and override changes.
    """

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    OVERRIDE_SET = "override_set"
    OVERRIDE_REMOVED = "override_removed"

    ACTION_CHOICES = [
        (CREATED, "Created"),
        (UPDATED, "Updated"),
        (DELETED, "Deleted"),
        (OVERRIDE_SET, "Override Set"),
        (OVERRIDE_REMOVED, "Override Removed"),
    ]

    flag_key = models.CharField(max_length=100)

    scope_type = models.CharField(
        max_length=32,
        choices=ScopeType.choices,
        blank=True,
        help_text="Scope of the override, blank for flag-level changes",
    )

    scope_id = models.CharField(max_length=64, blank=True)

    action = models.CharField(max_length=20, choices=ACTION_CHOICES)

    old_value = models.JSONField(
        null=True,
        blank=True,
        help_text="Previous state before change",
    )
    new_value = models.JSONField(
        null=True,
        blank=True,
        help_text="New state after change",
    )

    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="flag_changes",
    )

    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "feature_flag_history"
        indexes = [
            models.Index(fields=["flag_key", "timestamp"], name="flag_history_key_idx"),
            models.Index(fields=["action"], name="flag_history_action_idx"),
        ]
        ordering = ["-timestamp"]
        verbose_name = "Feature Flag History"
        verbose_name_plural = "Feature Flag History"

    def __str__(self):
        scope = f" ({self.scope_type}:{self.scope_id})" if self.scope_type else ""
        return f"{self.flag_key}{scope} - {self.action} at {self.timestamp}"
