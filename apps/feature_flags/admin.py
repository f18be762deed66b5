"""
Django admin configuration for feature flags.

Every save and delete made here is attributed to the acting operator in
FeatureFlagHistory.
"""

from django.contrib import admin

from .models import FeatureFlag, FeatureFlagHistory, FeatureFlagOverride


class FeatureFlagOverrideInline(admin.TabularInline):
    model = FeatureFlagOverride
    extra = 0
    fields = ["scope_type", "scope_id", "value", "notes", "created_by", "updated_at"]
    readonly_fields = ["created_by", "updated_at"]


@admin.register(FeatureFlag)
class FeatureFlagAdmin(admin.ModelAdmin):
    """Admin interface for feature flag definitions."""

    list_display = ["key", "status", "default_value", "target_verticals", "updated_at"]

    list_filter = [
        "status",
        "default_value",
    ]

    search_fields = [
        "key",
        "description",
    ]

    readonly_fields = [
        "created_at",
        "updated_at",
    ]

    fieldsets = (
        ("Basic Information", {"fields": ("key", "description")}),
        ("Behaviour", {"fields": ("status", "default_value", "target_verticals")}),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("collapse",)}),
    )

    inlines = [FeatureFlagOverrideInline]

    ordering = ["key"]

    def save_model(self, request, obj, form, change):
        obj._changed_by = request.user
        super().save_model(request, obj, form, change)

    def save_formset(self, request, form, formset, change):
        instances = formset.save(commit=False)
        for instance in formset.deleted_objects:
            instance._changed_by = request.user
            instance.delete()
        for instance in instances:
            instance._changed_by = request.user
            if instance.pk is None and instance.created_by_id is None:
                instance.created_by = request.user
            instance.save()
        formset.save_m2m()

    def delete_model(self, request, obj):
        obj._changed_by = request.user
        super().delete_model(request, obj)


@admin.register(FeatureFlagOverride)
class FeatureFlagOverrideAdmin(admin.ModelAdmin):
    """Admin interface for scoped flag overrides."""

    list_display = [
        "flag",
        "scope_type",
        "scope_id",
        "value",
        "created_by",
        "updated_at",
    ]

    list_filter = [
        "scope_type",
        "value",
        "flag",
    ]

    search_fields = [
        "flag__key",
        "scope_id",
        "notes",
    ]

    readonly_fields = [
        "created_by",
        "created_at",
        "updated_at",
    ]

    fieldsets = (
        ("Basic Information", {"fields": ("flag", "scope_type", "scope_id", "value")}),
        ("Details", {"fields": ("notes", "created_by")}),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("collapse",)}),
    )

    ordering = ["-updated_at"]

    def get_queryset(self, request):
        """Optimize queryset with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related("flag", "created_by")

    def save_model(self, request, obj, form, change):
        obj._changed_by = request.user
        if not change and obj.created_by_id is None:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)

    def delete_model(self, request, obj):
        obj._changed_by = request.user
        super().delete_model(request, obj)


@admin.register(FeatureFlagHistory)
class FeatureFlagHistoryAdmin(admin.ModelAdmin):
    """
    Read-only admin for the flag change history.
    """

    list_display = [
        "flag_key",
        "action",
        "scope_type",
        "scope_id",
        "changed_by",
        "timestamp",
    ]

    list_filter = [
        "action",
        "scope_type",
        "timestamp",
    ]

    search_fields = [
        "flag_key",
        "scope_id",
    ]

    readonly_fields = [
        "flag_key",
        "scope_type",
        "scope_id",
        "action",
        "old_value",
        "new_value",
        "changed_by",
        "timestamp",
    ]

    fieldsets = (
        ("Change Details", {"fields": ("flag_key", "action", "scope_type", "scope_id")}),
        ("Values", {"fields": ("old_value", "new_value")}),
        ("Audit", {"fields": ("changed_by", "timestamp")}),
    )

    ordering = ["-timestamp"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
