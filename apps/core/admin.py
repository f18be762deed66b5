"""
Django admin configuration for core models.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import Franchise, Franchisor, Location, Station, User


@admin.register(Franchisor)
class FranchisorAdmin(admin.ModelAdmin):
    """Admin interface for Franchisor model."""

    list_display = ["name", "slug", "status", "created_at", "updated_at"]

    list_filter = [
        "status",
        "created_at",
    ]

    search_fields = [
        "name",
        "slug",
        "id",
    ]

    readonly_fields = [
        "id",
        "created_at",
        "updated_at",
    ]

    fieldsets = (
        ("Basic Information", {"fields": ("id", "name", "slug")}),
        ("Status", {"fields": ("status",)}),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("collapse",)}),
    )

    def get_readonly_fields(self, request, obj=None):
        """Make slug readonly when editing an existing brand."""
        if obj:
            return self.readonly_fields + ["slug"]
        return self.readonly_fields


@admin.register(Franchise)
class FranchiseAdmin(admin.ModelAdmin):
    """Admin interface for Franchise model."""

    list_display = ["legal_name", "franchisor", "status", "created_at"]
    list_filter = ["status", "franchisor"]
    search_fields = ["legal_name", "franchisor__name", "id"]
    readonly_fields = ["id", "created_at", "updated_at"]

    def get_queryset(self, request):
        """Optimize queryset with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related("franchisor")


class StationInline(admin.TabularInline):
    model = Station
    extra = 0
    fields = ["name", "is_active", "last_seen_at"]
    readonly_fields = ["last_seen_at"]


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    """Admin interface for Location model."""

    list_display = ["name", "franchise", "business_type", "is_active", "created_at"]

    list_filter = [
        "business_type",
        "is_active",
        "franchise__franchisor",
    ]

    search_fields = [
        "name",
        "address",
        "franchise__legal_name",
        "id",
    ]

    readonly_fields = [
        "id",
        "created_at",
        "updated_at",
    ]

    fieldsets = (
        ("Basic Information", {"fields": ("id", "franchise", "name", "address")}),
        ("Vertical", {"fields": ("business_type",)}),
        ("Status", {"fields": ("is_active",)}),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("collapse",)}),
    )

    inlines = [StationInline]

    def get_queryset(self, request):
        """Optimize queryset with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related("franchise", "franchise__franchisor")


@admin.register(Station)
class StationAdmin(admin.ModelAdmin):
    """Admin interface for Station model."""

    list_display = ["name", "location", "is_active", "last_seen_at", "created_at"]
    list_filter = ["is_active", "location__business_type"]
    search_fields = ["name", "location__name", "id"]
    readonly_fields = ["id", "created_at", "updated_at", "last_seen_at"]
    fieldsets = [
        (
            "Basic Information",
            {
                "fields": ["id", "location", "name"],
            },
        ),
        (
            "Status",
            {
                "fields": ["is_active", "last_seen_at"],
            },
        ),
        (
            "Configuration",
            {
                "fields": ["configuration"],
            },
        ),
        (
            "Timestamps",
            {
                "fields": ["created_at", "updated_at"],
            },
        ),
    ]


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin interface for User model."""

    list_display = [
        "username",
        "email",
        "role",
        "franchisor",
        "franchise",
        "location",
        "is_active",
    ]

    list_filter = [
        "role",
        "is_active",
        "is_staff",
        "is_superuser",
        "franchisor",
    ]

    search_fields = [
        "username",
        "email",
        "first_name",
        "last_name",
        "franchisor__name",
    ]

    fieldsets = (
        (None, {"fields": ("username", "password")}),
        (
            "Personal Information",
            {"fields": ("first_name", "last_name", "email")},
        ),
        (
            "Hierarchy & Role",
            {"fields": ("role", "franchisor", "franchise", "location")},
        ),
        (
            "Permissions",
            {
                "fields": (
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                ),
                "classes": ("collapse",),
            },
        ),
        (
            "Important Dates",
            {"fields": ("last_login", "date_joined"), "classes": ("collapse",)},
        ),
    )
