"""
Core models for the franchise POS platform.

The tenant hierarchy is platform provider -> franchisor (brand) -> franchise
(legal entity) -> location -> station. Every node below the platform is a
scope that feature flag overrides can attach to.
"""

import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils.text import slugify


class Franchisor(models.Model):
    """
    A brand that sells franchises on the platform.
    """

    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"

    STATUS_CHOICES = [
        (ACTIVE, "Active"),
        (SUSPENDED, "Suspended"),
    ]

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the franchisor",
    )

    name = models.CharField(max_length=255, help_text="Brand name")

    slug = models.SlugField(
        unique=True, max_length=255, help_text="URL-friendly identifier for the brand"
    )

    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=ACTIVE,
        help_text="Current operational status of the brand",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "franchisors"
        ordering = ["name"]
        verbose_name = "Franchisor"
        verbose_name_plural = "Franchisors"

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        """
        Override save to auto-generate slug from name if not provided.
        """
        if not self.slug:
            self.slug = slugify(self.name)
            # Ensure uniqueness by appending UUID if slug already exists
            if Franchisor.objects.filter(slug=self.slug).exists():
                self.slug = f"{self.slug}-{str(uuid.uuid4())[:8]}"
        super().save(*args, **kwargs)


class Franchise(models.Model):
    """
    A franchisee business (usually an LLC) operating one or more locations
    under a franchisor's brand.
    """

    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"

    STATUS_CHOICES = [
        (ACTIVE, "Active"),
        (SUSPENDED, "Suspended"),
    ]

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the franchise",
    )

    franchisor = models.ForeignKey(
        Franchisor,
        on_delete=models.PROTECT,
        related_name="franchises",
        help_text="Brand this franchise operates under",
    )

    legal_name = models.CharField(max_length=255, help_text="Registered legal entity name")

    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=ACTIVE,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "franchises"
        ordering = ["legal_name"]
        verbose_name = "Franchise"
        verbose_name_plural = "Franchises"
        indexes = [
            models.Index(fields=["franchisor", "status"], name="franchise_owner_status_idx"),
        ]

    def __str__(self):
        return f"{self.legal_name} ({self.franchisor.name})"


class Location(models.Model):
    """
    A physical store operated by a franchise.

    The business type (vertical) decides which feature flags apply to the
    location at all.
    """

    SALON = "SALON"
    RETAIL = "RETAIL"
    RESTAURANT = "RESTAURANT"
    HYBRID = "HYBRID"

    BUSINESS_TYPE_CHOICES = [
        (SALON, "Salon"),
        (RETAIL, "Retail"),
        (RESTAURANT, "Restaurant"),
        (HYBRID, "Hybrid"),
    ]

    DEFAULT_BUSINESS_TYPE = RETAIL

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the location",
    )

    franchise = models.ForeignKey(
        Franchise,
        on_delete=models.CASCADE,
        related_name="locations",
        help_text="Franchise that operates this location",
    )

    name = models.CharField(max_length=255, help_text="Location name")

    address = models.TextField(blank=True, help_text="Street address")

    business_type = models.CharField(
        max_length=20,
        choices=BUSINESS_TYPE_CHOICES,
        null=True,
        blank=True,
        help_text="Vertical of the location; unset locations are treated as retail",
    )

    is_active = models.BooleanField(default=True, help_text="Whether the location is active")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "locations"
        ordering = ["name"]
        verbose_name = "Location"
        verbose_name_plural = "Locations"
        unique_together = [["franchise", "name"]]
        indexes = [
            models.Index(fields=["franchise", "is_active"], name="location_franchise_active_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.franchise.legal_name})"

    @property
    def effective_business_type(self):
        """Business type used for flag targeting."""
        return self.business_type or self.DEFAULT_BUSINESS_TYPE


class Station(models.Model):
    """
    A paired POS device (register, tablet, kiosk) at a location.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the station",
    )

    location = models.ForeignKey(
        Location,
        on_delete=models.PROTECT,
        related_name="stations",
        help_text="Location where this station is installed",
    )

    name = models.CharField(
        max_length=50,
        help_text="Human-readable station name (e.g., 'REGISTER-1', 'FRONT-DESK')",
    )

    is_active = models.BooleanField(
        default=True,
        help_text="Whether this station is paired and allowed to operate",
    )

    configuration = models.JSONField(
        default=dict,
        blank=True,
        help_text="Station-specific configuration (printer, terminal IP, etc.)",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    last_seen_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the station last contacted the platform",
    )

    class Meta:
        db_table = "stations"
        ordering = ["location", "name"]
        verbose_name = "Station"
        verbose_name_plural = "Stations"
        unique_together = [["location", "name"]]
        indexes = [
            models.Index(fields=["location", "is_active"], name="station_location_active_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.location.name})"


class User(AbstractUser):
    """
    Platform user anchored somewhere in the tenant hierarchy.

    Platform admins have no anchor. Franchisor owners are anchored on a brand,
    franchise owners on a franchise, and managers and employees on a location.
    """

    PLATFORM_ADMIN = "PLATFORM_ADMIN"
    FRANCHISOR_OWNER = "FRANCHISOR_OWNER"
    FRANCHISE_OWNER = "FRANCHISE_OWNER"
    LOCATION_MANAGER = "LOCATION_MANAGER"
    EMPLOYEE = "EMPLOYEE"

    ROLE_CHOICES = [
        (PLATFORM_ADMIN, "Platform Administrator"),
        (FRANCHISOR_OWNER, "Franchisor Owner"),
        (FRANCHISE_OWNER, "Franchise Owner"),
        (LOCATION_MANAGER, "Location Manager"),
        (EMPLOYEE, "Employee"),
    ]

    role = models.CharField(
        max_length=50,
        choices=ROLE_CHOICES,
        default=EMPLOYEE,
        help_text="User's role in the system",
    )

    franchisor = models.ForeignKey(
        Franchisor,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="users",
    )

    franchise = models.ForeignKey(
        Franchise,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="users",
    )

    location = models.ForeignKey(
        Location,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="users",
        help_text="Location the user works at",
    )

    class Meta:
        db_table = "users"
        ordering = ["username"]
        verbose_name = "User"
        verbose_name_plural = "Users"
        indexes = [
            models.Index(fields=["franchisor", "role"], name="user_franchisor_role_idx"),
        ]

    def __str__(self):
        return f"{self.username} ({self.get_role_display()})"

    def is_platform_admin(self):
        """Check if user is a platform administrator. Superusers count as one."""
        return self.role == self.PLATFORM_ADMIN or self.is_superuser

    def can_access_location(self, location):
        """
        Check whether the user may act on behalf of a location.
        """
        if self.is_platform_admin():
            return True
        if self.role == self.FRANCHISOR_OWNER:
            return location.franchise.franchisor_id == self.franchisor_id
        if self.role == self.FRANCHISE_OWNER:
            return location.franchise_id == self.franchise_id
        return location.pk == self.location_id

    def can_access_station(self, station):
        return self.can_access_location(station.location)

    def save(self, *args, **kwargs):
        """
        Override save to keep hierarchy anchors consistent.
        """
        if self.role == self.PLATFORM_ADMIN:
            self.franchisor = None
            self.franchise = None
            self.location = None
        else:
            # Fill in the ancestors of the most specific anchor
            if self.location_id and not self.franchise_id:
                self.franchise = self.location.franchise
            if self.franchise_id and not self.franchisor_id:
                self.franchisor = self.franchise.franchisor

            if not self.franchisor_id and not self.is_superuser:
                raise ValueError(f"Users with role {self.role} must belong to a franchisor")

        super().save(*args, **kwargs)
