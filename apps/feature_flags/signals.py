"""
Signal handlers that record flag and override changes in FeatureFlagHistory.

Callers that know who made a change set ``instance._changed_by`` before
saving or deleting; the admin does this for every edit.
"""

import logging

from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver
from django.utils import timezone

from .models import FeatureFlag, FeatureFlagHistory, FeatureFlagOverride

logger = logging.getLogger(__name__)


def _changed_by(instance):
    return getattr(instance, "_changed_by", None)


def _stored_snapshot(sender, instance):
    if instance.pk is None:
        return None
    stored = sender.objects.filter(pk=instance.pk).first()
    return stored.snapshot() if stored else None


@receiver(pre_save, sender=FeatureFlag)
@receiver(pre_save, sender=FeatureFlagOverride)
def remember_previous_state(sender, instance, **kwargs):
    """Keep the stored state so post_save can record what changed."""
    if kwargs.get("raw"):
        return
    instance._previous_snapshot = _stored_snapshot(sender, instance)


@receiver(post_save, sender=FeatureFlag)
def record_flag_saved(sender, instance, created, **kwargs):
    if kwargs.get("raw"):
        return

    old_value = getattr(instance, "_previous_snapshot", None)
    new_value = instance.snapshot()
    if not created and old_value == new_value:
        return

    FeatureFlagHistory.objects.create(
        flag_key=instance.key,
        action=FeatureFlagHistory.CREATED if created else FeatureFlagHistory.UPDATED,
        old_value=None if created else old_value,
        new_value=new_value,
        changed_by=_changed_by(instance),
    )
    logger.info(f"Feature flag {instance.key} {'created' if created else 'updated'}")


@receiver(post_delete, sender=FeatureFlag)
def record_flag_deleted(sender, instance, **kwargs):
    FeatureFlagHistory.objects.create(
        flag_key=instance.key,
        action=FeatureFlagHistory.DELETED,
        old_value=instance.snapshot(),
        changed_by=_changed_by(instance),
    )
    logger.info(f"Feature flag {instance.key} deleted")


@receiver(post_save, sender=FeatureFlagOverride)
def record_override_saved(sender, instance, created, **kwargs):
    if kwargs.get("raw"):
        return

    old_value = getattr(instance, "_previous_snapshot", None)
    new_value = instance.snapshot()
    if not created and old_value == new_value:
        return

    FeatureFlagHistory.objects.create(
        flag_key=instance.flag.key,
        scope_type=instance.scope_type,
        scope_id=instance.scope_id,
        action=FeatureFlagHistory.OVERRIDE_SET,
        old_value=None if created else old_value,
        new_value=new_value,
        changed_by=_changed_by(instance) or instance.created_by,
    )


@receiver(post_delete, sender=FeatureFlagOverride)
def record_override_removed(sender, instance, **kwargs):
    """
    Record the removal and bump the parent flag's updated_at.

    A deleted row no longer contributes to Max(updated_at), so without the
    bump the version would not move when an override disappears.
    """
    flag_key = (
        FeatureFlag.objects.filter(pk=instance.flag_id).values_list("key", flat=True).first()
    )
    if flag_key is None:
        return

    FeatureFlag.objects.filter(pk=instance.flag_id).update(updated_at=timezone.now())
    FeatureFlagHistory.objects.create(
        flag_key=flag_key,
        scope_type=instance.scope_type,
        scope_id=instance.scope_id,
        action=FeatureFlagHistory.OVERRIDE_REMOVED,
        old_value=instance.snapshot(),
        changed_by=_changed_by(instance),
    )
