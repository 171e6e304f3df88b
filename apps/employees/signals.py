"""
Registry cache invalidation.

Writes made through ``RegistryService`` already drop the cache; these
receivers cover admin edits, fixtures and shell sessions.
"""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Department, Designation
from .services.registry import RegistryService


@receiver(post_save, sender=Department)
@receiver(post_delete, sender=Department)
@receiver(post_save, sender=Designation)
@receiver(post_delete, sender=Designation)
def invalidate_registry_cache(sender, **kwargs):
    RegistryService.invalidate()
