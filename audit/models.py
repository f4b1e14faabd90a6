"""
Audit Log Model

IMMUTABLE: Audit logs cannot be edited or deleted after creation.
Each row is one insert/update/delete on a tracked credentialing table,
with the record's snapshot before and after the change.
"""

import json
import uuid

from django.db import models
from django.db.models import Q
from django.core.exceptions import PermissionDenied

from audit.describer import build_field_diffs, describe, humanize_table_name, normalize_action
from core.constants import AuditAction, TIMELINE_TABLES, SYSTEM_ACTOR


# ============================================================================
# CUSTOM MANAGER AND QUERYSET
# ============================================================================

class AuditLogQuerySet(models.QuerySet):
    """Custom queryset for audit logs with filtering helpers"""

    def for_table(self, table_name):
        """Case-insensitive match on the table name"""
        return self.filter(table_name__icontains=table_name)

    def for_record(self, record_id):
        """Filter logs for a specific record"""
        return self.filter(record_id=str(record_id))

    def for_actor(self, actor_email):
        """Case-insensitive match on the actor email"""
        return self.filter(actor_email__icontains=actor_email)

    def for_action(self, action):
        """
        Filter logs for a normalized action.
        Legacy 'create' rows count as inserts.
        """
        if action == AuditAction.INSERT:
            return self.filter(action__in=[AuditAction.INSERT, 'create'])
        if action == AuditAction.DELETE:
            return self.filter(action=AuditAction.DELETE)
        return self.exclude(action__in=[AuditAction.INSERT, 'create', AuditAction.DELETE])

    def created_between(self, from_date=None, to_date=None):
        """Both bounds are inclusive calendar dates"""
        queryset = self
        if from_date:
            queryset = queryset.filter(created_at__date__gte=from_date)
        if to_date:
            queryset = queryset.filter(created_at__date__lte=to_date)
        return queryset

    def containing(self, text):
        """
        Search inside either snapshot.
        SQLite stores JSON with non-ASCII characters and quotes escaped,
        so the escaped form of the text is matched too.
        """
        escaped = json.dumps(text)[1:-1]
        query = Q(old_data__icontains=text) | Q(new_data__icontains=text)
        if escaped != text:
            query |= Q(old_data__icontains=escaped) | Q(new_data__icontains=escaped)
        return self.filter(query)

    def for_entity(self, entity_type, entity_id):
        """Rows for a provider or facility and everything hanging off it"""
        own_table, child_tables, fk_field = TIMELINE_TABLES[entity_type]
        entity_id = str(entity_id)
        return self.filter(
            Q(table_name=own_table, record_id=entity_id) |
            Q(table_name__in=child_tables, **{f'new_data__{fk_field}': entity_id}) |
            Q(table_name__in=child_tables, **{f'old_data__{fk_field}': entity_id})
        )

    def recent(self, limit=100):
        """Get recent logs"""
        return self.order_by('-created_at')[:limit]


class AuditLogManager(models.Manager):
    """Custom manager for audit logs"""

    def get_queryset(self):
        return AuditLogQuerySet(self.model, using=self._db)

    def for_entity(self, entity_type, entity_id):
        return self.get_queryset().for_entity(entity_type, entity_id)

    def recent(self, limit=100):
        return self.get_queryset().recent(limit)


# ============================================================================
# AUDIT LOG MODEL
# ============================================================================

class AuditLog(models.Model):
    """
    Immutable change record for a tracked table.

    - insert rows carry new_data only
    - delete rows carry old_data only
    - update rows carry both
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    table_name = models.CharField(
        max_length=100,
        db_index=True,
        help_text="Tracked table that changed"
    )

    record_id = models.CharField(
        max_length=64,
        null=True,
        blank=True,
        db_index=True,
        help_text="ID of the changed row"
    )

    action = models.CharField(
        max_length=10,
        choices=AuditAction.CHOICES,
        db_index=True,
        help_text="Type of change"
    )

    actor_email = models.EmailField(
        null=True,
        blank=True,
        db_index=True,
        help_text="Who made the change (empty for system changes)"
    )

    old_data = models.JSONField(
        null=True,
        blank=True,
        help_text="Snapshot before the change"
    )

    new_data = models.JSONField(
        null=True,
        blank=True,
        help_text="Snapshot after the change"
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="When the change happened"
    )

    objects = AuditLogManager()

    class Meta:
        db_table = 'audit_log'
        verbose_name = "Audit Log"
        verbose_name_plural = "Audit Logs"
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['table_name', 'record_id'], name='idx_audit_table_record'),
            models.Index(fields=['action', '-created_at'], name='idx_audit_action_created'),
        ]

    def __str__(self):
        return f"{self.actor_display} - {self.action} - {self.table_name} #{self.record_id} - {self.created_at}"

    def save(self, *args, **kwargs):
        """
        Override save to enforce immutability.
        Only allow creation, not updates.
        """
        if not self._state.adding:
            raise PermissionDenied(
                "Audit logs are immutable and cannot be modified after creation."
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise PermissionDenied(
            "Audit logs are immutable and cannot be deleted."
        )

    @property
    def actor_display(self):
        return self.actor_email or SYSTEM_ACTOR

    @property
    def normalized_action(self):
        return normalize_action(self.action)

    @property
    def entity_label(self):
        return humanize_table_name(self.table_name)

    @property
    def description(self):
        return describe(self.action, self.table_name, self.old_data, self.new_data)

    @property
    def field_diffs(self):
        return build_field_diffs(self.action, self.old_data, self.new_data)
