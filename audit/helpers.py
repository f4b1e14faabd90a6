"""
Audit Logging Helper Functions

Provides a centralized way to record changes and format them for display.
"""

import logging

from django.utils import timezone

from audit.describer import normalize_action
from audit.models import AuditLog
from core.constants import DATE_FORMAT

logger = logging.getLogger(__name__)


def log_change(actor_email, action, table_name, record_id, old_data=None, new_data=None):
    """
    Record a change to a tracked table.

    Args:
        actor_email: Email of whoever made the change (None for system jobs)
        action: insert/update/delete ('create' is accepted as insert)
        table_name: Tracked table identifier, e.g. 'providers'
        record_id: ID of the changed row
        old_data: Snapshot before the change (update/delete)
        new_data: Snapshot after the change (insert/update)

    Returns:
        AuditLog instance, or None if the row could not be written

    Example:
        log_change(
            actor_email=request.user.email,
            action='update',
            table_name='providers',
            record_id=provider.id,
            old_data=before,
            new_data=after,
        )
    """
    action = normalize_action(action)
    try:
        audit_log = AuditLog.objects.create(
            actor_email=actor_email or None,
            action=action,
            table_name=table_name,
            record_id=str(record_id) if record_id is not None else None,
            old_data=old_data,
            new_data=new_data,
        )
    except Exception as e:
        # Don't fail the main operation if audit logging fails
        logger.error(f"Failed to create audit log for {table_name} #{record_id}: {e}", exc_info=True)
        return None

    logger.info(f"Audit: {actor_email or 'system'} - {action} - {table_name} #{record_id}")
    return audit_log


def relative_time(moment, now=None):
    """
    Short relative time for timelines: 'just now', '5m ago', '3h ago', '2d ago'.
    Anything a week or older is shown as a date.
    """
    now = now or timezone.now()
    seconds = (now - moment).total_seconds()
    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days < 7:
        return f"{days}d ago"
    return moment.strftime(DATE_FORMAT)


def format_audit_log(entry, now=None):
    """Display-ready dict for one audit row"""
    return {
        'id': str(entry.id),
        'timestamp': entry.created_at,
        'user': entry.actor_display,
        'action': entry.normalized_action,
        'table_name': entry.table_name,
        'entity_label': entry.entity_label,
        'record_id': str(entry.record_id) if entry.record_id else None,
        'old_data': entry.old_data or None,
        'new_data': entry.new_data or None,
        'description': entry.description,
        'relative_time': relative_time(entry.created_at, now=now),
        'changes': [diff.to_dict() for diff in entry.field_diffs],
    }
