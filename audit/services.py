"""
Audit log service - Business logic layer for the audit log screens.
Parses filters, builds querysets and computes summary statistics.
"""
from datetime import timedelta
from typing import List, Tuple

from django.utils import timezone

from audit.models import AuditLog
from core.constants import (
    AuditAction,
    RECENT_CHANGES_LIMIT,
    TIMELINE_DEFAULT_LIMIT,
    TIMELINE_MAX_LIMIT,
)
from core.dto import AuditLogFiltersDTO, AuditStatsDTO
from core.services import BaseService
from core.validators import AuditActionValidator, DateRangeValidator, TimelineValidator


class AuditLogService(BaseService):
    """Service for audit log queries"""

    def parse_filters(self, params) -> AuditLogFiltersDTO:
        """
        Build filters from request query params.

        Raises:
            ValidationError: On malformed dates, a reversed range or unknown action
        """
        from_date = DateRangeValidator.parse_date(params.get('from_date'), 'from_date')
        to_date = DateRangeValidator.parse_date(params.get('to_date'), 'to_date')
        DateRangeValidator.validate_range(from_date, to_date)

        return AuditLogFiltersDTO(
            from_date=from_date,
            to_date=to_date,
            action=AuditActionValidator.validate_action(params.get('action')),
            table_name=(params.get('table_name') or '').strip(),
            actor_email=(params.get('actor_email') or params.get('user') or '').strip(),
            record_id=(params.get('record_id') or '').strip(),
            data_content=(params.get('data_content') or '').strip(),
        )

    def list_logs(self, filters: AuditLogFiltersDTO, queryset=None):
        """Filtered audit logs, newest first"""
        if queryset is None:
            queryset = AuditLog.objects.all()

        if filters.is_empty():
            return queryset.order_by('-created_at')

        queryset = queryset.created_between(filters.from_date, filters.to_date)
        if filters.action:
            queryset = queryset.for_action(filters.action)
        if filters.table_name:
            queryset = queryset.for_table(filters.table_name)
        if filters.actor_email:
            queryset = queryset.for_actor(filters.actor_email)
        if filters.record_id:
            queryset = queryset.for_record(filters.record_id)
        if filters.data_content:
            queryset = queryset.containing(filters.data_content)

        return queryset.order_by('-created_at')

    def list_by_entity(self, entity_type, entity_id, limit=None) -> Tuple[List[AuditLog], bool]:
        """
        Activity timeline for a provider or facility.

        Returns:
            (entries, has_more) where has_more means the limit was reached
        """
        entity_type = TimelineValidator.validate_entity_type(entity_type)
        entity_id = TimelineValidator.validate_entity_id(entity_id)
        limit = TimelineValidator.validate_limit(limit, TIMELINE_DEFAULT_LIMIT, TIMELINE_MAX_LIMIT)

        entries = list(
            AuditLog.objects.for_entity(entity_type, entity_id).order_by('-created_at')[:limit]
        )
        self.log_info("Timeline loaded", entity_type=entity_type, entity_id=entity_id, count=len(entries))
        return entries, len(entries) >= limit

    def get_stats(self, queryset) -> AuditStatsDTO:
        """Counts over the whole filtered set, not just the visible page"""
        unique_users = (
            queryset.exclude(actor_email__isnull=True)
            .exclude(actor_email='')
            .order_by()
            .values('actor_email')
            .distinct()
            .count()
        )
        return AuditStatsDTO(
            total=queryset.count(),
            inserts=queryset.for_action(AuditAction.INSERT).count(),
            updates=queryset.for_action(AuditAction.UPDATE).count(),
            deletes=queryset.for_action(AuditAction.DELETE).count(),
            unique_users=unique_users,
        )

    def get_summary(self):
        """Quick numbers for the dashboard"""
        logs = AuditLog.objects.all()
        today = timezone.localdate()
        return {
            'total_logs': logs.count(),
            'logs_today': logs.created_between(today, today).count(),
            'logs_last_24h': logs.filter(created_at__gte=timezone.now() - timedelta(hours=24)).count(),
            'recent_changes': list(logs.recent(RECENT_CHANGES_LIMIT)),
        }
