"""
Audit Log API Views

Provides read-only access to audit logs with filtering, pagination,
statistics and per-entity activity timelines.
"""

from django.conf import settings
from django.utils import timezone
from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.filters import OrderingFilter
from rest_framework.pagination import LimitOffsetPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from audit.models import AuditLog
from audit.serializers import AuditLogSerializer, AuditLogSummarySerializer, AuditStatsSerializer
from audit.services import AuditLogService
from core.constants import AUDIT_LOG_MAX_PAGE_SIZE, AUDIT_LOG_PAGE_SIZE
from core.exceptions import ValidationError as AppValidationError


def validation_error_response(exc):
    return Response(
        {'detail': exc.message, 'code': exc.code, 'errors': exc.details},
        status=status.HTTP_400_BAD_REQUEST
    )


class AuditLogPagination(LimitOffsetPagination):
    default_limit = getattr(settings, 'AUDIT_LOG_PAGE_SIZE', AUDIT_LOG_PAGE_SIZE)
    max_limit = AUDIT_LOG_MAX_PAGE_SIZE


class AuditLogViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Read-only ViewSet for audit logs.

    Features:
    - List logs filtered by date range, action, table, user, record and content
    - Statistics over the filtered set
    - Activity timeline for a provider or facility

    Query params for list/stats:
    - from_date, to_date: YYYY-MM-DD, inclusive
    - action: insert | update | delete | all
    - table_name, actor_email (or user), record_id, data_content
    """

    serializer_class = AuditLogSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = AuditLogPagination
    filter_backends = [OrderingFilter]
    ordering_fields = ['created_at', 'action', 'table_name']

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.service = AuditLogService()

    def get_queryset(self):
        if self.action in ('list', 'stats'):
            filters = self.service.parse_filters(self.request.query_params)
            return self.service.list_logs(filters)
        return AuditLog.objects.all()

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['now'] = timezone.now()
        return context

    def handle_exception(self, exc):
        if isinstance(exc, AppValidationError):
            return validation_error_response(exc)
        return super().handle_exception(exc)

    @action(detail=False, methods=['get'])
    def stats(self, request):
        """
        Get audit log statistics for the current filters.

        Example: GET /api/audit/logs/stats/?action=update&from_date=2026-01-01
        """
        stats = self.service.get_stats(self.get_queryset())
        return Response(AuditStatsSerializer(stats.to_dict()).data)

    @action(detail=False, methods=['get'])
    def entity(self, request):
        """
        Activity timeline for one provider or facility.

        Query params:
        - entity_type: provider | facility
        - entity_id: ID of the provider or facility
        - limit: number of entries (default 15, max 100)

        Example: GET /api/audit/logs/entity/?entity_type=provider&entity_id=42
        """
        entity_type = request.query_params.get('entity_type')
        entity_id = request.query_params.get('entity_id')
        entries, has_more = self.service.list_by_entity(
            entity_type,
            entity_id,
            limit=request.query_params.get('limit'),
        )
        serializer = self.get_serializer(entries, many=True)

        return Response({
            'entity_type': entity_type,
            'entity_id': entity_id,
            'entries': serializer.data,
            'count': len(entries),
            'has_more': has_more,
        })


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def audit_summary(request):
    """
    Get quick audit summary for dashboard.

    Returns:
    - Total logs
    - Logs today and in the last 24 hours
    - Most recent changes
    """
    summary = AuditLogService().get_summary()
    recent = AuditLogSummarySerializer(summary.pop('recent_changes'), many=True)

    return Response({
        **summary,
        'recent_changes': recent.data,
    })
