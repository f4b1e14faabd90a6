"""
Audit Log Serializers
"""

from rest_framework import serializers

from audit.helpers import format_audit_log
from audit.models import AuditLog


class AuditLogSerializer(serializers.ModelSerializer):
    """
    Serializer for AuditLog model.
    
    Read-only: Audit logs cannot be created/updated via API.
    Adds the rendered summary and field diff for each row.
    """
    
    user = serializers.CharField(source='actor_display', read_only=True)
    action = serializers.CharField(source='normalized_action', read_only=True)
    
    class Meta:
        model = AuditLog
        fields = [
            'id',
            'created_at',
            'user',
            'actor_email',
            'action',
            'table_name',
            'record_id',
            'old_data',
            'new_data',
        ]
        read_only_fields = fields  # All fields are read-only
    
    def to_representation(self, instance):
        data = super().to_representation(instance)
        formatted = format_audit_log(instance, now=self.context.get('now'))
        for key in ('entity_label', 'description', 'relative_time', 'changes'):
            data[key] = formatted[key]
        return data


class AuditLogSummarySerializer(serializers.ModelSerializer):
    """
    Lightweight serializer for timelines and dashboard summaries.
    """
    
    user = serializers.CharField(source='actor_display', read_only=True)
    action = serializers.CharField(source='normalized_action', read_only=True)
    description = serializers.CharField(read_only=True)
    
    class Meta:
        model = AuditLog
        fields = [
            'id',
            'created_at',
            'user',
            'action',
            'table_name',
            'description',
        ]
        read_only_fields = fields


class AuditStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    inserts = serializers.IntegerField()
    updates = serializers.IntegerField()
    deletes = serializers.IntegerField()
    unique_users = serializers.IntegerField()
