"""
Audit Log Admin - READ ONLY

Audit logs are immutable and cannot be edited or deleted via admin.
"""

import json

from django.contrib import admin
from django.utils.html import format_html, format_html_join

from audit.describer import format_value
from audit.models import AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    """
    Read-only admin for audit logs.

    Features:
    - View logs only (no add/edit/delete)
    - Filter by action, table, date
    - Search by actor, record id and snapshot content
    - Field-level diff of the snapshots
    """

    list_display = [
        'created_at',
        'actor_display',
        'action',
        'table_name',
        'record_id',
        'description_short',
    ]

    list_filter = [
        'action',
        'table_name',
        'created_at',
    ]

    search_fields = [
        'actor_email',
        'record_id',
        'table_name',
    ]

    readonly_fields = [
        'id',
        'table_name',
        'record_id',
        'action',
        'actor_email',
        'description',
        'diff_display',
        'old_data_display',
        'new_data_display',
        'created_at',
    ]

    fieldsets = (
        ('Change', {
            'fields': ('id', 'action', 'table_name', 'record_id', 'description', 'actor_email', 'created_at')
        }),
        ('Diff', {
            'fields': ('diff_display',)
        }),
        ('Snapshots', {
            'fields': ('old_data_display', 'new_data_display'),
            'classes': ('collapse',)
        }),
    )

    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def get_actions(self, request):
        """Disable bulk actions"""
        actions = super().get_actions(request)
        if 'delete_selected' in actions:
            del actions['delete_selected']
        return actions

    @admin.display(description='User')
    def actor_display(self, obj):
        return obj.actor_display

    @admin.display(description='Description')
    def description_short(self, obj):
        """Display truncated description"""
        max_length = 80
        description = obj.description
        if len(description) > max_length:
            return f"{description[:max_length]}..."
        return description

    @admin.display(description='Changes')
    def diff_display(self, obj):
        rows = [
            (
                diff.label,
                '' if diff.old_value is None else format_value(diff.old_value),
                '' if diff.new_value is None else format_value(diff.new_value),
                '*' if diff.changed else '',
            )
            for diff in obj.field_diffs
        ]
        if not rows:
            return "No data"
        return format_html(
            '<table><tr><th>Field</th><th>Old</th><th>New</th><th></th></tr>{}</table>',
            format_html_join('', '<tr><td>{}</td><td>{}</td><td>{}</td><td>{}</td></tr>', rows)
        )

    @admin.display(description='Old data')
    def old_data_display(self, obj):
        return self._json_block(obj.old_data)

    @admin.display(description='New data')
    def new_data_display(self, obj):
        return self._json_block(obj.new_data)

    def _json_block(self, data):
        if data is None:
            return "No data"
        return format_html('<pre>{}</pre>', json.dumps(data, indent=2, default=str))
