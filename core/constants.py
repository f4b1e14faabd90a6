"""
Application-wide constants.
Centralized constants following DRY principle.
"""


# Audit actions
class AuditAction:
    INSERT = 'insert'
    UPDATE = 'update'
    DELETE = 'delete'

    ALL = (INSERT, UPDATE, DELETE)

    CHOICES = [
        (INSERT, 'Insert'),
        (UPDATE, 'Update'),
        (DELETE, 'Delete'),
    ]


# Tracked tables
class TrackedTable:
    PROVIDERS = 'providers'
    FACILITIES = 'facilities'
    PROVIDER_STATE_LICENSES = 'provider_state_licenses'
    PROVIDER_VESTA_PRIVILEGES = 'provider_vesta_privileges'
    PROVIDER_FACILITY_CREDENTIALS = 'provider_facility_credentials'
    WORKFLOW_PHASES = 'workflow_phases'
    FACILITY_CONTACTS = 'facility_contacts'
    FACILITY_PRELIVE_INFO = 'facility_prelive_info'
    INCIDENT_LOGS = 'incident_logs'


# Human-readable labels for tracked tables
TABLE_LABELS = {
    TrackedTable.PROVIDERS: 'Provider',
    TrackedTable.FACILITIES: 'Facility',
    TrackedTable.PROVIDER_STATE_LICENSES: 'State License',
    TrackedTable.PROVIDER_VESTA_PRIVILEGES: 'Vesta Privilege',
    TrackedTable.PROVIDER_FACILITY_CREDENTIALS: 'PFC Credential',
    TrackedTable.WORKFLOW_PHASES: 'Workflow Phase',
    TrackedTable.FACILITY_CONTACTS: 'Contact',
    TrackedTable.FACILITY_PRELIVE_INFO: 'Pre-live Info',
    TrackedTable.INCIDENT_LOGS: 'Incident',
}


# Entities that own an activity timeline
class TimelineEntity:
    PROVIDER = 'provider'
    FACILITY = 'facility'

    ALL = (PROVIDER, FACILITY)


# Per entity: (own table, child tables, foreign key field inside child snapshots)
TIMELINE_TABLES = {
    TimelineEntity.PROVIDER: (
        TrackedTable.PROVIDERS,
        [
            TrackedTable.PROVIDER_STATE_LICENSES,
            TrackedTable.PROVIDER_VESTA_PRIVILEGES,
            TrackedTable.PROVIDER_FACILITY_CREDENTIALS,
            TrackedTable.WORKFLOW_PHASES,
        ],
        'provider_id',
    ),
    TimelineEntity.FACILITY: (
        TrackedTable.FACILITIES,
        [
            TrackedTable.PROVIDER_FACILITY_CREDENTIALS,
            TrackedTable.FACILITY_CONTACTS,
            TrackedTable.FACILITY_PRELIVE_INFO,
            TrackedTable.INCIDENT_LOGS,
            TrackedTable.WORKFLOW_PHASES,
        ],
        'facility_id',
    ),
}


# Pagination
AUDIT_LOG_PAGE_SIZE = 50
AUDIT_LOG_MAX_PAGE_SIZE = 100
TIMELINE_DEFAULT_LIMIT = 15
TIMELINE_MAX_LIMIT = 100
RECENT_CHANGES_LIMIT = 10

# Display
SYSTEM_ACTOR = 'System'
DATE_FORMAT = '%b %d, %Y'
