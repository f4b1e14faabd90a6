"""
Data Transfer Objects (DTOs).
Used for passing data between layers without exposing domain models.
"""
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any
from datetime import date


@dataclass
class AuditLogFiltersDTO:
    """Filters accepted by the audit log listing"""
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    action: Optional[str] = None
    table_name: str = ""
    actor_email: str = ""
    record_id: str = ""
    data_content: str = ""
    
    def is_empty(self) -> bool:
        return not any(asdict(self).values())


@dataclass
class AuditStatsDTO:
    """Summary counts for a set of audit logs"""
    total: int = 0
    inserts: int = 0
    updates: int = 0
    deletes: int = 0
    unique_users: int = 0
    
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
