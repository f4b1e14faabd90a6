"""
Validation utilities and validators.
Centralized validation logic following single responsibility principle.
"""
from datetime import date
from typing import Optional

from core.constants import AuditAction, TimelineEntity
from core.exceptions import ValidationError as AppValidationError


class DateRangeValidator:
    """Validates ISO dates and date ranges coming from query params"""

    @staticmethod
    def parse_date(value: Optional[str], field_name: str) -> Optional[date]:
        """Parse YYYY-MM-DD, treating blank values as not given"""
        if value is None or not str(value).strip():
            return None
        try:
            return date.fromisoformat(str(value).strip())
        except ValueError:
            raise AppValidationError(
                message=f"Invalid date for {field_name}: expected YYYY-MM-DD.",
                code="INVALID_DATE",
                details={field_name: value}
            )

    @staticmethod
    def validate_range(from_date: Optional[date], to_date: Optional[date]):
        """from_date must not be after to_date"""
        if from_date and to_date and from_date > to_date:
            raise AppValidationError(
                message="from_date must be on or before to_date.",
                code="INVALID_DATE_RANGE",
                details={
                    "from_date": from_date.isoformat(),
                    "to_date": to_date.isoformat()
                }
            )


class AuditActionValidator:
    """Validates the action filter"""

    @staticmethod
    def validate_action(value: Optional[str]) -> Optional[str]:
        """Returns the action, or None for blank/'all'"""
        if value is None:
            return None
        value = str(value).strip().lower()
        if value in ("", "all"):
            return None
        if value not in AuditAction.ALL:
            raise AppValidationError(
                message=f"Invalid action: {value}.",
                code="INVALID_ACTION",
                details={"action": value, "allowed": list(AuditAction.ALL)}
            )
        return value


class TimelineValidator:
    """Validates entity timeline parameters"""

    @staticmethod
    def validate_entity_type(value: Optional[str]) -> str:
        value = (value or "").strip().lower()
        if value not in TimelineEntity.ALL:
            raise AppValidationError(
                message=f"Invalid entity_type: {value or '(missing)'}.",
                code="INVALID_ENTITY_TYPE",
                details={"entity_type": value, "allowed": list(TimelineEntity.ALL)}
            )
        return value

    @staticmethod
    def validate_entity_id(value: Optional[str]) -> str:
        value = (value or "").strip()
        if not value:
            raise AppValidationError(
                message="entity_id is required.",
                code="MISSING_ENTITY_ID",
                details={"entity_id": value}
            )
        return value

    @staticmethod
    def validate_limit(value, default: int, maximum: int) -> int:
        """Clamp limit to [1, maximum]; blank means default"""
        if value is None or str(value).strip() == "":
            return default
        try:
            limit = int(value)
        except (TypeError, ValueError):
            raise AppValidationError(
                message="limit must be an integer.",
                code="INVALID_LIMIT",
                details={"limit": value}
            )
        return max(1, min(limit, maximum))
