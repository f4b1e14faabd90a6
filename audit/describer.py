"""
Change Describer

Turns one audit change record (action, table, old/new snapshots) into a
short human-readable summary and a field-level diff for expandable views.

Everything here is a pure function of its inputs and never raises: missing
snapshots, unknown tables and unknown actions fall back to generic wording.
"""
import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, List, Optional

from core.constants import AuditAction, TABLE_LABELS


# Probed in order when looking for a name to quote in create/delete summaries
IDENTIFYING_FIELDS = ('phase_name', 'state', 'name', 'privilege_tier', 'subcategory')

# Identifier values that read as absent and give the generic summary
BLANK_IDENTIFIERS = ('', 0, False)

# More changed fields than this are summarized as a count
MAX_LISTED_FIELDS = 3

_MISSING = object()


@dataclass(frozen=True)
class FieldDiff:
    """One row of the expandable diff view"""
    field_name: str
    old_value: Any
    new_value: Any
    changed: bool

    @property
    def label(self) -> str:
        return humanize_field_name(self.field_name)

    def to_dict(self) -> dict:
        return {
            'field': self.field_name,
            'label': self.label,
            'old_value': self.old_value,
            'new_value': self.new_value,
            'changed': self.changed,
        }


def normalize_action(action) -> str:
    """Map a raw action to insert/update/delete. Anything unknown is an update."""
    if action in (AuditAction.INSERT, 'create'):
        return AuditAction.INSERT
    if action == AuditAction.DELETE:
        return AuditAction.DELETE
    return AuditAction.UPDATE


def humanize_table_name(table_name) -> str:
    table_name = str(table_name or '')
    return TABLE_LABELS.get(table_name, table_name.replace('_', ' '))


def humanize_field_name(field_name) -> str:
    return str(field_name).replace('_', ' ')


def format_value(value) -> str:
    """Render a snapshot value for display: strings as-is, the rest as JSON."""
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, separators=(',', ':'), ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return str(value)


def values_equal(left, right) -> bool:
    """
    Structural equality for JSON-like values.

    Mappings compare regardless of key order, sequences element-wise.
    Booleans never equal numbers (True != 1), unlike plain ``==``.
    """
    if left is _MISSING or right is _MISSING:
        return left is right
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        if set(left.keys()) != set(right.keys()):
            return False
        return all(values_equal(left[key], right[key]) for key in left)
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        if len(left) != len(right):
            return False
        return all(values_equal(a, b) for a, b in zip(left, right))
    if isinstance(left, (Mapping, list, tuple)) or isinstance(right, (Mapping, list, tuple)):
        return False
    return bool(left == right)


def _as_snapshot(data) -> Optional[Mapping]:
    return data if isinstance(data, Mapping) else None


def find_identifier(data) -> str:
    """
    Return the first identifying value in a snapshot, or ''.

    The first field that is present and not null wins, even when its value
    is blank, so an empty ``phase_name`` hides a later ``name``. Blank
    means an empty string, zero or false.
    """
    data = _as_snapshot(data)
    if not data:
        return ''
    for field in IDENTIFYING_FIELDS:
        value = data.get(field)
        if value is not None:
            return '' if value in BLANK_IDENTIFIERS else format_value(value)
    return ''


def changed_fields(old_data, new_data) -> List[str]:
    """Keys of new_data whose value differs from old_data (missing counts as changed)."""
    old_data = _as_snapshot(old_data)
    new_data = _as_snapshot(new_data)
    if old_data is None or new_data is None:
        return []
    return [
        key for key in new_data
        if not values_equal(old_data.get(key, _MISSING), new_data[key])
    ]


def describe(action, table_name, old_data=None, new_data=None) -> str:
    """Build the one-line summary shown in timelines and the audit table."""
    entity = humanize_table_name(table_name)
    action = normalize_action(action)
    old_data = _as_snapshot(old_data)
    new_data = _as_snapshot(new_data)

    if action == AuditAction.INSERT:
        name = find_identifier(new_data)
        return f'Created {entity} "{name}"' if name else f'Created {entity}'

    if action == AuditAction.DELETE:
        name = find_identifier(old_data)
        return f'Deleted {entity} "{name}"' if name else f'Deleted {entity}'

    if old_data is None or new_data is None:
        return f'Updated {entity}'

    changed = changed_fields(old_data, new_data)
    if not changed:
        return f'Updated {entity}'

    # A status transition outranks any other field in the summary
    if 'status' in old_data and 'status' in new_data and 'status' in changed:
        old_status = format_value(old_data['status'])
        new_status = format_value(new_data['status'])
        return f'{entity} status: {old_status} → {new_status}'

    if len(changed) <= MAX_LISTED_FIELDS:
        # Sorted so the summary does not depend on snapshot key order
        names = sorted(humanize_field_name(f) for f in changed)
        return f"Updated {entity}: {', '.join(names)}"
    return f'Updated {entity}: {len(changed)} fields changed'


def build_field_diffs(action, old_data=None, new_data=None) -> List[FieldDiff]:
    """
    Field-level diff over the union of snapshot keys.

    Inserts and updates are ordered by new_data's keys, deletes by old_data's;
    keys only found in the other snapshot follow.
    """
    action = normalize_action(action)
    old_data = _as_snapshot(old_data) or {}
    new_data = _as_snapshot(new_data) or {}

    if action == AuditAction.DELETE:
        primary, secondary = old_data, new_data
    else:
        primary, secondary = new_data, old_data

    keys = list(primary)
    keys.extend(key for key in secondary if key not in primary)

    diffs = []
    for key in keys:
        old_value = old_data.get(key, _MISSING)
        new_value = new_data.get(key, _MISSING)
        diffs.append(FieldDiff(
            field_name=key,
            old_value=None if old_value is _MISSING else old_value,
            new_value=None if new_value is _MISSING else new_value,
            changed=not values_equal(old_value, new_value),
        ))
    return diffs
