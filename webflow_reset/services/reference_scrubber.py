"""
Reference Field Scrubber
========================

Webflow refuses to delete an item that another item still points at, so
every reference field has to be cleared before anything gets deleted.

Item payloads don't say which fields are references. We treat any value
that looks like a Webflow object ID (24+ lowercase hex chars) as one:

- "507f191e810c19729de860ea"          -> single reference, becomes None
- ["507f191e810c19729de860ea", ...]   -> multi reference, becomes []

The scrubbed payload keeps ONLY the allow-listed keys below plus the
cleared reference fields. Every other field is dropped.
"""

import re
from typing import Any, Dict, NamedTuple

from webflow_reset.models import Record

# Fields always sent back with the patch (when present on the item)
PRESERVED_FIELDS = ("_archived", "_draft", "name", "slug")

# Internal identifiers: never copied, never treated as references
SKIPPED_FIELDS = frozenset({"_cid", "_id"})

REFERENCE_ID_PATTERN = re.compile(r"[0-9a-f]{24,}")


class ScrubResult(NamedTuple):
    fields: Dict[str, Any]
    modified: bool


def looks_like_reference(value: Any) -> bool:
    """True if value is a string of 24 or more lowercase hex digits"""
    return (
        isinstance(value, str)
        and len(value) >= 24
        and REFERENCE_ID_PATTERN.fullmatch(value) is not None
    )


def looks_like_multi_reference(value: Any) -> bool:
    """True if value is a non-empty list whose first element looks like a reference"""
    return isinstance(value, list) and len(value) > 0 and looks_like_reference(value[0])


def scrub_references(fields: Dict[str, Any]) -> ScrubResult:
    """
    Build the patch payload that clears every reference field of an item

    Args:
        fields: Raw item payload

    Returns:
        ScrubResult(fields, modified) where `modified` is True if at least
        one reference field was cleared
    """
    modified = False
    new_fields = {key: fields[key] for key in PRESERVED_FIELDS if key in fields}

    for key, value in fields.items():
        if key in SKIPPED_FIELDS:
            continue

        if looks_like_reference(value):
            new_fields[key] = None
            modified = True
        elif looks_like_multi_reference(value):
            new_fields[key] = []
            modified = True

    return ScrubResult(new_fields, modified)


def scrub_record(record: Record) -> ScrubResult:
    """Scrub the fields of a fetched record (the record itself is left untouched)"""
    return scrub_references(record.fields)
