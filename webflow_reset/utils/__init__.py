"""Utility functions"""

from .data_validation import (
    parse_site_ids,
    parse_collection_ids,
    validate_collection_ids,
    is_valid_webflow_id
)
