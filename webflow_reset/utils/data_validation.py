"""
Operator Input Validation
Checks site/collection ID arguments before any request is sent.
"""

from typing import List, Optional, Sequence

from webflow_reset.exceptions import ValidationError

ALL_KEYWORD = "all"
WEBFLOW_ID_LENGTH = 24


def is_all_selector(values: Sequence[str]) -> bool:
    """True if the operator passed the `all` keyword"""
    return len(values) > 0 and values[0].strip() == ALL_KEYWORD


def is_valid_webflow_id(value: str) -> bool:
    """Webflow object IDs are 24 characters long"""
    return isinstance(value, str) and len(value) == WEBFLOW_ID_LENGTH


def parse_site_ids(values: Sequence[str]) -> Optional[List[str]]:
    """
    Parse the --site-ids argument

    Returns:
        None for `all`, otherwise the list of site IDs
    """
    if not values:
        raise ValidationError('Expected to have "siteIds" passed in as an argument.')
    if is_all_selector(values):
        return None
    return [value.strip() for value in values]


def parse_collection_ids(values: Sequence[str]) -> Optional[List[str]]:
    """
    Parse the --collection-ids argument

    Returns:
        None for `all`, otherwise the list of collection IDs

    Raises:
        ValidationError: Empty list or an ID that isn't 24 characters long
    """
    if not values:
        raise ValidationError('Expected to have "collectionIds" passed in as an argument.')
    if is_all_selector(values):
        return None

    collection_ids = [value.strip() for value in values]
    validate_collection_ids(collection_ids)
    return collection_ids


def validate_collection_ids(collection_ids: Sequence[str]):
    """Raise ValidationError unless every ID looks like a Webflow collection ID"""
    for collection_id in collection_ids:
        if not is_valid_webflow_id(collection_id):
            raise ValidationError(
                f"Expected to have a valid Webflow collection ID "
                f"({WEBFLOW_ID_LENGTH} characters long), but instead got {collection_id}."
            )
