"""
Filename-based guideline category inference.
"""

from ...domain.constants import CATEGORY_RULES, DEFAULT_CATEGORY, GUIDELINE_CATEGORIES


def infer_category(filename: str) -> str:
    """
    Infer a guideline category from its filename.

    Rules in CATEGORY_RULES are checked in order and the first keyword found
    in the lower-cased filename decides. Falls back to 'organization'.

    Examples:
        >>> infer_category("06_mocks_and_http_stubs.md")
        'mocking'
        >>> infer_category("intro.md")
        'organization'
    """
    name = filename.lower()
    for keywords, category in CATEGORY_RULES:
        if any(keyword in name for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def is_known_category(value: object) -> bool:
    return isinstance(value, str) and value in GUIDELINE_CATEGORIES
