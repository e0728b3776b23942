import re
from datetime import datetime


def clean_email(email):
    """
    Clean and normalize email addresses
    - Convert to lowercase
    - Remove leading/trailing whitespace
    """
    if not email or _is_missing(email):
        return ""

    return str(email).strip().lower()


def normalize_name(name):
    """
    Normalize name formatting
    - Remove leading/trailing whitespace
    - Collapse runs of whitespace to one space
    Capitalization is kept as entered.
    """
    if not name or _is_missing(name):
        return ""

    return re.sub(r'\s+', ' ', str(name).strip())


def clean_text_field(text):
    """
    General text field cleaning
    - Remove leading/trailing whitespace
    - Replace multiple spaces with single space
    """
    if not text or _is_missing(text):
        return ""

    return re.sub(r'\s+', ' ', str(text).strip())


def parse_timestamp(value):
    """
    Parse a stored timestamp into a naive local datetime.

    Accepts datetime objects and ISO 8601 strings, including the
    'Z'-suffixed UTC strings written by browser exports.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _is_missing(value):
    # pandas hands back float NaN for empty spreadsheet cells
    return isinstance(value, float) and value != value
