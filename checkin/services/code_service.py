# services/code_service.py
"""
Attendee code generation.

Codes look like ACC-482913-anVhbkBl: a fixed prefix, the low six digits of a
millisecond timestamp and the first eight characters of the base64 encoding of
the attendee's email (or name when there is no email). Bulk imports append the
row index so codes from one batch never repeat.

Codes are not checked for uniqueness here; DirectoryStore retries on collision.

The fragment is taken over UTF-8 bytes. Browser-side btoa works on Latin-1
bytes, so for names with accented characters such as Pérez the fragment
differs from one produced by btoa. ASCII emails and names give identical
fragments either way.
"""

import base64
import time

DEFAULT_PREFIX = 'ACC'
FRAGMENT_LENGTH = 8
STAMP_DIGITS = 6


def current_millis():
    return int(time.time() * 1000)


def encode_fragment(text):
    """Base64 fragment of text, taken over its UTF-8 bytes."""
    encoded = base64.b64encode(text.encode('utf-8')).decode('ascii')
    return encoded[:FRAGMENT_LENGTH]


def generate_code(name, email='', timestamp_ms=None, row_index=None, prefix=DEFAULT_PREFIX):
    """
    Build an attendee code.

    Args:
        name: Attendee name, already validated by the caller
        email: Optional email; preferred over name for the fragment
        timestamp_ms: Millisecond timestamp, defaults to now
        row_index: Row number for bulk imports
        prefix: Code prefix

    Returns:
        str: The code
    """
    if timestamp_ms is None:
        timestamp_ms = current_millis()

    stamp = str(timestamp_ms)[-STAMP_DIGITS:]
    fragment = encode_fragment(email or name)
    code = f"{prefix}-{stamp}-{fragment}"

    if row_index is not None:
        code = f"{code}-{row_index}"

    return code


def demo_code(sequence, email, prefix=DEFAULT_PREFIX):
    """Code of the form ACC-001-<fragment> used by the bundled demo people."""
    return f"{prefix}-{sequence:03d}-{encode_fragment(email)}"
