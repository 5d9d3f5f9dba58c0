"""
Identifier generation
"""

import uuid

ID_LENGTH = 10


def generate_id() -> str:
    """Fresh opaque element/slide identifier."""
    return uuid.uuid4().hex[:ID_LENGTH]
