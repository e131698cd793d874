"""
Identifier helpers.

Rows are keyed by UUID strings, same as the identity provider's user ids.
"""

import uuid


def new_id() -> str:
    return str(uuid.uuid4())
