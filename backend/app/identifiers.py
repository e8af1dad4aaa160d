"""
Vidly Backend — Entity Identifiers
===================================

What:  Generation and shape-checking of entity ids.
Why:   Every entity id is a 24-hex-character ObjectId string. Ids are minted
       by the application (not the database) so that snapshots can embed an
       id before the row is flushed, and so that malformed ids can be
       rejected before any query is issued.
How:   Delegates to `bson.ObjectId`, the same id type document stores use.
"""

from bson import ObjectId


def new_object_id() -> str:
    """Returns a fresh, globally unique 24-hex id string."""
    return str(ObjectId())


def is_valid_object_id(value: object) -> bool:
    """
    True only for 24-character hex strings.

    `ObjectId.is_valid` also accepts 12-byte `bytes` values, which are never
    valid in a URL or JSON body, so non-strings are rejected first.
    """
    if not isinstance(value, str) or len(value) != 24:
        return False
    return ObjectId.is_valid(value)
