"""
Constants for proxy_model.

Event names are part of the public observer interface and keep the names
of the access hooks they announce.
"""

from typing import Final

# ============================================================================
# LIFECYCLE EVENT NAMES
# ============================================================================

EVENT_VALIDATE: Final[str] = "validate"
"""Emitted before a write; observers may short-circuit it."""

EVENT_SET: Final[str] = "set"
"""Emitted after a write attempt, whatever its outcome."""

EVENT_GET: Final[str] = "get"
"""Emitted after a value was resolved and converted."""

EVENT_HAS: Final[str] = "has"
"""Emitted after an existence check."""

EVENT_OWN_KEYS: Final[str] = "ownKeys"
"""Emitted before the key list is de-duplicated."""

EVENT_DESCRIBE: Final[str] = "getOwnPropertyDescriptor"
"""Emitted after a property descriptor was looked up."""

EVENT_DELETE: Final[str] = "deleteProperty"
"""Emitted before a delete; observers may supply the outcome."""

LIFECYCLE_EVENTS: Final[tuple[str, ...]] = (
    EVENT_VALIDATE,
    EVENT_SET,
    EVENT_GET,
    EVENT_HAS,
    EVENT_OWN_KEYS,
    EVENT_DESCRIBE,
    EVENT_DELETE,
)

# ============================================================================
# ENUMERATION CONSTANTS
# ============================================================================

HIDDEN_KEY_PREFIX: Final[str] = "__"
"""String keys with this prefix are left out of ``keys()`` unless requested."""

# ============================================================================
# OPTION DEFAULTS
# ============================================================================

DEFAULT_ENUMERATE_NON_ENUMERABLE: Final[bool] = False
DEFAULT_ENUMERATE_SYMBOLS: Final[bool] = False
DEFAULT_CONFIRM_DELETE: Final[bool] = True
DEFAULT_READONLY_FAIL: Final[bool] = False

# ============================================================================
# MONGODB CONSTANTS
# ============================================================================

EJSON_OID: Final[str] = "$oid"
EJSON_DATE: Final[str] = "$date"
EJSON_NUMBER_LONG: Final[str] = "$numberLong"
