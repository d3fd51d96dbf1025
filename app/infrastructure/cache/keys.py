"""Storage key builders. Single place for key format (DRY).

Key components must not contain CACHE_KEY_SEP to avoid ambiguous or
colliding keys.
"""

from app.core.constants import CACHE_KEY_SEP, PENDING_RESET_KEY


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value contains the key separator.

    Args:
        value: String component used in a key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value contains CACHE_KEY_SEP.
    """
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def pending_reset_key(prefix: str | None = None) -> str:
    """Key of the single pending reset slot, optionally namespaced (e.g. in shared Redis)."""
    if not prefix:
        return PENDING_RESET_KEY
    _validate_key_component(prefix, "prefix")
    return f"{prefix}{CACHE_KEY_SEP}{PENDING_RESET_KEY}"
