"""Guard for folder and snippet names before they touch the filesystem."""

import os

_RESERVED = {"", ".", ".."}


def sanitize_name(raw_name: str) -> str:
    """Return ``raw_name`` if it is a single safe path segment, else ``""``.

    A name is rejected when it differs from its own base name (it contains a
    path separator), contains a NUL byte, or is ``.`` / ``..``. Callers must
    treat ``""`` as a validation failure.
    """
    if not isinstance(raw_name, str) or "\x00" in raw_name:
        return ""
    if os.path.basename(raw_name) != raw_name:
        return ""
    if os.altsep and os.altsep in raw_name:
        return ""
    if raw_name in _RESERVED:
        return ""
    return raw_name
