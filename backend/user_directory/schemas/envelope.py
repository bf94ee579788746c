"""Response Envelope — uniform {success, message, data, errors} wrapper.

Invariants:
    - Absent keys are omitted, never serialized as null
    - Success envelopes never carry `errors`; failure envelopes come from
      UserDirectoryError.to_response() and never carry `data`
"""

from typing import Any


def success_envelope(message: str | None = None, data: Any = None) -> dict:
    """Build a success envelope. An empty list is valid data."""
    envelope: dict[str, Any] = {"success": True}
    if message is not None:
        envelope["message"] = message
    if data is not None:
        envelope["data"] = data
    return envelope
