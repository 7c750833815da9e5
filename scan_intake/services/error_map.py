"""Maps Telivy API error shapes to the form's field names.

Telivy does not publish a stable error schema, so the payload is inspected
defensively for the common shapes, e.g. ``{"errors": {"field": ["msg"]}}`` or
``{"error": {"field": "msg"}}``.
"""

from collections.abc import Mapping
from typing import Any

# Checked in this order; later containers overwrite earlier ones.
_CONTAINER_KEYS = ("errors", "error", "detail", "message")

_TELIVY_TO_LOCAL_KEY = {
    "company_name": "companyName",
    "work_email": "workEmail",
    "company_domain": "companyDomain",
    "full_name": "fullName",
    "phone": "phone",
    # graceful fallbacks
    "email": "workEmail",
    "domain": "companyDomain",
    "name": "companyName",
}


def _as_text(value: Any) -> str:
  if value is None:
    return "null"
  if isinstance(value, bool):
    return "true" if value else "false"
  return str(value)


def _extract_message(value: Any) -> str | None:
  if isinstance(value, str):
    return value
  if isinstance(value, list | tuple):
    return _as_text(value[0]) if value else None
  if isinstance(value, Mapping) and value.get("message"):
    return _as_text(value["message"])
  return None


def map_vendor_errors(payload: Any) -> dict[str, str]:
  """Returns per-field messages found in a vendor error payload.

  Never raises; anything unrecognised yields an empty mapping.

  Args:
    payload: The parsed vendor response body, of any shape.

  Returns:
    A mapping from local field name to a single message.
  """
  field_errors: dict[str, str] = {}
  if not isinstance(payload, Mapping):
    return field_errors

  for container_key in _CONTAINER_KEYS:
    container = payload.get(container_key)
    if not container or not isinstance(container, Mapping):
      continue
    for vendor_key, value in container.items():
      local_key = _TELIVY_TO_LOCAL_KEY.get(vendor_key)
      if local_key is None:
        continue
      message = _extract_message(value)
      if message is not None:
        field_errors[local_key] = message

  return field_errors
