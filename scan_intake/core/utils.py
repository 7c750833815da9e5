"""Helper functions for working with JSON bodies."""

import json
import logging
from typing import Any


def _reject_constant(name: str) -> Any:
  """NaN and Infinity are not JSON and cannot be sent back to the client."""
  raise ValueError(f"Unsupported JSON constant {name}")


def decode_json_body(raw_body: bytes | str, source: str) -> Any:
  """Decodes a JSON body.

  Args:
    raw_body: The raw body as received.
    source: Short label used in the log line when decoding fails.

  Returns:
    The decoded value.

  Raises:
    ValueError: If the body is not valid UTF-8 JSON or contains the
      non-standard constants NaN, Infinity or -Infinity.
  """
  try:
    return json.loads(raw_body, parse_constant=_reject_constant)
  except ValueError as e:
    logging.warning("Could not decode %s body as JSON: %s", source, e)
    raise ValueError(f"{source} body is not valid JSON") from e


def decode_json_body_or_empty(raw_body: bytes | str, source: str) -> Any:
  """Like decode_json_body, but returns an empty dict for unparseable bodies."""
  if not raw_body:
    return {}
  try:
    return decode_json_body(raw_body, source)
  except ValueError:
    return {}
