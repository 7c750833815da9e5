"""This module provides a Cloudflare Turnstile verification service."""

import asyncio
import logging
from typing import Any, Protocol

import aiohttp
from scan_intake.config import settings
from scan_intake.core import utils
from scan_intake.errors import CaptchaUnavailableError


class CaptchaVerifier(Protocol):
  """Verifies a captcha response token."""

  async def verify(self, secret: str, token: str) -> dict[str, Any]:
    ...


class TurnstileVerifier:
  """Verifies Turnstile tokens against Cloudflare's siteverify endpoint."""

  def __init__(
      self,
      verify_url: str | None = None,
      timeout_seconds: float | None = None,
  ):
    self.verify_url = verify_url or settings.TURNSTILE_VERIFY_URL
    self.timeout = aiohttp.ClientTimeout(
        total=timeout_seconds or settings.OUTBOUND_TIMEOUT_SECONDS
    )

  async def verify(self, secret: str, token: str) -> dict[str, Any]:
    """Asks Turnstile whether a widget token is valid.

    Args:
        secret: The server-side Turnstile secret.
        token: The response token submitted with the form.

    Returns:
        The decoded siteverify reply. Only ``success`` is meaningful; a reply
        that is not a JSON object is returned as ``{"success": False}``.

    Raises:
        CaptchaUnavailableError: If the endpoint could not be reached, timed
          out or replied with something other than JSON.
    """
    logging.info("TURNSTILE_SERVICE: Verifying captcha token.")
    try:
      async with aiohttp.ClientSession(timeout=self.timeout) as session:
        async with session.post(
            self.verify_url,
            data={"secret": secret, "response": token},
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        ) as response:
          raw_body = await response.read()
          status = response.status
      result = utils.decode_json_body(raw_body, "Turnstile")
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
      logging.error(
          "SERVICE_ERROR: Turnstile verification did not produce a result: %r",
          e,
      )
      raise CaptchaUnavailableError("Turnstile verification failed") from e

    if not isinstance(result, dict):
      return {"success": False}
    logging.info(
        "TURNSTILE_SERVICE: Verification answered with status %s, success=%s.",
        status,
        result.get("success"),
    )
    return result


# Singleton instance to be used by other parts of the application.
turnstile_verifier = TurnstileVerifier()
