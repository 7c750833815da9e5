"""This module provides the Telivy external scan client."""

import asyncio
import dataclasses
import logging
from typing import Any, Protocol

import aiohttp
from scan_intake.config import settings
from scan_intake.core import utils
from scan_intake.errors import VendorUnavailableError


@dataclasses.dataclass(frozen=True)
class VendorResponse:
  """Status and best-effort decoded body of a vendor reply."""

  status: int
  body: Any

  @property
  def ok(self) -> bool:
    return 200 <= self.status < 300


class ScanVendor(Protocol):
  """Submits an external scan request to the vendor."""

  async def submit(
      self, payload: dict[str, str], api_key: str
  ) -> VendorResponse:
    ...


class TelivyScanClient:
  """Creates external security scans through the Telivy REST API."""

  def __init__(
      self,
      url: str | None = None,
      timeout_seconds: float | None = None,
  ):
    self.url = url or settings.TELIVY_URL
    self.timeout = aiohttp.ClientTimeout(
        total=timeout_seconds or settings.OUTBOUND_TIMEOUT_SECONDS
    )

  async def submit(
      self, payload: dict[str, str], api_key: str
  ) -> VendorResponse:
    """Posts a scan request to Telivy.

    Args:
        payload: The snake_case body Telivy expects.
        api_key: The Telivy bearer token.

    Returns:
        The response status and its JSON body, or ``{}`` when the body could
        not be decoded.

    Raises:
        VendorUnavailableError: If Telivy could not be reached or timed out.
    """
    logging.info(
        "TELIVY_SERVICE: Requesting external scan for domain %s.",
        payload.get("company_domain"),
    )
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
        "Accept": "application/json",
    }
    try:
      async with aiohttp.ClientSession(timeout=self.timeout) as session:
        async with session.post(
            self.url, json=payload, headers=headers
        ) as response:
          raw_body = await response.read()
          status = response.status
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
      logging.error("SERVICE_ERROR: Telivy request failed: %r", e)
      raise VendorUnavailableError("Telivy request failed") from e

    logging.info("TELIVY_SERVICE: Telivy answered with status %s.", status)
    return VendorResponse(
        status=status,
        body=utils.decode_json_body_or_empty(raw_body, "Telivy"),
    )


# Singleton instance to be used by other parts of the application.
telivy_client = TelivyScanClient()
