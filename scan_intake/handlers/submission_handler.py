"""Handles a single scan request submission from validation to Telivy."""

import dataclasses
import logging
from typing import Any

from scan_intake.errors import CaptchaUnavailableError
from scan_intake.schemas import scan_request as scan_request_lib
from scan_intake.services import error_map
from scan_intake.services import telivy_service as telivy_service_lib
from scan_intake.services import turnstile_service as turnstile_service_lib

CaptchaVerifier = turnstile_service_lib.CaptchaVerifier
ScanVendor = telivy_service_lib.ScanVendor
validate_scan_request = scan_request_lib.validate_scan_request
map_vendor_errors = error_map.map_vendor_errors

MISSING_CAPTCHA_SECRET = "missing captcha secret"
MISSING_VENDOR_API_KEY = "missing vendor api key"


@dataclasses.dataclass(frozen=True)
class HandlerConfig:
  """Server-side secrets; either may be absent in a broken deployment."""

  turnstile_secret: str | None = None
  telivy_api_key: str | None = None


@dataclasses.dataclass(frozen=True)
class Accepted:
  vendor_response: Any


@dataclasses.dataclass(frozen=True)
class RejectedInvalidInput:
  field_errors: dict[str, list[dict[str, str]]]


@dataclasses.dataclass(frozen=True)
class RejectedCaptcha:
  details: dict[str, Any]


@dataclasses.dataclass(frozen=True)
class RejectedVendor:
  status: int
  field_errors: dict[str, str]
  details: Any


@dataclasses.dataclass(frozen=True)
class ServerMisconfigured:
  reason: str


@dataclasses.dataclass(frozen=True)
class UnexpectedFailure:
  pass


Outcome = (
    Accepted
    | RejectedInvalidInput
    | RejectedCaptcha
    | RejectedVendor
    | ServerMisconfigured
    | UnexpectedFailure
)


class SubmissionHandler:
  """Validates a submission, verifies its captcha and forwards it to Telivy.

  Each call to handle() is independent; the handler keeps no per-request state.
  """

  def __init__(
      self,
      config: HandlerConfig,
      verifier: CaptchaVerifier,
      vendor: ScanVendor,
  ):
    self.config = config
    self.verifier = verifier
    self.vendor = vendor

  async def handle(self, raw: Any) -> Outcome:
    """Runs one submission through every step and reports where it stopped.

    Args:
      raw: The decoded JSON body of the request.

    Returns:
      The outcome of the first step that did not succeed, or Accepted.
    """
    try:
      return await self._handle(raw)
    except Exception:  # pylint: disable=broad-exception-caught
      logging.exception("SUBMISSION: Unexpected error handling scan request.")
      return UnexpectedFailure()

  async def _handle(self, raw: Any) -> Outcome:
    validation = validate_scan_request(raw)
    if not validation.ok:
      logging.info(
          "SUBMISSION: Rejected invalid input for fields %s.",
          sorted(validation.details),
      )
      return RejectedInvalidInput(field_errors=validation.details)
    request = validation.request

    secret = self.config.turnstile_secret
    if not secret:
      logging.error(
          "SUBMISSION: Server misconfigured: %s.", MISSING_CAPTCHA_SECRET
      )
      return ServerMisconfigured(reason=MISSING_CAPTCHA_SECRET)

    try:
      verification = await self.verifier.verify(secret, request.turnstile_token)
    except CaptchaUnavailableError:
      return RejectedCaptcha(details={})
    if not isinstance(verification, dict) or not verification.get("success"):
      logging.info(
          "SUBMISSION: Captcha verification failed for domain %s.",
          request.company_domain,
      )
      return RejectedCaptcha(
          details=verification if isinstance(verification, dict) else {}
      )

    api_key = self.config.telivy_api_key
    if not api_key:
      logging.error(
          "SUBMISSION: Server misconfigured: %s.", MISSING_VENDOR_API_KEY
      )
      return ServerMisconfigured(reason=MISSING_VENDOR_API_KEY)

    response = await self.vendor.submit(request.to_vendor_payload(), api_key)
    if not response.ok:
      logging.warning(
          "SUBMISSION: Telivy rejected scan request with status %s.",
          response.status,
      )
      return RejectedVendor(
          status=response.status,
          field_errors=map_vendor_errors(response.body),
          details=response.body,
      )

    logging.info(
        "SUBMISSION: Telivy accepted scan request for domain %s.",
        request.company_domain,
    )
    return Accepted(vendor_response=response.body)
