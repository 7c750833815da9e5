"""Shared fixtures for the scan request test suite.

The captcha verifier and the scan vendor are replaced by in-process fakes that
record their calls, so no test reaches the network unless it starts its own
local aiohttp server.
"""

from typing import Any

import pytest
from scan_intake.services.telivy_service import VendorResponse


class FakeVerifier:
  """Records verify() calls and returns a canned reply (or raises)."""

  def __init__(self, result: Any = None, error: Exception | None = None):
    self.result = {"success": True} if result is None else result
    self.error = error
    self.calls: list[tuple[str, str]] = []

  async def verify(self, secret: str, token: str) -> Any:
    self.calls.append((secret, token))
    if self.error is not None:
      raise self.error
    return self.result


class FakeVendor:
  """Records submit() calls and returns a canned VendorResponse (or raises)."""

  def __init__(
      self,
      status: int = 201,
      body: Any = None,
      error: Exception | None = None,
  ):
    self.response = VendorResponse(
        status=status, body={} if body is None else body
    )
    self.error = error
    self.calls: list[tuple[dict[str, str], str]] = []

  async def submit(
      self, payload: dict[str, str], api_key: str
  ) -> VendorResponse:
    self.calls.append((payload, api_key))
    if self.error is not None:
      raise self.error
    return self.response


@pytest.fixture
def make_verifier():
  return FakeVerifier


@pytest.fixture
def make_vendor():
  return FakeVendor


@pytest.fixture
def valid_submission() -> dict[str, str]:
  """A submission that passes every field rule."""
  return {
      "companyName": "Enterprise Technology Solutions",
      "workEmail": "ops@example.com",
      "companyDomain": "example.com",
      "fullName": "Dana Whitfield",
      "phone": "808-377-6300",
      "turnstileToken": "token_1234567890",
  }
