"""Exceptions raised by the scan request services."""


class ScanIntakeError(Exception):
  """Base class for scan request errors."""


class CaptchaUnavailableError(ScanIntakeError):
  """The captcha verification service could not produce a result."""


class VendorUnavailableError(ScanIntakeError):
  """The scan vendor could not be reached or did not answer in time."""
