"""Pydantic schemas for scan request validation."""

import dataclasses
from typing import Annotated, Any

import email_validator
import pydantic

Field = pydantic.Field
BaseModel = pydantic.BaseModel
ConfigDict = pydantic.ConfigDict
AfterValidator = pydantic.AfterValidator
ValidationError = pydantic.ValidationError

ROOT_ERROR_KEY = "_root"

# pydantic error type -> issue kind reported to the client
_ISSUE_KINDS = {
    "missing": "missing",
    "string_type": "type",
    "string_too_short": "length",
    "value_error": "format",
}


def _check_email_syntax(value: str) -> str:
  """Checks the address syntax but keeps the submitted value as-is."""
  try:
    email_validator.validate_email(value, check_deliverability=False)
  except email_validator.EmailNotValidError as e:
    raise ValueError(f"Invalid email address: {e}") from e
  return value


WorkEmail = Annotated[str, AfterValidator(_check_email_syntax)]


class ScanRequest(BaseModel):
  """A scan request as submitted by the form."""

  model_config = ConfigDict(frozen=True, strict=True)

  company_name: str = Field(
      ..., alias="companyName", min_length=2,
      description="Legal or trading name of the company to scan.",
  )
  work_email: WorkEmail = Field(
      ..., alias="workEmail", description="Contact address at the company."
  )
  company_domain: str = Field(
      ..., alias="companyDomain", min_length=3,
      description="Primary domain the external scan should target.",
  )
  full_name: str = Field(
      ..., alias="fullName", min_length=2,
      description="Name of the person requesting the scan.",
  )
  phone: str = Field(
      ..., min_length=7, description="Contact phone number."
  )
  turnstile_token: str = Field(
      ..., alias="turnstileToken", min_length=10,
      description="Turnstile response token produced by the widget.",
  )

  def to_vendor_payload(self) -> dict[str, str]:
    """Returns the body expected by the scan vendor; the token is left out."""
    return {
        "company_name": self.company_name,
        "work_email": self.work_email,
        "company_domain": self.company_domain,
        "full_name": self.full_name,
        "phone": self.phone,
    }


@dataclasses.dataclass(frozen=True)
class ValidationResult:
  """Either a validated request or the per-field issues that prevented it."""

  request: ScanRequest | None = None
  details: dict[str, list[dict[str, str]]] = dataclasses.field(
      default_factory=dict
  )

  @property
  def ok(self) -> bool:
    return self.request is not None


def _issues_from(error: ValidationError) -> dict[str, list[dict[str, str]]]:
  details: dict[str, list[dict[str, str]]] = {}
  for item in error.errors(include_url=False):
    loc = item.get("loc") or (ROOT_ERROR_KEY,)
    field_name = str(loc[0])
    details.setdefault(field_name, []).append({
        "kind": _ISSUE_KINDS.get(item["type"], "format"),
        "message": item["msg"],
    })
  return details


def validate_scan_request(raw: Any) -> ValidationResult:
  """Validates an untrusted submission.

  Malformed input is the expected failure case, so this never raises for it.

  Args:
    raw: The decoded request body, of any shape.

  Returns:
    A ValidationResult holding the ScanRequest on success, or a mapping of
    field name to a list of {kind, message} issues on failure. Kind is one of
    "missing", "type", "length" or "format".
  """
  if not isinstance(raw, dict):
    return ValidationResult(details={
        ROOT_ERROR_KEY: [{"kind": "type", "message": "Expected a JSON object"}]
    })
  try:
    return ValidationResult(request=ScanRequest.model_validate(raw))
  except ValidationError as e:
    return ValidationResult(details=_issues_from(e))
