"""FastAPI router for the scan request endpoint."""

import logging
from typing import Any

import fastapi
from fastapi import responses
from scan_intake.config import settings
from scan_intake.core import utils
from scan_intake.handlers import submission_handler as submission_handler_lib
from scan_intake.schemas import scan_request as scan_request_lib
from scan_intake.services import telivy_service as telivy_service_lib
from scan_intake.services import turnstile_service as turnstile_service_lib

APIRouter = fastapi.APIRouter
Depends = fastapi.Depends
Request = fastapi.Request
JSONResponse = responses.JSONResponse
HandlerConfig = submission_handler_lib.HandlerConfig
SubmissionHandler = submission_handler_lib.SubmissionHandler
Outcome = submission_handler_lib.Outcome


router = APIRouter(prefix="/api", tags=["Scan Requests"])


def get_submission_handler() -> SubmissionHandler:
  """Builds a handler from the current settings."""
  return SubmissionHandler(
      config=HandlerConfig(
          turnstile_secret=settings.TURNSTILE_SECRET,
          telivy_api_key=settings.TELIVY_API_KEY,
      ),
      verifier=turnstile_service_lib.turnstile_verifier,
      vendor=telivy_service_lib.telivy_client,
  )


def outcome_to_response(outcome: Outcome) -> JSONResponse:
  """Translates a handler outcome into the endpoint's status and body."""
  content: dict[str, Any]
  match outcome:
    case submission_handler_lib.Accepted(vendor_response=vendor_response):
      status_code, content = 200, {"ok": True, "telivy": vendor_response}
    case submission_handler_lib.RejectedInvalidInput(field_errors=details):
      status_code, content = 400, {"error": "Invalid input", "details": details}
    case submission_handler_lib.RejectedCaptcha(details=details):
      status_code = 400
      content = {"error": "Failed human verification", "details": details}
    case submission_handler_lib.RejectedVendor():
      status_code = 502
      content = {
          "error": "Telivy API error",
          "status": outcome.status,
          "details": outcome.details,
          "fieldErrors": outcome.field_errors,
      }
    case submission_handler_lib.ServerMisconfigured():
      # The reason stays in the server log.
      status_code, content = 500, {"error": "Server misconfigured"}
    case _:
      status_code, content = 500, {"error": "Unexpected server error"}
  return JSONResponse(status_code=status_code, content=content)


@router.post("/telivy")
async def submit_scan_request_endpoint(
    request: Request,
    handler: SubmissionHandler = Depends(get_submission_handler),
) -> JSONResponse:
  """Receives the form submission and forwards it to Telivy."""
  raw_body = await request.body()
  try:
    body = utils.decode_json_body(raw_body, "request")
  except ValueError:
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid input",
            "details": {
                scan_request_lib.ROOT_ERROR_KEY: [
                    {"kind": "type", "message": "Body is not valid JSON"}
                ]
            },
        },
    )

  outcome = await handler.handle(body)
  logging.info(
      "SCAN_REQUESTS: Submission finished as %s.", type(outcome).__name__
  )
  try:
    return outcome_to_response(outcome)
  except ValueError:
    # NaN and Infinity in a collaborator reply cannot be rendered as JSON.
    logging.exception("SCAN_REQUESTS: Could not serialize outcome.")
    return outcome_to_response(submission_handler_lib.UnexpectedFailure())
