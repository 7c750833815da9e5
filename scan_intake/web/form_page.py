"""Serves the scan request form."""

import pathlib

import fastapi
from fastapi import responses
from fastapi import templating
from scan_intake.config import settings

APIRouter = fastapi.APIRouter
Request = fastapi.Request
HTMLResponse = responses.HTMLResponse
Jinja2Templates = templating.Jinja2Templates

TEMPLATES_DIR = pathlib.Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["Form"])

FORM_FIELDS = (
    {"name": "companyName", "label": "Company name",
     "input_type": "text", "autocomplete": "organization"},
    {"name": "workEmail", "label": "Work email",
     "input_type": "email", "autocomplete": "email"},
    {"name": "companyDomain", "label": "Company domain",
     "input_type": "text", "autocomplete": "url"},
    {"name": "fullName", "label": "Full name",
     "input_type": "text", "autocomplete": "name"},
    {"name": "phone", "label": "Phone",
     "input_type": "tel", "autocomplete": "tel"},
)


@router.get("/", response_class=HTMLResponse)
async def form_page(request: Request) -> HTMLResponse:
  """Serves the scan request form.

  Only the public Turnstile site key reaches the page; without one the
  widget is replaced by a configuration notice.
  """
  return templates.TemplateResponse(
      request,
      "form.html",
      {
          "title": settings.APP_NAME,
          "fields": FORM_FIELDS,
          "site_key": settings.TURNSTILE_SITE_KEY,
          "submit_url": "/api/telivy",
      },
  )
