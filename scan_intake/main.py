"""Main application for the Telivy scan request service."""

from contextlib import asynccontextmanager

import logging
import sys
from google.cloud.logging_v2.handlers import StructuredLogHandler
import dotenv
import fastapi
from scan_intake.api import scan_requests
from scan_intake.config import settings
from scan_intake.web import form_page

load_dotenv = dotenv.load_dotenv
FastAPI = fastapi.FastAPI

load_dotenv()


def setup_logging(level: str = settings.LOG_LEVEL) -> None:
  """Configures a single structured logger for Cloud Run."""
  root_logger = logging.getLogger()
  root_logger.handlers.clear()
  root_logger.setLevel(level.upper())
  handler = StructuredLogHandler(stream=sys.stdout)
  root_logger.addHandler(handler)


# --- Logging and App Setup ---
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
  logging.info("FastAPI server starting up...")
  if not settings.TURNSTILE_SITE_KEY:
    logging.warning(
        "STARTUP: TURNSTILE_SITE_KEY is not set; the form cannot render"
        " the captcha."
    )
  yield
  logging.info("FastAPI server shutting down.")


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
app.include_router(scan_requests.router)
app.include_router(form_page.router)


if __name__ == "__main__":
  import uvicorn  # pylint: disable=g-import-not-at-top

  uvicorn.run(
      "scan_intake.main:app",
      host="0.0.0.0",
      port=8080,
      reload=True,
  )
