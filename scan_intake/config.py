"""Settings for the Telivy scan request service."""

import pydantic_settings

SettingsConfigDict = pydantic_settings.SettingsConfigDict
BaseSettings = pydantic_settings.BaseSettings


class Settings(BaseSettings):
  """Settings for the Telivy scan request service.

  Secrets are optional here so that a missing value is reported per request
  as a server misconfiguration instead of failing at import time.
  """

  model_config = SettingsConfigDict(
      env_file='.env', env_file_encoding='utf-8', extra='ignore'
  )
  APP_NAME: str = 'Telivy Scan Request'
  LOG_LEVEL: str = 'INFO'

  # Captcha (Cloudflare Turnstile)
  TURNSTILE_SECRET: str | None = None
  TURNSTILE_SITE_KEY: str | None = None
  TURNSTILE_VERIFY_URL: str = (
      'https://challenges.cloudflare.com/turnstile/v0/siteverify'
  )

  # Scan vendor
  TELIVY_API_KEY: str | None = None
  TELIVY_URL: str = 'https://api-v1.telivy.com/api/v1/security/external-scans'

  # Applies to both outbound calls.
  OUTBOUND_TIMEOUT_SECONDS: float = 10.0


settings = Settings()
