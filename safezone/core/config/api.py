"""Remote API settings: SafeZone backend and the Kakao Local search API.
"""

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings


class ApiSettings(BaseSettings):
    """Defines where requests are sent and how long they may take.

    Security Note:
        - API_BASE_URL must be an HTTPS origin outside of local development,
          bearer credentials are sent with every authenticated request.
        - KAKAO_REST_API_KEY should never be exposed in logs or version control.
    """

    API_BASE_URL: str = "https://safezone-h0u2.onrender.com"
    API_PREFIX: str = "/api"
    REQUEST_TIMEOUT_SECONDS: float = Field(gt=0, default=30.0)
    REFRESH_TIMEOUT_SECONDS: float = Field(gt=0, default=10.0)
    REFRESH_ENDPOINT: str = "/auth/refresh"

    KAKAO_API_BASE_URL: str = "https://dapi.kakao.com"
    KAKAO_REST_API_KEY: SecretStr = SecretStr("")
    PLACE_SEARCH_PAGE_SIZE: int = Field(ge=1, le=15, default=15)
    PLACE_SEARCH_MAX_ATTEMPTS: int = Field(ge=1, default=3)

    @field_validator("API_BASE_URL", "KAKAO_API_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")
