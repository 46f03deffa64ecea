from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: str = ""


class ErrorEnvelope(BaseModel):
    """Error payload: ``{"error": {"message": ...}, "documentation_url": ...}``."""

    model_config = ConfigDict(extra="ignore")

    error: ErrorDetail = Field(default_factory=ErrorDetail)
    documentation_url: str | None = None
