from pydantic import BaseModel


class HealthCheckResponse(BaseModel):
    """Health check payload."""

    status: str
    version: str
    timestamp: str
    database: str
