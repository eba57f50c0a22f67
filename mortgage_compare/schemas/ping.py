"""Health-check payload."""

from pydantic import BaseModel


class PingResponse(BaseModel):
    message: str
    downstream: str
