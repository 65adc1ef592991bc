"""Client options model."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ClientConfig(BaseModel):
    """Configuration for the API client.

    Attributes:
        sandbox: Send requests to the sandbox domain instead of production
        trace: Log every request/response pair
        timeout: Per-attempt transport timeout in seconds (None = no timeout)
        domain: Forced domain override (takes precedence over sandbox)
    """

    sandbox: bool = False
    trace: bool = False
    timeout: Optional[float] = Field(None, gt=0)
    domain: Optional[str] = None

    model_config = ConfigDict(frozen=True)
