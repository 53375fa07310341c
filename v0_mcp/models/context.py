from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class CallContext(BaseModel):
    """
    Per-call state handed from a transport to the dispatcher.

    Created for one inbound tool call and dropped once its envelope is sent.
    The credential lives here, not on the tool descriptors, so each caller
    can use its own platform key.
    """

    model_config = ConfigDict(frozen=True)

    tool_name: str = Field(description="Name of the tool being invoked.")
    credential: str = Field(repr=False, description="Caller's platform API key.")
    arguments: Dict[str, Any] = Field(
        default_factory=dict,
        description="Raw, undecoded arguments supplied by the caller.",
    )
    request_id: Optional[str] = Field(
        default=None,
        description="Transport-level correlation ID (e.g. the JSON-RPC id).",
    )
