"""Building blocks for tool operations (arguments -> one platform call)."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from . import Operation

Reshape = Callable[[Dict[str, Any]], Dict[str, Any]]


def platform_call(operation: str, reshape: Optional[Reshape] = None) -> Operation:
    """
    Return an operation that issues exactly one `client.perform` call.

    `reshape` turns decoded tool arguments into the parameter object the
    platform operation expects; by default arguments pass through as-is.
    """

    async def _call(client: Any, arguments: Dict[str, Any], credential: str) -> Any:
        params = reshape(arguments) if reshape else dict(arguments)
        return await client.perform(operation, params, api_key=credential)

    _call.__name__ = f"call_{operation.replace('.', '_')}"
    _call.__qualname__ = _call.__name__
    return _call


def with_model_configuration(arguments: Dict[str, Any]) -> Dict[str, Any]:
    """
    Fold flat `modelId` / `imageGenerations` into `modelConfiguration`.

    Without a `modelId` no configuration object is sent at all; the platform
    treats a missing object differently from a default one.
    """
    params = dict(arguments)
    model_id = params.pop("modelId", None)
    image_generations = params.pop("imageGenerations", None)
    if model_id:
        params["modelConfiguration"] = {
            "modelId": model_id,
            "imageGenerations": bool(image_generations),
        }
    return params
