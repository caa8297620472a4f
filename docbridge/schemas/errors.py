"""Errors raised by the schema layer."""
from typing import Any, Dict, List, Optional


class InvalidRequestError(ValueError):
    """A payload did not match the shape of the request it was parsed as."""

    def __init__(self, model_name: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.model_name = model_name
        self.errors = errors or []
        super().__init__(f"Invalid {model_name} payload: {len(self.errors)} error(s)")

    def to_dict(self) -> Dict[str, Any]:
        """Body returned to HTTP clients."""
        return {"error": "invalid_request", "detail": self.errors}
