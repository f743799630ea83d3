"""
UserCRUD - Request Body Parsing
================================

What:  Decodes a POST body into a plain dict, whatever its encoding.
How:   JSON bodies are read raw with `request.body()` and decoded with
       `json.loads`, so an empty body can become {} and malformed JSON a 400.
       URL-encoded and multipart form bodies go through `request.form()`
       (python-multipart). The result is then validated against a schema by
       the route.
"""

import json
import logging
from typing import Any, Dict

from fastapi import Request

from usercrud.exceptions import ValidationError

logger = logging.getLogger(__name__)


async def read_body(request: Request) -> Dict[str, Any]:
    """
    Parse the request body as JSON or form data.

    Returns:
        The submitted fields. An empty body yields an empty dict, which then
        fails validation with the list of missing fields.

    Raises:
        ValidationError: Malformed JSON, or a JSON document that is not an object.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json") or content_type.endswith("+json"):
        raw = await request.body()
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise ValidationError(message="Request body is not valid JSON.") from e
        if not isinstance(data, dict):
            raise ValidationError(message="Request body must be a JSON object.")
        return data

    form = await request.form()
    # Repeated keys keep the last value, matching a flat form submission
    return {key: value for key, value in form.items() if isinstance(value, str)}
