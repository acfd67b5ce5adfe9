"""OpenAPI metadata and customization utilities.

Adds tag descriptions and documents which operations are rate limited, keeping
documentation concerns out of the app factory.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

TAGS_METADATA = [
    {
        "name": "Gamepasses",
        "description": "Passthrough endpoints relaying the Roblox game pass APIs.",
    },
    {
        "name": "Health",
        "description": "Static service descriptor (not rate limited).",
    },
]


def apply_openapi_customizations(app: FastAPI, *, rate_limit_description: str) -> None:
    """Patch FastAPI's OpenAPI generation.

    - Adds tags metadata if not present
    - Appends the rate limit policy to every operation that can answer 429
    """

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        schema = original_openapi()

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in TAGS_METADATA:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        for methods in schema.get("paths", {}).values():
            for method_obj in methods.values():
                if not isinstance(method_obj, dict):
                    continue
                if "429" in method_obj.get("responses", {}):
                    description = method_obj.get("description", "")
                    method_obj["description"] = (
                        f"{description}\n\n{rate_limit_description}".strip()
                    )

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
