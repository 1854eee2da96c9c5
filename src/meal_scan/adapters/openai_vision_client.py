"""OpenAI Responses API client for meal photo analysis."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from meal_scan.services.images import to_data_url
from meal_scan.services.vision import VisionClient


@dataclass
class OpenAIVisionClient(VisionClient):
    """Vision client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    reasoning_effort: str | None = None
    store: bool = False

    @classmethod
    def create(
        cls, api_key: str, reasoning_effort: str | None = None, store: bool = False
    ) -> "OpenAIVisionClient":
        """Create an OpenAI vision client."""
        return cls(
            client=AsyncOpenAI(api_key=api_key),
            reasoning_effort=reasoning_effort,
            store=store,
        )

    async def generate(
        self,
        *,
        model: str,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
        schema: dict[str, object],
    ) -> str | None:
        """Call OpenAI Responses API with structured outputs."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": [
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": prompt},
                        {
                            "type": "input_image",
                            "image_url": to_data_url(image_bytes, mime_type),
                        },
                    ],
                }
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "meal_analysis",
                    "strict": True,
                    "schema": strict_schema(schema),
                }
            },
            "store": self.store,
        }
        if self.reasoning_effort:
            request_payload["reasoning"] = {"effort": self.reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        return response.output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()


def strict_schema(schema: dict[str, object]) -> dict[str, object]:
    """Return a copy of the schema with closed objects, as strict mode requires."""
    result: dict[str, object] = {}
    for key, value in schema.items():
        if key == "properties" and isinstance(value, dict):
            result[key] = {
                name: strict_schema(child) if isinstance(child, dict) else child
                for name, child in value.items()
            }
        elif isinstance(value, dict):
            result[key] = strict_schema(value)
        elif isinstance(value, list):
            result[key] = list(value)
        else:
            result[key] = value
    if result.get("type") == "object":
        result["additionalProperties"] = False
    return result
