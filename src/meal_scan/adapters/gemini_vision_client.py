"""Google Gemini client for meal photo analysis."""

from dataclasses import dataclass

from google import genai
from google.genai import types

from meal_scan.services.vision import VisionClient


@dataclass
class GeminiVisionClient(VisionClient):
    """Vision client backed by the google-genai async models API."""

    client: genai.Client

    @classmethod
    def create(cls, api_key: str) -> "GeminiVisionClient":
        """Create a Gemini vision client."""
        return cls(client=genai.Client(api_key=api_key))

    async def generate(
        self,
        *,
        model: str,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
        schema: dict[str, object],
    ) -> str | None:
        """Call Gemini with the image, prompt and a JSON response schema."""
        response = await self.client.aio.models.generate_content(
            model=model,
            contents=[
                types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                types.Part.from_text(text=prompt),
            ],
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
            ),
        )
        return response.text
