"""Vision analysis service: prompt, schema and sanitization of model output."""

import json
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from meal_scan.domain.scans import NUTRIENT_FIELDS, FoodItem, Nutrients, ScanAnalysis
from meal_scan.errors import (
    AIConnectionError,
    AIResponseParseError,
    EmptyAIResponseError,
)
from meal_scan.services.images import JPEG_MIME_TYPE, decode_image_payload

_logger = logging.getLogger(__name__)

UNKNOWN_FOOD_NAME = "unknown food"
FALLBACK_DESCRIPTION = "No description available."
FALLBACK_INSIGHT = "Keep up a balanced diet!"

VISION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "items": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "Food name"},
                    "estimatedWeightGrams": {"type": "number"},
                    "nutrients": {
                        "type": "object",
                        "properties": {
                            name: {"type": "number"} for name in NUTRIENT_FIELDS
                        },
                        "required": list(NUTRIENT_FIELDS),
                    },
                },
                "required": ["name", "estimatedWeightGrams", "nutrients"],
            },
        },
        "description": {"type": "string", "description": "Meal description"},
        "insight": {"type": "string", "description": "Health suggestion"},
    },
    "required": ["items", "description", "insight"],
}


class VisionClient(Protocol):
    """Interface for a multimodal model provider."""

    async def generate(
        self,
        *,
        model: str,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
        schema: dict[str, object],
    ) -> str | None:
        """Return the raw response text for the image and prompt."""


@dataclass
class VisionService:
    """Service that prepares vision prompts and sanitizes results."""

    client: VisionClient
    model: str
    language: str = "Simplified Chinese"

    async def analyze(
        self,
        image: bytes | str,
        user_context: str = "",
        model: str | None = None,
    ) -> ScanAnalysis:
        """Analyze a food photo into sanitized items, description and insight."""
        image_bytes = decode_image_payload(image)
        prompt = build_prompt(self.language, user_context)
        try:
            raw = await self.client.generate(
                model=model or self.model,
                prompt=prompt,
                image_bytes=image_bytes,
                mime_type=JPEG_MIME_TYPE,
                schema=VISION_SCHEMA,
            )
        except Exception as exc:
            _logger.exception("Vision model call failed")
            upstream = str(exc).strip()
            error = AIConnectionError(upstream) if upstream else AIConnectionError()
            raise error from exc

        parsed = parse_response(raw)
        return sanitize_analysis(parsed)


def build_prompt(language: str, user_context: str = "") -> str:
    """Build the instruction block for nutrition analysis."""
    lines = [
        "Analyze this food photo as a professional nutritionist.",
        "1. Identify every distinct food item in the image.",
        "2. Estimate the weight of each item in grams and its full nutrient "
        "breakdown: calories, protein, carbs, fat, fiber and sugar.",
        "3. description: one short sentence describing the meal.",
        "4. insight: one actionable health suggestion based on the meal's "
        "nutrients (for example, high protein is good for muscle recovery, or "
        "add leafy greens to balance the carbs).",
    ]
    context = user_context.strip()
    if context:
        lines.append(
            f'Additional context from the user: "{context}". Use it to adjust '
            "your judgment of hidden ingredients and cooking method."
        )
    lines.append(
        f"Important: write ALL text (name, description, insight) in {language}."
    )
    lines.append("Return raw JSON only, strictly following the given schema.")
    return "\n".join(lines)


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences the model may wrap around JSON."""
    return text.replace("```json", "").replace("```", "").strip()


def parse_response(raw: str | None) -> dict[str, object]:
    """Decode model text into a JSON object or raise a user-facing error."""
    if not raw or not raw.strip():
        raise EmptyAIResponseError()
    cleaned = strip_code_fences(raw)
    try:
        parsed = json.loads(cleaned)
    except ValueError as exc:
        _logger.error("Failed to parse AI response: %s", raw)
        raise AIResponseParseError() from exc
    if not isinstance(parsed, dict):
        _logger.error("AI response is not a JSON object: %s", raw)
        raise AIResponseParseError()
    return parsed


def sanitize_analysis(parsed: Mapping[str, object]) -> ScanAnalysis:
    """Coerce an untrusted decoded response into a fully populated analysis."""
    raw_items = parsed.get("items")
    items = (
        [sanitize_item(item) for item in raw_items]
        if isinstance(raw_items, list)
        else []
    )
    return ScanAnalysis(
        items=items,
        description=_coerce_text(parsed.get("description"), FALLBACK_DESCRIPTION),
        insight=_coerce_text(parsed.get("insight"), FALLBACK_INSIGHT),
    )


def sanitize_item(raw: object) -> FoodItem:
    """Coerce one decoded item, defaulting every malformed field."""
    data = raw if isinstance(raw, Mapping) else {}
    raw_nutrients = data.get("nutrients")
    nutrient_data = raw_nutrients if isinstance(raw_nutrients, Mapping) else {}
    values = {name: coerce_number(nutrient_data.get(name)) for name in NUTRIENT_FIELDS}
    weight = coerce_number(data.get("estimatedWeightGrams"))
    return FoodItem(
        name=_coerce_text(data.get("name"), UNKNOWN_FOOD_NAME),
        estimated_weight_grams=weight,
        original_weight_grams=weight,
        nutrients=Nutrients(**values),
    )


def coerce_number(value: object) -> float:
    """Return a finite, non-negative float, or 0 when coercion fails."""
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip()) if value.strip() else 0.0
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return max(number, 0.0)


def _coerce_text(value: object, fallback: str) -> str:
    if isinstance(value, str):
        text = value.strip()
    elif isinstance(value, int | float) and not isinstance(value, bool):
        text = str(value)
    else:
        return fallback
    return text or fallback
