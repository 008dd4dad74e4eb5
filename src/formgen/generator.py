"""LangChain-backed implementation of the form generation service."""

import json
import logging
from typing import Any, Dict, Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.prompts import ChatPromptTemplate

from common.errors import GenerationError
from formgen.llm_client import get_llm_client
from formgen.normalization import normalize_generated_form
from schema import GeneratedForm

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an expert form builder assistant. Your role is to generate form \
configurations based on natural language descriptions.

You understand form design best practices including:
- Logical field ordering (contact info first, then specific questions)
- Appropriate field types for different data (email for emails, phone for phones, etc.)
- When to make fields required vs optional
- Appropriate validation rules

Available field types: short_text, long_text, number, email, phone, url, multiple_choice,
checkboxes, dropdown, yes_no, rating, scale, slider, nps, date, time, datetime, file_upload,
image_upload, signature, address, tags, lookup.

Respond with a single JSON object:
{{"name": "...", "description": "...", "fieldConfigs": [
  {{"path": "...", "label": "...", "type": "...", "required": false,
    "lookup": {{"collection": "...", "displayField": "..."}}}}
]}}"""


def _strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_generated_form(raw: str) -> GeneratedForm:
    """Parse a model response into a normalized GeneratedForm."""
    if not raw or not raw.strip():
        raise GenerationError("No response from AI model")
    try:
        payload = json.loads(_strip_code_fence(raw))
    except json.JSONDecodeError as e:
        raise GenerationError(f"Generated form is not valid JSON: {e.msg}") from e
    if not isinstance(payload, dict):
        raise GenerationError("Generated form must be a JSON object")
    return normalize_generated_form(payload)


class LLMFormGenerator:
    """FormGenerator that prompts a chat model for a form configuration."""

    def __init__(self, llm: Optional[BaseChatModel] = None) -> None:
        """Wrap an existing chat model, or resolve one from the environment lazily."""
        self._llm = llm

    def _get_llm(self) -> BaseChatModel:
        if self._llm is None:
            self._llm = get_llm_client()
        return self._llm

    async def generate(
        self, prompt: str, context: Optional[Dict[str, Any]] = None
    ) -> GeneratedForm:
        """Generate a form from a composed prompt.

        `context` carries the structured schema and relationships; they are
        appended as JSON so the model sees the same data the prompt describes.
        """
        user_message = prompt
        if context:
            user_message += "\n\nContext:\n" + json.dumps(context, default=str)

        template = ChatPromptTemplate.from_messages(
            [("system", SYSTEM_PROMPT), ("user", "{request}")]
        )
        chain = template | self._get_llm()
        try:
            response = await chain.ainvoke({"request": user_message})
        except Exception as e:
            logger.error("Form generation request failed: %s", e)
            raise GenerationError(f"Form generation request failed: {e}") from e

        content = response.content if hasattr(response, "content") else str(response)
        if not isinstance(content, str):
            content = "".join(
                part.get("text", "") if isinstance(part, dict) else str(part) for part in content
            )
        return parse_generated_form(content)
