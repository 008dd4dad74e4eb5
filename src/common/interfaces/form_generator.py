from typing import Any, Dict, Optional, Protocol, runtime_checkable

from schema import GeneratedForm


@runtime_checkable
class FormGenerator(Protocol):
    """Protocol for the natural-language form generation service."""

    async def generate(
        self, prompt: str, context: Optional[Dict[str, Any]] = None
    ) -> GeneratedForm:
        """Generate a form configuration from a composed prompt and structured context."""
        ...
