"""
AI Suggestion Agent for Trackwise

CRITICAL BOUNDARIES:

   - CAN: Suggest a category for an expense description
   - CAN: Suggest or refine a short note for an expense
   - CANNOT: Persist anything. The form decides what to keep.
   - CANNOT: Invent a category that was not offered

The LLM is an ASSISTANT, not an AUTHORITY.
Every suggestion is shown to the user, who may accept or ignore it.

FAILURE POLICY:
Transport errors are retried a few times. After that, and for any
response we cannot parse, the caller gets a SuggestionError. We do
not fall back to a made-up answer.
"""

import json
from collections.abc import Sequence
from typing import Any, Optional

import google.generativeai as genai
import structlog
from pydantic import BaseModel, Field
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from trackwise.config import get_settings

logger = structlog.get_logger(__name__)


class SuggestionError(Exception):
    """The suggestion service failed or answered with something unusable."""


class Suggestion(BaseModel):
    """A non-authoritative suggestion for one form field."""

    suggestion: str = Field(..., min_length=1)
    reasoning: Optional[str] = None


class _UnusableResponse(Exception):
    """Raised inside the retry loop for answers that retrying will not fix."""


class SuggestionAgent:
    """
    AI helper used by the expense form.

    RESPONSIBILITIES:
    - Pick the best category from the ones the user has
    - Draft a brief note from the description

    BOUNDARIES:
    - NEVER writes to app state
    - NEVER returns a category outside available_categories
    """

    def __init__(self, model: Any = None, max_attempts: int = 3):
        """
        Args:
            model: Anything with an async generate_content_async(prompt).
                   If None, a Gemini model is configured on first use.
            max_attempts: Attempts per request before giving up.
        """
        self._model = model
        self._max_attempts = max_attempts

    def _get_model(self) -> Any:
        """Configure Google Generative AI lazily so the app runs without a key."""
        if self._model is None:
            settings = get_settings().gemini
            genai.configure(api_key=settings.api_key)
            self._model = genai.GenerativeModel(
                model_name=settings.model_name,
                generation_config={
                    "temperature": settings.temperature,
                    "max_output_tokens": settings.max_tokens,
                },
            )
        return self._model

    async def _generate(self, prompt: str) -> str:
        """Send a prompt, retrying transport failures."""
        try:
            model = self._get_model()
        except Exception as e:
            logger.error("suggestion_model_unavailable", error=str(e))
            raise SuggestionError(f"Suggestion service unavailable: {e}") from e

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._max_attempts),
                wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
                retry=retry_if_not_exception_type(_UnusableResponse),
                reraise=False,
            ):
                with attempt:
                    response = await model.generate_content_async(prompt)
                    text = (getattr(response, "text", None) or "").strip()
                    if not text:
                        raise _UnusableResponse("empty response")
                    return text
        except _UnusableResponse as e:
            logger.warning("suggestion_unusable", error=str(e))
            raise SuggestionError("Suggestion service returned nothing") from e
        except RetryError as e:
            cause = e.last_attempt.exception()
            logger.error(
                "suggestion_request_failed",
                attempts=self._max_attempts,
                error=str(cause),
            )
            raise SuggestionError(f"Suggestion service failed: {cause}") from cause

    @staticmethod
    def _parse_json(text: str) -> dict[str, Any]:
        """Find the JSON object in a model answer."""
        start = text.find("{")
        end = text.rfind("}") + 1
        if start < 0 or end <= start:
            raise SuggestionError("Suggestion response was not JSON")
        try:
            data = json.loads(text[start:end])
        except json.JSONDecodeError as e:
            raise SuggestionError("Suggestion response was not valid JSON") from e
        if not isinstance(data, dict):
            raise SuggestionError("Suggestion response was not a JSON object")
        return data

    async def suggest_category(
        self,
        description: str,
        available_categories: Sequence[str],
    ) -> Suggestion:
        """
        Suggest the best category name for an expense.

        Args:
            description: What the expense was for
            available_categories: Category names the user can pick from

        Returns:
            Suggestion whose text is one of available_categories

        Raises:
            SuggestionError: service failure or an answer outside the list
        """
        if not description.strip():
            raise SuggestionError("A description is required for a suggestion")
        if not available_categories:
            raise SuggestionError("No categories to choose from")

        prompt = f"""You are an expert financial advisor that helps users categorize their expenses.

You will be given a description of the expense, and a list of available categories.

Your task is to suggest the best category for the expense, and explain your reasoning.

Description: {description}
Available Categories: {', '.join(available_categories)}

Respond with ONLY a JSON object in this exact format:
{{"category": "category name from the list", "reasoning": "brief explanation"}}"""

        data = self._parse_json(await self._generate(prompt))

        # Match case-insensitively, but return the user's own spelling
        by_lower = {name.lower(): name for name in available_categories}
        picked = str(data.get("category", "")).strip().lower()
        if picked not in by_lower:
            logger.warning("suggestion_category_unknown", category=data.get("category"))
            raise SuggestionError(
                f"Suggested category '{data.get('category')}' is not available"
            )

        suggestion = Suggestion(
            suggestion=by_lower[picked],
            reasoning=data.get("reasoning") or None,
        )
        logger.info("category_suggested", category=suggestion.suggestion)
        return suggestion

    async def suggest_notes(
        self,
        description: str,
        current_notes: Optional[str] = None,
    ) -> Suggestion:
        """
        Suggest a short note for an expense.

        If the user already typed notes, the model refines them instead
        of starting over.
        """
        if not description.strip():
            raise SuggestionError("A description is required for a suggestion")

        if current_notes and current_notes.strip():
            existing = (
                f"The user has already started writing these notes: {current_notes.strip()}\n"
                "Based on the description and existing notes, either refine or add to them, "
                "or suggest an alternative if the description implies something more specific."
            )
        else:
            existing = "Suggest a new note based on the description."

        prompt = f"""You are an intelligent assistant helping a user add notes to their expenses.
Given the expense description, suggest a concise and relevant note.

Expense Description: {description}

{existing}

Keep the suggested note brief, typically a few words to a short sentence.
Example: If description is "Coffee with Sarah", suggested note could be "Networking meeting" or "Catch up with friend".
If description is "Monthly Metro Pass", suggested note could be "Public transport subscription".

Respond with ONLY a JSON object in this exact format:
{{"suggestedNote": "the note", "reasoning": "brief explanation"}}"""

        data = self._parse_json(await self._generate(prompt))

        note = str(data.get("suggestedNote") or data.get("suggestion") or "").strip()
        if not note:
            raise SuggestionError("Suggestion response had no note")

        logger.info("notes_suggested", length=len(note))
        return Suggestion(suggestion=note, reasoning=data.get("reasoning") or None)
