"""Tests for the AI suggestion agent, using a fake model (no network)."""

import pytest

from trackwise.agents import Suggestion, SuggestionAgent, SuggestionError
from trackwise.agents import ai_agents


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeModel:
    """Returns queued answers in order; queued exceptions are raised."""

    def __init__(self, *answers):
        self._answers = list(answers)
        self.prompts: list[str] = []

    async def generate_content_async(self, prompt):
        self.prompts.append(prompt)
        answer = self._answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return FakeResponse(answer)


CATEGORIES = ["Food & Dining", "Transportation", "Other"]


class TestSuggestCategory:

    @pytest.mark.asyncio
    async def test_returns_available_category(self):
        model = FakeModel('{"category": "Transportation", "reasoning": "A taxi ride"}')
        agent = SuggestionAgent(model=model)

        suggestion = await agent.suggest_category("Taxi to airport", CATEGORIES)

        assert suggestion == Suggestion(suggestion="Transportation", reasoning="A taxi ride")
        assert "Taxi to airport" in model.prompts[0]
        assert "Food & Dining, Transportation, Other" in model.prompts[0]

    @pytest.mark.asyncio
    async def test_matches_case_insensitively(self):
        """The model's casing is replaced by the user's own spelling."""
        model = FakeModel('```json\n{"category": "food & dining"}\n```')
        agent = SuggestionAgent(model=model)

        suggestion = await agent.suggest_category("Pizza", CATEGORIES)

        assert suggestion.suggestion == "Food & Dining"
        assert suggestion.reasoning is None

    @pytest.mark.asyncio
    async def test_unknown_category_rejected(self):
        agent = SuggestionAgent(model=FakeModel('{"category": "Crypto"}'))
        with pytest.raises(SuggestionError):
            await agent.suggest_category("Bitcoin", CATEGORIES)

    @pytest.mark.asyncio
    async def test_non_json_rejected(self):
        agent = SuggestionAgent(model=FakeModel("I think it is food."))
        with pytest.raises(SuggestionError):
            await agent.suggest_category("Pizza", CATEGORIES)

    @pytest.mark.asyncio
    async def test_blank_description_not_sent(self):
        model = FakeModel()
        agent = SuggestionAgent(model=model)

        with pytest.raises(SuggestionError):
            await agent.suggest_category("   ", CATEGORIES)
        assert model.prompts == []

    @pytest.mark.asyncio
    async def test_no_categories(self):
        agent = SuggestionAgent(model=FakeModel())
        with pytest.raises(SuggestionError):
            await agent.suggest_category("Pizza", [])


class TestSuggestNotes:

    @pytest.mark.asyncio
    async def test_new_note(self):
        model = FakeModel('{"suggestedNote": "Catch up with friend", "reasoning": "Social"}')
        agent = SuggestionAgent(model=model)

        suggestion = await agent.suggest_notes("Coffee with Sarah")

        assert suggestion.suggestion == "Catch up with friend"
        assert suggestion.reasoning == "Social"
        assert "Suggest a new note" in model.prompts[0]

    @pytest.mark.asyncio
    async def test_refines_current_notes(self):
        model = FakeModel('{"suggestedNote": "Monthly metro pass, zone 1-2"}')
        agent = SuggestionAgent(model=model)

        await agent.suggest_notes("Monthly Metro Pass", current_notes="zone 1-2")

        assert "already started writing these notes: zone 1-2" in model.prompts[0]

    @pytest.mark.asyncio
    async def test_empty_note_rejected(self):
        agent = SuggestionAgent(model=FakeModel('{"suggestedNote": "  "}'))
        with pytest.raises(SuggestionError):
            await agent.suggest_notes("Coffee")


class TestFailures:

    @pytest.mark.asyncio
    async def test_transport_error_retried(self):
        model = FakeModel(ConnectionError("reset"), '{"suggestedNote": "Lunch"}')
        agent = SuggestionAgent(model=model, max_attempts=2)

        suggestion = await agent.suggest_notes("Sandwich")

        assert suggestion.suggestion == "Lunch"
        assert len(model.prompts) == 2

    @pytest.mark.asyncio
    async def test_persistent_failure_raises(self):
        model = FakeModel(ConnectionError("down"), ConnectionError("still down"))
        agent = SuggestionAgent(model=model, max_attempts=2)

        with pytest.raises(SuggestionError, match="still down"):
            await agent.suggest_notes("Sandwich")
        assert len(model.prompts) == 2

    @pytest.mark.asyncio
    async def test_empty_response_not_retried(self):
        model = FakeModel("", '{"suggestedNote": "never used"}')
        agent = SuggestionAgent(model=model, max_attempts=3)

        with pytest.raises(SuggestionError):
            await agent.suggest_notes("Sandwich")
        assert len(model.prompts) == 1

    @pytest.mark.asyncio
    async def test_missing_configuration(self, monkeypatch):
        """Without a configured model the caller gets a SuggestionError."""
        def no_settings():
            raise ValueError("GEMINI_API_KEY is not set")

        monkeypatch.setattr(ai_agents, "get_settings", no_settings)
        agent = SuggestionAgent()

        with pytest.raises(SuggestionError, match="unavailable"):
            await agent.suggest_notes("Sandwich")
