import asyncio
import json
from types import SimpleNamespace

import httpx
import openai
import pytest

from artisan_alley.schemas.story import ProductStory
from artisan_alley.services.ai.showcase_stories import SHOWCASE_STORIES, CannedStoryProvider, showcase_provider
from artisan_alley.services.ai.story import (
    FIELD_DEFAULTS,
    StoryGenerationRequest,
    StoryGenerator,
    fallback_story,
)

COMPLETE_ANSWER = {
    "aiStory": "Meera learned to paint on the banks of the Godavari.",
    "artistJourney": "Her first solo show in Pune changed everything.",
    "inspiration": "The first rains over the Sahyadri range",
    "technique": "Layered oil glazes on stretched cotton canvas",
    "timeToComplete": "Five weeks",
}


class FakeCompletions:
    """Stands in for ``client.chat.completions`` and records every call."""

    def __init__(self, content=None, error=None, delay=0.0):
        self.content = content
        self.error = error
        self.delay = delay
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))])


def fake_client(**kwargs):
    completions = FakeCompletions(**kwargs)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def story_request(artist_name="Meera Kulkarni", medium="Oil on Canvas", **kwargs):
    return StoryGenerationRequest(
        product_title="Monsoon Over Sahyadri",
        product_description="Hand-painted landscape of the western ghats in the rains.",
        artist_name=artist_name,
        medium=medium,
        **kwargs
    )


def generate(generator, request):
    return asyncio.run(generator.generate(request))


def assert_is_fallback(story, medium="Oil on Canvas", artist="Meera Kulkarni"):
    assert story == fallback_story(story_request(artist_name=artist, medium=medium))
    for value in story.model_dump().values():
        assert value.strip()
    assert medium.lower() in story.ai_story
    assert artist in story.ai_story
    assert artist in story.artist_journey
    assert medium in story.technique


class TestCannedStories:
    @pytest.mark.parametrize("artist", ["Sarthak Jadhav", "Aditya Thete", "Sakshi Peharkar"])
    def test_showcase_artist_never_calls_model(self, artist):
        client, completions = fake_client(content=json.dumps(COMPLETE_ANSWER))
        generator = StoryGenerator(client=client, providers=[showcase_provider])

        first = generate(generator, story_request(artist_name=artist))
        second = generate(generator, story_request(artist_name=artist))

        assert first == SHOWCASE_STORIES[artist]
        assert second == first
        assert completions.calls == []

    def test_name_match_is_exact(self):
        client, completions = fake_client(content=json.dumps(COMPLETE_ANSWER))
        generator = StoryGenerator(client=client, providers=[showcase_provider])

        generate(generator, story_request(artist_name="sarthak jadhav"))

        assert len(completions.calls) == 1

    def test_providers_are_substitutable(self):
        custom = ProductStory(
            ai_story="custom", artist_journey="custom", inspiration="custom",
            technique="custom", time_to_complete="custom",
        )
        client, completions = fake_client(content=json.dumps(COMPLETE_ANSWER))
        generator = StoryGenerator(client=client, providers=[CannedStoryProvider({"Meera Kulkarni": custom})])

        assert generate(generator, story_request()) is custom
        assert completions.calls == []

    def test_without_providers_showcase_artists_reach_the_model(self):
        client, completions = fake_client(content=json.dumps(COMPLETE_ANSWER))
        generator = StoryGenerator(client=client)

        generate(generator, story_request(artist_name="Sarthak Jadhav"))

        assert len(completions.calls) == 1

    def test_provider_membership(self):
        assert "Aditya Thete" in showcase_provider
        assert "Abhishek Patade" not in showcase_provider


class TestModelStories:
    def test_parses_model_answer(self):
        client, completions = fake_client(content=json.dumps(COMPLETE_ANSWER))
        generator = StoryGenerator(client=client, model="test-model", max_tokens=321)

        story = generate(generator, story_request(artist_bio="Oil painter from Nashik", style="Impressionist"))

        assert story.model_dump(by_alias=True) == COMPLETE_ANSWER
        call = completions.calls[0]
        assert call["model"] == "test-model"
        assert call["max_tokens"] == 321
        assert call["response_format"] == {"type": "json_object"}
        prompt = call["messages"][1]["content"]
        assert "Title: Monsoon Over Sahyadri" in prompt
        assert "Artist Bio: Oil painter from Nashik" in prompt
        assert "Style: Impressionist" in prompt
        assert "Location:" not in prompt

    def test_missing_fields_get_defaults(self):
        client, _ = fake_client(content=json.dumps({"aiStory": "Only the story came back.", "technique": ""}))
        story = generate(StoryGenerator(client=client), story_request())

        assert story.ai_story == "Only the story came back."
        assert story.artist_journey == FIELD_DEFAULTS["artistJourney"]
        assert story.technique == FIELD_DEFAULTS["technique"]
        assert story.time_to_complete == FIELD_DEFAULTS["timeToComplete"]


class TestFallback:
    def test_no_client_configured(self):
        assert_is_fallback(generate(StoryGenerator(client=None), story_request()))

    def test_api_error(self, caplog):
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        client, _ = fake_client(error=openai.APIConnectionError(request=request))

        with caplog.at_level("WARNING"):
            story = generate(StoryGenerator(client=client), story_request())

        assert_is_fallback(story)
        assert "failed upstream" in caplog.text

    def test_unexpected_error(self, caplog):
        client, _ = fake_client(error=RuntimeError("socket closed"))

        with caplog.at_level("ERROR"):
            story = generate(StoryGenerator(client=client), story_request())

        assert_is_fallback(story)
        assert "Unexpected error during story generation" in caplog.text

    @pytest.mark.parametrize("content", ["this is not json", "[1, 2, 3]", '"just a string"'])
    def test_unusable_content(self, content):
        client, _ = fake_client(content=content)
        assert_is_fallback(generate(StoryGenerator(client=client), story_request()))

    def test_slow_model_times_out(self, caplog):
        client, completions = fake_client(content=json.dumps(COMPLETE_ANSWER), delay=1.0)

        with caplog.at_level("WARNING"):
            story = generate(StoryGenerator(client=client, timeout=0.05), story_request())

        assert_is_fallback(story)
        assert len(completions.calls) == 1
        assert "timed out" in caplog.text

    def test_fallback_uses_medium_and_artist(self):
        story = fallback_story(story_request(artist_name="Rohan Deshmukh", medium="Terracotta"))
        assert "terracotta piece by Rohan Deshmukh" in story.ai_story
        assert story.technique == "Traditional Terracotta techniques"
        assert story.time_to_complete == "2-4 weeks"
