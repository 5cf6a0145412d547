# artisan_alley/services/ai/story.py

import asyncio
import json
import logging
from functools import lru_cache
from typing import Any, Optional, Sequence

import httpx
from openai import AsyncOpenAI, APITimeoutError, OpenAIError
from pydantic import BaseModel

from artisan_alley.core.config import settings
from artisan_alley.schemas.story import ProductStory
from artisan_alley.services.ai.showcase_stories import StoryProvider, showcase_provider

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert art historian and storyteller who creates compelling narratives about artworks "
    "and their creators. Your stories should be authentic, emotionally engaging, and true to the "
    "artistic medium and style."
)

# Used when the model answers with JSON that lacks a field
FIELD_DEFAULTS = {
    "aiStory": "A beautiful piece created with passion and skill.",
    "artistJourney": "This work represents an important milestone in the artist's creative journey.",
    "inspiration": "Life experiences and artistic vision",
    "technique": "Traditional artistic methods",
    "timeToComplete": "Several weeks",
}


class StoryGenerationRequest(BaseModel):
    product_title: str
    product_description: str
    artist_name: str
    medium: str
    artist_bio: Optional[str] = None
    style: Optional[str] = None
    location: Optional[str] = None


def build_story_prompt(request: StoryGenerationRequest) -> str:
    lines = [
        "Create a deeply emotional and detailed story for this Indian handcrafted artwork:",
        "",
        f"Title: {request.product_title}",
        f"Description: {request.product_description}",
        f"Artist: {request.artist_name}",
    ]
    if request.artist_bio:
        lines.append(f"Artist Bio: {request.artist_bio}")
    lines.append(f"Medium: {request.medium}")
    if request.style:
        lines.append(f"Style: {request.style}")
    if request.location:
        lines.append(f"Location: {request.location}")

    lines += [
        "",
        "Please provide a response in JSON format with the following structure:",
        "{",
        '  "aiStory": "A deeply personal narrative about the artist\'s inspiration, struggles, and breakthrough '
        "moments - include specific details about family background, cultural heritage, and the challenges "
        'faced (300-400 words in 2-3 emotional paragraphs)",',
        '  "artistJourney": "How this piece represents the artist\'s growth, recognition received, and cultural '
        'impact (150-200 words)",',
        '  "inspiration": "Specific cultural, personal, or spiritual inspiration behind this work",',
        '  "technique": "Detailed description of traditional Indian techniques and materials used",',
        '  "timeToComplete": "Realistic timeframe for creating this handcrafted piece"',
        "}",
        "",
        "Focus on authentic Indian cultural heritage, traditional techniques, personal struggles, and "
        "breakthrough moments that make buyers feel emotionally connected to the artist's journey.",
    ]
    return "\n".join(lines)


def fallback_story(request: StoryGenerationRequest) -> ProductStory:
    """Generic story built only from the request, used whenever the model cannot answer."""
    return ProductStory(
        ai_story=(
            f"This {request.medium.lower()} piece by {request.artist_name} represents a unique artistic vision "
            "brought to life through skilled craftsmanship. The work demonstrates the artist's mastery of their "
            "chosen medium and their ability to translate emotion into visual form."
        ),
        artist_journey=(
            f"For {request.artist_name}, this piece represents both technical achievement and personal "
            "expression. The creation process involved careful consideration of composition, color, and form "
            "to achieve the desired artistic effect."
        ),
        inspiration="Personal experiences and artistic exploration",
        technique=f"Traditional {request.medium} techniques",
        time_to_complete="2-4 weeks",
    )


def parse_story(content: Optional[str]) -> ProductStory:
    """
    Parse the model's JSON answer into a story.

    Raises:
        ValueError: if the content is not a JSON object
    """
    result = json.loads(content or "{}")
    if not isinstance(result, dict):
        raise ValueError(f"Expected a JSON object, got {type(result).__name__}")

    fields = {key: result.get(key) or default for key, default in FIELD_DEFAULTS.items()}
    return ProductStory.model_validate({key: str(value) for key, value in fields.items()})


class StoryGenerator:
    """
    Produces product stories.

    Canned providers are consulted first; only when none of them knows the
    artist is the language model called. Every model failure, including the
    call exceeding ``timeout`` seconds, degrades to ``fallback_story``.
    """

    def __init__(
        self,
        client: Optional[Any],
        providers: Sequence[StoryProvider] = (),
        model: str = settings.STORY_MODEL,
        max_tokens: int = settings.STORY_MAX_TOKENS,
        timeout: float = settings.AI_TIMEOUT_SECONDS,
    ):
        self.client = client
        self.providers = list(providers)
        self.model = model
        self.max_tokens = max_tokens
        self.timeout = timeout

    async def generate(self, request: StoryGenerationRequest) -> ProductStory:
        for provider in self.providers:
            story = provider.lookup(request)
            if story is not None:
                logger.info(f"Using canned story for artist '{request.artist_name}'")
                return story

        if self.client is None:
            logger.warning("No language model client configured, using fallback story")
            return fallback_story(request)

        try:
            response = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=self.model,
                    messages=[
                        {"role": "system", "content": SYSTEM_PROMPT},
                        {"role": "user", "content": build_story_prompt(request)},
                    ],
                    response_format={"type": "json_object"},
                    max_tokens=self.max_tokens,
                ),
                timeout=self.timeout,
            )
            story = parse_story(response.choices[0].message.content)
            logger.info(f"Generated story for '{request.product_title}' with model {self.model}")
            return story
        except (asyncio.TimeoutError, APITimeoutError):
            logger.warning(f"Story generation timed out after {self.timeout}s, using fallback story")
        except OpenAIError as e:
            logger.warning(f"Story generation failed upstream: {e}")
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning(f"Story generation returned unusable content: {e}")
        except Exception as e:
            logger.error(f"Unexpected error during story generation: {e}", exc_info=True)

        return fallback_story(request)


def build_completion_client() -> Optional[AsyncOpenAI]:
    if not settings.OPENAI_API_KEY:
        return None
    return AsyncOpenAI(
        api_key=settings.OPENAI_API_KEY,
        base_url=settings.OPENAI_BASE_URL,
        timeout=httpx.Timeout(settings.AI_TIMEOUT_SECONDS, connect=5.0),
        max_retries=0,
    )


@lru_cache
def get_story_generator() -> StoryGenerator:
    """FastAPI dependency returning the process-wide story generator."""
    return StoryGenerator(client=build_completion_client(), providers=[showcase_provider])
