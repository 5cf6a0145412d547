from .authenticity import new_verification_id, verify_authenticity
from .showcase_stories import CannedStoryProvider, SHOWCASE_STORIES, showcase_provider
from .story import StoryGenerationRequest, StoryGenerator, fallback_story, get_story_generator

__all__ = [
    "CannedStoryProvider",
    "SHOWCASE_STORIES",
    "StoryGenerationRequest",
    "StoryGenerator",
    "fallback_story",
    "get_story_generator",
    "new_verification_id",
    "showcase_provider",
    "verify_authenticity",
]
