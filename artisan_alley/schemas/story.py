from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class StoryRequest(BaseModel):
    """Request body for POST /ai/story."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: str = Field(..., min_length=1)


class ProductStory(BaseModel):
    """Narrative generated for a product, serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    ai_story: str
    artist_journey: str
    inspiration: str
    technique: str
    time_to_complete: str
