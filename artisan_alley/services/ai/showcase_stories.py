"""
Fixed stories for the showcase artists seeded into the marketplace.

The generator resolves these before calling the language model, so demo
accounts always render the same narrative and never cost an API call.
"""
from typing import Mapping, Optional, Protocol

from artisan_alley.schemas.story import ProductStory


class StoryContext(Protocol):
    artist_name: str


class StoryProvider(Protocol):
    """Anything that can answer a story request without the language model."""

    def lookup(self, context: StoryContext) -> Optional[ProductStory]:
        ...


class CannedStoryProvider:
    """Resolve stories from a fixed mapping keyed by exact artist name."""

    def __init__(self, stories: Mapping[str, ProductStory]):
        self._stories = dict(stories)

    def lookup(self, context: StoryContext) -> Optional[ProductStory]:
        return self._stories.get(context.artist_name)

    def __contains__(self, artist_name: str) -> bool:
        return artist_name in self._stories


SHOWCASE_STORIES = {
    "Sarthak Jadhav": ProductStory(
        ai_story=(
            "Growing up in the tribal heartlands of Maharashtra, Sarthak was mesmerized by the ancient Warli "
            "paintings adorning mud walls in his village. His grandmother, a keeper of traditional stories, "
            "would trace these symbols with her weathered fingers, explaining how each circle represented "
            "life's eternal cycle.\n\n"
            "Despite facing ridicule from urban friends who called his art 'primitive,' Sarthak persevered. "
            "He spent sleepless nights experimenting with natural pigments - mixing rice paste with clay, "
            "creating brushes from bamboo sticks. His breakthrough came when a renowned art critic discovered "
            "his work at a local exhibition, praising how he bridged 4000-year-old traditions with "
            "contemporary relevance."
        ),
        artist_journey=(
            "This piece captures that magical moment when ancient wisdom meets modern life. Each stroke "
            "carries the prayers of his ancestors and the hope of preserving dying traditions. Today, "
            "Sarthak's work hangs in homes across the world, but each piece still carries the soul of his village."
        ),
        inspiration="Ancient Warli tribal traditions and his grandmother's storytelling",
        technique="Natural pigments on handmade paper using traditional bamboo brushes",
        time_to_complete="3-4 weeks of meditation and careful painting",
    ),
    "Aditya Thete": ProductStory(
        ai_story=(
            "In the dusty workshops of Mumbai's artisan quarter, young Aditya's hands bled from learning to "
            "carve marble. His master, a 70-year-old sculptor, would often say 'The stone chooses the artist, "
            "not the other way around.' Coming from a family of construction workers, Aditya's passion for "
            "sculpture was seen as impractical.\n\n"
            "The turning point came during a particularly difficult period when his family faced financial "
            "crisis. Instead of abandoning art, Aditya poured his anguish into creating a Ganesha sculpture. "
            "Working 16-hour days, surviving on just tea and biscuits, he completed what would become his masterpiece."
        ),
        artist_journey=(
            "This sculpture embodies that journey from struggle to triumph. Carved during auspicious times "
            "with prayers and dedication, each detail reflects not just artistic skill but spiritual devotion. "
            "The international recognition Aditya now enjoys feels surreal, but his heart remains in that "
            "small Mumbai workshop."
        ),
        inspiration="Family struggles and deep spiritual devotion to Lord Ganesha",
        technique="Traditional marble carving with hand tools passed down through generations",
        time_to_complete="6-8 weeks of intensive carving and finishing",
    ),
    "Sakshi Peharkar": ProductStory(
        ai_story=(
            "The art of traditional jewelry-making chose Sakshi before she chose it. Born into a family of "
            "goldsmiths in Aurangabad, she was creating intricate patterns with wire and beads while other "
            "children played with toys. But being a woman in a male-dominated craft meant constant battles - "
            "suppliers who refused to deal with her, customers who questioned her expertise.\n\n"
            "Her persistence paid off when she recreated a lost 300-year-old Maharashtrian Nath design from a "
            "faded museum photograph. The painstaking research, hunting for ancient techniques in dusty "
            "libraries, and months of trial and error resulted in a piece that left jewelry historians speechless."
        ),
        artist_journey=(
            "This piece carries the weight of that heritage - every curve, every gem placement follows "
            "traditions passed down through generations of Maharashtrian craftsmen. When you wear this, you "
            "carry with you the pride and artistry of countless artisans who kept this tradition alive."
        ),
        inspiration="300-year-old Maharashtrian bridal traditions and family goldsmith heritage",
        technique="Traditional filigree work with kundan setting and hand-forged silver",
        time_to_complete="4-5 weeks including research and intricate handwork",
    ),
}

showcase_provider = CannedStoryProvider(SHOWCASE_STORIES)
