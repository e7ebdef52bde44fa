"""Roadmap generation from a learner profile."""

import math

from learnpath.agent.coercer import coerce_roadmap
from learnpath.agent.llm import GenerativeClient, request_generation
from learnpath.agent.prompts import ROADMAP_SYSTEM_PROMPT, build_roadmap_prompt
from learnpath.core.exceptions import MalformedGenerationError
from learnpath.core.logging import get_logger
from learnpath.schemas.profile import ProfileSpec
from learnpath.schemas.roadmap import MAX_DURATION_WEEKS, GeneratedRoadmap

logger = get_logger(__name__)

DEFAULT_MAX_TOKENS = 2000
DEFAULT_TEMPERATURE = 0.7


class RoadmapBuilder:
    """Generates one roadmap per call; never retries and never caches."""

    def __init__(
        self,
        client: GenerativeClient,
        *,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ):
        self.client = client
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def generate(self, profile: ProfileSpec) -> GeneratedRoadmap:
        """Generate a roadmap for ``profile``.

        Raises:
            GenerationUnavailableError: The backend failed or returned nothing.
            MalformedGenerationError: No roadmap with at least one topic could
                be recovered from the output.
        """
        raw_text = await request_generation(
            self.client,
            build_roadmap_prompt(profile),
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            system=ROADMAP_SYSTEM_PROMPT,
            purpose="Roadmap",
        )

        result = coerce_roadmap(raw_text)
        roadmap = result.unwrap()
        if not roadmap.topics:
            raise MalformedGenerationError("Generated roadmap has no topics")

        # Position in the generated array is the order; payload numbering is ignored.
        topics = [
            topic.model_copy(update={"order_index": index})
            for index, topic in enumerate(roadmap.topics, start=1)
        ]
        weeks = roadmap.estimated_duration_weeks or _derive_weeks(
            sum(t.estimated_hours for t in topics), profile.hours_per_week
        )

        logger.info(
            "Roadmap generated",
            title=roadmap.title,
            topic_count=len(topics),
            dropped_count=len(result.dropped),
            duration_weeks=weeks,
        )
        return roadmap.model_copy(update={"topics": topics, "estimated_duration_weeks": weeks})


def _derive_weeks(total_hours: float, hours_per_week: int) -> int:
    return min(MAX_DURATION_WEEKS, max(1, math.ceil(total_hours / hours_per_week)))
