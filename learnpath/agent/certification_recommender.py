"""Certification recommendations for an existing roadmap."""

from collections.abc import Sequence

from learnpath.agent.coercer import coerce_certifications
from learnpath.agent.llm import GenerativeClient, request_generation
from learnpath.agent.prompts import CERTIFICATION_SYSTEM_PROMPT, build_certification_prompt
from learnpath.core.exceptions import MalformedGenerationError, ValidationError
from learnpath.core.logging import get_logger
from learnpath.models.roadmap import Topic
from learnpath.schemas.certification import CertificationSet
from learnpath.schemas.profile import ProfileSpec
from learnpath.schemas.roadmap import GeneratedTopic

logger = get_logger(__name__)

DEFAULT_MAX_TOKENS = 1500
DEFAULT_TEMPERATURE = 0.7


class CertificationRecommender:
    """Recommends certifications for one roadmap per call; never retries."""

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

    async def recommend(
        self,
        profile: ProfileSpec,
        topics: Sequence[Topic | GeneratedTopic],
    ) -> CertificationSet:
        """Recommend certifications for a profile and its roadmap topics.

        Out-of-range or missing priorities come back as 1 and unknown
        difficulty levels as "beginner"; malformed items are dropped.

        Raises:
            ValidationError: ``topics`` is empty.
            GenerationUnavailableError: The backend failed or returned nothing.
            MalformedGenerationError: No certification could be recovered.
        """
        if not topics:
            raise ValidationError("Certification recommendations need a roadmap with topics")

        ordered = sorted(topics, key=lambda t: t.order_index)
        raw_text = await request_generation(
            self.client,
            build_certification_prompt(profile, [t.topic_name for t in ordered]),
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            system=CERTIFICATION_SYSTEM_PROMPT,
            purpose="Certification",
        )

        result = coerce_certifications(raw_text)
        certification_set = result.unwrap()
        if not certification_set.certifications:
            raise MalformedGenerationError("No certifications were recommended")

        logger.info(
            "Certifications recommended",
            count=len(certification_set.certifications),
            dropped_count=len(result.dropped),
        )
        return certification_set
