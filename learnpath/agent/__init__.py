"""Generation pipeline: LLM client, output coercion, roadmap and certification builders."""

from learnpath.agent.certification_recommender import CertificationRecommender
from learnpath.agent.llm import GenerativeClient, OpenAIGenerativeClient
from learnpath.agent.roadmap_builder import RoadmapBuilder

__all__ = [
    "GenerativeClient",
    "OpenAIGenerativeClient",
    "RoadmapBuilder",
    "CertificationRecommender",
]
