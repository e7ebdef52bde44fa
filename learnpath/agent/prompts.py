"""Prompt text for roadmap and certification generation.

Every profile field appears in the prompt, with an explicit fallback when
absent, so a missing field never silently drops out of the request.
"""

from collections.abc import Iterable

from learnpath.schemas.profile import ProfileSpec

NOT_SPECIFIED = "Not specified"
NO_SKILLS = "None specified"

ROADMAP_SYSTEM_PROMPT = (
    "You are an expert learning advisor who creates personalized, structured study "
    "roadmaps. Always return valid JSON."
)

CERTIFICATION_SYSTEM_PROMPT = (
    "You are a certification advisor. Recommend relevant certifications based on user "
    "goals and learning path. Always return valid JSON."
)


def _or_default(value: str | None, default: str = NOT_SPECIFIED) -> str:
    if value is None or not value.strip():
        return default
    return value.strip()


def _skills(profile: ProfileSpec) -> str:
    return ", ".join(profile.current_skills) or NO_SKILLS


def build_roadmap_prompt(profile: ProfileSpec) -> str:
    return f"""Create a personalized study roadmap based on the following user profile:

Background: {_or_default(profile.background)}
Current Skills: {_skills(profile)}
Learning Goals: {_or_default(profile.learning_goals)}
Time Available: {profile.hours_per_week} hours per week
Learning Style: {_or_default(profile.learning_style)}
Target Industry: {_or_default(profile.target_industry)}

Create a comprehensive, structured learning roadmap with:
1. A clear title for the roadmap
2. A brief description
3. A list of topics in study order, each with a name, description, estimated hours
   to complete, prerequisites (if any) and learning objectives.

The roadmap should be realistic for the time available and progress from
foundational concepts to advanced topics.

Return a JSON object with this structure:
{{
  "title": "Roadmap title",
  "description": "Brief description",
  "estimated_duration_weeks": number,
  "topics": [
    {{
      "topic_name": "Topic name",
      "description": "Topic description",
      "estimated_hours": number,
      "prerequisites": ["prereq1", "prereq2"],
      "learning_objectives": ["objective1", "objective2"]
    }}
  ]
}}

IMPORTANT: Return ONLY valid JSON, no additional text or markdown formatting."""


def build_certification_prompt(profile: ProfileSpec, topic_names: Iterable[str]) -> str:
    return f"""Based on the user's learning goals, target industry, and roadmap topics, recommend relevant certifications.

User Profile:
- Learning Goals: {_or_default(profile.learning_goals)}
- Target Industry: {_or_default(profile.target_industry)}
- Current Skills: {_skills(profile)}
- Roadmap Topics: {", ".join(topic_names)}

Recommend 3-5 relevant certifications with:
- Certification name
- Provider (e.g., AWS, Google, Microsoft)
- Brief description
- Difficulty level (beginner, intermediate, advanced)
- Estimated study hours
- Why it is relevant to the user's goals
- Priority (1-5, where 5 is highest priority)

Return a JSON object with a "certifications" array:
{{
  "certifications": [
    {{
      "name": "Certification name",
      "provider": "Provider name",
      "description": "Description",
      "difficulty_level": "beginner|intermediate|advanced",
      "estimated_study_hours": number,
      "recommendation_reason": "Why it is relevant",
      "priority": number,
      "category": "Category",
      "website_url": "https://..."
    }}
  ]
}}

IMPORTANT: Return ONLY valid JSON, no additional text or markdown formatting."""
