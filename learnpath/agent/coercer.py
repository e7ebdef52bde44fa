"""Coercion of raw generated text into validated domain objects.

Generated output is untrusted: it may be wrapped in prose or markdown, and
individual items may be missing fields. Coercion recovers what it can and
reports the rest instead of raising, so callers get a tagged result:

- success with the value plus the reasons any items were dropped
- failure with a reason when nothing usable could be recovered
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from learnpath.agent.llm_utils import ARRAY, OBJECT, parse_llm_json_response
from learnpath.core.exceptions import MalformedGenerationError
from learnpath.core.logging import get_logger
from learnpath.schemas.certification import CertificationSet, GeneratedCertification
from learnpath.schemas.roadmap import MAX_DURATION_WEEKS, GeneratedRoadmap, GeneratedTopic

logger = get_logger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

# Keys a certification list may be wrapped under
CERTIFICATION_LIST_KEYS = ("certifications", "recommendations")


class SchemaKind(str, Enum):
    ROADMAP = "roadmap"
    CERTIFICATION_SET = "certification_set"


@dataclass(frozen=True)
class CoercionResult(Generic[T]):
    value: T | None = None
    dropped: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.value is not None

    def unwrap(self) -> T:
        """Return the value or raise ``MalformedGenerationError``."""
        if not self.ok:
            raise MalformedGenerationError(self.error or "No usable content")
        return self.value  # type: ignore[return-value]


def _describe(exc: PydanticValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'item'}: {err['msg']}" for err in exc.errors()
    )


def _validate_items(items: list[Any], model: type[M], kind: SchemaKind) -> tuple[list[M], list[str]]:
    """Validate each item on its own, dropping the ones that fail."""
    kept: list[M] = []
    dropped: list[str] = []
    for index, item in enumerate(items):
        try:
            kept.append(model.model_validate(item))
        except PydanticValidationError as exc:
            reason = _describe(exc)
            logger.warning("Dropping malformed generated item", kind=kind.value, index=index, reason=reason)
            dropped.append(f"#{index}: {reason}")
    return kept, dropped


def _duration_weeks(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        weeks = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if weeks < 1:
        return None
    return min(weeks, MAX_DURATION_WEEKS)


def coerce_roadmap(raw_text: str | None) -> CoercionResult[GeneratedRoadmap]:
    try:
        payload = parse_llm_json_response(raw_text, containers=(OBJECT,))
    except ValueError as exc:
        return CoercionResult(error=str(exc))

    title = payload.get("title")
    if not isinstance(title, str) or not title.strip():
        return CoercionResult(error="Roadmap has no title")
    topics = payload.get("topics")
    if not isinstance(topics, list):
        return CoercionResult(error="Roadmap has no topics list")

    kept, dropped = _validate_items(topics, GeneratedTopic, SchemaKind.ROADMAP)
    if topics and not kept:
        return CoercionResult(dropped=dropped, error="Every generated topic was malformed")

    description = payload.get("description")
    roadmap = GeneratedRoadmap(
        title=title.strip(),
        description=description if isinstance(description, str) else "",
        estimated_duration_weeks=_duration_weeks(payload.get("estimated_duration_weeks")),
        topics=kept,
        payload=payload,
    )
    return CoercionResult(value=roadmap, dropped=dropped)


def _certification_items(payload: dict[str, Any] | list[Any]) -> list[Any] | None:
    if isinstance(payload, list):
        return payload
    for key in CERTIFICATION_LIST_KEYS:
        if isinstance(payload.get(key), list):
            return payload[key]
    return None


def coerce_certifications(raw_text: str | None) -> CoercionResult[CertificationSet]:
    try:
        payload = parse_llm_json_response(raw_text, containers=(OBJECT, ARRAY))
    except ValueError as exc:
        return CoercionResult(error=str(exc))

    items = _certification_items(payload)
    if items is None:
        return CoercionResult(error="No certification list in generated output")

    kept, dropped = _validate_items(items, GeneratedCertification, SchemaKind.CERTIFICATION_SET)
    if items and not kept:
        return CoercionResult(dropped=dropped, error="Every generated certification was malformed")
    return CoercionResult(value=CertificationSet(certifications=kept), dropped=dropped)


def coerce(raw_text: str | None, kind: SchemaKind) -> CoercionResult[Any]:
    """Coerce ``raw_text`` into the domain object for ``kind``."""
    if kind is SchemaKind.ROADMAP:
        return coerce_roadmap(raw_text)
    return coerce_certifications(raw_text)
