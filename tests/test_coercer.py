"""Tests for coercion of generated text into roadmaps and certification sets."""

import json

import pytest

from learnpath.agent.coercer import SchemaKind, coerce, coerce_certifications, coerce_roadmap
from learnpath.core.exceptions import MalformedGenerationError
from learnpath.schemas.roadmap import MAX_DURATION_WEEKS


def _topic(name: str, hours: float = 5, **extra) -> dict:
    return {"topic_name": name, "description": f"{name} basics", "estimated_hours": hours, **extra}


class TestRoadmapCoercion:
    def test_fenced_payload_with_prose(self):
        raw = 'Here is your plan:\n```json\n{"title":"X","topics":[]}\n```'
        result = coerce(raw, SchemaKind.ROADMAP)
        assert result.ok
        roadmap = result.unwrap()
        assert roadmap.title == "X"
        assert roadmap.topics == []

    def test_topic_missing_hours_is_dropped(self):
        raw = json.dumps(
            {
                "title": "Data Path",
                "topics": [
                    _topic("SQL"),
                    {"topic_name": "Pandas", "description": "no hours"},
                    _topic("Spark", 12),
                ],
            }
        )
        result = coerce_roadmap(raw)
        roadmap = result.unwrap()
        assert [t.topic_name for t in roadmap.topics] == ["SQL", "Spark"]
        assert len(result.dropped) == 1
        assert "estimated_hours" in result.dropped[0]

    def test_optional_fields_defaulted(self):
        raw = json.dumps(
            {
                "title": "T",
                "topics": [{"name": "Git", "estimated_hours": 3, "description": None, "prerequisites": None}],
            }
        )
        topic = coerce_roadmap(raw).unwrap().topics[0]
        assert topic.topic_name == "Git"
        assert topic.description == ""
        assert topic.prerequisites == []

    def test_prerequisites_are_an_ordered_set(self):
        raw = json.dumps(
            {"title": "T", "topics": [_topic("Docker", prerequisites=["Linux", "Networking", "Linux", " "])]}
        )
        topic = coerce_roadmap(raw).unwrap().topics[0]
        assert topic.prerequisites == ["Linux", "Networking"]

    def test_negative_hours_dropped(self):
        raw = json.dumps({"title": "T", "topics": [_topic("A", -1), _topic("B", 0)]})
        assert [t.topic_name for t in coerce_roadmap(raw).unwrap().topics] == ["B"]

    def test_all_topics_malformed_is_failure(self):
        raw = json.dumps({"title": "T", "topics": [{"description": "x"}, "not an object"]})
        result = coerce_roadmap(raw)
        assert not result.ok
        assert len(result.dropped) == 2
        with pytest.raises(MalformedGenerationError):
            result.unwrap()

    def test_missing_title_is_failure(self):
        result = coerce_roadmap(json.dumps({"topics": [_topic("A")]}))
        assert not result.ok
        assert "title" in result.error

    def test_unparseable_text_is_failure(self):
        result = coerce_roadmap("I could not build a plan today.")
        assert not result.ok
        with pytest.raises(MalformedGenerationError):
            result.unwrap()

    def test_invalid_duration_treated_as_absent(self):
        raw = json.dumps({"title": "T", "estimated_duration_weeks": "soon", "topics": [_topic("A")]})
        assert coerce_roadmap(raw).unwrap().estimated_duration_weeks is None

    def test_payload_kept_verbatim(self):
        payload = {"title": "T", "extra": {"k": 1}, "topics": [_topic("A")]}
        assert coerce_roadmap(json.dumps(payload)).unwrap().payload == payload


class TestCertificationCoercion:
    def _cert(self, name: str = "AWS Solutions Architect", provider: str = "AWS", **extra) -> dict:
        return {"name": name, "provider": provider, "priority": 4, "difficulty_level": "intermediate", **extra}

    def test_wrapper_object(self):
        raw = json.dumps({"certifications": [self._cert()]})
        result = coerce(raw, SchemaKind.CERTIFICATION_SET)
        assert [c.name for c in result.unwrap().certifications] == ["AWS Solutions Architect"]

    def test_bare_list_in_prose(self):
        raw = "Sure! " + json.dumps([self._cert(), self._cert("CKA", "CNCF")]) + " Good luck."
        certs = coerce_certifications(raw).unwrap().certifications
        assert [(c.name, c.provider) for c in certs] == [("AWS Solutions Architect", "AWS"), ("CKA", "CNCF")]

    def test_alternate_wrapper_key(self):
        raw = json.dumps({"recommendations": [self._cert()]})
        assert len(coerce_certifications(raw).unwrap().certifications) == 1

    @pytest.mark.parametrize("priority", [9, 0, -2, "high", None, 2.5, True])
    def test_bad_priority_defaults_to_lowest(self, priority):
        raw = json.dumps({"certifications": [self._cert(priority=priority)]})
        assert coerce_certifications(raw).unwrap().certifications[0].priority == 1

    def test_numeric_string_priority_accepted(self):
        raw = json.dumps({"certifications": [self._cert(priority="3")]})
        assert coerce_certifications(raw).unwrap().certifications[0].priority == 3

    def test_missing_priority_defaults_to_lowest(self):
        cert = self._cert()
        del cert["priority"]
        raw = json.dumps({"certifications": [cert]})
        assert coerce_certifications(raw).unwrap().certifications[0].priority == 1

    def test_difficulty_normalized(self):
        raw = json.dumps(
            {"certifications": [self._cert(difficulty_level="Advanced"), self._cert("B", "X", difficulty_level="expert")]}
        )
        certs = coerce_certifications(raw).unwrap().certifications
        assert [c.difficulty_level for c in certs] == ["advanced", "beginner"]

    def test_item_missing_provider_dropped(self):
        raw = json.dumps({"certifications": [{"name": "Orphan"}, self._cert()]})
        result = coerce_certifications(raw)
        assert len(result.unwrap().certifications) == 1
        assert len(result.dropped) == 1

    def test_object_without_list_is_failure(self):
        result = coerce_certifications(json.dumps({"name": "AWS", "provider": "AWS"}))
        assert not result.ok

    def test_every_item_malformed_is_failure(self):
        result = coerce_certifications(json.dumps([{"name": ""}, {"provider": "X"}]))
        assert not result.ok


class TestGeneratorNumbersOutOfRange:
    def test_topic_numbering_never_drops_a_topic(self):
        raw = json.dumps(
            {
                "title": "T",
                "topics": [
                    _topic("A", order_index="first"),
                    _topic("B", order_index=2.5),
                    _topic("C", order_index=None),
                ],
            }
        )
        result = coerce_roadmap(raw)
        assert [t.topic_name for t in result.unwrap().topics] == ["A", "B", "C"]
        assert result.dropped == []

    @pytest.mark.parametrize("weeks", ["Infinity", "-Infinity", "NaN"])
    def test_non_finite_duration_treated_as_absent(self, weeks):
        raw = '{"title": "T", "estimated_duration_weeks": %s, "topics": [%s]}' % (weeks, json.dumps(_topic("A")))
        assert coerce_roadmap(raw).unwrap().estimated_duration_weeks is None

    def test_huge_duration_is_capped(self):
        raw = json.dumps({"title": "T", "estimated_duration_weeks": 1e30, "topics": [_topic("A")]})
        assert coerce_roadmap(raw).unwrap().estimated_duration_weeks == MAX_DURATION_WEEKS

    @pytest.mark.parametrize("hours", ["Infinity", "NaN"])
    def test_non_finite_hours_drop_the_topic(self, hours):
        raw = '{"title": "T", "topics": [{"topic_name": "A", "estimated_hours": %s}, %s]}' % (
            hours,
            json.dumps(_topic("B")),
        )
        result = coerce_roadmap(raw)
        assert [t.topic_name for t in result.unwrap().topics] == ["B"]
        assert len(result.dropped) == 1

    def test_non_finite_study_hours_treated_as_absent(self):
        raw = '{"certifications": [{"name": "CKA", "provider": "CNCF", "estimated_study_hours": Infinity}]}'
        assert coerce_certifications(raw).unwrap().certifications[0].estimated_study_hours is None
