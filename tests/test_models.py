"""Tests for the click wire models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from btnify.models import ClickRequest, ClickResponse


class TestClickRequest:
    def test_parses_answers_with_nulls(self) -> None:
        req = ClickRequest.model_validate({"id": 2, "answers": ["Ada", None]})
        assert req.id == 2
        assert req.answers == ["Ada", None]

    def test_missing_answers_defaults_to_empty(self) -> None:
        assert ClickRequest.model_validate({"id": 0}).answers == []

    def test_null_answers_means_empty(self) -> None:
        assert ClickRequest.model_validate({"id": 0, "answers": None}).answers == []

    def test_extra_responses_alias(self) -> None:
        req = ClickRequest.model_validate({"id": 1, "extra_responses": ["x"]})
        assert req.answers == ["x"]

    def test_negative_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ClickRequest.model_validate({"id": -1, "answers": []})

    @pytest.mark.parametrize("bad_id", [True, "0", 1.0])
    def test_non_integer_id_rejected(self, bad_id: object) -> None:
        with pytest.raises(ValidationError):
            ClickRequest.model_validate({"id": bad_id, "answers": []})

    def test_missing_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ClickRequest.model_validate({"answers": []})

    def test_non_string_answer_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ClickRequest.model_validate({"id": 0, "answers": [{"nested": True}]})


class TestClickResponse:
    def test_from_str(self) -> None:
        assert ClickResponse.from_value("pong") == ClickResponse(message="pong")

    def test_from_response_passthrough(self) -> None:
        resp = ClickResponse(message="done")
        assert ClickResponse.from_value(resp) is resp

    def test_from_other_type_raises(self) -> None:
        with pytest.raises(TypeError, match="must return str or ClickResponse"):
            ClickResponse.from_value(42)

    def test_dump_shape(self) -> None:
        assert ClickResponse(message="pong").model_dump() == {"message": "pong"}
