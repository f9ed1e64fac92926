"""Tests for the ServiceResult contract."""

from __future__ import annotations

import pytest

from sixdegrees.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_defaults(self) -> None:
        result = ServiceResult(ok=True, op="find_shortest_path")
        assert result.data == {}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="x")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]

    def test_failure_builder(self) -> None:
        result = ServiceResult.failure(
            "find_shortest_path",
            "NOT_FOUND",
            "No path",
            warnings=["Cache lookup failed: x"],
            from_person_id=1,
        )
        assert not result.ok
        assert result.error == ServiceError(
            code="NOT_FOUND", message="No path", detail={"from_person_id": 1}
        )
        assert result.warnings == ["Cache lookup failed: x"]

    def test_json_round_trip(self) -> None:
        result = ServiceResult(ok=True, op="x", data={"path": [1, 2]})
        assert ServiceResult.model_validate_json(result.model_dump_json()) == result
