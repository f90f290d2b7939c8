"""Model tests: pagination arithmetic and immutability."""

import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from skill_fetch.models import Pagination, SearchResult, Skill


@pytest.mark.parametrize(
    "page,limit,total,expected",
    [
        (1, 20, 45, True),
        (2, 20, 45, True),
        (3, 20, 45, False),
        (1, 20, 20, False),
        (1, 10, 0, False),
    ],
)
def test_has_next(page, limit, total, expected):
    assert Pagination(page=page, limit=limit, total=total).has_next is expected


def test_pagination_rejects_non_positive():
    with pytest.raises(ValidationError):
        Pagination(page=0, limit=20)
    with pytest.raises(ValidationError):
        Pagination(page=1, limit=0)


def test_has_next_is_serialized():
    data = SearchResult(pagination=Pagination(page=1, limit=20, total=45)).model_dump()
    assert data["pagination"]["has_next"] is True


def test_skill_is_immutable():
    skill = Skill(name="pdf", description="d", repo_url="https://github.com/a/b", source="url-import")
    with pytest.raises(ValidationError):
        skill.name = "other"
    assert skill.author == "unknown"
