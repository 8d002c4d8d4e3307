import pytest

from prompt_studio.diffs.services import DiffService


@pytest.fixture
def diff_service() -> DiffService:
    return DiffService()
