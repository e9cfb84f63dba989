from __future__ import annotations

import pytest

from tests.fakes import FakeForm, FakeSurface


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def form() -> FakeForm:
    return FakeForm()


@pytest.fixture
def alerts() -> list[str]:
    return []
