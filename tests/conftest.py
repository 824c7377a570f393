from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.go_tree import GoTreeBuilder


@pytest.fixture
def go_tree(tmp_path: Path) -> GoTreeBuilder:
    """Provide a throwaway GOPATH/GOROOT rooted at the pytest tmp_path."""
    return GoTreeBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_goapidoc_logger() -> Iterator[None]:
    """Drop handlers installed by CLI runs so later tests do not log into closed streams."""
    yield
    logger = logging.getLogger("goapidoc")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
