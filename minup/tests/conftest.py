import logging
import os
from pathlib import Path
from typing import Iterator

import pytest


@pytest.fixture(autouse=True)
def _reset_minup_logger() -> Iterator[None]:
    """
    L{minup.driver.main} installs a handler on the C{minup} logger, don't
    let it leak into the next test.
    """
    logger = logging.getLogger('minup')
    yield
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    An empty current directory, so no config file gets picked up by accident.
    """
    monkeypatch.chdir(tmp_path)
    assert not os.listdir(tmp_path)
    return tmp_path
