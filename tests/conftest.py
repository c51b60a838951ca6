from __future__ import annotations

from typing import List

import pytest

from entcomp.reporting import SilentReporter, set_reporter, set_verbosity
from universe_helper import UNIVERSE


@pytest.fixture
def universe() -> List[str]:
    return list(UNIVERSE)


@pytest.fixture(autouse=True)
def _quiet_reporter():
    set_reporter(SilentReporter())
    set_verbosity(0)
    yield
    set_reporter(SilentReporter())
    set_verbosity(0)
