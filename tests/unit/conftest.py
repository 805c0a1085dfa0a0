from __future__ import annotations

import logging

import pytest

from fakes import FakeClock, RecordingRuntime


@pytest.fixture
def runtime():
    return RecordingRuntime()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def _restore_package_logger():
    log = logging.getLogger("branchwait")
    saved = (list(log.handlers), log.level, log.propagate)
    yield
    log.handlers[:] = saved[0]
    log.setLevel(saved[1])
    log.propagate = saved[2]
