import contextlib
import logging

import pytest

from softbody2d import SoftBody2D, SoftBodyConfig


@pytest.fixture
def rest_config() -> SoftBodyConfig:
    """3x3 sheet laid out exactly at its 0.5 rest spacing."""
    return SoftBodyConfig(
        width=1.5,
        height=1.5,
        subdivisions_x=3,
        subdivisions_y=3,
        stiffness=25.0,
        damping=0.5,
        fixed_step=0.01,
    )


@pytest.fixture
def softbody(rest_config) -> SoftBody2D:
    return SoftBody2D(config=rest_config)


@contextlib.contextmanager
def preserved_root_logger():
    """Put the root logger's handlers and level back exactly as they were."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield root
    finally:
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)


@pytest.fixture
def restore_root_logger():
    with preserved_root_logger() as root:
        yield root
