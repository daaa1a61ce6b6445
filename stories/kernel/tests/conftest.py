"""
Kernel test configuration.

Shared story fixtures. Kernel tests use MemoryValueStorage and in-process
providers; nothing here touches the network.
"""

import pytest

from stories.kernel.storage import MemoryValueStorage
from stories.kernel.types import Story


@pytest.fixture
def react():
    return Story(
        id=0,
        title="React",
        url="https://reactjs.org/",
        author="Jordan Walke",
        num_comments=3,
        points=4,
    )


@pytest.fixture
def redux():
    return Story(
        id=1,
        title="Redux",
        url="https://redux.js.org/",
        author="Dan Abramov, Andrew Clark",
        num_comments=2,
        points=5,
    )


@pytest.fixture
def two_stories(react, redux):
    return [react, redux]


@pytest.fixture
def storage():
    return MemoryValueStorage()
