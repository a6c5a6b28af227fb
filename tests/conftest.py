import os
import tempfile
import uuid

import pytest

from temporary_fixture.utils.file_utils import FileUtils

pytest_plugins = ["pytester"]

TEMP = os.path.normpath(os.path.abspath(tempfile.gettempdir()))


@pytest.fixture
def fixture_root():
    """A not-yet-existing path directly under the OS temp directory."""
    path = os.path.join(TEMP, f"tf-test-{uuid.uuid4().hex}")
    yield path
    FileUtils.remove_tree(path)


@pytest.fixture
def outside_file():
    """A file next to fixture roots that fixtures must not link to."""
    name = f"do-not-point-at-me-{uuid.uuid4().hex}.txt"
    path = os.path.join(TEMP, name)
    with open(path, "w", encoding="utf-8") as f:
        f.write("Do not point at me")
    yield name
    if os.path.lexists(path):
        os.unlink(path)
