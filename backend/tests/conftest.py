import pathlib
import sys

import pytest

# Ensure backend root (containing the 'version_gate' package) is on sys.path
BACKEND_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from tests.fakes import make_descriptor
from version_gate.models.descriptor import VersionDescriptor


@pytest.fixture
def descriptor() -> VersionDescriptor:
    return make_descriptor()
