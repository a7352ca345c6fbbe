import pytest

from vz_core.items import Module


@pytest.fixture
def modules():
    """Six modules named mod0..mod5 at 0x1000 steps."""
    return [
        Module(name=f"mod{i}", address=0x1000 * (i + 1), size=0x100) for i in range(6)
    ]
