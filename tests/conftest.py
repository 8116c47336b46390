import pytest

from chip8 import Machine


def _assemble(*words):
    return b"".join(w.to_bytes(2, "big") for w in words)


@pytest.fixture
def assemble():
    return _assemble


@pytest.fixture
def load():
    """Build a Machine from a list of opcodes placed at 0x200."""
    def _load(*words, rng=None):
        return Machine(_assemble(*words), rng=rng)
    return _load
