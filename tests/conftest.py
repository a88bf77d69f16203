import pytest

from streambf import BufferInput, BufferOutput, ExecutionEngine, VMConfig


@pytest.fixture
def make_engine():
    """Engine factory with buffered I/O."""
    def _make(input_data="", **config):
        return ExecutionEngine(output=BufferOutput(), input=BufferInput(input_data),
                               config=VMConfig(**config))
    return _make


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("BF_CELL_BITS", "BF_TAPE", "BF_TAPE_SIZE", "BF_CIRCULAR", "BF_EOF", "BF_STEP_LIMIT"):
        monkeypatch.delenv(name, raising=False)
