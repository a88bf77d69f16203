import pytest

from streambf import ConfigError, VMConfig
from streambf.config import default_step_limit


def test_defaults():
    config = VMConfig()
    assert config.cell_bits == 8
    assert config.tape == "sparse"
    assert config.tape_size == 30000
    assert config.eof == "halt"
    assert config.step_limit is None
    assert config.cell_modulus == 256


def test_from_env(monkeypatch):
    monkeypatch.setenv("BF_CELL_BITS", "16")
    monkeypatch.setenv("BF_TAPE", "Dense")
    monkeypatch.setenv("BF_TAPE_SIZE", "100")
    monkeypatch.setenv("BF_CIRCULAR", "yes")
    monkeypatch.setenv("BF_EOF", "zero")
    monkeypatch.setenv("BF_STEP_LIMIT", "500")
    config = VMConfig.from_env()
    assert config == VMConfig(cell_bits=16, tape="dense", tape_size=100, circular=True,
                              eof="zero", step_limit=500)


def test_from_env_zero_step_limit_means_unlimited():
    assert VMConfig.from_env({"BF_STEP_LIMIT": "0"}).step_limit is None


@pytest.mark.parametrize("env", [
    {"BF_CELL_BITS": "12"},
    {"BF_CELL_BITS": "eight"},
    {"BF_EOF": "explode"},
    {"BF_CIRCULAR": "maybe"},
    {"BF_TAPE_SIZE": "-5"},
])
def test_from_env_rejects_bad_values(env):
    with pytest.raises(ConfigError):
        VMConfig.from_env(env)


def test_with_overrides_ignores_none():
    config = VMConfig(eof="zero").with_overrides(eof=None, step_limit=10)
    assert config.eof == "zero"
    assert config.step_limit == 10


def test_with_overrides_validates():
    with pytest.raises(ValueError):
        VMConfig().with_overrides(step_limit=-1)


@pytest.mark.parametrize("env, expected", [
    ({}, 5000),
    ({"BF_STEP_LIMIT": "200"}, 200),
    ({"BF_STEP_LIMIT": "lots"}, 5000),
    ({"BF_STEP_LIMIT": "0"}, 5000),
])
def test_default_step_limit_never_fails(env, expected):
    assert default_step_limit(env) == expected
