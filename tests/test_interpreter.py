import random

import pytest

from streambf import (BatchInterpreter, StepLimitExceeded, UnmatchedLoopError, VMConfig,
                      run_program)
from streambf.programs import is_balanced, random_program, strip_comments


def test_doubling_program():
    itp = BatchInterpreter()
    assert itp.run(",[->++<]>.", chr(3)) == chr(6)
    assert itp.input_reads == 1
    assert itp.output_writes == 1


def test_unbalanced_brackets_rejected():
    with pytest.raises(UnmatchedLoopError):
        BatchInterpreter().run("+]")
    with pytest.raises(UnmatchedLoopError):
        BatchInterpreter().run("[+")


def test_step_limit_sets_flag():
    itp = BatchInterpreter(VMConfig(step_limit=50))
    with pytest.raises(StepLimitExceeded):
        itp.run("+[]")
    assert itp.hit_step_limit


def test_eof_halt_returns_partial_output():
    assert BatchInterpreter().run("+.,.") == chr(1)


def test_strip_comments_and_balance():
    assert strip_comments("a+b[c]d.") == "+[]."
    assert is_balanced("[[]][]")
    assert not is_balanced("][")
    assert not is_balanced("[[]")


def test_random_programs_are_balanced():
    rng = random.Random(7)
    for _ in range(50):
        program = random_program(30, rng)
        assert is_balanced(program)
        assert program.startswith(',') and program.endswith('.')


def test_streaming_engine_agrees_with_jump_table():
    rng = random.Random(1234)
    reference = BatchInterpreter(VMConfig(eof="unchanged", step_limit=2000))
    compared = 0
    for _ in range(300):
        program = random_program(25, rng)
        data = bytes(rng.randrange(256) for _ in range(4))
        try:
            expected = reference.run(program, data)
        except StepLimitExceeded:
            continue
        got = run_program(program, data, VMConfig(eof="unchanged", step_limit=100000))
        assert got == expected, program
        compared += 1
    assert compared > 50
