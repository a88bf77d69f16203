"""Streaming virtual machine for the eight-operator Brainfuck tape language."""

from .config import VMConfig
from .decoder import InstructionLog, Operation, OPERATORS, decode
from .engine import ExecutionEngine
from .errors import (BrainfuckError, ConfigError, EndOfInput, StepLimitExceeded,
                     TapeBoundsError, UnmatchedLoopError)
from .interpreter import BatchInterpreter
from .runner import run_once, run_program, run_stream
from .streams import BufferInput, BufferOutput, StreamInput, StreamOutput
from .tape import DenseTape, SparseTape, make_tape

__version__ = "0.1.0"
