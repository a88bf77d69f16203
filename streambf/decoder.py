"""
Instruction decoder.

Maps one streamed symbol to an operation and records every freshly seen
operator in the instruction log, which doubles as the program counter domain:

    +   VALUE_INCREMENT     increment the cell at the pointer
    -   VALUE_DECREMENT     decrement the cell at the pointer
    >   POINTER_INCREMENT   move the pointer right
    <   POINTER_DECREMENT   move the pointer left
    .   OUTPUT              emit the cell at the pointer
    ,   INPUT               read one symbol into the cell at the pointer
    [   LOOP_START          enter the loop, or skip it if the cell is 0
    ]   LOOP_END            repeat the body while the cell is nonzero

Anything else decodes to NOOP and is not logged.
"""

from enum import Enum
from typing import List, Union

Symbol = Union[str, int]


class Operation(Enum):
    VALUE_INCREMENT = '+'
    VALUE_DECREMENT = '-'
    POINTER_INCREMENT = '>'
    POINTER_DECREMENT = '<'
    OUTPUT = '.'
    INPUT = ','
    LOOP_START = '['
    LOOP_END = ']'
    NOOP = ''

    @property
    def symbol(self) -> str:
        return self.value


# Fixed operator table; NOOP has no symbol.
OPERATORS = {op.value: op for op in Operation if op is not Operation.NOOP}


class InstructionLog:
    """Append-only record of decoded operator symbols plus the instruction pointer."""

    def __init__(self):
        self.symbols: List[str] = []
        self.pointer = -1

    def append(self, symbol: str):
        self.symbols.append(symbol)
        self.pointer += 1

    def __len__(self):
        return len(self.symbols)

    def __getitem__(self, index):
        return self.symbols[index]

    def __iter__(self):
        return iter(self.symbols)

    def text(self) -> str:
        return ''.join(self.symbols)

    def __repr__(self):
        return f"InstructionLog({self.text()!r}, pointer={self.pointer})"


def _as_char(symbol: Symbol) -> str:
    if isinstance(symbol, int):
        return chr(symbol)
    return symbol


def decode(symbol: Symbol, log: InstructionLog, is_replay: bool = False) -> Operation:
    """Decode a single symbol.

    A fresh decode of a recognised operator appends it to ``log`` and advances
    the instruction pointer. Replays (re-executing a logged loop body) never
    touch the log. Unknown symbols are comments and come back as NOOP.
    """
    char = _as_char(symbol)
    op = OPERATORS.get(char)
    if op is None:
        return Operation.NOOP
    if not is_replay:
        log.append(char)
    return op
