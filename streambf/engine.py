"""
Streaming execution engine.

Symbols are fed one at a time and executed immediately. There is no bracket
matching pass: a '[' with a nonzero cell records its log index on the loop
origin stack, and the matching ']' replays the logged body from that index
until the cell reaches zero. A '[' with a zero cell starts skipping; the skip
depth counts nested brackets so the matching ']' ends the skip.

    engine = ExecutionEngine(input=BufferInput("A"))
    engine.feed_all(",+.")
    engine.output.text   # 'B'
"""

from typing import Callable, Iterable, List, Optional

from .config import VMConfig
from .decoder import InstructionLog, Operation, Symbol, decode
from .errors import EndOfInput, StepLimitExceeded, UnmatchedLoopError
from .streams import BufferInput, BufferOutput
from .tape import make_tape

TraceHook = Callable[["ExecutionEngine", Operation], None]


class ExecutionEngine:
    def __init__(self, output=None, input=None, config: Optional[VMConfig] = None,
                 trace: Optional[TraceHook] = None):
        self.config = config or VMConfig()
        self.output = output if output is not None else BufferOutput()
        self.input = input if input is not None else BufferInput()
        self.trace = trace
        self.reset()

    def reset(self):
        """Return to a blank tape and an empty log."""
        self.tape = make_tape(self.config)
        self.pointer = 0
        self.log = InstructionLog()
        self.loop_origins: List[int] = []
        self.skip_depth = 0
        self.step_count = 0
        self.input_reads = 0
        self.output_writes = 0

    @property
    def ip(self) -> int:
        return self.log.pointer

    @property
    def cell(self) -> int:
        return self.tape[self.pointer]

    @property
    def loop_depth(self) -> int:
        return len(self.loop_origins)

    def feed(self, symbol: Symbol):
        """Decode and execute one symbol freshly read from the program stream."""
        self.execute(decode(symbol, self.log))

    def feed_all(self, symbols: Iterable[Symbol]) -> "ExecutionEngine":
        for symbol in symbols:
            self.feed(symbol)
        return self

    def execute(self, op: Operation):
        """Apply one decoded operation to the machine state."""
        if op is Operation.NOOP:
            return
        self._count_step()

        if op is Operation.LOOP_START:
            self._loop_start()
        elif op is Operation.LOOP_END:
            self._loop_end()
        elif self.skip_depth:
            pass
        elif op is Operation.VALUE_INCREMENT:
            self.tape.add(self.pointer, 1)
        elif op is Operation.VALUE_DECREMENT:
            self.tape.add(self.pointer, -1)
        elif op is Operation.POINTER_INCREMENT:
            self.pointer += 1
        elif op is Operation.POINTER_DECREMENT:
            self.pointer -= 1
        elif op is Operation.OUTPUT:
            self.output.write(self.tape[self.pointer])
            self.output_writes += 1
        elif op is Operation.INPUT:
            self._read_input()

        if self.trace is not None:
            self.trace(self, op)

    def _count_step(self):
        self.step_count += 1
        limit = self.config.step_limit
        if limit is not None and self.step_count > limit:
            raise StepLimitExceeded(limit)

    def _read_input(self):
        value = self.input.read()
        if value is None:
            policy = self.config.eof
            if policy == "halt":
                raise EndOfInput(f"input exhausted at instruction {self.ip}")
            if policy == "unchanged":
                return
            value = 0 if policy == "zero" else self.config.cell_modulus - 1
        else:
            self.input_reads += 1
        self.tape[self.pointer] = value

    def _loop_start(self):
        if self.skip_depth:
            # nested bracket inside a skipped body
            self.skip_depth += 1
        elif self.tape[self.pointer] != 0:
            self.loop_origins.append(self.log.pointer)
        else:
            self.skip_depth = 1

    def _loop_end(self):
        if self.skip_depth:
            self.skip_depth -= 1
            return
        if not self.loop_origins:
            raise UnmatchedLoopError(f"Unmatched ']' at instruction {self.ip}", self.ip)

        log = self.log
        while self.tape[self.pointer] != 0:
            # each jump back counts, so an empty body still hits the step limit
            self._count_step()
            end = log.pointer
            log.pointer = self.loop_origins[-1] + 1
            try:
                while log.pointer < end:
                    self.execute(decode(log[log.pointer], log, is_replay=True))
                    log.pointer += 1
            finally:
                log.pointer = end
        self.loop_origins.pop()

    def snapshot(self) -> dict:
        """Plain-data view of the machine, for debugging and reports."""
        return {
            'pointer': self.pointer,
            'ip': self.ip,
            'skip_depth': self.skip_depth,
            'loop_origins': list(self.loop_origins),
            'tape': self.tape.nonzero(),
            'log': self.log.text(),
            'steps': self.step_count,
            'input_reads': self.input_reads,
            'output_writes': self.output_writes,
        }
