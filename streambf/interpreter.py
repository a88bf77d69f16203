"""
Batch Brainfuck Interpreter

Runs a complete program with a precomputed bracket jump table instead of
streaming it. It shares the tape models, I/O collaborators and EOF policy
with ExecutionEngine, so the two can be checked against each other:

    >   Move the pointer to the right
    <   Move the pointer to the left
    +   Increment the memory cell at the pointer
    -   Decrement the memory cell at the pointer
    .   Output the character signified by the cell at the pointer
    ,   Input a character and store it in the cell at the pointer
    [   Jump past the matching ] if the cell at the pointer is 0
    ]   Jump back to the matching [ if the cell at the pointer is nonzero

All other characters are treated as comments and ignored.
"""

from typing import Dict, Optional, Union

from .config import VMConfig
from .errors import EndOfInput, StepLimitExceeded, UnmatchedLoopError
from .programs import strip_comments
from .streams import BufferInput, BufferOutput
from .tape import make_tape


class BatchInterpreter:
    def __init__(self, config: Optional[VMConfig] = None):
        self.config = config or VMConfig()
        self.memory = make_tape(self.config)
        self.pointer = 0
        self.instruction_pointer = 0
        self.output = BufferOutput()
        self.step_count = 0
        self.input_reads = 0
        self.output_writes = 0
        self.hit_step_limit = False

    def run(self, code: str, input_data: Union[str, bytes] = "", debug: bool = False) -> str:
        """Execute Brainfuck code with optional input data, return the output text.

        Running out of input under the "halt" EOF policy ends the run early
        and returns what was written so far.
        """
        code = strip_comments(code)
        source = BufferInput(input_data)

        # Reset state
        self.memory = make_tape(self.config)
        self.pointer = 0
        self.instruction_pointer = 0
        self.output = BufferOutput()
        self.step_count = 0
        self.input_reads = 0
        self.output_writes = 0
        self.hit_step_limit = False

        jump_table = self._build_jump_table(code)
        limit = self.config.step_limit

        try:
            while self.instruction_pointer < len(code):
                if limit is not None and self.step_count >= limit:
                    self.hit_step_limit = True
                    raise StepLimitExceeded(limit)

                cmd = code[self.instruction_pointer]
                if debug and self.step_count < 50:  # Only show first 50 steps
                    print(f"Step {self.step_count:2d}: IP={self.instruction_pointer:2d} CMD='{cmd}' "
                          f"PTR={self.pointer} CELL={self.memory[self.pointer]}")

                if cmd == '>':
                    self.pointer += 1
                elif cmd == '<':
                    self.pointer -= 1
                elif cmd == '+':
                    self.memory.add(self.pointer, 1)
                elif cmd == '-':
                    self.memory.add(self.pointer, -1)
                elif cmd == '.':
                    self.output.write(self.memory[self.pointer])
                    self.output_writes += 1
                elif cmd == ',':
                    self._read(source)
                elif cmd == '[':
                    if self.memory[self.pointer] == 0:
                        self.instruction_pointer = jump_table[self.instruction_pointer]
                elif cmd == ']':
                    if self.memory[self.pointer] != 0:
                        self.instruction_pointer = jump_table[self.instruction_pointer]

                self.instruction_pointer += 1
                self.step_count += 1
        except EndOfInput:
            pass

        return self.output.text

    def _read(self, source: BufferInput):
        value = source.read()
        if value is None:
            policy = self.config.eof
            if policy == "halt":
                raise EndOfInput(f"input exhausted at position {self.instruction_pointer}")
            if policy == "unchanged":
                return
            value = 0 if policy == "zero" else self.config.cell_modulus - 1
        else:
            self.input_reads += 1
        self.memory[self.pointer] = value

    @staticmethod
    def _build_jump_table(code: str) -> Dict[int, int]:
        """Build a table mapping bracket positions for efficient jumping."""
        jump_table = {}
        stack = []

        for i, cmd in enumerate(code):
            if cmd == '[':
                stack.append(i)
            elif cmd == ']':
                if not stack:
                    raise UnmatchedLoopError(f"Unmatched ']' at position {i}", i)
                start = stack.pop()
                jump_table[start] = i
                jump_table[i] = start

        if stack:
            raise UnmatchedLoopError(f"Unmatched '[' at position {stack[-1]}", stack[-1])

        return jump_table
