"""
Brainfuck Step-by-Step Debugger

Runs a program through the streaming engine and prints the machine state
after every executed operation: the instruction log with the current
instruction marked, skip depth and open loops, a tape window around the
pointer, and the output so far. Replayed loop bodies show up step by step.
"""

import sys
from typing import Optional, Union

from .config import VMConfig
from .decoder import Operation
from .engine import ExecutionEngine
from .errors import EndOfInput
from .streams import BufferInput, BufferOutput, to_char


class StepDebugger:
    """Prints engine state after each step via the engine's trace hook."""

    def __init__(self, config: Optional[VMConfig] = None, show_memory_range: int = 10,
                 file=None, max_steps: Optional[int] = None):
        self.config = config or VMConfig()
        self.show_memory_range = show_memory_range
        self.file = file
        self.max_steps = max_steps
        self.engine: Optional[ExecutionEngine] = None
        self._skip_depth = 0

    def _print(self, *args):
        print(*args, file=self.file if self.file is not None else sys.stdout)

    def debug_run(self, code: str, input_data: Union[str, bytes] = "") -> str:
        """Execute code with step-by-step tracing, return the output text."""
        self._print("BRAINFUCK DEBUGGER")
        self._print(f"Program: {code}")
        self._print(f"Input: {input_data!r}")
        self._print("=" * 80)

        config = self.config
        if self.max_steps is not None:
            config = config.with_overrides(step_limit=self.max_steps)
        self._skip_depth = 0
        self.engine = ExecutionEngine(output=BufferOutput(), input=BufferInput(input_data),
                                      config=config, trace=self.on_step)
        self.show_state("INITIAL")
        try:
            self.engine.feed_all(code)
        except EndOfInput:
            self._print("\nInput exhausted, stopping.")

        result = self.engine.output.text
        self._print("\nFINAL RESULT:")
        self._print(f"Output: {result!r} -> {self.engine.output.values}")
        return result

    def on_step(self, engine: ExecutionEngine, op: Operation):
        if engine is not self.engine:
            self.engine = engine
            self._skip_depth = 0
        self._print(f"\nStep {engine.step_count}: Execute '{op.symbol}' at instruction {engine.ip}")
        self._print(f"  {self.describe(engine, op, self._skip_depth)}")
        self._skip_depth = engine.skip_depth
        self.show_state(f"AFTER STEP {engine.step_count}")

    @staticmethod
    def describe(engine: ExecutionEngine, op: Operation, prev_skip_depth: int = 0) -> str:
        """One-line account of what an operation just did.

        ``prev_skip_depth`` is the skip depth before the step; it tells a ']'
        that ended a skip apart from one that closed a loop that ran.
        """
        p = engine.pointer
        if op is Operation.LOOP_START:
            if engine.skip_depth:
                return f"Loop start: skipping (depth {engine.skip_depth})"
            return f"Loop start: cell[{p}] = {engine.cell}, enter loop at {engine.loop_origins[-1]}"
        if op is Operation.LOOP_END:
            if engine.skip_depth:
                return f"Loop end: still skipping (depth {engine.skip_depth})"
            if prev_skip_depth:
                return "Loop end: skip ended"
            return f"Loop end: cell[{p}] = {engine.cell}, loop closed"
        if engine.skip_depth:
            return "Skipped"
        if op is Operation.VALUE_INCREMENT:
            return f"Increment cell[{p}] -> {engine.cell}"
        if op is Operation.VALUE_DECREMENT:
            return f"Decrement cell[{p}] -> {engine.cell}"
        if op is Operation.POINTER_INCREMENT:
            return f"Move pointer right -> position {p}"
        if op is Operation.POINTER_DECREMENT:
            return f"Move pointer left -> position {p}"
        if op is Operation.OUTPUT:
            return f"Output cell[{p}] = {engine.cell} -> {to_char(engine.cell)!r}"
        return f"Read input -> cell[{p}] = {engine.cell}"

    def show_state(self, label: str):
        """Show current state of memory, pointer, and program."""
        engine = self.engine
        self._print(f"\n{label}:")

        program_display = ""
        for i, cmd in enumerate(engine.log):
            if i == engine.ip:
                program_display += f"[{cmd}]"
            else:
                program_display += cmd
        self._print(f"Program:  {program_display}")
        self._print(f"Loops:    open={engine.loop_origins} skip_depth={engine.skip_depth}")

        # Tape window centred on the pointer; negative cells are fine on a sparse tape
        start = engine.pointer - self.show_memory_range // 2
        if engine.config.tape == "dense" and not engine.config.circular:
            start = max(0, min(start, engine.config.tape_size - self.show_memory_range))
        end = start + self.show_memory_range
        if engine.config.tape == "dense" and not engine.config.circular:
            end = min(end, engine.config.tape_size)

        memory_vals = []
        memory_ptrs = []
        memory_addrs = []
        for i in range(start, end):
            memory_vals.append(f"{engine.tape[i]:3d}")
            memory_ptrs.append(" ^ " if i == engine.pointer else "   ")
            memory_addrs.append(f"{i:3d}")

        self._print("Memory:   [" + "|".join(memory_vals) + "]")
        self._print("Pointer:   " + " ".join(memory_ptrs))
        self._print("Address:   " + " ".join(memory_addrs))

        output = engine.output
        if not engine.output_writes:
            self._print("Output:   (empty)")
        elif isinstance(output, BufferOutput):
            self._print(f"Output:   {output.text!r} -> {output.values}")
        else:
            self._print(f"Output:   {engine.output_writes} written")
