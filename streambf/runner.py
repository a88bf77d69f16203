from typing import Optional, Union

from .config import DEFAULT_STEP_LIMIT, VMConfig
from .engine import ExecutionEngine, TraceHook
from .errors import BrainfuckError, EndOfInput
from .streams import BufferInput, BufferOutput


def run_stream(source, output=None, input=None, config: Optional[VMConfig] = None,
               trace: Optional[TraceHook] = None) -> ExecutionEngine:
    """Feed program symbols from ``source`` until it runs dry.

    Without a separate ``input``, ',' reads from the same source as the
    program, so data can follow the code on one stream. End of input,
    whether between symbols or during ',', ends the run normally.
    """
    engine = ExecutionEngine(output=output, input=input if input is not None else source,
                             config=config, trace=trace)
    try:
        while True:
            symbol = source.read()
            if symbol is None:
                break
            engine.feed(symbol)
    except EndOfInput:
        pass
    return engine


def run_program(code: str, input_data: Union[str, bytes] = "",
                config: Optional[VMConfig] = None) -> str:
    """Execute a whole program against buffered input, return the output text."""
    engine = ExecutionEngine(output=BufferOutput(), input=BufferInput(input_data), config=config)
    try:
        engine.feed_all(code)
    except EndOfInput:
        pass
    return engine.output.text


def run_once(code: str, x: int, step_limit: int = DEFAULT_STEP_LIMIT) -> Optional[int]:
    """Execute code with single byte input, return the first output byte.
    Fresh machine every call; None when nothing was written or the run failed.
    """
    config = VMConfig(eof="unchanged", step_limit=step_limit or None)
    output = BufferOutput()
    engine = ExecutionEngine(output=output, input=BufferInput(bytes([x % 256])), config=config)
    try:
        engine.feed_all(code)
    except BrainfuckError:
        return None
    return output.values[0] if output.values else None
