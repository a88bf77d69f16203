import random
from typing import Optional

from .decoder import OPERATORS

# ']' is only emitted when closing an open '['
BODY_TOK = "><+-[,"


def strip_comments(code: str) -> str:
    """Keep only the eight operator symbols."""
    return ''.join(c for c in code if c in OPERATORS)


def is_balanced(s: str) -> bool:
    """Check if brackets are balanced."""
    d = 0
    for c in s:
        if c == '[':
            d += 1
        elif c == ']':
            d -= 1
            if d < 0:
                return False
    return d == 0


def random_program(max_len=40, rng: Optional[random.Random] = None) -> str:
    """Generate a random balanced program with structure ,<body>."""
    rng = rng or random.Random()
    body_len = rng.randint(1, max_len - 2)
    body, depth = [], 0
    for _ in range(body_len):
        if depth > 0 and rng.random() < 0.25:
            body.append(']')
            depth -= 1
        else:
            c = rng.choice(BODY_TOK)
            if c == '[':
                depth += 1
            body.append(c)
    body += [']'] * depth
    return ',' + ''.join(body) + '.'
