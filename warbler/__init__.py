# Core
from .Parser import Parser, ParseResult, Environment, Position, GrammarError
from .Prim import Terminal, Forward, parse, W, literal, pattern, is_success, value, lazy, forward_decl

# Combinators
from .Combinators import (
    or_, seq, many, opt, list_of, lazy_many,
    wrap, skip, terminals, map_seq, expect, trace
)

# Built-in primitives
from .Char import digit, integer, whitespace, any_char
