import re
from typing import Any, Callable, Optional

from .Parser import Parser, ParseResult, Environment, GrammarError, T


class Terminal(Parser[str]):
    """
    A primitive matcher: a literal string or a regular expression.

    When the environment carries a `terminals` wrapper, the terminal is run
    through `wrapper(terminal)` instead of directly. The wrapped parser gets a
    child environment with `terminals` cleared, so primitives inside the
    wrapper itself (e.g. whitespace) match plainly instead of recursing.
    """

    def __call__(self, text: str, env: Optional[Environment] = None) -> ParseResult[str]:
        if env is None:
            env = Environment()
        wrapper = env.terminals
        if wrapper is not None:
            return parse(wrapper(self))(text, env.child(terminals=None))
        return self.parse_fn(text, env)


def literal(s: str) -> Terminal:
    """Matches the exact string `s` at the start of the input."""
    def parse_literal(text: str, env: Environment) -> ParseResult[str]:
        if not text.startswith(s):
            return ParseResult.fail(text)
        env.advance(s)
        return ParseResult.ok(s, text[len(s):])
    return Terminal(parse_literal, repr(s))


def pattern(regex: 're.Pattern[str]') -> Terminal:
    """Matches a compiled regular expression anchored at the start of the input."""
    def parse_pattern(text: str, env: Environment) -> ParseResult[str]:
        match = regex.match(text)
        if match is None:
            # Pattern failures carry '' rather than None
            return ParseResult.fail(text, '')
        matched = match.group(0)
        env.advance(matched)
        return ParseResult.ok(matched, text[len(matched):])
    return Terminal(parse_pattern, f"/{regex.pattern}/")


def parse(*shorthands: Any) -> Parser:
    """
    Turn a shorthand into a parser.

    - several arguments: `or_` over all of them
    - a list: `seq` over its elements
    - a str: a literal matcher
    - a compiled regular expression: a pattern matcher
    - a `Parser`: returned as is
    - any other callable `fn(text, env) -> ParseResult`: wrapped as a parser
    """
    from .Combinators import or_, seq

    if len(shorthands) > 1:
        return or_(*shorthands)
    if not shorthands:
        raise GrammarError("parse() needs at least one parser")

    shorthand = shorthands[0]
    if shorthand is None:
        raise GrammarError("Attempt to use `None` as parser.")
    if isinstance(shorthand, Parser):
        return shorthand
    if isinstance(shorthand, list):
        return seq(*shorthand)
    if isinstance(shorthand, str):
        return literal(shorthand)
    if isinstance(shorthand, re.Pattern):
        return pattern(shorthand)
    if callable(shorthand):
        return Parser(shorthand, getattr(shorthand, '__name__', ''))
    raise GrammarError(f"Cannot use {shorthand!r} as parser.")


# The grammar-author facing name: W('a', 'b'), W(['(', expr, ')'])
W = parse


def is_success(result: ParseResult) -> bool:
    """True if the parse succeeded and consumed the entire input."""
    return bool(result.success and len(result.rest) == 0)


def value(result: ParseResult[T]) -> Optional[T]:
    return result.value


# Forward references for recursive grammars

def lazy(thunk: Callable[[], Any]) -> Parser:
    """A parser that looks up `thunk()` on every call, for rules defined later."""
    def parse_lazy(text: str, env: Environment) -> ParseResult:
        return parse(thunk())(text, env)
    return Parser(parse_lazy, "lazy")


class Forward(Parser):
    """A parser declared now and given a body later with `define()`."""

    def __init__(self, name: str = ""):
        super().__init__(self._undefined, name)
        self.body: Optional[Parser] = None

    def _undefined(self, text: str, env: Environment) -> ParseResult:
        raise GrammarError(f"forward declaration {self!r} used before define()")

    def define(self, shorthand: Any) -> 'Forward':
        self.body = parse(shorthand)
        self.parse_fn = self.body
        return self


def forward_decl(name: str = "") -> Forward:
    """
    Declare a parser for mutually recursive rules.

        expr = forward_decl()
        group = wrap('(', ')', expr)
        expr.define(or_(group, integer))
    """
    return Forward(name)
