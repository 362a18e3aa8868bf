import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar('T')  # Generic type for parser results
U = TypeVar('U')

log = logging.getLogger("warbler")

_UNSET = object()  # Marks an environment field that is not set locally


class GrammarError(TypeError):
    """Raised when a grammar is assembled from something that is not a parser."""


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """The value every parser returns: success flag, produced value, unconsumed input."""
    success: bool
    value: Optional[T]
    rest: str

    @staticmethod
    def ok(value: Any, rest: str) -> 'ParseResult[Any]':
        return ParseResult(True, value, rest)

    @staticmethod
    def fail(rest: str, value: Any = None) -> 'ParseResult[Any]':
        # On failure `rest` must be the input the failing parser was given
        return ParseResult(False, value, rest)


@dataclass
class Position:
    """Line and column counters shared by every environment of one parse run."""
    line: int = 1
    col: int = 1

    def advance(self, consumed: str) -> None:
        """Move past `consumed`, which has just been matched."""
        newlines = consumed.count('\n')
        if newlines:
            self.line += newlines
            self.col = len(consumed) - consumed.rfind('\n')
        else:
            self.col += len(consumed)

    def __str__(self) -> str:
        return f"{self.line}:{self.col}"


class Environment:
    """
    Per-run context threaded alongside the input.

    Environments form a chain: a child created with `child()` shares its
    parent's `Position` and overrides only the fields passed to it. Any field
    not set locally is looked up on the parent.
    """

    def __init__(self, position: Optional[Position] = None,
                 terminals: Any = _UNSET,
                 parent: Optional['Environment'] = None):
        if position is None:
            position = parent.position if parent is not None else Position()
        self.position = position
        self.parent = parent
        self._terminals = terminals

    @property
    def line(self) -> int:
        return self.position.line

    @property
    def col(self) -> int:
        return self.position.col

    @property
    def terminals(self) -> Optional[Callable[['Parser'], 'Parser']]:
        env: Optional[Environment] = self
        while env is not None:
            if env._terminals is not _UNSET:
                return env._terminals
            env = env.parent
        return None

    def advance(self, consumed: str) -> None:
        self.position.advance(consumed)

    def child(self, terminals: Any = _UNSET) -> 'Environment':
        """Overlay `terminals` (None suppresses an inherited wrapper) on this environment."""
        return Environment(terminals=terminals, parent=self)

    def __repr__(self) -> str:
        return f"Environment(line={self.line}, col={self.col}, terminals={self.terminals!r})"


ParseFn = Callable[[str, Environment], ParseResult]


class Parser(Generic[T]):
    """A parser: a callable `(text, env) -> ParseResult` with chainable mapping methods."""
    def __init__(self, parse_fn: ParseFn, name: str = ""):
        self.parse_fn = parse_fn
        self.name = name

    def __call__(self, text: str, env: Optional[Environment] = None) -> ParseResult[T]:
        if env is None:
            env = Environment()
        return self.parse_fn(text, env)

    def named(self, name: str) -> 'Parser[T]':
        """Name this parser for `repr` and trace output."""
        self.name = name
        return self

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>" if self.name else f"<{type(self).__name__}>"

    # Alternative: p | q == or_(p, q)
    def __or__(self, other: Any) -> 'Parser':
        from .Combinators import or_
        return or_(self, other)

    def __ror__(self, other: Any) -> 'Parser':
        from .Combinators import or_
        return or_(other, self)

    # Mapping chain. Every method wraps this parser once and returns a new one.

    def map(self, f: Callable[[T], U]) -> 'Parser[U]':
        """Replace a successful value with `f(value)`. Failures pass through."""
        def parse(text: str, env: Environment) -> ParseResult[U]:
            result = self(text, env)
            if result.success:
                return replace(result, value=f(result.value))
            return result
        return Parser(parse, self.name)

    def nth(self, *indices: int) -> 'Parser':
        """Keep element `i` of a sequence value, or a list of elements for several indices."""
        if len(indices) > 1:
            return self.map(lambda xs: [xs[i] for i in indices])
        n = indices[0]
        return self.map(lambda xs: xs[n])

    def const(self, c: U) -> 'Parser[U]':
        return self.map(lambda _: c)

    def set(self, key: Any, val: Any) -> 'Parser':
        """Assign `val` under `key` in a mapping value, e.g. to tag AST nodes with a type."""
        def assign(mapping):
            mapping[key] = val
            return mapping
        return self.map(assign)

    def skip(self, n: int) -> 'Parser':
        """Drop the first `n` elements of a sequence value."""
        return self.map(lambda xs: xs[n:])

    def skip_last(self, n: int) -> 'Parser':
        """Drop the last `n` elements of a sequence value."""
        return self.map(lambda xs: xs[:max(len(xs) - n, 0)])

    def take(self, n: int) -> 'Parser':
        """Keep the first `n` elements of a sequence value."""
        return self.map(lambda xs: xs[:n])

    def take_last(self, n: int) -> 'Parser':
        """Keep the last `n` elements of a sequence value."""
        return self.map(lambda xs: xs[max(len(xs) - n, 0):])
