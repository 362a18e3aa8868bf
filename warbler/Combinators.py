from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional

from .Parser import Parser, ParseResult, Environment, log
from .Prim import parse

ParserShorthand = Any  # str, compiled regex, list, Parser or parse function
ParserCombinator = Callable[[ParserShorthand], Parser]

PREVIEW_LENGTH = 10


# 1. or_: Tries parsers in order until one succeeds
def or_(*shorthands: ParserShorthand) -> Parser:
    """
    Tries each parser from left to right against the same input and returns
    the first success unchanged. Fails with the original input if none match.
    """
    parsers = [parse(p) for p in shorthands]

    def parse_or(text: str, env: Environment) -> ParseResult:
        for parser in parsers:
            result = parser(text, env)
            if result.success:
                return result
        return ParseResult.fail(text)
    return Parser(parse_or)


# 2. seq: Runs parsers one after another
def seq(*shorthands: ParserShorthand) -> Parser[List[Any]]:
    """
    Succeeds only if every parser succeeds in sequence, each on the rest left
    by the previous one. The value is the list of their values.

    On failure nothing is consumed, but the failing parser's value is kept so
    that an `expect` message further down reaches the caller.
    """
    parsers = [parse(p) for p in shorthands]

    def parse_seq(text: str, env: Environment) -> ParseResult[List[Any]]:
        values: List[Any] = []
        rest = text
        for parser in parsers:
            result = parser(rest, env)
            if not result.success:
                return ParseResult.fail(text, result.value)
            values.append(result.value)
            rest = result.rest
        return ParseResult.ok(values, rest)
    return Parser(parse_seq)


# 3. many: Zero or more occurrences
def many(shorthand: ParserShorthand) -> Parser[List[Any]]:
    """
    Applies the parser until it fails and returns the list of values. Never fails.

    A match that consumes nothing ends the repetition without being collected.
    """
    parser = parse(shorthand)

    def parse_many(text: str, env: Environment) -> ParseResult[List[Any]]:
        values: List[Any] = []
        rest = text
        while True:
            result = parser(rest, env)
            if not result.success or len(result.rest) == len(rest):
                break
            values.append(result.value)
            rest = result.rest
        return ParseResult.ok(values, rest)
    return Parser(parse_many)


# 4. opt: Zero or one occurrence
def opt(shorthand: ParserShorthand) -> Parser:
    """Always succeeds; the value is None and nothing is consumed if the parser fails."""
    parser = parse(shorthand)

    def parse_opt(text: str, env: Environment) -> ParseResult:
        result = parser(text, env)
        if result.success:
            return result
        return ParseResult.ok(None, text)
    return Parser(parse_opt)


# 5. list_of: Zero or more occurrences separated by a separator
def list_of(shorthand: ParserShorthand, sep: ParserShorthand = ',') -> Parser[List[Any]]:
    """
    Parses zero or more `shorthand` separated by `sep` (default ',') and
    returns their values as one flat list. Never fails.
    """
    item = parse(shorthand)
    items = seq(item, many(seq(sep, item).nth(1))).map(lambda xs: [xs[0], *xs[1]])
    return opt(items).map(lambda xs: xs if xs is not None else [])


# 6. lazy_many: As few occurrences as possible, then a terminator
def lazy_many(shorthand: ParserShorthand, stop: ParserShorthand) -> Parser[List[Any]]:
    """
    Before every repetition of `shorthand`, tries `stop`. When `stop` matches,
    its value is appended and the repetition ends, consuming the terminator.
    If the repetition breaks down before `stop` matched, the result is `stop`
    applied to the original input.

        string_body = lazy_many(any_char, '"').skip_last(1)
    """
    parser = parse(shorthand)
    stop_parser = parse(stop)

    def parse_lazy_many(text: str, env: Environment) -> ParseResult[List[Any]]:
        values: List[Any] = []
        rest = text
        while True:
            stop_result = stop_parser(rest, env)
            if stop_result.success:
                values.append(stop_result.value)
                return ParseResult.ok(values, stop_result.rest)

            result = parser(rest, env)
            if not result.success or len(result.rest) == len(rest):
                return stop_parser(text, env)
            values.append(result.value)
            rest = result.rest
    return Parser(parse_lazy_many)


# 7. wrap: Discards brackets or quotes around a parser
def wrap(left: ParserShorthand, right: ParserShorthand,
         inner: Optional[ParserShorthand] = None) -> Parser:
    """
    `wrap(left, right, inner)` parses left, inner, right and keeps only inner's
    value. With two arguments, `wrap(quote, inner)`, the same parser closes.
    """
    if inner is None:
        inner, right = right, left
    return seq(left, inner, right).nth(1)


# 8. skip: Ignores input matched by a parser around another parser
def skip(ignore: ParserShorthand) -> ParserCombinator:
    """
    skip(whitespace)(p) consumes and discards `ignore` both before and after `p`.
    """
    def apply(shorthand: ParserShorthand) -> Parser:
        return seq(ignore, shorthand, ignore).nth(1)
    return apply


# 9. terminals: Wraps every terminal parser
def terminals(wrap_fn: Callable[[Parser], ParserShorthand]) -> ParserCombinator:
    """
    terminals(f)(p) runs `p` with `f` installed in the environment, so every
    literal and pattern matcher reached from `p` is replaced by `f(matcher)`.

        program = terminals(skip(whitespace))(statements)
    """
    def apply(shorthand: ParserShorthand) -> Parser:
        parser = parse(shorthand)

        def parse_terminals(text: str, env: Environment) -> ParseResult:
            return parser(text, env.child(terminals=wrap_fn))
        return Parser(parse_terminals, parser.name)
    return apply


# 10. map_seq: Sequence with named captures
def map_seq(build: Callable[[Callable[[Any], Callable[[Any], Any]]], List[ParserShorthand]]) -> Parser[Dict[Any, Any]]:
    """
    Builds a dict from named parts of a sequence. `build` receives a `capture`
    function and returns the list of parsers to run in sequence; parts mapped
    through `capture(key)` are stored under `key`, others are discarded.

        if_statement = map_seq(lambda capture: [
            'if',
            wrap('(', ')', expression).map(capture('expr')),
            block.map(capture('block')),
        ])

    `build` runs on every call, so it may refer to rules defined after it.
    """
    def parse_map_seq(text: str, env: Environment) -> ParseResult[Dict[Any, Any]]:
        captured: Dict[Any, Any] = {}

        def capture(key: Any) -> Callable[[Any], Any]:
            def store(v: Any) -> Any:
                captured[key] = v
                return v
            return store

        result = seq(*build(capture))(text, env)
        if not result.success:
            return result
        return replace(result, value=captured)
    return Parser(parse_map_seq)


def _preview(text: str, length: int = PREVIEW_LENGTH) -> str:
    if len(text) <= length:
        return text
    return text[:length - 3] + '...'


# 11. expect: Positioned diagnostic on failure
def expect(shorthand: ParserShorthand, description: str) -> Parser:
    """
    On failure, returns a failure whose value is a message such as
    '[2:2]: Expected integer, got "cc"', using the current line and column.
    """
    parser = parse(shorthand)

    def parse_expect(text: str, env: Environment) -> ParseResult:
        result = parser(text, env)
        if not result.success:
            message = f'[{env.line}:{env.col}]: Expected {description}, got "{_preview(text)}"'
            return ParseResult.fail(text, message)
        return result
    return Parser(parse_expect, description)


# 12. trace: Debug logging around a parser
def trace(label: str, shorthand: ParserShorthand) -> Parser:
    """
    Logs attempts, matches and failures of a parser to the 'warbler' logger
    at DEBUG level. The parser's behaviour is unchanged.
    """
    parser = parse(shorthand)

    def parse_trace(text: str, env: Environment) -> ParseResult:
        log.debug("%s: trying at %s on %r", label, env.position, _preview(text, 30))
        result = parser(text, env)
        if result.success:
            log.debug("%s: matched %r, now at %s", label, result.value, env.position)
        else:
            log.debug("%s: failed at %s", label, env.position)
        return result
    return Parser(parse_trace, label)
