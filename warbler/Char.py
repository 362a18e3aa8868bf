import re

from .Parser import Parser, ParseResult, Environment
from .Prim import parse

# 1. digit: Parses a single ASCII digit
digit: Parser[str] = parse(re.compile(r'[0-9]')).named("digit")

# 2. integer: Parses one or more digits as an int
integer: Parser[int] = parse(re.compile(r'[0-9]+')).map(int).named("integer")

# 3. whitespace: Parses zero or more whitespace characters
whitespace: Parser[str] = parse(re.compile(r'\s*')).named("whitespace")


# 4. any_char: Parses any single character
def _any_char(text: str, env: Environment) -> ParseResult[str]:
    if not text:
        return ParseResult.fail(text)
    env.advance(text[0])
    return ParseResult.ok(text[0], text[1:])

# Not a terminal: `terminals` wrappers never apply to it, so it can read
# the inside of quoted strings character by character.
any_char: Parser[str] = Parser(_any_char, "any_char")
