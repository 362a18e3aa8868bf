"""
A toy language with functions, if statements, return statements and
additions, producing dict AST nodes tagged with a 'type' key.
"""
import re
from pprint import pprint

from warbler import W, or_, many, list_of, wrap, map_seq, terminals, skip, whitespace, integer, forward_decl

identifier = W(re.compile(r'[a-zA-Z_][a-zA-Z0-9_]*'))

expression = forward_decl("expression")
statement = forward_decl("statement")

primary_expression = or_(re.compile(r'[a-zA-Z-]+'), integer)

additive_expression = map_seq(lambda capture: [
    primary_expression.map(capture('lhs')),
    '+',
    primary_expression.map(capture('rhs')),
]).set('type', 'additiveExpression')

block = wrap('{', '}', many(statement))

if_statement = map_seq(lambda capture: [
    'if',
    wrap('(', ')', expression).map(capture('expr')),
    block.map(capture('block')),
]).set('type', 'ifStatement')

function_definition = map_seq(lambda capture: [
    'function',
    identifier.map(capture('name')),
    wrap('(', ')', list_of(identifier)).map(capture('params')),
    block.map(capture('block')),
]).set('type', 'functionDefinition')

return_statement = map_seq(lambda capture: [
    'return',
    expression.map(capture('expr')),
]).set('type', 'returnStatement')

expression.define(or_(additive_expression, primary_expression))
statement.define(or_(if_statement, function_definition, return_statement))

program = terminals(skip(whitespace))(many(statement))


if __name__ == "__main__":
    source = """
        function f(x) {
            return 5+5
        }

        if (5) {

        }
    """
    result = program(source)
    pprint(result.value)
