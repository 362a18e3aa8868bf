import re

from warbler import W, wrap, list_of, terminals, skip, whitespace, is_success, value

# 1. Tokens
# Numbers may omit either side of the decimal point: 1, 3.14, .22
number = W(re.compile(r'([0-9]+(\.[0-9]*)?)|(([0-9]*)?\.[0-9]+)')).map(float)
string = W(re.compile(r'"(\\"|.)*?"')).map(lambda s: s[1:-1])
null_val = W('null').const(None)
true_val = W('true').const(True)
false_val = W('false').const(False)


# 2. Recursive JSON value
# `json_value` is looked up at call time, so it may refer to rules defined below.
json_value = W(lambda text, env: W(array, json_object, string, number, null_val, true_val, false_val)(text, env))

array = wrap('[', ']', list_of(json_value))

# { "key": value, ... }
entry = W([string, ':', json_value]).nth(0, 2)
json_object = wrap('{', '}', list_of(entry)).map(dict)

# Every token may be surrounded by whitespace
parser = terminals(skip(whitespace))(json_value)


def loads(text):
    result = parser(text)
    if not is_success(result):
        raise ValueError(f"invalid JSON near {result.rest[:20]!r}")
    return value(result)


if __name__ == "__main__":
    import json

    test_json = '{"string": [1, .22, 3.14], "hello": "world", "nested": {"ok": true}}'
    print("Successfully Parsed:")
    print(json.dumps(loads(test_json), indent=4))
