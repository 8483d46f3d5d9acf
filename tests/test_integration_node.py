"""
End-to-end tests against the real node.js parser script.

Skipped unless node is installed and `npm install` has been run in jsast/parser/.
"""

import pytest

from jsast.core.errors import ParsingFailed
from jsast.core.parser import JavaScriptParser
from jsast.resources import PARSER_DIR

pytestmark = pytest.mark.skipif(
    not (PARSER_DIR / "node_modules").is_dir(),
    reason="parser npm dependencies not installed",
)


@pytest.fixture(scope="module")
def js_parser():
    p = JavaScriptParser.create()
    if p is None:
        pytest.skip("node.js parser unavailable")
    return p


def test_empty_statement(js_parser):
    ast = js_parser.parse_source(";")
    assert len(ast.statements) == 1
    assert ast.statements[0].WhichOneof("statement") == "empty_statement"


def test_function_and_call(js_parser):
    ast = js_parser.parse_source("function f(a, b = 2) { return a + b; }\nf(1);\n")
    fn = ast.statements[0].function_declaration
    assert fn.name == "f"
    assert [p.name for p in fn.parameters] == ["a", "b"]
    assert fn.parameters[1].default_value.number_literal.value == 2
    ret = fn.body[0].return_statement.argument.binary_expression
    assert ret.operator == "+"
    call = ast.statements[1].expression_statement.expression.call_expression
    assert call.callee.identifier.name == "f"


def test_syntax_error(js_parser):
    with pytest.raises(ParsingFailed) as ei:
        js_parser.parse_source("let = ;")
    assert ei.value.message
