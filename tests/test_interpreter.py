import pytest

from rune.ast import Block, Declaration, NumberLiteral
from rune.environment import Scope
from rune.interpreter import Interpreter, eval_expression, eval_module, run_program
from rune.lexer import tokenize
from rune.parser import parse_expression, parse_source
from rune.types import ErrorVal, FunctionVal, NumberVal, StringVal


def evaluate(source, scope=None):
    return eval_expression(parse_expression(tokenize(source)), scope)


def test_curried_application():
    scope = run_program('let f = x -> y -> x + y')
    assert evaluate('f 1 2', scope) == NumberVal(3)


def test_first_declaration_wins():
    scope = run_program('let x = 1\nlet x = 2')
    assert scope.lookup('x') == NumberVal(1)
    assert len(scope) == 1


def test_undefined_identifier():
    assert evaluate('z') == ErrorVal('z is not defined')


def test_arithmetic_on_non_numbers():
    assert evaluate('"a" + 1') == ErrorVal('Operation on non-number')
    assert evaluate('-"a"') == ErrorVal('Operation on non-number')
    assert evaluate('(x -> x) * 2') == ErrorVal('Operation on non-number')


def test_operators_do_not_forward_error_messages():
    assert evaluate('z + 1') == ErrorVal('Operation on non-number')
    assert evaluate('-z') == ErrorVal('Operation on non-number')
    assert evaluate('1 / 0 + 1') == ErrorVal('Operation on non-number')


def test_truncating_division_and_modulo():
    assert evaluate('7 / 2') == NumberVal(3)
    assert evaluate('-7 / 2') == NumberVal(-3)
    assert evaluate('7 / -2') == NumberVal(-3)
    assert evaluate('-7 % 2') == NumberVal(-1)
    assert evaluate('7 % -2') == NumberVal(1)


def test_division_by_zero_is_an_error_value():
    assert evaluate('1 / 0') == ErrorVal('division by zero')
    assert evaluate('1 % 0') == ErrorVal('division by zero')


def test_int64_wraps_around():
    assert evaluate('9223372036854775807 + 1') == NumberVal(-9223372036854775808)
    assert evaluate('(-9223372036854775807 - 1) / -1') == NumberVal(-9223372036854775808)
    assert evaluate('(-9223372036854775807 - 1) % -1') == NumberVal(0)


def test_invalid_number_literals():
    assert evaluate('9223372036854775808') == ErrorVal('invalid number literal: 9223372036854775808')
    assert eval_expression(NumberLiteral('12a')) == ErrorVal('invalid number literal: 12a')


def test_block_evaluates_to_zero():
    assert eval_expression(Block()) == NumberVal(0)


def test_strings():
    assert evaluate('"hello"') == StringVal('hello')


def test_call_to_non_function():
    assert evaluate('1 2') == ErrorVal('Call to non-function')
    assert evaluate('z 2') == ErrorVal('Call to non-function')


def test_function_values():
    value = evaluate('x -> x')
    assert isinstance(value, FunctionVal)
    assert value.parameter == 'x'
    assert repr(value) == 'Function'


def test_closure_does_not_see_later_declarations():
    scope = run_program('let f = x -> later\nlet later = 5\nlet r = f 0')
    assert scope.lookup('r') == ErrorVal('later is not defined')


def test_declared_function_cannot_call_itself():
    scope = run_program('let loop = n -> loop n\nlet r = loop 1')
    assert scope.lookup('r') == ErrorVal('Call to non-function')


def test_parameter_shadows_global():
    scope = run_program('let x = 1\nlet f = x -> x * 10\nlet r = f 2')
    assert scope.lookup('r') == NumberVal(20)
    assert scope.lookup('x') == NumberVal(1)


def test_calls_do_not_share_bindings():
    scope = run_program(
        'let k = x -> y -> x\n'
        'let a = k 1\n'
        'let b = k 2\n'
        'let ra = a 0\n'
        'let rb = b 0'
    )
    assert scope.lookup('ra') == NumberVal(1)
    assert scope.lookup('rb') == NumberVal(2)


def test_argument_is_evaluated_in_callers_scope():
    scope = Scope().bind('y', NumberVal(4))
    assert evaluate('(x -> x * x) y', scope) == NumberVal(16)


def test_runaway_recursion_becomes_an_error_value():
    assert evaluate('(x -> x x) (x -> x x)') == ErrorVal('maximum recursion depth exceeded')


def test_declare_uses_the_persistent_global_scope():
    interpreter = Interpreter()
    assert interpreter.declare(Declaration('x', NumberLiteral('1'))) == NumberVal(1)
    # the value is still returned, but the first binding is kept
    assert interpreter.declare(Declaration('x', NumberLiteral('2'))) == NumberVal(2)
    assert interpreter.global_scope.lookup('x') == NumberVal(1)


def test_eval_module_starts_from_an_empty_scope():
    module = parse_source('let a = 1')
    assert eval_module(module) == {'a': NumberVal(1)}
    assert eval_module(module) == {'a': NumberVal(1)}


def test_debug_trace_written_to_file(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    interpreter = Interpreter(debug_level=3, debug_file=str(debug_file))
    interpreter.run(parse_source('let x = 1\nlet x = 2\nlet y = 1 / 0'))
    interpreter.close()
    trace = debug_file.read_text(encoding='utf-8')
    assert 'module: 3 declarations' in trace
    assert 'declare x: Number = Number(1)' in trace
    assert 'skip duplicate x: keeping Number(1)' in trace
    assert 'error: division by zero' in trace


def test_debug_trace_printed_without_file(capsys):
    interpreter = Interpreter(debug_level=1, debug_file=None)
    interpreter.run(parse_source('let x = 1'))
    out = capsys.readouterr().out
    assert 'let x' in out


@pytest.mark.parametrize('source, expected', [
    ('1 + 2 * 3', 7),
    ('(1 + 2) * 3', 9),
    ('- - 3', 3),
    ('10 - 2 - 3', 5),
    ('2 * 3 % 4', 2),
])
def test_arithmetic(source, expected):
    assert evaluate(source) == NumberVal(expected)


def test_long_sum_is_evaluated_without_recursing_per_term():
    scope = run_program('let x = ' + ' + '.join(['1'] * 3000))
    assert scope.lookup('x') == NumberVal(3000)


def test_long_application_chain():
    scope = run_program('let i = x -> x\nlet r = ' + 'i ' * 3000 + '7')
    assert scope.lookup('r') == NumberVal(7)


def test_long_chain_keeps_error_rules():
    assert evaluate(' - '.join(['1'] * 2000) + ' + "a"') == ErrorVal('Operation on non-number')
    assert evaluate('1 ' + 'x ' * 2000) == ErrorVal('Call to non-function')
