from rune.interpreter import run_program
from rune.types import NumberVal, StringVal


def test_program_5_closures(example_source):
    scope = run_program(example_source('program_5.rn'))
    assert scope.lookup('r') == NumberVal(15)
    assert scope.lookup('r2') == NumberVal(22)
    assert scope.lookup('greeting') == StringVal('hello world')
    assert repr(scope.lookup('greeting')) == 'String(hello world)'
