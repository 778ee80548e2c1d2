from rune.interpreter import run_program
from rune.types import FunctionVal, NumberVal


def test_program_2_currying(example_source):
    scope = run_program(example_source('program_2.rn'))
    assert isinstance(scope.lookup('add'), FunctionVal)
    assert isinstance(scope.lookup('inc'), FunctionVal)
    assert scope.lookup('three') == NumberVal(3)
    assert scope.lookup('five') == NumberVal(5)
