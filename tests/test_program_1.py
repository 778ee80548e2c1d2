from rune.interpreter import run_program
from rune.types import NumberVal


def test_program_1_precedence(example_source):
    scope = run_program(example_source('program_1.rn'))
    assert scope.lookup('x') == NumberVal(7)
    assert scope.lookup('y') == NumberVal(9)
    assert scope.lookup('z') == NumberVal(3)
    # 20 - 4 - ((3 * 2 / 3) % 5)
    assert scope.lookup('w') == NumberVal(14)
