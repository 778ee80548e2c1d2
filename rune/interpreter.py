"""Tree-walking interpreter for the Rune language.

Evaluation is a pure function of an expression and a `Scope`. Runtime
errors are ordinary `ErrorVal` results rather than exceptions, so the
evaluator is total: every expression produces a value. The only state the
interpreter keeps is the global scope it threads through top-level
declarations.

Operators only understand numbers. An operand that is anything else,
including an `ErrorVal` produced further down the tree, turns into a fresh
`Error(Operation on non-number)`; the original message is not carried
through.
"""

from __future__ import annotations

from typing import Optional

from .ast import (
    Binary, Block, Call, Declaration, Expression, Function, Identifier,
    Module, NumberLiteral, Operator, StringLiteral, Unary,
)
from .environment import Scope
from .parser import parse_source
from .types import (
    ErrorVal, FunctionVal, NumberVal, StringVal, Value,
    parse_int64, truncating_divide, truncating_modulo, type_name, wrap_int64,
)


NON_NUMBER = 'Operation on non-number'
NON_FUNCTION = 'Call to non-function'
DIVISION_BY_ZERO = 'division by zero'
RECURSION_LIMIT = 'maximum recursion depth exceeded'


class Interpreter:
    """Core interpreter that evaluates Rune ASTs."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.global_scope = Scope()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 and debug_file else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, module: Module, scope: Optional[Scope] = None) -> Scope:
        """Evaluate every declaration of `module` and return the resulting scope.

        Evaluation starts from an empty scope unless one is given. The
        result also becomes the interpreter's global scope.
        """
        if scope is None:
            scope = Scope()
        if self.debug_level >= 1:
            self.debug(f"module: {len(module.declarations)} declarations")
        for decl in module.declarations:
            scope = self.execute(decl, scope)
        self.global_scope = scope
        return scope

    def declare(self, decl: Declaration) -> Value:
        """Evaluate one declaration against the global scope.

        Returns the initializer's value, whether or not it was bound.
        """
        value = self.evaluate_guarded(decl.initializer, self.global_scope)
        self.global_scope = self.bind_declaration(decl.name, value, self.global_scope)
        return value

    def execute(self, decl: Declaration, scope: Scope) -> Scope:
        if self.debug_level >= 1:
            self.debug(f"let {decl.name}")
        value = self.evaluate_guarded(decl.initializer, scope)
        return self.bind_declaration(decl.name, value, scope)

    def bind_declaration(self, name: str, value: Value, scope: Scope) -> Scope:
        if name in scope:
            if self.debug_level >= 2:
                self.debug(f"skip duplicate {name}: keeping {scope.lookup(name)!r}")
            return scope
        if self.debug_level >= 2:
            self.debug(f"declare {name}: {type_name(value)} = {value!r}")
        return scope.define_if_absent(name, value)

    def evaluate_guarded(self, node: Expression, scope: Scope) -> Value:
        """Evaluate `node`, turning Python's recursion limit into an error value."""
        try:
            return self.evaluate(node, scope)
        except RecursionError:
            if self.debug_level >= 3:
                self.debug(f"error: {RECURSION_LIMIT}")
            return ErrorVal(RECURSION_LIMIT)

    def evaluate(self, node: Expression, scope: Scope) -> Value:
        if self.debug_level >= 4:
            self.debug(f"eval {type(node).__name__}")
        if isinstance(node, (Binary, Call)):
            return self.evaluate_spine(node, scope)
        if isinstance(node, Unary):
            operand = self.evaluate(node.operand, scope)
            if not isinstance(operand, NumberVal):
                return self.error(NON_NUMBER)
            if node.operator is Operator.UNARY_MINUS:
                return NumberVal(wrap_int64(-operand.value))
            return operand
        if isinstance(node, Function):
            return FunctionVal(node.body, node.parameter, scope)
        if isinstance(node, Identifier):
            value = scope.get(node.name)
            if value is None:
                return self.error(f"{node.name} is not defined")
            return value
        if isinstance(node, NumberLiteral):
            n = parse_int64(node.text)
            if n is None:
                return self.error(f"invalid number literal: {node.text}")
            return NumberVal(n)
        if isinstance(node, StringLiteral):
            return StringVal(node.text)
        if isinstance(node, Block):
            return NumberVal(0)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def evaluate_spine(self, node: Expression, scope: Scope) -> Value:
        """Evaluate a left-nested chain of Binary and Call nodes.

        `1 + 1 + ... + 1` and `f a b ... z` nest on the left, one level per
        operator, so the chain is walked with a loop and folded back up
        instead of recursing into `node.left` / `node.callee`.
        """
        spine = []
        while isinstance(node, (Binary, Call)):
            spine.append(node)
            node = node.left if isinstance(node, Binary) else node.callee
        acc = self.evaluate(node, scope)
        for link in reversed(spine):
            if isinstance(link, Binary):
                right = self.evaluate(link.right, scope)
                if not (isinstance(acc, NumberVal) and isinstance(right, NumberVal)):
                    acc = self.error(NON_NUMBER)
                else:
                    acc = self.apply_binary_op(link.operator, acc.value, right.value)
            elif not isinstance(acc, FunctionVal):
                acc = self.error(NON_FUNCTION)
            else:
                acc = self.call_function(acc, self.evaluate(link.argument, scope))
        return acc

    def call_function(self, func: FunctionVal, arg: Value) -> Value:
        if self.debug_level >= 3:
            self.debug(f"call {func.parameter} = {arg!r}")
        # the parameter always shadows, unlike top-level declarations
        return self.evaluate(func.body, func.scope.bind(func.parameter, arg))

    def apply_binary_op(self, op: Operator, a: int, b: int) -> Value:
        if op is Operator.ADD:
            return NumberVal(wrap_int64(a + b))
        if op is Operator.SUBTRACT:
            return NumberVal(wrap_int64(a - b))
        if op is Operator.MULTIPLY:
            return NumberVal(wrap_int64(a * b))
        if op is Operator.DIVIDE:
            if b == 0:
                return self.error(DIVISION_BY_ZERO)
            return NumberVal(truncating_divide(a, b))
        if op is Operator.MODULO:
            if b == 0:
                return self.error(DIVISION_BY_ZERO)
            return NumberVal(truncating_modulo(a, b))
        raise NotImplementedError(f"apply_binary_op: {op!r} is not a binary operator")

    def error(self, message: str) -> ErrorVal:
        if self.debug_level >= 3:
            self.debug(f"error: {message}")
        return ErrorVal(message)


def eval_module(module: Module, debug_level: int = 0) -> Scope:
    """Evaluate a module in a fresh, empty scope."""
    interpreter = Interpreter(debug_level=debug_level)
    try:
        return interpreter.run(module)
    finally:
        interpreter.close()


def eval_expression(expr: Expression, scope: Optional[Scope] = None) -> Value:
    """Evaluate a standalone expression, by default in an empty scope."""
    return Interpreter().evaluate_guarded(expr, scope if scope is not None else Scope())


def run_program(source: str, debug_level: int = 0) -> Scope:
    """Convenience function to parse and evaluate Rune source code."""
    return eval_module(parse_source(source), debug_level=debug_level)


def compile_module(file_path: str, debug_level: int = 0) -> Interpreter:
    """Parse and evaluate a Rune file, returning the interpreter instance."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    module = parse_source(source)
    interpreter = Interpreter(debug_level=debug_level)
    try:
        interpreter.run(module)
    finally:
        interpreter.close()
    return interpreter
