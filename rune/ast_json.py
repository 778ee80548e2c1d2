"""JSON serialization/deserialization for the Rune AST.

This module converts between Rune AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Operators are stored by
enum name (`"ADD"`, `"UNARY_MINUS"`, ...).
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Binary,
    Block,
    Call,
    Declaration,
    Function,
    Identifier,
    Module,
    NumberLiteral,
    Operator,
    StringLiteral,
    Unary,
)


OPERATORS_BY_KIND = {
    "binary": frozenset({Operator.ADD, Operator.SUBTRACT, Operator.MULTIPLY, Operator.DIVIDE, Operator.MODULO}),
    "unary": frozenset({Operator.UNARY_PLUS, Operator.UNARY_MINUS}),
}


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, Module):
        return {"type": "Module", "declarations": [ast_to_obj(d) for d in node.declarations]}
    if isinstance(node, Declaration):
        return {"type": "Declaration", "name": node.name, "initializer": ast_to_obj(node.initializer)}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "name": node.name}
    if isinstance(node, NumberLiteral):
        return {"type": "NumberLiteral", "text": node.text}
    if isinstance(node, StringLiteral):
        return {"type": "StringLiteral", "text": node.text}
    if isinstance(node, Function):
        return {"type": "Function", "parameter": node.parameter, "body": ast_to_obj(node.body)}
    if isinstance(node, Call):
        return {"type": "Call", "callee": ast_to_obj(node.callee), "argument": ast_to_obj(node.argument)}
    if isinstance(node, Binary):
        return {
            "type": "Binary",
            "operator": node.operator.name,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Unary):
        return {"type": "Unary", "operator": node.operator.name, "operand": ast_to_obj(node.operand)}
    if isinstance(node, Block):
        return {"type": "Block"}
    raise TypeError(f"Unsupported node type for serialization: {type(node).__name__}")


def ast_from_obj(o: Any) -> Any:
    if o is None:
        return None
    if not isinstance(o, dict):
        raise TypeError(f"expected an AST object, got {type(o).__name__}")
    t = o.get("type")
    if t == "Module":
        return Module.of([ast_from_obj(d) for d in o.get("declarations", [])])
    if t == "Declaration":
        return Declaration(o["name"], ast_from_obj(o["initializer"]))
    if t == "Identifier":
        return Identifier(o["name"])
    if t == "NumberLiteral":
        return NumberLiteral(o["text"])
    if t == "StringLiteral":
        return StringLiteral(o["text"])
    if t == "Function":
        return Function(o["parameter"], ast_from_obj(o["body"]))
    if t == "Call":
        return Call(ast_from_obj(o["callee"]), ast_from_obj(o["argument"]))
    if t == "Binary":
        return Binary(_operator(o["operator"], "binary"), ast_from_obj(o["left"]), ast_from_obj(o["right"]))
    if t == "Unary":
        return Unary(_operator(o["operator"], "unary"), ast_from_obj(o["operand"]))
    if t == "Block":
        return Block()
    raise ValueError(f"Unknown AST object type: {t}")


def _operator(name: str, kind: str) -> Operator:
    op = Operator.__members__.get(name) if isinstance(name, str) else None
    if op is None:
        raise ValueError(f"Unknown operator: {name}")
    if op not in OPERATORS_BY_KIND[kind]:
        raise ValueError(f"{name} is not a {kind} operator")
    return op
