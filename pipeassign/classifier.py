# -*- coding: utf-8 -*-
"""Classify an invalid binding target of `assign_to`, for error reporting.

The classifier is only consulted after `pipeassign.targets.validate` has
rejected a tree. It looks at the shape of the tree, and picks exactly one
category from a closed set. The categories are lispy symbols, so they can be
compared by identity::

    from mcpyrate.quotes import macros, q
    assert classify(q[a + b]) is BinaryOrUnaryOp

The checks are tried in a fixed order; the first match wins:

    1. ``ModuleAttribute``  ``self.x``, ``config.DEBUG``
    2. ``RemoteCall``       ``mod.f(x)``, ``obj.method()``
    3. ``BinaryOrUnaryOp``  ``a + b``, ``-x``, ``a < b``, ``a and b``
    4. ``LocalCall``        ``f(x)``, ``f()``
    5. literals             ``(a, b)``, ``[1, 2]``, ``"s"``, ``42``, ``None``

and anything else is ``Unknown``. Hence, e.g. ``f(x).y`` is an attribute,
not a call, and ``mod.f(x)`` is a remote call, not a local one.

Python has no separate syntax for module attributes, so ``ModuleAttribute``
covers every qualified attribute reference, whatever the object on the left
is. Likewise ``RemoteCall`` covers every call through an attribute, be it a
module-level function or a method. Their messages say "attribute" and
"qualified function call".

The operator check is an allow-list. Operators outside it (``%``, ``**``,
``not``, ``in``, ...) are deliberately not reported as expressions; they end up
as ``Unknown``, which gets a generic (but still correct) message.
"""

__all__ = ["ModuleAttribute", "RemoteCall", "BinaryOrUnaryOp", "LocalCall",
           "TuplePattern", "ListLiteral", "StringLiteral", "NumberLiteral",
           "AtomLiteral", "Unknown", "classifications",
           "classify", "unmark",
           "isattribute", "isremotecall", "isoperation", "islocalcall",
           "literal_kind"]

from ast import (Attribute, Call, Name, BinOp, UnaryOp, Compare, BoolOp,
                 Constant, JoinedStr, Tuple, List,
                 Add, Sub, Mult, Div, UAdd, USub,
                 Eq, NotEq, Lt, Gt, LtE, GtE, And, Or)

from mcpyrate.markers import ASTMarker

from unpythonic.symbol import sym

ModuleAttribute = sym("ModuleAttribute")  # any `x.attr`, not only module attributes
RemoteCall = sym("RemoteCall")
BinaryOrUnaryOp = sym("BinaryOrUnaryOp")
LocalCall = sym("LocalCall")
TuplePattern = sym("TuplePattern")
ListLiteral = sym("ListLiteral")
StringLiteral = sym("StringLiteral")
NumberLiteral = sym("NumberLiteral")
AtomLiteral = sym("AtomLiteral")
Unknown = sym("Unknown")

classifications = (ModuleAttribute, RemoteCall, BinaryOrUnaryOp, LocalCall,
                   TuplePattern, ListLiteral, StringLiteral, NumberLiteral,
                   AtomLiteral, Unknown)

# The Python counterparts of `+ - * / == != < > <= >= and or`.
# Concatenation is `+` in Python, so there is no separate entry for it.
_allowed_operators = (Add, Sub, Mult, Div, UAdd, USub,
                      Eq, NotEq, Lt, Gt, LtE, GtE,
                      And, Or)

def unmark(tree):
    """Strip any `mcpyrate` AST markers wrapping `tree`."""
    while isinstance(tree, ASTMarker):
        tree = tree.body
    return tree

def isattribute(tree):
    """Test whether tree is a qualified attribute reference, like ``self.x``."""
    return type(tree) is Attribute

def isremotecall(tree):
    """Test whether tree is a call through a qualified path, like ``mod.f(x)``."""
    return type(tree) is Call and type(tree.func) is Attribute

def isoperation(tree):
    """Test whether tree applies only operators from the allow-list.

    A sign directly on a numeric constant (``-1``) is a number, not an operation.
    """
    if type(tree) is BinOp:
        return type(tree.op) in _allowed_operators
    if type(tree) is UnaryOp:
        return type(tree.op) in _allowed_operators and not _issignednumber(tree)
    if type(tree) is BoolOp:
        return type(tree.op) in _allowed_operators
    if type(tree) is Compare:  # `a < b <= c` qualifies only if every operator does
        return all(type(op) in _allowed_operators for op in tree.ops)
    return False

def islocalcall(tree):
    """Test whether tree is a call of a bare name, like ``f(x)`` or ``f()``."""
    return type(tree) is Call and type(tree.func) is Name

def _isnumber(value):
    return isinstance(value, (int, float, complex)) and not isinstance(value, bool)

def _issignednumber(tree):
    return (type(tree) is UnaryOp and type(tree.op) in (UAdd, USub) and
            type(tree.operand) is Constant and _isnumber(tree.operand.value))

def literal_kind(tree):
    """Sub-classify a literal or compound value.

    Return one of ``TuplePattern``, ``ListLiteral``, ``StringLiteral``,
    ``NumberLiteral``, ``AtomLiteral``, or ``Unknown`` if `tree` is none of those.
    """
    if type(tree) is Tuple:
        return TuplePattern
    if type(tree) is List:
        return ListLiteral
    if type(tree) is JoinedStr:  # f-string
        return StringLiteral
    if _issignednumber(tree):
        return NumberLiteral
    if type(tree) is Constant:
        value = tree.value
        if isinstance(value, (str, bytes)):
            return StringLiteral
        if _isnumber(value):
            return NumberLiteral
        # True, False, None, Ellipsis; bool must not be mistaken for int.
        if value is None or value is Ellipsis or isinstance(value, bool):
            return AtomLiteral
    return Unknown

def classify(tree):
    """Classify an invalid binding target. Total; never raises.

    Return one of the symbols in ``classifications``.
    """
    tree = unmark(tree)
    if isattribute(tree):
        return ModuleAttribute
    if isremotecall(tree):
        return RemoteCall
    if isoperation(tree):
        return BinaryOrUnaryOp
    if islocalcall(tree):
        return LocalCall
    return literal_kind(tree)
