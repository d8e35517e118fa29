# -*- coding: utf-8 -*-
"""Validate the binding target of `assign_to`.

A binding target must be a bare variable name: not qualified by an object or
a module, not called, and not wrapped in a literal or a pattern. The name may
arrive wrapped in `mcpyrate` AST markers (e.g. a `Done` left behind by an
expanded name macro); that doesn't affect validity.

`validate` is a pure yes/no test, and never raises. Producing a helpful error
for a rejected tree is the job of `pipeassign.diagnostics`; `extract_name`
puts the two together, for callers that just want a name or an exception.
"""

__all__ = ["Identifier", "validate", "isvalidtarget",
           "extract_name", "BindingTargetError"]

from ast import Name
from collections import namedtuple

from mcpyrate.markers import ASTMarker

from .diagnostics import classify_and_render

# context: `None` for a bare name, else the AST marker that wrapped it.
Identifier = namedtuple("Identifier", ["name", "context"])

def validate(tree):
    """Check whether `tree` can be bound to.

    If `tree` is a bare name, return an `Identifier`. Otherwise return `tree`
    itself, unchanged.
    """
    context = None
    node = tree
    while isinstance(node, ASTMarker):
        if context is None:
            context = node
        node = node.body
    if type(node) is Name:
        return Identifier(node.id, context)
    return tree

def isvalidtarget(tree):
    """Return whether `tree` is a bare name, i.e. a valid binding target."""
    return type(validate(tree)) is Identifier

class BindingTargetError(SyntaxError):
    """Raised by `extract_name` when the binding target is not a bare name.

    Attributes `classification` and `diagnostic` tell what went wrong;
    the exception message is the diagnostic message.
    """
    def __init__(self, classification, diagnostic):
        super().__init__(diagnostic.message)
        self.classification = classification
        self.diagnostic = diagnostic

def extract_name(tree):
    """Return the name `tree` binds to, as a str.

    If `tree` is not a valid binding target, raise `BindingTargetError`.
    """
    result = validate(tree)
    if type(result) is Identifier:
        return result.name
    classification, diagnostic = classify_and_render(tree)
    raise BindingTargetError(classification, diagnostic)
