# -*- coding: utf-8 -*-
"""Error messages for invalid binding targets of `assign_to`.

Each classification has exactly one message template. Every message echoes
the source code of the offending tree, so that the message alone is enough
to locate the problem, and shows the correct usage next to the wrong one::

    Cannot assign to string literal `'not_a_var'`.
    assign_to() expects a simple variable name, not a literal value.

    Example: assign_to(value, my_var)  # ✓ Correct
    Not: assign_to(value, 'not_a_var')  # ✗ Wrong
"""

__all__ = ["Diagnostic", "render", "classify_and_render", "describe", "source_of"]

from collections import namedtuple

from mcpyrate import unparse

from .classifier import (ModuleAttribute, RemoteCall, BinaryOrUnaryOp, LocalCall,
                         TuplePattern, ListLiteral, StringLiteral, NumberLiteral,
                         AtomLiteral, Unknown,
                         classify, unmark)

class Diagnostic(namedtuple("Diagnostic", ["classification", "source", "message"])):
    """A rendered error message, bound to one classification.

    `source` is the source code of the rejected tree, as it appears in `message`.
    """
    __slots__ = ()
    def __str__(self):
        return self.message

# classification -> (what the target is, what assign_to expected it not to be)
_templates = {ModuleAttribute: ("attribute", "an attribute"),
              RemoteCall: ("qualified function call", "a function call"),
              BinaryOrUnaryOp: ("expression", "an expression"),
              LocalCall: ("function call", "a function call"),
              TuplePattern: ("tuple pattern", "pattern matching"),
              ListLiteral: ("list literal", "a literal value"),
              StringLiteral: ("string literal", "a literal value"),
              NumberLiteral: ("number literal", "a literal value"),
              AtomLiteral: ("atom literal", "a literal value")}

_example = "Example: assign_to(value, my_var)  # ✓ Correct"

def describe(classification):
    """Return the prose name of `classification`, e.g. ``"string literal"``.

    ``Unknown`` has no prose name; for it, return ``None``.
    """
    if classification is Unknown:
        return None
    if classification not in _templates:
        raise ValueError(f"Unknown classification {classification!r}")
    what, _ = _templates[classification]
    return what

def source_of(tree):
    """Return the source code of `tree`, as it will appear in error messages."""
    return unparse(unmark(tree)).strip()

def render(classification, tree):
    """Render the error message for `tree`, which was classified as `classification`.

    Pure function; return a `Diagnostic`.
    """
    source = source_of(tree)
    if classification is Unknown:
        lines = [f"Cannot assign to `{source}`.",
                 "assign_to() expects a simple variable name."]
    else:
        if classification not in _templates:
            raise ValueError(f"Unknown classification {classification!r}")
        what, notwhat = _templates[classification]
        lines = [f"Cannot assign to {what} `{source}`.",
                 f"assign_to() expects a simple variable name, not {notwhat}."]
    lines.extend(["",
                  _example,
                  f"Not: assign_to(value, {source})  # ✗ Wrong"])
    message = "\n".join(lines) + "\n"
    return Diagnostic(classification, source, message)

def classify_and_render(tree):
    """Classify the rejected binding target `tree`, and render its error message.

    Return ``(classification, diagnostic)``. Never raises.
    """
    classification = classify(tree)
    return classification, render(classification, tree)
