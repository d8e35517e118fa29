# -*- coding: utf-8 -*-
"""Error messages for invalid binding targets."""

from unpythonic.syntax import macros, test, test_raises, the  # noqa: F401
from unpythonic.test.fixtures import session, testset

from mcpyrate.quotes import macros, q  # noqa: F401, F811

from mcpyrate.core import Done
from mcpyrate import unparse

from pipeassign.classifier import (ModuleAttribute, RemoteCall, BinaryOrUnaryOp, LocalCall,
                                   TuplePattern, ListLiteral, StringLiteral, NumberLiteral,
                                   AtomLiteral, Unknown, classifications)
from pipeassign.diagnostics import (Diagnostic, render, classify_and_render,
                                    describe, source_of)

def runtests():
    with testset("scenarios"):
        classification, diagnostic = classify_and_render(q["not_a_var"])
        test[classification is StringLiteral]
        test[diagnostic.classification is StringLiteral]
        test["not_a_var" in the[diagnostic.message]]
        test["string literal" in diagnostic.message]

        classification, diagnostic = classify_and_render(q[a + b])  # noqa: F821, only quoted
        test[classification is BinaryOrUnaryOp]
        test["a + b" in the[diagnostic.message]]
        test["Cannot assign to expression" in diagnostic.message]

        test[classify_and_render(q[123])[0] is NumberLiteral]
        test[classify_and_render(q[(a, b)])[0] is TuplePattern]  # noqa: F821
        test[classify_and_render(q[Module.function()])[0] is RemoteCall]  # noqa: F821
        test[classify_and_render(q[some_function(arg)])[0] is LocalCall]  # noqa: F821
        test[classify_and_render(q[self.my_attr])[0] is ModuleAttribute]  # noqa: F821

    with testset("message contains the source"):
        trees = [q[self.x], q[m.f(1)], q[a * b], q[f(x, y)], q[(a, b)],  # noqa: F821
                 q[[1, 2, 3]], q["s"], q[42], q[None], q[x[0]], q[not a]]  # noqa: F821
        for tree in trees:
            classification, diagnostic = classify_and_render(tree)
            test[the[diagnostic.source] == the[unparse(tree).strip()]]
            test[the[diagnostic.source] in the[diagnostic.message]]
            test[f"Not: assign_to(value, {diagnostic.source})" in diagnostic.message]
            test["Example: assign_to(value, my_var)" in diagnostic.message]
            test["simple variable name" in diagnostic.message]

    with testset("category wording"):
        expected = {ModuleAttribute: ("Cannot assign to attribute", "not an attribute"),
                    RemoteCall: ("Cannot assign to qualified function call", "not a function call"),
                    BinaryOrUnaryOp: ("Cannot assign to expression", "not an expression"),
                    LocalCall: ("Cannot assign to function call", "not a function call"),
                    TuplePattern: ("Cannot assign to tuple pattern", "not pattern matching"),
                    ListLiteral: ("Cannot assign to list literal", "not a literal value"),
                    StringLiteral: ("Cannot assign to string literal", "not a literal value"),
                    NumberLiteral: ("Cannot assign to number literal", "not a literal value"),
                    AtomLiteral: ("Cannot assign to atom literal", "not a literal value")}
        for classification, (headline, explanation) in expected.items():
            message = render(classification, q[whatever]).message  # noqa: F821
            test[the[headline] in the[message]]
            test[the[explanation] in message]

    with testset("generic message for Unknown"):
        diagnostic = render(Unknown, q[a % b])  # noqa: F821
        test[diagnostic.message.startswith("Cannot assign to `")]
        test[diagnostic.source in diagnostic.message]
        test["assign_to() expects a simple variable name." in diagnostic.message]
        test[", not " not in diagnostic.message]

    with testset("every classification renders"):
        for classification in classifications:
            diagnostic = render(classification, q[target])  # noqa: F821
            test[type(diagnostic) is Diagnostic]
            test[diagnostic.classification is classification]
            test[str(diagnostic) == diagnostic.message]
        test_raises[ValueError, render("StringLiteral", q[target])]  # noqa: F821, not a classification

    with testset("describe"):
        test[describe(StringLiteral) == "string literal"]
        test[describe(ModuleAttribute) == "attribute"]
        test[describe(Unknown) is None]
        test_raises[ValueError, describe("nonsense")]

    with testset("source_of"):
        test[source_of(q[my_var]) == "my_var"]  # noqa: F821
        test[source_of(Done(body=q[f(x)])) == "f(x)"]  # noqa: F821

    with testset("rendering is pure"):
        tree = q[[1, 2, 3]]
        first = render(ListLiteral, tree)
        second = render(ListLiteral, tree)
        test[first == second]
        test[first is not second]

if __name__ == '__main__':  # pragma: no cover
    with session(__file__):
        runtests()
