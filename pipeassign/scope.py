# -*- coding: utf-8 -*-
"""Existing-binding detection for `assign_to`.

When the target name of an `assign_to` is already bound in the surrounding
lexical scope, the binding should reuse it ("rebind"); otherwise a new binding
is introduced ("declare"). Making that choice correctly is what keeps the
expansion from triggering spurious unused-variable warnings.

The predicate itself is trivial; most of this module is the scope analysis
that produces the set of bound names (a `ScopeContext`) at any point of a
Python module.

The analysis is purely lexical, in the same sense as Python's own: a name
bound anywhere in a scope is considered bound everywhere in that scope. Names
bound in a class body are visible in the class body, but not in its methods.

Relevant part of the Python language reference:

    https://docs.python.org/3/reference/executionmodel.html#naming-and-binding
"""

__all__ = ["ScopeContext", "already_bound", "binding_strategy",
           "declare", "rebind",
           "isnewscope", "get_names_in_store_context", "get_lexical_variables",
           "scoped_walk"]

import ast
from ast import (Name, Lambda, FunctionDef, AsyncFunctionDef, ClassDef, Module,
                 Import, ImportFrom, Try, ListComp, SetComp, GeneratorExp,
                 DictComp, NamedExpr, Store, Global, Nonlocal)

from mcpyrate.walkers import ASTVisitor

from unpythonic.it import uniqify
from unpythonic.symbol import sym

declare = sym("declare")
rebind = sym("rebind")

# Python 3.11+
_trystar = getattr(ast, "TryStar", None)
_try_types = (Try,) if _trystar is None else (Try, _trystar)
# Python 3.10+; capture patterns bind plain strings, not `Name` nodes.
_match_capture_types = tuple(getattr(ast, name) for name in ("MatchAs", "MatchStar")
                             if hasattr(ast, name))
_comprehension_types = (ListComp, SetComp, GeneratorExp, DictComp)

class ScopeContext:
    """The set of names bound in the lexical scope at some point of a program.

    Read-only. Use `extend` to get a new context with more names.

    `owner` is the AST node that introduced the innermost scope (a ``Module``,
    function, lambda, class or comprehension), or ``None`` if not known. It
    does not take part in comparisons.
    """
    def __init__(self, names=(), owner=None):
        self.names = frozenset(names)
        self.owner = owner

    def extend(self, names, owner=None):
        """Return a new `ScopeContext` that also contains `names`.

        If `owner` is given, the new context belongs to that scope; otherwise
        it keeps the owner of this one.
        """
        names = frozenset(names)
        if owner is None:
            if names <= self.names:
                return self
            owner = self.owner
        return ScopeContext(self.names | names, owner)

    def __contains__(self, name):
        return name in self.names
    def __iter__(self):
        return iter(sorted(self.names))
    def __len__(self):
        return len(self.names)
    def __eq__(self, other):
        if isinstance(other, ScopeContext):
            return self.names == other.names
        return NotImplemented
    def __hash__(self):
        return hash(self.names)
    def __repr__(self):
        return "ScopeContext({})".format(sorted(self.names))

def already_bound(name, scope):
    """Return whether `name` (str) is already bound in `scope` (a `ScopeContext`)."""
    return name in scope

def binding_strategy(name, scope):
    """Return `rebind` if `name` is already bound in `scope`, else `declare`."""
    return rebind if already_bound(name, scope) else declare

def isnewscope(tree):
    """Return whether tree introduces a new lexical scope.

    (According to Python's scoping rules.)
    """
    return type(tree) in (Lambda, FunctionDef, AsyncFunctionDef, ClassDef, ListComp, SetComp, GeneratorExp, DictComp)

def get_names_in_store_context(tree):
    """In a tree representing a statement (or a list of them), get names bound by it.

    This includes:

        - Any ``Name`` in store context (assignment LHSs, ``for`` targets,
          ``with`` as-parts, walrus targets)

        - The name of ``FunctionDef``, ``AsyncFunctionDef`` or ``ClassDef``

        - The names (or asnames where applicable) of ``Import``

        - The exception name of any ``except`` handlers

        - Capture names in ``match`` patterns

        - Walrus targets inside comprehensions, which bind in the scope
          containing the comprehension (PEP 572)

    Duplicates may be returned; use ``list(uniqify(...))`` on the output
    to remove them.

    This stops at the boundary of any nested scopes.
    """
    class StoreNamesCollector(ASTVisitor):
        def examine(self, tree):
            if type(tree) in (FunctionDef, AsyncFunctionDef, ClassDef):
                self.collect(tree.name)
            elif type(tree) in (Import, ImportFrom):
                for x in tree.names:
                    if x.asname is not None:
                        self.collect(x.asname)
                    elif x.name != "*":
                        # `import a.b.c` binds `a`
                        self.collect(x.name.split(".")[0])
            elif type(tree) in _try_types:
                # TODO: `except E as err` binds `err` only within the handler, but we treat it as bound in the whole scope.
                for h in tree.handlers:
                    if h.name is not None:
                        self.collect(h.name)
            elif type(tree) in _match_capture_types:
                if tree.name is not None:
                    self.collect(tree.name)
            if type(tree) is Name and type(getattr(tree, "ctx", None)) is Store:
                self.collect(tree.id)
            if type(tree) in _comprehension_types:
                for name in _get_walrus_targets(tree):
                    self.collect(name)
            elif not isnewscope(tree):
                self.generic_visit(tree)
    nc = StoreNamesCollector()
    nc.visit(tree)
    return nc.collected

def _get_walrus_targets(tree):
    """Get the walrus targets in a comprehension, including nested comprehensions."""
    class WalrusTargetsCollector(ASTVisitor):
        def examine(self, tree):
            if type(tree) is NamedExpr:
                self.collect(tree.target.id)
            if type(tree) in _comprehension_types or not isnewscope(tree):
                self.generic_visit(tree)
    wc = WalrusTargetsCollector()
    wc.visit(tree)
    return wc.collected

def get_lexical_variables(tree):
    """In a tree representing a lexical scope, get the names bound in that scope.

    An AST node represents a scope if ``isnewscope(tree)`` returns ``True``,
    or if it is a ``Module``.

    We collect:

        - ``Module``: names bound at the top level of the module.

        - ``Lambda``, ``FunctionDef``, ``AsyncFunctionDef``: formal parameter
          names, plus for the latter two, names bound anywhere in the body,
          and names declared ``nonlocal`` or ``global``.

        - ``ClassDef``: names bound in the class body.

        - ``ListComp``, ``SetComp``, ``GeneratorExp``, ``DictComp``: comprehension
          targets.

    The name of a ``FunctionDef`` or a ``ClassDef`` belongs to the surrounding
    scope, so it is not included.

    Return a ``list`` of ``str``.
    """
    if type(tree) is Module:
        return list(uniqify(get_names_in_store_context(tree.body)))

    if not isnewscope(tree):
        raise TypeError(f"Expected a tree representing a lexical scope, got {type(tree)}")

    if type(tree) in (Lambda, FunctionDef, AsyncFunctionDef):
        a = tree.args
        allargs = a.posonlyargs + a.args + a.kwonlyargs
        argnames = [x.arg for x in allargs]
        if a.vararg:
            argnames.append(a.vararg.arg)
        if a.kwarg:
            argnames.append(a.kwarg.arg)

        if type(tree) is Lambda:
            return list(uniqify(argnames))

        localvars = get_names_in_store_context(tree.body)

        class NonlocalsCollector(ASTVisitor):
            def examine(self, tree):
                if type(tree) in (Global, Nonlocal):
                    for x in tree.names:
                        self.collect(x)
                if not isnewscope(tree):
                    self.generic_visit(tree)
        nc = NonlocalsCollector()
        nc.visit(tree.body)

        return list(uniqify(argnames + localvars + nc.collected))

    elif type(tree) is ClassDef:
        return list(uniqify(get_names_in_store_context(tree.body)))

    # ListComp, SetComp, GeneratorExp, DictComp
    #
    # The outermost iterator is evaluated in the surrounding scope, but the
    # targets are bound in the comprehension's own scope.
    targetnames = []
    for g in tree.generators:
        class NamesCollector(ASTVisitor):
            def examine(self, tree):
                if type(tree) is Name:
                    self.collect(tree.id)
                self.generic_visit(tree)
        nc = NamesCollector()
        nc.visit(g.target)
        targetnames.extend(nc.collected)
    return list(uniqify(targetnames))

def scoped_walk(tree, *, callback, scope=None):
    """Walk `tree`, keeping track of which names are bound.

    `callback`: callable, (tree, scope) --> None
                Called for each AST node of `tree`, with the `ScopeContext`
                visible at that node. Must not edit the tree.

    `scope`:    `ScopeContext`, the names bound outside `tree`.
                Default is empty.

    The `owner` of the `ScopeContext` passed to `callback` is the node that
    introduced the innermost enclosing scope.

    If `tree` is a ``Module``, its top-level names are in scope everywhere
    inside it.
    """
    if scope is None:
        scope = ScopeContext()

    class ScopedWalker(ASTVisitor):
        # `scope`: names visible at the current node.
        # `inherited`: names visible to a function defined at the current node.
        #              Differs from `scope` only inside a class body.
        def examine(self, tree):
            scope = self.state.scope
            inherited = self.state.inherited
            callback(tree, scope)
            if type(tree) is Module:
                newscope = inherited.extend(get_lexical_variables(tree), owner=tree)
                self._visit_suite(tree.body, scope=newscope, inherited=newscope)
            elif type(tree) in (FunctionDef, AsyncFunctionDef, Lambda):
                # decorators, defaults and annotations belong to the surrounding scope
                if type(tree) is not Lambda:
                    self.visit(tree.decorator_list)
                    if tree.returns is not None:
                        self.visit(tree.returns)
                self.visit(tree.args)
                newscope = inherited.extend(get_lexical_variables(tree), owner=tree)
                if type(tree) is Lambda:
                    self.withstate(tree.body, scope=newscope, inherited=newscope)
                    self.visit(tree.body)
                else:
                    self._visit_suite(tree.body, scope=newscope, inherited=newscope)
            elif type(tree) is ClassDef:
                self.visit(tree.decorator_list)
                self.visit(tree.bases)
                self.visit(tree.keywords)
                classscope = scope.extend(get_lexical_variables(tree), owner=tree)
                self._visit_suite(tree.body, scope=classscope, inherited=inherited)
            elif type(tree) in _comprehension_types:
                targets = get_lexical_variables(tree)
                first, *rest = tree.generators
                self.visit(first.iter)  # evaluated in the surrounding scope
                # class-body names are not visible here, same as in a method
                newscope = inherited.extend(targets, owner=tree)
                others = [first.target] + first.ifs + rest
                if type(tree) is DictComp:
                    others += [tree.key, tree.value]
                else:
                    others.append(tree.elt)
                self._visit_suite(others, scope=newscope, inherited=newscope)
            else:
                self.generic_visit(tree)

        def _visit_suite(self, trees, **bindings):
            for t in trees:
                self.withstate(t, **bindings)
                self.visit(t)

    ScopedWalker(scope=scope, inherited=scope).visit(tree)
