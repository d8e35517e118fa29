# -*- coding: utf-8 -*-
"""Static check of `assign_to` invocations in Python source code.

This catches invalid binding targets at development time, without expanding
any macros. Recognized invocation forms::

    assign_to(value, target)      # call
    assign_to(target)             # call, value supplied by a pipe
    assign_to[value, target]      # macro
    assign_to[target]             # macro, value supplied by a pipe

The name may also be qualified, as in ``pipeassign.assign_to(...)``.

Usage::

    for finding in lint_file("mymodule.py"):
        print(finding)
"""

__all__ = ["Site", "Finding", "sites", "lint", "lint_source", "lint_file"]

import ast
from ast import Attribute, Call, Name, Subscript, Tuple
from collections import namedtuple
import logging
import sys
from warnings import warn

from .diagnostics import classify_and_render
from .scope import binding_strategy, scoped_walk
from .targets import Identifier, validate

logger = logging.getLogger(__name__)

default_names = ("assign_to",)

class Site(namedtuple("Site", ["node", "value", "target", "scope"])):
    """An invocation of `assign_to`.

    `node` is the whole invocation, `value` the value expression (``None`` if
    supplied by a pipe), `target` the binding target, and `scope` the
    `ScopeContext` at the invocation.
    """
    __slots__ = ()

    @property
    def identifier(self):
        """The validated target as an `Identifier`, or ``None`` if invalid."""
        result = validate(self.target)
        return result if type(result) is Identifier else None

    @property
    def strategy(self):
        """`pipeassign.scope.declare` or `rebind`; ``None`` if the target is invalid."""
        identifier = self.identifier
        if identifier is None:
            return None
        return binding_strategy(identifier.name, self.scope)

class Finding(namedtuple("Finding", ["filename", "lineno", "col_offset",
                                     "classification", "diagnostic"])):
    """An invalid binding target found by `lint`."""
    __slots__ = ()
    def __str__(self):
        return f"{self.filename}:{self.lineno}:{self.col_offset}: {self.diagnostic.message}"

def _ismacroname(tree, names):
    if type(tree) is Name:
        return tree.id in names
    if type(tree) is Attribute:
        return tree.attr in names
    return False

def _arguments(tree, names):
    """If `tree` invokes `assign_to`, return its positional arguments as a list, else ``None``."""
    if type(tree) is Call and _ismacroname(tree.func, names):
        return list(tree.args)
    if type(tree) is Subscript and _ismacroname(tree.value, names):
        body = tree.slice
        if sys.version_info < (3, 9, 0):  # Python 3.8: `Index` wraps a plain subscript, `ExtSlice` a tuple with slices.
            if type(body) is ast.Index:
                body = body.value
            elif type(body) is ast.ExtSlice:
                return list(body.dims)
        if type(body) is Tuple:
            return list(body.elts)
        return [body]
    return None

def sites(tree, *, names=default_names, filename="<unknown>"):
    """Find the invocations of `assign_to` in `tree`, outermost first.

    `names`: the macro names to recognize. Default ``("assign_to",)``.

    Return a list of `Site`. An invocation with a wrong number of arguments,
    or with keyword arguments, is not a site; it emits a `SyntaxWarning` and
    is skipped.

    A valid target of an earlier site counts as bound at the later sites in
    the same scope, so that e.g. ``assign_to(x)`` twice in a row gives
    `declare`, then `rebind`.
    """
    found = []
    introduced = {}  # scope owner -> names bound by the sites seen so far
    def examine(tree, scope):
        args = _arguments(tree, names)
        if args is None:
            return
        lineno = getattr(tree, "lineno", "?")
        if type(tree) is Call and tree.keywords:
            warn(f"{filename}:{lineno}: assign_to takes no keyword arguments; skipping", SyntaxWarning)
            return
        if len(args) not in (1, 2):
            warn(f"{filename}:{lineno}: assign_to expects 1 or 2 positional arguments, got {len(args)}; skipping",
                 SyntaxWarning)
            return
        earlier = introduced.setdefault(scope.owner, set())
        site = Site(tree, args[0] if len(args) == 2 else None, args[-1], scope.extend(earlier))
        if site.identifier is not None:
            earlier.add(site.identifier.name)
        found.append(site)
    scoped_walk(tree, callback=examine)
    return found

def lint(tree, *, names=default_names, filename="<unknown>"):
    """Check every `assign_to` in `tree`, and report the invalid binding targets.

    Return a list of `Finding`, outermost invocation first.
    """
    findings = []
    for site in sites(tree, names=names, filename=filename):
        if site.identifier is not None:
            logger.debug("%s:%s: assign_to binds %r (%s)", filename, getattr(site.node, "lineno", "?"),
                         site.identifier.name, site.strategy)
            continue
        classification, diagnostic = classify_and_render(site.target)
        findings.append(Finding(filename,
                                getattr(site.target, "lineno", None),
                                getattr(site.target, "col_offset", None),
                                classification, diagnostic))
    logger.debug("%s: %d invalid assign_to target(s)", filename, len(findings))
    return findings

def lint_source(source, filename="<unknown>", *, names=default_names):
    """Parse Python `source` code and `lint` it.

    A `SyntaxError` in `source` propagates to the caller.
    """
    tree = ast.parse(source, filename=filename)
    return lint(tree, names=names, filename=filename)

def lint_file(path, *, names=default_names):
    """Read the Python source file at `path` and `lint` it."""
    logger.debug("linting %s", path)
    with open(path, encoding="utf-8") as f:
        source = f.read()
    return lint_source(source, filename=str(path), names=names)
