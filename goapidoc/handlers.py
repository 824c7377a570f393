"""Predicates deciding which functions are documented endpoint handlers."""

from __future__ import annotations

from typing import Callable

from .models import FunctionDeclaration

HandlerPredicate = Callable[[FunctionDeclaration], bool]


def every_function(function: FunctionDeclaration) -> bool:
    return True


def controller_predicate(controller_class: str = "") -> HandlerPredicate:
    """Match methods whose receiver type name contains ``controller_class``.

    An empty class name accepts every function; functions without a
    ``@Router`` directive are dropped later anyway.
    """
    if not controller_class:
        return every_function

    def _is_controller(function: FunctionDeclaration) -> bool:
        return function.receiver is not None and controller_class in function.receiver

    return _is_controller


__all__ = ["HandlerPredicate", "controller_predicate", "every_function"]
