"""Minimal ordered rule engine.

A rule pairs a predicate with a producer. Rules are evaluated in a single
pass, in list order, and every matching rule contributes one item.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

C = TypeVar("C")
T = TypeVar("T")


@dataclass(frozen=True)
class Rule(Generic[C, T]):
    """A named predicate/producer pair over a context of type C."""

    name: str
    applies: Callable[[C], bool]
    produce: Callable[[C], T]


def evaluate_rules(rules: Sequence[Rule[C, T]], context: C) -> list[T]:
    """Run every rule against the context and collect the produced items.

    Args:
        rules: Rules in evaluation order.
        context: Value passed to each predicate and producer.

    Returns:
        Items from matching rules, in rule order.
    """
    results: list[T] = []
    for rule in rules:
        if rule.applies(context):
            logger.debug("Rule matched: %s", rule.name)
            results.append(rule.produce(context))
    return results
