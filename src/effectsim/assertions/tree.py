from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, Iterator, Tuple, TypeVar, Union

from effectsim.effects.computation import Computation, sequence_

logger = logging.getLogger(__name__)

U = TypeVar("U")

CONTEXT_SEPARATOR = "/"


@dataclass(frozen=True)
class TestCase(Generic[U]):
    __test__ = False

    test: U


@dataclass(frozen=True)
class TestGroup(Generic[U]):
    __test__ = False

    tests: Tuple["TestTree[U]", ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "tests", tuple(self.tests))


@dataclass(frozen=True)
class TestLabel(Generic[U]):
    __test__ = False

    label: str
    test: "TestTree[U]"


TestTree = Union[TestCase[U], TestGroup[U], TestLabel[U]]


def render_context(path: Tuple[str, ...]) -> str:
    return CONTEXT_SEPARATOR.join(path)


def iter_cases(tree: TestTree[U], context: Tuple[str, ...] = ()) -> Iterator[Tuple[Tuple[str, ...], U]]:
    """Yield ``(context path, payload)`` for every case, in execution order."""
    if isinstance(tree, TestCase):
        yield context, tree.test
    elif isinstance(tree, TestGroup):
        for child in tree.tests:
            yield from iter_cases(child, context)
    elif isinstance(tree, TestLabel):
        yield from iter_cases(tree.test, context + (tree.label,))
    else:
        raise TypeError(f"not a test tree node: {type(tree).__name__}")


def run_test_tree(fx: Any, tree: TestTree[Computation[Any]]) -> Computation[None]:
    """Build one computation running every case of ``tree`` in order.

    Groups never stop early; a failing case only records failed assertions.
    Labels scope their name onto the assertion context of their subtree.
    """
    if isinstance(tree, TestCase):
        return tree.test
    if isinstance(tree, TestGroup):
        return sequence_(fx, (run_test_tree(fx, child) for child in tree.tests))
    if isinstance(tree, TestLabel):
        logger.debug("entering test label %s", tree.label)
        return fx.nest_context(tree.label, run_test_tree(fx, tree.test))
    raise TypeError(f"not a test tree node: {type(tree).__name__}")
