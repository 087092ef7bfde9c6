"""
Entry points a graphing front end calls.

The module functions are stateless. GraphSession adds the one piece of state a
front end needs: the last expression that parsed successfully, which stays on
screen while the user is typing something invalid.
"""
import logging
from typing import List, NamedTuple, Optional

from graphcalc.errors import CalculatorError, EvalError, LexError, ParseError, hint_for
from graphcalc.evaluator import evaluate
from graphcalc.nodes import Node, to_canonical
from graphcalc.parser import parse_text
from graphcalc.sampler import SamplePoint, sample_for_viewport
from graphcalc.viewport import Viewport, math_to_pixel, pixel_to_math, visible_range
from graphcalc.zeros import ZeroPoint, find_zero_crossings

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    "EvalError",
    "Frame",
    "GraphSession",
    "LexError",
    "ParseError",
    "Viewport",
    "evaluate_at",
    "find_zero_crossings",
    "math_to_pixel",
    "parse_and_validate",
    "pixel_to_math",
    "sample_for_viewport",
    "visible_range",
]


def parse_and_validate(text: str) -> Node:
    """Parse ``text`` into an expression tree; raises LexError or ParseError."""
    if not isinstance(text, str):
        raise TypeError("Expression must be a string")
    return parse_text(text)


def evaluate_at(expression: Node, x: float) -> float:
    """y for a single x; raises EvalError where the function is undefined."""
    return evaluate(expression, x)


class Frame(NamedTuple):
    """Everything needed to draw one graph: samples and intercepts for one version."""

    version: int
    samples: List[SamplePoint]
    zeros: List[ZeroPoint]


class GraphSession:
    def __init__(self):
        self.text = ""
        self.tree: Optional[Node] = None
        self.version = 0
        self.error: Optional[CalculatorError] = None

    @property
    def error_message(self) -> str:
        return str(self.error) if self.error else ""

    @property
    def hint(self) -> str:
        return hint_for(self.error) if self.error else ""

    @property
    def canonical(self) -> str:
        return to_canonical(self.tree) if self.tree is not None else ""

    def submit(self, text: str) -> Optional[CalculatorError]:
        """
        Try to replace the current expression with ``text``.

        On success the tree is swapped in whole and the version advances. On a
        lex or parse error the previous tree is kept and the error is returned
        (and remembered for error_message / hint).
        """
        try:
            tree = parse_and_validate(text)
        except (LexError, ParseError) as e:
            logger.debug("submit: rejected %r: %s", text, e)
            self.error = e
            return e
        self.text = text
        self.tree = tree
        self.version += 1
        self.error = None
        return None

    def _require_tree(self) -> Node:
        if self.tree is None:
            raise RuntimeError("No expression has been submitted yet")
        return self.tree

    def evaluate_at(self, x: float) -> float:
        return evaluate_at(self._require_tree(), x)

    def render(self, viewport: Viewport = Viewport(), max_jump: Optional[float] = None) -> Frame:
        """Sample the visible range of ``viewport`` and find its zero crossings."""
        tree = self._require_tree()
        version = self.version
        x_min, x_max = viewport.visible_range()
        samples = sample_for_viewport(tree, x_min, x_max, viewport.width)
        zeros = find_zero_crossings(samples, max_jump=max_jump)
        return Frame(version, samples, zeros)

    def is_current(self, version: int) -> bool:
        """False once a newer expression has replaced the one ``version`` was drawn from."""
        return version == self.version

