"""Formula evaluation for parametric part and accessory definitions.

Catalog formulas are small arithmetic expressions over a fixed set of
cabinet variables, for example ``cabinet_width - (2 * panel_thickness)``
or ``max(1, door_count * 2)``.

Evaluation happens in two steps:

1. Variable substitution. Context names are replaced by their values,
   longest name first, matching whole identifiers only, so ``width`` never
   rewrites part of ``cabinet_width``.
2. Arithmetic evaluation of the substituted text by a recursive descent
   parser over a closed grammar::

       expr  := term (("+" | "-") term)*
       term  := unary (("*" | "/") unary)*
       unary := ("+" | "-") unary | atom
       atom  := NUMBER | FUNC "(" expr ("," expr)* ")" | "(" expr ")"

   The only callable names are ``min``, ``max``, ``round``, ``floor``,
   ``ceil`` and ``abs``. Any other identifier left after substitution is
   an error. Nothing in the host interpreter is reachable from a formula.

``evaluate_formula`` returns a :class:`FormulaResult` that separates a
legitimate zero from a failure. ``evaluate`` keeps the lenient contract
used for costing: failures log a warning and yield ``0.0``.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Callable, Mapping

from .exceptions import FormulaError
from .value_objects import CabinetDimensions

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_BACK_THICKNESS",
    "DEFAULT_DRAWER_SIDE_THICKNESS",
    "DEFAULT_PANEL_THICKNESS",
    "FUNCTIONS",
    "FormulaIssue",
    "FormulaResult",
    "FormulaScope",
    "VARIABLE_NAMES",
    "build_context",
    "default_door_count",
    "evaluate",
    "evaluate_formula",
    "round_half_up",
    "round_quantity",
    "substitute_variables",
]

DEFAULT_PANEL_THICKNESS = 18.0
DEFAULT_BACK_THICKNESS = 6.0
DEFAULT_DRAWER_SIDE_THICKNESS = 15.0
TWO_DOOR_MIN_WIDTH = 600.0

VARIABLE_NAMES: tuple[str, ...] = (
    "cabinet_width",
    "cabinet_height",
    "cabinet_depth",
    "panel_thickness",
    "back_thickness",
    "door_count",
    "drawer_count",
    "shelf_count",
    "drawer_side_thickness",
)


def round_half_up(value: float) -> float:
    """Round to the nearest integer, halves away from zero.

    Python's built-in ``round`` uses banker's rounding (``round(2.5) == 2``),
    which surprises catalog authors writing ``round(cabinet_width / 500)``.
    """
    return math.copysign(math.floor(abs(value) + 0.5), value)


def round_quantity(value: float) -> int:
    """Turn an evaluated quantity into a part count of at least one."""
    return max(1, int(round_half_up(value)))


def _min(*args: float) -> float:
    return min(args)


def _max(*args: float) -> float:
    return max(args)


# name -> (callable, minimum arity, maximum arity or None for variadic)
FUNCTIONS: dict[str, tuple[Callable[..., float], int, int | None]] = {
    "min": (_min, 1, None),
    "max": (_max, 1, None),
    "round": (round_half_up, 1, 1),
    "floor": (math.floor, 1, 1),
    "ceil": (math.ceil, 1, 1),
    "abs": (abs, 1, 1),
}


@dataclass(frozen=True)
class FormulaResult:
    """Outcome of evaluating one formula.

    Attributes:
        formula: The original formula text.
        value: Evaluated value, or 0.0 when evaluation failed.
        error: Failure description, None on success.
    """

    formula: str
    value: float = 0.0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> float:
        """Return the value, raising FormulaError if evaluation failed."""
        if self.error is not None:
            raise FormulaError(self.formula, self.error)
        return self.value


def default_door_count(width: float) -> int:
    """Door count heuristic: two doors from 600mm wide, otherwise one."""
    return 2 if width >= TWO_DOOR_MIN_WIDTH else 1


def build_context(
    dimensions: CabinetDimensions,
    panel_thickness: float = DEFAULT_PANEL_THICKNESS,
    back_thickness: float = DEFAULT_BACK_THICKNESS,
    door_count: int | None = None,
    drawer_count: int = 0,
    shelf_count: int = 1,
    drawer_side_thickness: float = DEFAULT_DRAWER_SIDE_THICKNESS,
) -> dict[str, float]:
    """Build the variable context for a cabinet.

    Args:
        dimensions: Chosen cabinet width, height and depth.
        panel_thickness: Carcass panel thickness.
        back_thickness: Back panel thickness.
        door_count: Number of doors; derived from the width when None.
        drawer_count: Number of drawers.
        shelf_count: Number of shelves.
        drawer_side_thickness: Drawer box side thickness.

    Returns:
        Mapping of every recognised variable name to its value.
    """
    if door_count is None:
        door_count = default_door_count(dimensions.width)
    return {
        "cabinet_width": float(dimensions.width),
        "cabinet_height": float(dimensions.height),
        "cabinet_depth": float(dimensions.depth),
        "panel_thickness": float(panel_thickness),
        "back_thickness": float(back_thickness),
        "door_count": float(door_count),
        "drawer_count": float(drawer_count),
        "shelf_count": float(shelf_count),
        "drawer_side_thickness": float(drawer_side_thickness),
    }


def _format_number(value: float) -> str:
    text = repr(float(value))
    return f"({text})" if value < 0 else text


def substitute_variables(formula: str, context: Mapping[str, float]) -> str:
    """Replace context names in ``formula`` with their numeric values.

    Names are substituted longest first and only where they form a whole
    identifier, so overlapping names cannot corrupt each other.
    """
    text = formula
    for name in sorted(context, key=len, reverse=True):
        if not name:
            continue
        pattern = rf"(?<![A-Za-z0-9_]){re.escape(name)}(?![A-Za-z0-9_])"
        replacement = _format_number(context[name])
        text = re.sub(pattern, lambda _m, r=replacement: r, text)
    return text


# Deepest parenthesis or function-call nesting the parser accepts.
MAX_NESTING_DEPTH = 100

_TOKEN_RE = re.compile(
    r"\s*(?:"
    r"(?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
    r"|(?P<name>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<op>[-+*/(),])"
    r")"
)


def _tokenize(text: str) -> list[tuple[str, str]]:
    tokens: list[tuple[str, str]] = []
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None or match.end() == pos:
            raise ValueError(f"unexpected character {text[pos:].lstrip()[:1]!r}")
        kind = match.lastgroup
        if kind is None:
            break
        value = match.group(kind)
        if kind == "name" and value not in FUNCTIONS:
            raise ValueError(f"unknown identifier {value!r}")
        tokens.append((kind, value))
        pos = match.end()
    return tokens


class _Parser:
    """Recursive descent evaluator over a token list."""

    def __init__(self, tokens: list[tuple[str, str]]) -> None:
        self._tokens = tokens
        self._pos = 0
        self._depth = 0

    def _peek(self) -> tuple[str, str] | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _peek_op(self) -> str | None:
        token = self._peek()
        if token is not None and token[0] == "op":
            return token[1]
        return None

    def _consume(self) -> tuple[str, str]:
        token = self._peek()
        if token is None:
            raise ValueError("unexpected end of formula")
        self._pos += 1
        return token

    def _expect(self, op: str) -> None:
        token = self._consume()
        if token != ("op", op):
            raise ValueError(f"expected {op!r}, got {token[1]!r}")

    def parse(self) -> float:
        if not self._tokens:
            raise ValueError("empty formula")
        value = self._expr()
        token = self._peek()
        if token is not None:
            raise ValueError(f"unexpected token {token[1]!r}")
        return value

    def _expr(self) -> float:
        value = self._term()
        while self._peek_op() in ("+", "-"):
            op = self._consume()[1]
            right = self._term()
            value = value + right if op == "+" else value - right
        return value

    def _term(self) -> float:
        value = self._unary()
        while self._peek_op() in ("*", "/"):
            op = self._consume()[1]
            right = self._unary()
            if op == "*":
                value = value * right
            else:
                if right == 0:
                    raise ValueError("division by zero")
                value = value / right
        return value

    def _unary(self) -> float:
        negate = False
        while self._peek_op() in ("+", "-"):
            if self._consume()[1] == "-":
                negate = not negate
        value = self._atom()
        return -value if negate else value

    def _enter(self) -> None:
        self._depth += 1
        if self._depth > MAX_NESTING_DEPTH:
            raise ValueError("formula nested too deeply")

    def _atom(self) -> float:
        kind, value = self._consume()
        if kind == "number":
            return float(value)
        if kind == "name":
            return self._call(value)
        if value == "(":
            self._enter()
            result = self._expr()
            self._expect(")")
            self._depth -= 1
            return result
        raise ValueError(f"unexpected token {value!r}")

    def _call(self, name: str) -> float:
        func, min_args, max_args = FUNCTIONS[name]
        self._expect("(")
        self._enter()
        args = [self._expr()]
        while self._peek_op() == ",":
            self._consume()
            args.append(self._expr())
        self._expect(")")
        self._depth -= 1
        if len(args) < min_args or (max_args is not None and len(args) > max_args):
            raise ValueError(f"{name}() takes {min_args} argument(s), got {len(args)}")
        return float(func(*args))


def evaluate_formula(formula: str | None, context: Mapping[str, float]) -> FormulaResult:
    """Evaluate ``formula`` against ``context`` and report success or failure.

    Never raises for bad input; the failure is carried in the result.
    """
    text = "" if formula is None else str(formula)
    try:
        substituted = substitute_variables(text, context)
        value = _Parser(_tokenize(substituted)).parse()
    except (ValueError, OverflowError) as e:
        return FormulaResult(formula=text, error=str(e))
    except RecursionError:
        return FormulaResult(formula=text, error="formula nested too deeply")
    if not math.isfinite(value):
        return FormulaResult(formula=text, error="result is not finite")
    return FormulaResult(formula=text, value=value)


def evaluate(formula: str | None, context: Mapping[str, float]) -> float:
    """Evaluate ``formula``, returning 0.0 and logging on any failure."""
    result = evaluate_formula(formula, context)
    if not result.ok:
        logger.warning("Formula %r evaluated to 0: %s", result.formula, result.error)
    return result.value


@dataclass(frozen=True)
class FormulaIssue:
    """A formula failure recorded during one derivation."""

    label: str
    formula: str
    message: str

    def __str__(self) -> str:
        return f"{self.label}: {self.formula!r}: {self.message}"


class FormulaScope:
    """Evaluates formulas against one cabinet's context and records failures.

    In lenient mode a failing formula yields 0.0 and is recorded in
    ``issues``. In strict mode the first failure raises FormulaError.
    """

    def __init__(self, context: Mapping[str, float], strict: bool = False) -> None:
        self.context = dict(context)
        self.strict = strict
        self.issues: list[FormulaIssue] = []

    def value(self, formula: str | None, label: str) -> float:
        result = evaluate_formula(formula, self.context)
        if result.ok:
            return result.value
        if self.strict:
            result.unwrap()
        logger.warning(
            "Formula for %s failed (%r): %s; using 0", label, result.formula, result.error
        )
        self.issues.append(FormulaIssue(label, result.formula, result.error or ""))
        return 0.0

    def quantity(self, formula: str | None, label: str) -> int:
        """Evaluate a quantity formula and apply the ``max(1, round(x))`` rule."""
        return round_quantity(self.value(formula, label))
