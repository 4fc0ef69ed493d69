"""
Spreadsheet functions understood by the formula evaluator.

Each supported function is described by a FunctionSpec listing its
parameters in declaration order.  The parameter kind tells the evaluator
how to resolve the argument text before the function is applied:

  CELL     a quoted literal, a cell reference, a nested call, or (inside
             an ARRAYFORMULA only) a range broadcast over the output cells
  FORMULA  raw, unevaluated formula text, handed over as a RawFormula

Functions supported:

  HYPERLINK(url, [label])  anchor tag over *url*
  IMAGE(url)               image tag over *url*
  ARRAYFORMULA(formula)    evaluates *formula* with range broadcasting
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from formula_converter.rendering import DEFAULT_IMAGE_STYLE, to_image, to_link


class Builtin(Enum):
    """The supported spreadsheet functions."""
    HYPERLINK = "hyperlink"
    IMAGE = "image"
    ARRAYFORMULA = "arrayformula"


class ParamKind(Enum):
    CELL = "CELL"
    FORMULA = "FORMULA"


@dataclass(frozen=True)
class ParamSpec:
    name: str
    kind: ParamKind = ParamKind.CELL


@dataclass(frozen=True)
class FunctionSpec:
    """Signature of a supported function.

    Attributes:
        builtin: Which function this is
        params: Parameters in declaration order; trailing ones are optional
    """
    builtin: Builtin
    params: Tuple[ParamSpec, ...]

    @property
    def name(self) -> str:
        return self.builtin.name


class RawFormula(str):
    """Formula text passed to a FORMULA-kind parameter without evaluation."""


FUNCTIONS: Dict[str, FunctionSpec] = {
    Builtin.HYPERLINK.value: FunctionSpec(
        Builtin.HYPERLINK,
        (ParamSpec("url"), ParamSpec("label")),
    ),
    Builtin.IMAGE.value: FunctionSpec(
        Builtin.IMAGE,
        (ParamSpec("url"),),
    ),
    Builtin.ARRAYFORMULA.value: FunctionSpec(
        Builtin.ARRAYFORMULA,
        (ParamSpec("formula", ParamKind.FORMULA),),
    ),
}


def lookup_function(name: str) -> Optional[FunctionSpec]:
    """Find a supported function by case-insensitive name."""
    return FUNCTIONS.get((name or "").lower())


def hyperlink(url: Any, label: Any = None) -> str:
    """HYPERLINK(url, [label])"""
    return to_link(url, label)


def image(url: Any, style: str = DEFAULT_IMAGE_STYLE) -> str:
    """IMAGE(url)"""
    return to_image(url, style=style)
