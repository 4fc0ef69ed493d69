"""
Recursive formula evaluator.

Evaluates a cell formula such as::

    ARRAYFORMULA(HYPERLINK(C2:C3, IMAGE(C2:C3)))

against the root range of a conversion.  A formula is a call
``NAME(args)``; each argument is a quoted literal, a cell reference, a
range reference (inside an ARRAYFORMULA only) or another call, which is
evaluated recursively.

Array formulas are evaluated by broadcasting: every range argument of a
call must have the same shape as the first range met inside the
ARRAYFORMULA (the *defining* range), and the function is applied once
per relative offset, all ranges moving together.  Scalar arguments are
repeated unchanged for every offset.  The result is an ArrayResult of
the defining shape.

Any string result starting with the URL prefix is turned into a link,
element-wise for array results.
"""

import logging
import re
from typing import Any, List, Optional, Union

from formula_converter.config import ConverterSettings, get_settings
from formula_converter.exceptions import InvalidCellReference, InvalidFormula
from formula_converter.formula.functions import (
    Builtin,
    FunctionSpec,
    ParamKind,
    ParamSpec,
    RawFormula,
    hyperlink,
    image,
    lookup_function,
)
from formula_converter.formula.tokenizer import split_top_level_parameters, unquote
from formula_converter.rendering import linkify
from formula_converter.spreadsheet.a1 import cell_label_to_coordinate, resolve_range_bounds
from formula_converter.spreadsheet.model import ArrayResult, GridRange

logger = logging.getLogger(__name__)

_CALL_RE = re.compile(r"^\s*(\w+)\((.+)\)\s*$", re.DOTALL)
_CELL_REF_RE = re.compile(r"^\$?[A-Z]+\$?\d+$")
_RANGE_REF_RE = re.compile(r"^\$?[A-Z]+\$?\d+:\$?[A-Z]*\$?\d*$")
_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)$")

Block = Union[GridRange, ArrayResult]


class BroadcastContext:
    """State of one ARRAYFORMULA evaluation.

    Created fresh by each ARRAYFORMULA call and passed down the recursive
    evaluation, so nested or successive array formulas never share a
    defining range.
    """

    def __init__(self) -> None:
        self.defining: Optional[Block] = None

    def register(self, block: Block) -> None:
        """Record a range argument, checking it against the defining shape.

        Raises:
            InvalidCellReference: If *block* has a different shape
        """
        if self.defining is None:
            self.defining = block
        elif not self.defining.same_shape_as(block):
            raise InvalidCellReference(
                f"Range {block!r} does not match the array formula range {self.defining!r}"
            )


class FormulaEvaluator:
    """Evaluates formulas against the values of a root range.

    Attributes:
        root: Root range owning the values grid
        settings: Converter settings (image style, URL prefix)
    """

    def __init__(self, root: GridRange, settings: Optional[ConverterSettings] = None) -> None:
        self.root = root
        self.settings = settings or get_settings()

    def evaluate(
        self,
        formula: str,
        value: Any = None,
        context: Optional[BroadcastContext] = None,
    ) -> Any:
        """Evaluate a formula (without its leading ``=``).

        Args:
            formula: Formula text, e.g. ``HYPERLINK(C2, "Home")``
            value: The cell's displayed value, returned when the formula
                is not a call to a supported function
            context: Active ARRAYFORMULA context, if any

        Returns:
            A scalar (usually an HTML string) or an ArrayResult

        Raises:
            InvalidCellReference: On unresolvable references or range
                shape mismatches
            InvalidFormula: On a call with too many arguments
        """
        match = _CALL_RE.match(formula or "")
        spec = lookup_function(match.group(1)) if match else None

        if spec is None:
            result = value
        else:
            params = split_top_level_parameters(match.group(2))
            result = self._apply(spec, params, context)

        prefix = self.settings.url_prefix
        if isinstance(result, ArrayResult):
            return result.map(lambda v: linkify(v, prefix))
        return linkify(result, prefix)

    def _apply(
        self,
        spec: FunctionSpec,
        params: List[str],
        context: Optional[BroadcastContext],
    ) -> Any:
        if len(params) > len(spec.params):
            raise InvalidFormula(
                f"{spec.name} takes at most {len(spec.params)} arguments, got {len(params)}"
            )

        args: List[Any] = []
        broadcast: List[int] = []
        for index, (param, param_spec) in enumerate(zip(params, spec.params)):
            arg = self._resolve(param, param_spec, context)
            if isinstance(arg, (GridRange, ArrayResult)):
                if context is None:
                    raise InvalidCellReference(f"Range {param!r} used outside of ARRAYFORMULA")
                context.register(arg)
                broadcast.append(index)
            args.append(arg)

        if not broadcast:
            return self._call(spec, args)

        shape = context.defining
        logger.debug(
            "Broadcasting %s over %dx%d", spec.name, shape.nb_rows, shape.nb_columns
        )
        rows = []
        for row in range(shape.nb_rows):
            out_row = []
            for col in range(shape.nb_columns):
                cell_args = [
                    arg.get_value(row, col) if index in broadcast else arg
                    for index, arg in enumerate(args)
                ]
                out_row.append(self._call(spec, cell_args))
            rows.append(out_row)
        return ArrayResult(rows)

    def _resolve(
        self,
        param: str,
        param_spec: ParamSpec,
        context: Optional[BroadcastContext],
    ) -> Any:
        """Turn one argument's text into a value, a range or a raw formula."""
        literal = unquote(param)
        if literal is not None:
            return literal

        if _CELL_REF_RE.match(param):
            cell = cell_label_to_coordinate(param)
            return self.root.get_absolute_value(cell.row, cell.col)

        if param_spec.kind is ParamKind.FORMULA:
            return RawFormula(param)

        if _RANGE_REF_RE.match(param):
            if context is None:
                raise InvalidCellReference(f"Range {param!r} used outside of ARRAYFORMULA")
            return resolve_range_bounds(param, self.root)

        if _NUMBER_RE.match(param):
            return param

        return self.evaluate(param, None, context)

    def _call(self, spec: FunctionSpec, args: List[Any]) -> Any:
        args = args + [None] * (len(spec.params) - len(args))

        if spec.builtin is Builtin.HYPERLINK:
            return hyperlink(args[0], args[1])
        if spec.builtin is Builtin.IMAGE:
            return image(args[0], style=self.settings.image_style)
        if spec.builtin is Builtin.ARRAYFORMULA:
            return self._array_formula(args[0])
        raise InvalidFormula(f"Unsupported function: {spec.name}")

    def _array_formula(self, arg: Any) -> Any:
        # A literal or a single cell needs no broadcasting
        if not isinstance(arg, RawFormula):
            return arg

        text = arg.strip()
        if _RANGE_REF_RE.match(text):
            block = resolve_range_bounds(text, self.root)
            return ArrayResult([
                [block.get_value(row, col) for col in range(block.nb_columns)]
                for row in range(block.nb_rows)
            ])

        return self.evaluate(text, None, BroadcastContext())
