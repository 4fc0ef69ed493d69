"""
Formula module.

This module parses and evaluates the HYPERLINK, IMAGE and ARRAYFORMULA
spreadsheet functions, including nested calls and range broadcasting.
"""

from formula_converter.formula.evaluator import BroadcastContext, FormulaEvaluator
from formula_converter.formula.functions import (
    FUNCTIONS,
    Builtin,
    FunctionSpec,
    ParamKind,
    ParamSpec,
    RawFormula,
    lookup_function,
)
from formula_converter.formula.tokenizer import split_top_level_parameters, unquote

__all__ = [
    "BroadcastContext",
    "Builtin",
    "FUNCTIONS",
    "FormulaEvaluator",
    "FunctionSpec",
    "ParamKind",
    "ParamSpec",
    "RawFormula",
    "lookup_function",
    "split_top_level_parameters",
    "unquote",
]
