"""Expression engine: parsing, canonical simplification, differentiation,
printing and three-valued zero testing of symbolic formulas.

"""

from .calculus import differentiate
from .parser import SUPPORTED_FUNCTIONS, parse, tokenize
from .printing import format_expr
from .simplify import ExpressionArena, simplify
from .zero import DEFAULT_SETTINGS, ZeroTest, ZeroTestSettings, is_zero

__all__ = [
    "DEFAULT_SETTINGS",
    "ExpressionArena",
    "SUPPORTED_FUNCTIONS",
    "ZeroTest",
    "ZeroTestSettings",
    "differentiate",
    "format_expr",
    "is_zero",
    "parse",
    "simplify",
    "tokenize",
]
