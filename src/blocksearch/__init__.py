"""Tag-safe search & replace over editor block trees."""

from .core import evaluate
from .dom import Block, RichText
from .ledger import MatchLedger
from .pattern import MatchRule, build_rule
from .session import EvaluationResult, SearchReplace, SearchSession

__all__ = [
    "Block",
    "EvaluationResult",
    "MatchLedger",
    "MatchRule",
    "RichText",
    "SearchReplace",
    "SearchSession",
    "build_rule",
    "evaluate",
]
