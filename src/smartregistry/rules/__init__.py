"""Filter rules package.

Keep this initialiser import-only: it re-exports the rule contract, the
compiler and the built-in rules.
"""

from ._base_rule import RegExpTest, RouterFilter, RuleSet, create_filter_rule
from .builtin import ExtensionIdMatchesRule, RequestContainsRule, default_rules
from .compiler import compile_filters

__all__ = [
    "RouterFilter",
    "RuleSet",
    "RegExpTest",
    "create_filter_rule",
    "compile_filters",
    "RequestContainsRule",
    "ExtensionIdMatchesRule",
    "default_rules",
]
