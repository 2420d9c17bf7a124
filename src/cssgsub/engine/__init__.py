from cssgsub.engine.catalog import ClassNameCatalog
from cssgsub.engine.engine import EngineState, SubstitutionEngine
from cssgsub.engine.hooks import (
    HookResult,
    NodeHook,
    TraversalContext,
    derived_suffix_hook,
)
from cssgsub.engine.patterns import css_class_pattern, script_class_pattern
from cssgsub.engine.policy import SelectorContext, negation_spans, resolve_or_mint
from cssgsub.engine.tokens import SubstitutionTable, TokenAllocator, to_base

__all__ = [
    "ClassNameCatalog",
    "EngineState",
    "SubstitutionEngine",
    "HookResult",
    "NodeHook",
    "TraversalContext",
    "derived_suffix_hook",
    "css_class_pattern",
    "script_class_pattern",
    "SelectorContext",
    "negation_spans",
    "resolve_or_mint",
    "SubstitutionTable",
    "TokenAllocator",
    "to_base",
]
