"""Substitution engine: renames stylesheet classes and the script literals that use them."""

from __future__ import annotations

import logging
import re
from enum import IntEnum
from pathlib import Path
from typing import Any

from cssgsub.config import GsubConfig
from cssgsub.engine.catalog import ClassNameCatalog
from cssgsub.engine.hooks import HookResult, TraversalContext
from cssgsub.engine.patterns import css_class_pattern, script_class_pattern
from cssgsub.engine.policy import SelectorContext, resolve_or_mint
from cssgsub.engine.tokens import SubstitutionTable, TokenAllocator
from cssgsub.errors import EngineStateError, UnresolvedSelectorError
from cssgsub.events import (
    EventBus,
    LiteralRewritten,
    RuleDropped,
    SelectorDropped,
    TokenMinted,
)
from cssgsub.report import write_replacements
from cssgsub.script import (
    ScriptDocument,
    VisitorOption,
    generate,
    is_string_literal,
    parse_script,
    traverse,
)
from cssgsub.stylesheet import StyleRule, Stylesheet, parse_stylesheet, stringify

logger = logging.getLogger(__name__)

# Parents whose string literals are syntax, not data.
_MODULE_SPECIFIER_PARENTS = frozenset(
    {"ImportDeclaration", "ExportNamedDeclaration", "ExportAllDeclaration", "ImportExpression"}
)


class EngineState(IntEnum):
    """Run progress. Steps must happen in this order."""

    CREATED = 0
    LOADED = 1
    PARSED = 2
    CATALOGED = 3
    SUBSTITUTED = 4
    EXHAUSTED = 5
    REGENERATED = 6


class SubstitutionEngine:
    """Runs one substitution over one (stylesheet, script) pair.

    Typical use::

        engine = SubstitutionEngine(GsubConfig(css_in="a.css", js_in="a.js")).run()
        css, js = engine.generate_css(), engine.generate_js()

    ``run()`` is shorthand for ``load()``, ``parse()``, ``build_catalog()``,
    ``replace()`` and, when configured, ``replace_all()``. An instance is
    good for a single run; create a new one for the next pair.
    """

    def __init__(
        self,
        config: GsubConfig | None = None,
        *,
        css_text: str | None = None,
        js_text: str | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.config = config or GsubConfig()
        self.event_bus = event_bus
        self.state = EngineState.CREATED

        self.css_text = css_text
        self.js_text = js_text
        self.stylesheet: Stylesheet | None = None
        self.script: ScriptDocument | None = None
        self.catalog: ClassNameCatalog | None = None
        self.allocator: TokenAllocator | None = None

        self._css_pattern = css_class_pattern(self.config.prefix, self.config.regexp)
        self._script_pattern: re.Pattern[str] | None = None
        self._css_output: str | None = None

    # ------------------------------------------------------------------
    # State handling
    # ------------------------------------------------------------------

    def _require(self, minimum: EngineState, step: str) -> None:
        if self.state < minimum:
            raise EngineStateError(
                f"{step}() needs state {minimum.name}, engine is {self.state.name}"
            )

    def _advance(self, expected: EngineState, new: EngineState, step: str) -> None:
        if self.state != expected:
            raise EngineStateError(
                f"{step}() needs state {expected.name}, engine is {self.state.name}"
            )
        self.state = new

    def _emit(self, event: object) -> None:
        if self.event_bus is not None:
            self.event_bus.emit(event)

    @property
    def replacements(self) -> SubstitutionTable:
        self._require(EngineState.PARSED, "replacements")
        assert self.allocator is not None
        return self.allocator.table

    # ------------------------------------------------------------------
    # Run steps
    # ------------------------------------------------------------------

    def run(self) -> SubstitutionEngine:
        """Load, parse, catalog and substitute.

        The replacement log is written by generate_css(), once selector
        rewriting has added its tokens and occurrences to the table.
        """
        self.load()
        self.parse()
        self.build_catalog()
        self.replace()
        if self.config.replace_all:
            self.replace_all()

        table = self.replacements
        logger.info(
            "substituted %d occurrence(s), %d class name(s) mapped, %d cataloged",
            table.count,
            len(table),
            len(self.catalog or ()),
        )
        return self

    def load(self) -> None:
        """Read the stylesheet and script sources unless they were passed in."""
        if self.css_text is None:
            self.css_text = _read(self.config.css_in, "css_in")
        if self.js_text is None:
            self.js_text = _read(self.config.js_in, "js_in")
        self._advance(EngineState.CREATED, EngineState.LOADED, "load")

    def parse(self) -> None:
        """Build both syntax trees. Parse failures propagate as ParseError."""
        self._require(EngineState.LOADED, "parse")
        assert self.css_text is not None and self.js_text is not None
        self.stylesheet = parse_stylesheet(self.css_text)
        self.script = parse_script(self.js_text, self.config.source_type)
        self.allocator = TokenAllocator(self.css_text)
        self._advance(EngineState.LOADED, EngineState.PARSED, "parse")

    def build_catalog(self) -> ClassNameCatalog:
        self._require(EngineState.PARSED, "build_catalog")
        assert self.stylesheet is not None
        self.catalog = ClassNameCatalog.from_stylesheet(
            self.stylesheet, self._css_pattern, nested=self.config.nested
        )
        self._script_pattern = script_class_pattern(
            self.config.prefix, self.config.regexp, self.catalog
        )
        self._advance(EngineState.PARSED, EngineState.CATALOGED, "build_catalog")
        return self.catalog

    def replace(self) -> SubstitutionEngine:
        """Walk the script tree and rewrite class names in string literals.

        Tokens for names met for the first time are minted in walk order
        (pre-order, left to right).
        """
        self._require(EngineState.CATALOGED, "replace")
        assert self.script is not None and self.allocator is not None
        context = TraversalContext(self.allocator, self._script_pattern, self.event_bus)
        hook = self.config.replace

        def enter(node: Any, parent: Any) -> VisitorOption | None:
            if hook is not None:
                result = hook(node, parent, context)
                if result is HookResult.SKIP:
                    return VisitorOption.SKIP
                if result is HookResult.HANDLED:
                    return None
            if is_string_literal(node) and not _is_syntax_literal(node, parent):
                self.replace_item(node)
            return None

        traverse(self.script.tree, enter)
        self._advance(EngineState.CATALOGED, EngineState.SUBSTITUTED, "replace")
        return self

    def replace_item(self, node: Any) -> None:
        """Rewrite every class-name occurrence inside one string literal node."""
        pattern = self._script_pattern
        if pattern is None:
            return
        assert self.allocator is not None
        value = node.value
        names = [m.group(0) for m in pattern.finditer(value) if m.group(0)]
        if not names:
            return
        for name in names:
            if name not in self.allocator:
                token = self.allocator.mint(name)
                self._emit(TokenMinted(name, token, "script"))

        table = self.allocator.table
        occurrences = 0

        def substitute(match: re.Match[str]) -> str:
            nonlocal occurrences
            name = match.group(0)
            if not name:
                return name
            occurrences += 1
            return table.items[name]

        node.value = pattern.sub(substitute, value)
        table.count += occurrences
        self._emit(LiteralRewritten(value, node.value, occurrences))

    def replace_all(self) -> None:
        """Give a token to every cataloged class the script never mentioned."""
        self._advance(EngineState.SUBSTITUTED, EngineState.EXHAUSTED, "replace_all")
        assert self.catalog is not None and self.allocator is not None
        for name in self.catalog:
            if name not in self.allocator:
                token = self.allocator.mint(name)
                self.allocator.table.count += 1
                self._emit(TokenMinted(name, token, "replace_all"))

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def generate_css(self) -> str:
        """Rewrite selectors with the table and serialize the stylesheet.

        Selectors that still reference a class without a token are removed
        from their rule; a rule that loses every selector is removed. The
        result is computed once; later calls return the same text. When
        ``replacements_output`` is set the replacement log is written here,
        so it matches the emitted stylesheet.
        """
        self._require(EngineState.SUBSTITUTED, "generate_css")
        if self._css_output is not None:
            return self._css_output
        assert self.stylesheet is not None and self.allocator is not None
        for rule in self.stylesheet.style_rules(nested=True):
            self._rewrite_rule(rule)
        self._css_output = stringify(self.stylesheet, compress=self.config.compress)
        self.state = EngineState.REGENERATED
        if self.config.replacements_output:
            write_replacements(self.config.replacements_output, self.allocator.table)
        return self._css_output

    def generate_js(self) -> str:
        """Serialize the rewritten script."""
        self._require(EngineState.SUBSTITUTED, "generate_js")
        assert self.script is not None
        output = generate(self.script)
        self.state = max(self.state, EngineState.REGENERATED)
        return output

    def get_replacements_count(self) -> int:
        self._require(EngineState.PARSED, "get_replacements_count")
        return self.replacements.count

    def _rewrite_rule(self, rule: StyleRule) -> None:
        kept: list[str] = []
        for selector in rule.selectors:
            rewritten = self._rewrite_selector(selector)
            if rewritten is not None:
                kept.append(rewritten)
        if not kept and rule.selectors:
            logger.debug("dropping rule %s", ", ".join(rule.selectors))
            self._emit(RuleDropped(tuple(rule.selectors)))
        rule.selectors = kept

    def _rewrite_selector(self, selector: str) -> str | None:
        """Return *selector* with tokens substituted, or None if it must be dropped."""
        assert self.allocator is not None
        allocator = self.allocator
        unresolved: list[str] = []
        occurrences = 0

        def substitute(match: re.Match[str]) -> str:
            nonlocal occurrences
            name = match.group(0)[1:]
            if not name:
                return match.group(0)
            known = name in allocator
            token = resolve_or_mint(name, SelectorContext(selector, match.start()), allocator)
            if token is None:
                unresolved.append(name)
                return match.group(0)
            if not known:
                self._emit(TokenMinted(name, token, "negation"))
            occurrences += 1
            return "." + token

        rewritten = self._css_pattern.sub(substitute, selector)
        if not unresolved:
            allocator.table.count += occurrences
            return rewritten
        if self.config.strict:
            raise UnresolvedSelectorError(selector, unresolved[0])
        logger.debug("dropping selector %r: no token for %r", selector, unresolved[0])
        self._emit(SelectorDropped(selector, unresolved[0]))
        return None


def _is_syntax_literal(node: Any, parent: Any) -> bool:
    """True for ``"use strict"``-style directives and module specifiers."""
    if parent is None:
        return False
    if getattr(parent, "directive", None) and getattr(parent, "expression", None) is node:
        return True
    return getattr(parent, "type", None) in _MODULE_SPECIFIER_PARENTS and (
        getattr(parent, "source", None) is node
    )


def _read(path: str | Path | None, option: str) -> str:
    if path is None:
        raise ValueError(f"{option} is not set and no text was given")
    return Path(path).read_text(encoding="utf-8")
