"""Tests for the substitution engine: end-to-end runs, counting and drop policy."""

import pytest

from cssgsub.config import GsubConfig
from cssgsub.engine import EngineState, SubstitutionEngine
from cssgsub.errors import EngineStateError, ParseError, UnresolvedSelectorError
from cssgsub.events import (
    EventBus,
    LiteralRewritten,
    RuleDropped,
    SelectorDropped,
    TokenMinted,
)
from cssgsub.report import load_replacements


def _engine(css: str, js: str, event_bus=None, **options) -> SubstitutionEngine:
    options.setdefault("compress", True)
    return SubstitutionEngine(GsubConfig(**options), css_text=css, js_text=js, event_bus=event_bus)


def _run(css: str, js: str, **options) -> SubstitutionEngine:
    return _engine(css, js, **options).run()


# ---------------------------------------------------------------------------
# End-to-end rewriting
# ---------------------------------------------------------------------------


class TestRewriting:
    def test_single_class(self):
        engine = _run(".foo{color:red}", 'var c = "foo";')
        assert engine.generate_js() == 'var c = "a";'
        assert engine.generate_css() == ".a{color:red}"
        assert engine.replacements.items == {"foo": "a"}
        assert engine.get_replacements_count() == 2

    def test_tokens_follow_script_order(self):
        engine = _run(".btn{top:0} .btn-primary{top:1}", 'el.className = "btn btn-primary";')
        assert engine.replacements.items == {"btn": "a", "btn-primary": "b"}
        assert engine.generate_js() == 'el.className = "a b";'
        assert engine.generate_css() == ".a{top:0}.b{top:1}"

    def test_repeated_name_in_one_literal(self):
        engine = _run(".x1{top:0}", 'var c = "x1 x1";')
        assert engine.generate_js() == 'var c = "a a";'
        assert engine.get_replacements_count() == 2

    def test_quotes_and_formatting_survive(self):
        source = "// header\nvar c = 'foo';\n\nvar n = 1; /* trailing */\n"
        engine = _run(".foo{top:0}", source)
        assert engine.generate_js() == "// header\nvar c = 'a';\n\nvar n = 1; /* trailing */\n"

    def test_glued_names_are_left_alone(self):
        engine = _run(".btn{top:0}", 'var c = "xbtn btn-x btn";')
        assert engine.generate_js() == 'var c = "xbtn btn-x a";'

    def test_directive_is_not_rewritten(self):
        engine = _run(".use{top:0}", '"use strict";\nvar c = "use";')
        assert engine.generate_js() == '"use strict";\nvar c = "a";'

    def test_module_specifiers_are_not_rewritten(self):
        js = 'import "./foo"; export const c = "foo";'
        engine = _run(".foo{top:0}", js, source_type="module")
        assert engine.generate_js() == 'import "./foo"; export const c = "a";'

    def test_prefix(self):
        engine = _run(".d-btn{color:red} .other{color:blue}", 'b.className = "d-btn other";', prefix="d-")
        assert engine.generate_js() == 'b.className = "a other";'
        assert engine.generate_css() == ".a{color:red}.other{color:blue}"

    def test_regexp(self):
        engine = _run(".js-tab{top:0} .plain{top:1}", 'var c = "js-tab plain";', regexp=r"js-[a-z]+")
        assert engine.generate_js() == 'var c = "a plain";'
        assert engine.generate_css() == ".a{top:0}.plain{top:1}"

    def test_empty_catalog_leaves_script_alone(self):
        engine = _run("div{top:0}", 'var c = "x";')
        assert engine.generate_js() == 'var c = "x";'
        assert engine.generate_css() == "div{top:0}"
        assert engine.get_replacements_count() == 0

    def test_pretty_output(self):
        engine = _run(".foo, .bar { color: red }", 'var c = "foo bar";', compress=False)
        assert engine.generate_css() == ".a,\n.b {\n  color: red;\n}"


# ---------------------------------------------------------------------------
# Token allocation
# ---------------------------------------------------------------------------


class TestTokenAllocation:
    def test_tokens_avoid_existing_classes(self):
        engine = _run(".a{} .b{} .c{} .foo{}", "var x = 1;", replace_all=True)
        assert engine.catalog.names == ["foo", "a", "b", "c"]
        assert engine.replacements.items == {"foo": "d", "a": "e", "b": "f", "c": "g"}
        assert engine.get_replacements_count() == 4

    def test_tokens_are_distinct(self):
        css = " ".join(f".name{i}{{top:{i}}}" for i in range(60))
        engine = _run(css, "var x = 1;", replace_all=True)
        tokens = list(engine.replacements.items.values())
        assert len(tokens) == 60
        assert len(set(tokens)) == 60

    def test_deterministic(self):
        css = ".one{top:0} .two{top:1} .three:not(.four){top:2}"
        js = 'var a = "two"; var b = ["three", "one"];'
        first, second = _run(css, js), _run(css, js)
        assert first.generate_css() == second.generate_css()
        assert first.generate_js() == second.generate_js()
        assert first.replacements.items == second.replacements.items

    def test_replace_all(self):
        engine = _run(".used{a:b} .unused{c:d}", 'var x = "used";', replace_all=True)
        assert engine.replacements.items == {"used": "a", "unused": "b"}
        assert engine.get_replacements_count() == 2
        assert engine.generate_css() == ".a{a:b}.b{c:d}"
        assert engine.get_replacements_count() == 4


# ---------------------------------------------------------------------------
# Selector resolution and drop policy
# ---------------------------------------------------------------------------


class TestDropPolicy:
    CSS = ".used{color:red} .gone{color:blue} .used, .gone2{margin:0}"
    JS = 'el.className = "used";'

    def test_unused_selectors_are_dropped(self):
        engine = _run(self.CSS, self.JS)
        assert engine.catalog.names == ["gone2", "used", "gone"]
        assert engine.generate_css() == ".a{color:red}.a{margin:0}"
        assert engine.get_replacements_count() == 3

    def test_drop_events(self):
        bus = EventBus()
        dropped = bus.collect(SelectorDropped)
        removed = bus.collect(RuleDropped)
        _engine(self.CSS, self.JS, event_bus=bus).run().generate_css()
        assert dropped == [
            SelectorDropped(".gone", "gone"),
            SelectorDropped(".gone2", "gone2"),
        ]
        assert removed == [RuleDropped((".gone",))]

    def test_strict_mode(self):
        engine = _run(".a1{color:red}", "var c = 1;", strict=True)
        with pytest.raises(UnresolvedSelectorError) as exc_info:
            engine.generate_css()
        assert exc_info.value.class_name == "a1"

    def test_negated_class_is_minted(self):
        engine = _run(".btn:not(.disabled){color:red}", 'var c = "btn";')
        assert engine.generate_css() == ".a:not(.b){color:red}"
        assert engine.replacements.items == {"btn": "a", "disabled": "b"}
        assert engine.get_replacements_count() == 3

    def test_unrelated_selectors_are_kept(self):
        engine = _run("div > p, .x1 {top:0} a:hover{top:1}", 'var c = "x1";')
        assert engine.generate_css() == "div>p,.a{top:0}a:hover{top:1}"

    def test_nested_groups(self):
        css = "@media print { .p { top: 0 } }"
        assert _run(css, 'var c = "p";').generate_css() == "@media print{.a{top:0}}"

    def test_nested_disabled(self):
        engine = _run("@media print { .p { top: 0 } } .q{top:1}", 'var c = "p q";', nested=False)
        assert engine.generate_js() == 'var c = "p a";'
        assert engine.generate_css() == ".a{top:1}"

    def test_keyframes_are_untouched(self):
        css = "@keyframes spin { from { top: 0 } } .a1{x:y}"
        engine = _run(css, 'var c = "a1";')
        assert engine.generate_css() == "@keyframes spin{from{top:0}}.a{x:y}"

    def test_charset_keeps_space_before_string(self):
        engine = _run('@charset "UTF-8"; .foo{content:"\u00e9"}', 'x="foo"')
        css = engine.generate_css()
        assert css.startswith('@charset "UTF-8";')
        assert css == '@charset "UTF-8";.a{content:"\u00e9"}'


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


class TestEvents:
    def test_event_sequence(self):
        bus = EventBus()
        events = bus.collect()
        engine = _engine(".btn:not(.disabled){color:red}", 'var c = "btn";', event_bus=bus)
        engine.run().generate_css()
        assert events == [
            TokenMinted("btn", "a", "script"),
            LiteralRewritten("btn", "a", 1),
            TokenMinted("disabled", "b", "negation"),
        ]

    def test_replace_all_origin(self):
        bus = EventBus()
        minted = bus.collect(TokenMinted)
        _engine(".x1{top:0}", "var c = 1;", event_bus=bus, replace_all=True).run()
        assert minted == [TokenMinted("x1", "a", "replace_all")]


# ---------------------------------------------------------------------------
# Run steps and state
# ---------------------------------------------------------------------------


class TestEngineState:
    def test_steps_advance_state(self):
        engine = _engine(".foo{top:0}", 'var c = "foo";')
        assert engine.state is EngineState.CREATED
        engine.load()
        assert engine.state is EngineState.LOADED
        engine.parse()
        engine.build_catalog()
        assert engine.state is EngineState.CATALOGED
        engine.replace()
        assert engine.state is EngineState.SUBSTITUTED
        engine.generate_css()
        assert engine.state is EngineState.REGENERATED

    def test_generate_before_replace(self):
        engine = _engine(".foo{top:0}", 'var c = "foo";')
        engine.load()
        engine.parse()
        with pytest.raises(EngineStateError):
            engine.generate_css()

    def test_parse_before_load(self):
        with pytest.raises(EngineStateError):
            _engine(".foo{}", "").parse()

    def test_run_twice(self):
        engine = _run(".foo{top:0}", 'var c = "foo";')
        with pytest.raises(EngineStateError):
            engine.run()

    def test_replace_all_after_replace_all(self):
        engine = _run(".foo{top:0}", "var c = 1;", replace_all=True)
        with pytest.raises(EngineStateError):
            engine.replace_all()

    def test_generate_css_is_idempotent(self):
        engine = _run(".foo{top:0}", 'var c = "foo";')
        first = engine.generate_css()
        assert engine.generate_css() == first
        assert engine.get_replacements_count() == 2

    def test_replace_all_after_generate(self):
        engine = _run(".foo{top:0}", 'var c = "foo";')
        engine.generate_css()
        with pytest.raises(EngineStateError):
            engine.replace_all()


class TestSourcesAndErrors:
    def test_reads_files(self, tmp_path):
        (tmp_path / "a.css").write_text(".foo{top:0}")
        (tmp_path / "a.js").write_text('var c = "foo";')
        config = GsubConfig(css_in=tmp_path / "a.css", js_in=tmp_path / "a.js", compress=True)
        engine = SubstitutionEngine(config).run()
        assert engine.generate_css() == ".a{top:0}"

    def test_missing_source(self):
        with pytest.raises(ValueError):
            SubstitutionEngine(GsubConfig(), css_text=".a{}").run()

    def test_stylesheet_parse_error(self):
        with pytest.raises(ParseError):
            _run(".a{color:red}}", "")

    def test_script_parse_error(self):
        with pytest.raises(ParseError):
            _run(".a{}", "var = ;")

    def test_replacement_log(self, tmp_path):
        log = tmp_path / "out" / "replacements.json"
        engine = _run(".foo{top:0} .bar{top:1}", 'var c = "bar";', replacements_output=log)
        assert not log.exists()
        engine.generate_css()
        assert load_replacements(log) == {"count": 2, "items": {"bar": "a"}}

    def test_replacement_log_includes_negation_tokens(self, tmp_path):
        log = tmp_path / "replacements.json"
        engine = _run(".btn:not(.disabled){color:red}", 'var c = "btn";', replacements_output=log)
        css = engine.generate_css()
        assert css == ".a:not(.b){color:red}"
        assert load_replacements(log) == {"count": 3, "items": {"btn": "a", "disabled": "b"}}
