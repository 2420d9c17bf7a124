"""Tests for negation detection and token resolution in selectors."""

from cssgsub.engine import SelectorContext, TokenAllocator, negation_spans, resolve_or_mint


class TestNegationSpans:
    def test_single(self):
        assert negation_spans(".a:not(.b)") == ((7, 9),)

    def test_none(self):
        assert negation_spans(".a .b:hover") == ()

    def test_nested_parens(self):
        selector = ".a:not(:nth-child(2n)) .c"
        ((start, end),) = negation_spans(selector)
        assert selector[start:end] == ":nth-child(2n)"

    def test_several(self):
        selector = ":not(.x) .y:NOT(.z)"
        spans = negation_spans(selector)
        assert [selector[s:e] for s, e in spans] == [".x", ".z"]

    def test_unclosed(self):
        selector = ".a:not(.b"
        ((start, end),) = negation_spans(selector)
        assert selector[start:end] == ".b"


class TestSelectorContext:
    def test_negated(self):
        selector = ".a:not(.b)"
        assert SelectorContext(selector, selector.index(".b")).negated
        assert not SelectorContext(selector, 0).negated


class TestResolveOrMint:
    def test_known_class(self):
        allocator = TokenAllocator()
        allocator.mint("a1")
        assert resolve_or_mint("a1", SelectorContext(".a1", 0), allocator) == "a"

    def test_unknown_plain_class(self):
        allocator = TokenAllocator()
        assert resolve_or_mint("x1", SelectorContext(".x1", 0), allocator) is None
        assert "x1" not in allocator

    def test_unknown_negated_class_is_minted(self):
        allocator = TokenAllocator()
        selector = ".b1:not(.x1)"
        context = SelectorContext(selector, selector.index(".x1"))
        assert resolve_or_mint("x1", context, allocator) == "a"
        assert allocator.table.items == {"x1": "a"}
