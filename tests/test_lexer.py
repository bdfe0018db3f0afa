"""Tests for the scanning engine and rule construction."""

from __future__ import annotations

import re

import pytest

from asmlex.lexer import SimpleLexer, create_simple_lexer
from asmlex.rules import make_rule
from asmlex.tokens import Token, TokenCategory


class TestMakeRule:
    def test_accepts_category_value_and_name(self) -> None:
        assert make_rule("kwd", r"a").category is TokenCategory.KEYWORD
        assert make_rule("keyword", r"a").category is TokenCategory.KEYWORD
        assert make_rule(TokenCategory.STRING, r"a").category is TokenCategory.STRING

    def test_unknown_category(self) -> None:
        with pytest.raises(ValueError, match="Unknown token category"):
            make_rule("bogus", r"a")

    def test_empty_pattern(self) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            make_rule(TokenCategory.PLAIN, "")

    def test_malformed_pattern(self) -> None:
        with pytest.raises(re.error):
            make_rule(TokenCategory.PLAIN, "[unclosed")

    def test_precompiled_pattern(self) -> None:
        pattern = re.compile(r"ab+")
        rule = make_rule(TokenCategory.KEYWORD, pattern)
        assert rule.pattern is pattern

    def test_ignore_case(self) -> None:
        rule = make_rule(TokenCategory.KEYWORD, r"mov", ignore_case=True)
        assert rule.match("MOV") == "MOV"
        assert make_rule(TokenCategory.KEYWORD, r"mov").match("MOV") is None

    def test_ignore_case_on_compiled_pattern(self) -> None:
        rule = make_rule(TokenCategory.KEYWORD, re.compile(r"mov"), ignore_case=True)
        assert rule.match("Mov") == "Mov"

    def test_match_is_anchored_at_offset(self) -> None:
        rule = make_rule(TokenCategory.LITERAL, r"\d+")
        assert rule.match("ab12", 0) is None
        assert rule.match("ab12", 2) == "12"

    def test_empty_match_is_no_match(self) -> None:
        rule = make_rule(TokenCategory.PLAIN, r"x*")
        assert rule.match("abc") is None

    def test_describe(self) -> None:
        rule = make_rule(TokenCategory.COMMENT, r"#.*", "#")
        assert rule.describe() == {
            "category": "COMMENT",
            "pattern": "#.*",
            "ignore_case": False,
            "shortcut_chars": "#",
        }


class TestSimpleLexer:
    def test_first_matching_rule_wins(self) -> None:
        lexer = create_simple_lexer(
            (),
            (
                make_rule(TokenCategory.KEYWORD, r"[a-z]+"),
                make_rule(TokenCategory.LITERAL, r"[a-z0-9]+"),
            ),
        )
        tokens = lexer.tokenize("ab12")
        assert [(t.category, t.text) for t in tokens] == [
            (TokenCategory.KEYWORD, "ab"),
            (TokenCategory.LITERAL, "12"),
        ]

    def test_shortcut_group_before_fallthrough(self) -> None:
        lexer = create_simple_lexer(
            (make_rule(TokenCategory.STRING, r"'[^']*'"),),
            (make_rule(TokenCategory.PUNCTUATION, r"'"),),
        )
        assert lexer.tokenize("'a'")[0].category is TokenCategory.STRING

    def test_shortcut_dispatch_takes_priority(self) -> None:
        lexer = create_simple_lexer(
            (
                make_rule(TokenCategory.PLAIN, r"!+"),
                make_rule(TokenCategory.COMMENT, r"![^\n]*", "!"),
            ),
            (),
        )
        assert [(t.category, t.text) for t in lexer.tokenize("!! x")] == [
            (TokenCategory.COMMENT, "!! x"),
        ]

    def test_failed_shortcut_falls_back_to_ordered_rules(self) -> None:
        lexer = create_simple_lexer(
            (make_rule(TokenCategory.STRING, r'"[^"]*"', '"'),),
            (make_rule(TokenCategory.PUNCTUATION, r'"'),),
        )
        assert lexer.tokenize('"')[0].category is TokenCategory.PUNCTUATION

    def test_later_rule_claims_shared_shortcut(self) -> None:
        lexer = create_simple_lexer(
            (
                make_rule(TokenCategory.STRING, r";.*", ";"),
                make_rule(TokenCategory.COMMENT, r";.*", ";"),
            ),
            (),
        )
        assert lexer.tokenize("; x")[0].category is TokenCategory.COMMENT

    def test_unmatched_characters_become_plain(self) -> None:
        lexer = create_simple_lexer((), (make_rule(TokenCategory.KEYWORD, r"[a-z]+"),))
        assert lexer.tokenize("ab?c") == [
            Token("ab", TokenCategory.KEYWORD, 0, 2),
            Token("?", TokenCategory.PLAIN, 2, 3),
            Token("c", TokenCategory.KEYWORD, 3, 4),
        ]

    def test_empty_input(self, asm_lexer: SimpleLexer) -> None:
        assert asm_lexer.tokenize("") == []
        assert asm_lexer.decorate("") == []

    def test_empty_tables_still_progress(self) -> None:
        lexer = SimpleLexer((), ())
        assert "".join(t.text for t in lexer.tokenize("abc")) == "abc"
        assert len(lexer.tokenize("abc")) == 3

    def test_iter_tokens_is_lazy(self, asm_lexer: SimpleLexer) -> None:
        iterator = asm_lexer.iter_tokens("mov %eax")
        assert next(iterator) == Token("mov", TokenCategory.KEYWORD, 0, 3)

    def test_rules_property_preserves_order(self, asm_lexer: SimpleLexer) -> None:
        assert asm_lexer.rules == asm_lexer.shortcut_rules + asm_lexer.fallthrough_rules

    def test_decorate_merges_adjacent_categories(self, asm_lexer: SimpleLexer) -> None:
        # "..." mid-input yields three PLAIN tokens, merged with the space.
        assert asm_lexer.decorate("... x", base_pos=10) == [
            (10, TokenCategory.PLAIN),
            (14, TokenCategory.KEYWORD),
        ]

    def test_decorate_boundaries(self, asm_lexer: SimpleLexer) -> None:
        assert asm_lexer.decorate("mov $1, %eax") == [
            (0, TokenCategory.KEYWORD),
            (3, TokenCategory.PLAIN),
            (4, TokenCategory.LITERAL),
            (6, TokenCategory.PUNCTUATION),
            (7, TokenCategory.PLAIN),
        ]

    def test_repr(self, asm_lexer: SimpleLexer) -> None:
        assert repr(asm_lexer) == "SimpleLexer(shortcut_rules=3, fallthrough_rules=4)"


class TestToken:
    def test_to_dict(self) -> None:
        token = Token("mov", TokenCategory.KEYWORD, 0, 3)
        assert token.to_dict() == {"text": "mov", "category": "KEYWORD", "start": 0, "end": 3}

    def test_category_values_are_css_classes(self) -> None:
        assert [c.value for c in TokenCategory] == ["pln", "str", "com", "lit", "kwd", "pun"]
