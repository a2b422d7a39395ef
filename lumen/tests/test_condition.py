"""
Test suite for keyword conditions and tokenisation.
"""

import pytest

from lumen.commands.condition import Condition, tokenize


class TestTokenize:

    def test_splits_on_whitespace_and_uppercases(self):
        assert tokenize("запусти  сценарий\tсейчас") == ["ЗАПУСТИ", "СЦЕНАРИЙ", "СЕЙЧАС"]

    def test_empty_text(self):
        assert tokenize("   ") == []


class TestLeafCondition:

    def test_keyword_is_uppercased(self):
        assert Condition.word("сцен").keyword == "СЦЕН"

    def test_prefix_match(self):
        leaf = Condition.word("СЦЕН")
        assert leaf.evaluate({"СЦЕНАРИЙ"})
        assert leaf.evaluate({"СЦЕНА"})

    def test_substring_is_not_enough(self):
        assert not Condition.word("СЦЕН").evaluate({"АСЦЕНТ"})

    def test_any_token_can_match(self):
        assert Condition.word("ФОНАР").evaluate(["ВКЛЮЧИ", "ФОНАРИК"])

    def test_no_tokens(self):
        assert not Condition.word("EXIT").evaluate([])

    def test_lowercase_tokens_are_not_normalised(self):
        # Callers must upper-case tokens before evaluation
        assert not Condition.word("EXIT").evaluate(["exit"])


class TestCompositeCondition:

    def setup_method(self):
        self.a = Condition.word("ВКЛЮЧ")
        self.b = Condition.word("ФОНАР")
        self.both = Condition.at_least(2, self.a, self.b)

    def test_threshold_not_reached(self):
        assert not self.both.evaluate(["ВКЛЮЧИ", "СВЕТ"])

    def test_threshold_reached(self):
        assert self.both.evaluate(["ВКЛЮЧИ", "ФОНАРИК"])

    def test_one_of_two(self):
        either = Condition.any_of("EXIT", "ВЫХОД")
        assert either.evaluate(["ВЫХОД"])
        assert either.evaluate(["EXIT"])
        assert not either.evaluate(["СТОП"])

    def test_keyword_ignored_when_children_present(self):
        condition = Condition(threshold=1, children=[self.a], keyword="НИКОГДА")
        assert condition.evaluate(["ВКЛЮЧИ"])
        assert not condition.evaluate(["НИКОГДА"])

    def test_threshold_above_children_is_always_false(self):
        condition = Condition.at_least(3, self.a, self.b)
        assert not condition.evaluate(["ВКЛЮЧИ", "ФОНАРИК"])

    def test_nested_tree(self):
        light = Condition.any_of("ФОНАР", "СВЕТ")
        condition = Condition.at_least(2, Condition.word("ВКЛЮЧ"), light)
        assert condition.evaluate(tokenize("включи свет"))
        assert condition.evaluate(tokenize("включи фонарик"))
        assert not condition.evaluate(tokenize("выключи свет"))

    def test_evaluation_is_repeatable(self):
        tokens = ["ВКЛЮЧИ", "ФОНАРИК"]
        results = {self.both.evaluate(tokens) for _ in range(5)}
        assert results == {True}
        assert tokens == ["ВКЛЮЧИ", "ФОНАРИК"]

    def test_accepts_generators(self):
        assert self.both.evaluate(t for t in ["ВКЛЮЧИ", "ФОНАРИК"])

    def test_all_of_uses_every_keyword(self):
        condition = Condition.all_of("СОЗД", "СЦЕНАР")
        assert condition.threshold == 2
        assert len(condition.children) == 2


class TestConditionConstruction:

    def test_threshold_must_be_positive(self):
        with pytest.raises(ValueError):
            Condition(threshold=0)

    def test_condition_is_immutable(self):
        condition = Condition.word("EXIT")
        with pytest.raises(AttributeError):
            condition.keyword = "OTHER"

    def test_children_stored_as_tuple(self):
        condition = Condition(children=[Condition.word("A")])
        assert isinstance(condition.children, tuple)
