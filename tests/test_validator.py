"""End-to-end tests for the Validator and ValidatorFactory.

Tests cover:
- Pass/fail runs with the bundled English messages
- Per-run message bags
- Rule spec errors (unknown rules, malformed rules)
- Custom rules added through extend()
- Rule inspection helpers
"""

from pathlib import Path

import pytest

from ruleforge import validation
from ruleforge.translation.config import LocaleConfig
from ruleforge.translation.translator import Translator
from ruleforge.validation.bag import MessageBag
from ruleforge.validation.registry import RuleRegistry
from ruleforge.validation.types import ParsedRule, RuleConfigurationError, UnknownRuleError
from ruleforge.validation.validator import Validator, ValidatorFactory, default_factory


@pytest.fixture
def factory():
    """Factory with a fresh registry and the bundled English messages."""
    return ValidatorFactory(translator=Translator.from_config(LocaleConfig()))


# =============================================================================
# Runs
# =============================================================================


class TestValidationRuns:
    def test_required_message(self, factory):
        validator = factory.make({"attribute": None}, {"attribute": "required"})

        assert validator.fails() is True
        assert validator.errors().first("attribute") == "The attribute field is required."

    def test_between_message(self, factory):
        validator = factory.make({"attribute": "as"}, {"attribute": "required|between:3,10"})

        assert validator.passes() is False
        assert validator.errors().first("attribute").endswith("must be between 3 and 10 characters.")

    def test_in_passes(self, factory):
        validator = factory.make({"attribute": 3}, {"attribute": "in:3,10"})

        assert validator.passes() is True
        assert validator.errors().has_errors() is False

    def test_required_if_message(self, factory):
        validator = factory.make({"bar": 10}, {"foo": "required_if:bar,10"})

        assert validator.fails() is True
        assert validator.errors().first("foo") == "The foo field is required when bar is 10."
        assert factory.make({"bar": 100}, {"foo": "required_if:bar,10"}).passes() is True

    def test_custom_message(self, factory):
        validator = factory.make(
            {"attribute": None},
            {"attribute": "required"},
            {"attribute.required": "Please fill in attribute."},
        )

        assert validator.fails() is True
        assert validator.errors().first("attribute") == "Please fill in attribute."

    def test_bundled_attribute_label(self, factory):
        validator = factory.make({}, {"email": "required"})
        assert validator.fails()
        assert validator.errors().first("email") == "The email address field is required."

    def test_messages_follow_rule_order(self, factory):
        validator = factory.make({"code": "abc"}, {"code": "numeric|min:5|in:x,y"})

        assert validator.fails()
        assert validator.errors().get("code") == [
            "The code must be a number.",
            "The code must be at least 5.",
            "The selected code is invalid.",
        ]

    def test_fields_without_rules_pass(self, factory):
        validator = factory.make({"a": None, "b": ""}, {"c": "max:3"})
        assert validator.passes() is True

    def test_empty_rule_spec(self, factory):
        assert factory.make({"a": None}, {}).passes() is True
        assert factory.make({"a": None}, None).passes() is True

    def test_blank_expressions_skipped(self, factory):
        assert factory.make({"a": "x"}, {"a": "required||"}).passes() is True
        assert factory.make({"a": "x"}, {"a": ""}).passes() is True

    def test_rule_spec_not_mutated(self, factory):
        rules = {"a": "required|min:2", "b": ["required"]}
        factory.make({}, rules).fails()
        assert rules == {"a": "required|min:2", "b": ["required"]}

    def test_sequence_rules(self, factory):
        validator = factory.make({"level": "c"}, {"level": ["required", ["in", "a", "b"]]})
        assert validator.fails() is True
        assert validator.errors().keys() == ["level"]

    def test_messages_alias(self, factory):
        validator = factory.make({}, {"a": "required"})
        validator.fails()
        assert validator.messages().all() == validator.errors().all()


class TestMessageBagPerRun:
    def test_errors_empty_before_first_run(self, factory):
        validator = factory.make({}, {"a": "required"})
        assert isinstance(validator.errors(), MessageBag)
        assert validator.errors().has_errors() is False

    def test_fresh_bag_each_run(self, factory):
        data = {"a": None}
        validator = factory.make(data, {"a": "required"})

        assert validator.fails() is True
        data["a"] = "filled"
        assert validator.passes() is True
        assert validator.errors().has("a") is False

    def test_repeated_runs_do_not_accumulate(self, factory):
        validator = factory.make({}, {"a": "required"})
        validator.fails()
        validator.fails()
        assert validator.errors().get("a") == ["The a field is required."]

    def test_errors_returns_copy(self, factory):
        validator = factory.make({}, {"a": "required"})
        validator.fails()

        validator.errors().add("a", "extra")

        assert len(validator.errors()) == 1

    def test_aborted_run_leaves_empty_bag(self, factory):
        def explode(field, value, parameters):
            if value == "boom":
                raise RuleConfigurationError("cannot check boom")
            return True

        factory.extend("explode", explode)
        data = {"a": None, "b": "ok"}
        validator = factory.make(data, {"a": "required", "b": "explode"})

        assert validator.fails() is True
        data["b"] = "boom"
        with pytest.raises(RuleConfigurationError):
            validator.passes()
        assert validator.errors().has_errors() is False


# =============================================================================
# Rule Spec Errors
# =============================================================================


class TestRuleSpecErrors:
    def test_unknown_rule(self, factory):
        validator = factory.make({"a": 1}, {"a": "no_such_rule"})

        with pytest.raises(UnknownRuleError, match="NoSuchRule") as exc_info:
            validator.passes()

        assert exc_info.value.name == "NoSuchRule"
        assert "Required" in exc_info.value.available

    def test_malformed_rule(self, factory):
        with pytest.raises(RuleConfigurationError):
            factory.make({"a": "abc"}, {"a": "size"}).passes()


# =============================================================================
# Custom Rules
# =============================================================================


class TestExtend:
    @pytest.mark.parametrize("reference", ["custom_rule", "CustomRule", "custom-rule", "customRule"])
    def test_casing_variants_dispatch(self, factory, reference):
        factory.extend("custom_rule", lambda field, value, params: value == "ok", "The :attribute is not ok.")

        assert factory.make({"a": "ok"}, {"a": reference}).passes() is True
        validator = factory.make({"a": "nope"}, {"a": reference})
        assert validator.fails() is True
        assert validator.errors().first("a") == "The a is not ok."

    def test_parameters_passed(self, factory):
        factory.extend("divisible_by", lambda field, value, params: int(value) % int(params[0]) == 0)

        assert factory.make({"n": 9}, {"n": "divisible_by:3"}).passes() is True
        assert factory.make({"n": 10}, {"n": "divisible_by:3"}).passes() is False

    def test_contextual_rule(self, factory):
        def greater_than(validator, field, value, parameters):
            return value > validator.get_value(parameters[0])

        factory.registry.register("greater_than", greater_than, contextual=True)

        assert factory.make({"lo": 1, "hi": 2}, {"hi": "greater_than:lo"}).passes() is True
        assert factory.make({"lo": 3, "hi": 2}, {"hi": "greater_than:lo"}).passes() is False

    def test_extend_is_scoped_to_registry(self, factory):
        factory.extend("only_here", lambda field, value, params: True)
        other = ValidatorFactory(translator=factory.translator)

        with pytest.raises(UnknownRuleError):
            other.make({"a": 1}, {"a": "only_here"}).passes()

    def test_validator_extend_shares_registry(self, factory):
        validator = factory.make({}, {})
        validator.extend("shared", lambda field, value, params: False)
        assert factory.registry.is_registered("shared")

    def test_builtin_can_be_replaced(self, factory):
        factory.extend("required", lambda field, value, params: True)
        assert factory.make({}, {"a": "required"}).passes() is True

    def test_copied_registry_is_isolated(self, factory):
        forked = ValidatorFactory(registry=factory.registry.copy(), translator=factory.translator)
        forked.extend("forked_only", lambda field, value, params: True)

        assert "forked_only" in forked.registry
        assert "forked_only" not in factory.registry

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            RuleRegistry().register("  ", lambda field, value, params: True)


class TestDefaultFactory:
    def test_default_factory_is_shared(self):
        assert default_factory() is default_factory()

    def test_module_level_make_and_extend(self, monkeypatch):
        monkeypatch.delenv("RULEFORGE_LOCALE", raising=False)
        monkeypatch.delenv("RULEFORGE_LOCALE_PATH", raising=False)

        validation.extend("ruleforge_test_always_fails", lambda field, value, params: False, "Nope :attribute.")
        validator = validation.make({"a": 1}, {"a": "ruleforge_test_always_fails"})

        assert isinstance(validator, Validator)
        assert validator.fails() is True
        assert validator.errors().first("a") == "Nope a."


# =============================================================================
# Inspection
# =============================================================================


class TestInspection:
    def test_get_rule(self, factory):
        validator = factory.make({}, {"age": "required|between:1,3"})
        assert validator.get_rule("age", ["Between", "Size"]) == ParsedRule("Between", ("1", "3"))
        assert validator.get_rule("age", "Numeric") is None

    def test_get_rule_only_inspects_field(self, factory):
        validator = factory.make({}, {"age": "numeric", "name": "between:1,3"})
        assert validator.has_rule("name", "Numeric") is False
        assert validator.has_rule("age", "Numeric") is True

    @pytest.mark.parametrize(
        "rules,expected",
        [("numeric", "numeric"), ("integer", "numeric"), ("array", "array"), ("required", "string")],
    )
    def test_attribute_type(self, factory, rules, expected):
        assert factory.make({}, {"f": rules}).get_attribute_type("f") == expected

    def test_get_value_coerces_field_name(self, factory):
        validator = factory.make({"10": "x"}, {})
        assert validator.get_value(10) == "x"

    def test_validator_without_registry_uses_default(self):
        validator = Validator({}, {}, translator=Translator({}))
        assert validator.registry is default_factory().registry


# =============================================================================
# Locales
# =============================================================================


class TestLocales:
    def test_locale_path_and_fallback(self, tmp_path: Path):
        (tmp_path / "de.yaml").write_text("required: 'Das Feld :attribute ist erforderlich.'\n")
        translator = Translator.from_config(LocaleConfig(locale="de", fallback="en", locale_path=tmp_path))
        factory = ValidatorFactory(translator=translator)

        validator = factory.make({"name": "a"}, {"title": "required", "name": "min:3"})

        assert validator.fails()
        assert validator.errors().first("title") == "Das Feld title ist erforderlich."
        assert validator.errors().first("name") == "The name must be at least 3 characters."
