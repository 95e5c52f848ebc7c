"""Tests for the contextual validator."""

import logging

import pytest

from contextual_validation.domain.value_objects import MessageBag
from contextual_validation.domain.exceptions import (
    ContextNotFoundError,
    InvalidRuleDefinitionError,
    ReplacementBindingError,
)
from contextual_validation.validation import ContextualValidator
from tests.doubles import FakeValidationEngine


class PersonValidator(ContextualValidator):
    """Validator declaring its rules as class attributes."""

    rules = {
        "default": {
            "first_name": "required",
            "last_name": "required",
            "website": "required|url",
        },
        "create": {"first_name": "required|max:255"},
    }
    messages = {"first_name.required": "Tell us your first name."}


@pytest.fixture
def validator(person_input, person_rules, fake_engine) -> ContextualValidator:
    """Return a person validator backed by the fake engine."""
    return ContextualValidator(person_input, rules=person_rules, engine=fake_engine)


class TestConstruction:
    """Test constructing validators."""

    def test_make_returns_contextual_validator(self, person_input):
        """Test make shorthand."""
        assert isinstance(PersonValidator.make(person_input), PersonValidator)

    def test_context_in_constructor(self, person_input):
        """Test a single context given to the constructor."""
        validator = PersonValidator(person_input, "signin")

        assert validator.get_contexts() == ["signin"]

    def test_contexts_in_make(self, person_input):
        """Test several contexts given to make."""
        validator = PersonValidator.make(person_input, ["signin", "signin2"])

        assert validator.get_contexts() == ["signin", "signin2"]

    def test_no_context_by_default(self, validator):
        """Test a new validator has no contexts."""
        assert validator.get_contexts() == []

    def test_class_rules_used_by_default(self, person_input):
        """Test subclass rule tables are picked up."""
        validator = PersonValidator(person_input, "create")

        assert validator.get_rules_in_context()["first_name"] == "required|max:255"

    def test_injected_rules_override_class_rules(self, person_input):
        """Test constructor rules win over class rules."""
        validator = PersonValidator(person_input, rules={"website": "url"})

        assert validator.get_rules_in_context() == {"website": "url"}


class TestContexts:
    """Test context selection."""

    def test_add_single_context_by_string(self, validator):
        """Test a single context name is appended."""
        validator.add_context("create")

        assert validator.get_contexts() == ["create"]

    def test_add_multiple_contexts_by_list(self, validator):
        """Test a list of contexts is appended in order."""
        validator.add_context(["create", "edit"])

        assert validator.get_contexts() == ["create", "edit"]

    def test_add_multiple_contexts_by_chaining(self, validator):
        """Test add_context returns the validator."""
        validator.add_context("create").add_context("edit")

        assert validator.get_contexts() == ["create", "edit"]

    def test_add_multiple_contexts_by_chaining_lists(self, validator):
        """Test chained lists keep their order."""
        validator.add_context(["create", "create2"]).add_context(["edit", "edit2"])

        assert validator.get_contexts() == ["create", "create2", "edit", "edit2"]

    def test_set_context_discards_previous(self, validator):
        """Test set_context replaces existing contexts."""
        validator.add_context(["create"])
        validator.set_context(["edit"])

        assert validator.get_contexts() == ["edit"]

    def test_set_context_accepts_string(self, validator):
        """Test set_context accepts a single name."""
        validator.set_context("edit")

        assert validator.get_contexts() == ["edit"]

    def test_duplicate_context_logs_warning(self, validator, caplog):
        """Test adding a context twice keeps both and warns."""
        with caplog.at_level(logging.WARNING):
            validator.add_context("create").add_context("create")

        assert validator.get_contexts() == ["create", "create"]
        assert "added more than once" in caplog.text

    def test_get_contexts_returns_copy(self, validator):
        """Test mutating the returned contexts has no effect."""
        validator.get_contexts().append("edit")

        assert validator.get_contexts() == []


class TestAttributes:
    """Test attribute access."""

    def test_get_attributes(self, validator, person_input):
        """Test attributes are returned as given."""
        assert validator.get_attributes() == person_input

    def test_set_attributes(self, validator):
        """Test attributes can be replaced."""
        validator.set_attributes({"website": "http://example.com"})

        assert validator.get_attributes() == {"website": "http://example.com"}


class TestRuleResolution:
    """Test resolution through the validator."""

    def test_resolved_example(self, fake_engine):
        """Test default fields overlaid by the create context."""
        validator = ContextualValidator(
            {"first_name": "Chris"},
            ["create"],
            rules={
                "default": {"first_name": "required", "last_name": "required"},
                "create": {"first_name": "required|max:255"},
            },
            engine=fake_engine,
        )

        assert validator.get_rules_in_context() == {
            "first_name": "required|max:255",
            "last_name": "required",
        }

    def test_flat_rules(self, fake_engine):
        """Test flat definitions are used as-is."""
        rules = {"first_name": "required"}
        validator = ContextualValidator({}, rules=rules, engine=fake_engine)

        assert not validator.has_context()
        assert validator.get_rules_in_context() == rules

    def test_unknown_context_raises_on_passes(self, validator):
        """Test unknown contexts are only detected when validating."""
        validator.add_context(["create", "signin"])

        with pytest.raises(ContextNotFoundError, match="'ContextualValidator'.*'signin'"):
            validator.passes()

    def test_error_names_subclass(self, person_input):
        """Test the validator class name is reported."""
        validator = PersonValidator(person_input, "signin", engine=FakeValidationEngine())

        with pytest.raises(ContextNotFoundError, match="'PersonValidator'"):
            validator.passes()

    def test_error_names_explicit_name(self, person_input, person_rules, fake_engine):
        """Test an explicit name is used in context errors."""
        validator = ContextualValidator(
            person_input, "signin", rules=person_rules, engine=fake_engine, name="person"
        )

        with pytest.raises(ContextNotFoundError, match="'person'"):
            validator.errors()


class TestReplacements:
    """Test replacement binding through the validator."""

    def test_get_replacement_default(self, validator):
        """Test an unbound field has no replacements."""
        assert validator.get_replacement("email") == {}

    def test_bind_replacement_chains(self, validator):
        """Test bind_replacement returns the validator."""
        assert validator.bind_replacement("email", {"id": 1}) is validator
        assert validator.get_replacement("email") == {"id": 1}

    def test_bound_rules_sent_to_engine(self, fake_engine):
        """Test the engine receives rules with placeholders filled."""
        validator = ContextualValidator(
            {"email": "chris@example.com"},
            "edit",
            rules={
                "default": {"email": "required|email"},
                "edit": {"email": "required|email|max:@max"},
            },
            engine=fake_engine,
        )
        validator.bind_replacement("email", {"max": 255})

        assert validator.passes()
        assert fake_engine.last_session.rules == {"email": "required|email|max:255"}

    def test_unbound_placeholder_raises(self, fake_engine):
        """Test a placeholder without a binding raises."""
        validator = ContextualValidator(
            {}, rules={"email": "unique:users,email,@id"}, engine=fake_engine
        )

        with pytest.raises(ReplacementBindingError, match="for field 'email'"):
            validator.passes()

    def test_bound_value_not_a_number_raises(self):
        """Test a non numeric bound size is a rule definition error."""
        validator = ContextualValidator({"n": "abc"}, rules={"n": "max:@m"})
        validator.bind_replacement("n", {"m": "ten"})

        with pytest.raises(InvalidRuleDefinitionError, match="rule 'max' on field 'n'"):
            validator.passes()


class TestEvaluation:
    """Test delegation to the engine."""

    def test_passes(self, validator, fake_engine, person_input):
        """Test attributes, rules and messages are handed to the engine."""
        assert validator.passes()
        assert not validator.fails()

        session = fake_engine.last_session
        assert session.attributes == person_input
        assert session.rules["website"] == "required|url"

    def test_custom_messages_sent_to_engine(self, person_input):
        """Test custom messages reach the engine."""
        engine = FakeValidationEngine()
        PersonValidator(person_input, engine=engine).passes()

        assert engine.last_session.custom_messages == {
            "first_name.required": "Tell us your first name."
        }

    def test_failure_captures_messages(self, person_input, person_rules):
        """Test failing validation exposes engine messages."""
        engine = FakeValidationEngine(errors={"x": ["bad"]})
        validator = ContextualValidator(person_input, rules=person_rules, engine=engine)

        assert validator.fails()
        assert validator.errors() == {"x": ["bad"]}
        assert isinstance(validator.get_message_bag(), MessageBag)

    def test_errors_triggers_validation(self, person_input, person_rules):
        """Test errors evaluates when nothing ran yet."""
        engine = FakeValidationEngine(errors={"x": ["bad"]})
        validator = ContextualValidator(person_input, rules=person_rules, engine=engine)

        assert validator.errors() == {"x": ["bad"]}
        assert engine.calls == 1

    def test_errors_are_cached(self, validator, fake_engine):
        """Test errors reuses the previous evaluation."""
        validator.passes()
        validator.errors()
        validator.errors()

        assert fake_engine.calls == 1

    def test_errors_empty_after_pass(self, validator):
        """Test a passing validator has no errors."""
        validator.passes()

        assert validator.errors().is_empty()

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda v: v.set_attributes({}),
            lambda v: v.add_context("create"),
            lambda v: v.set_context("edit"),
            lambda v: v.bind_replacement("email", {"id": 1}),
        ],
    )
    def test_mutation_invalidates_cache(self, validator, fake_engine, mutate):
        """Test every mutator forces a new evaluation."""
        validator.errors()
        mutate(validator)
        validator.errors()

        assert fake_engine.calls == 2

    def test_validate_returns_result(self, person_input, person_rules):
        """Test validate returns a result object."""
        engine = FakeValidationEngine(errors={"x": ["bad"]})
        result = ContextualValidator(person_input, rules=person_rules, engine=engine).validate()

        assert not result.valid
        assert result.messages == {"x": ["bad"]}


class TestConditionalRules:
    """Test the conditional rule hook."""

    def test_callback_receives_session(self, person_input, person_rules, fake_engine):
        """Test the conditional hook receives the engine session."""
        sessions = []
        validator = ContextualValidator(
            person_input,
            rules=person_rules,
            engine=fake_engine,
            conditional_rules=sessions.append,
        )

        validator.passes()

        assert sessions == [fake_engine.last_session]

    def test_callback_can_attach_rules(self, person_input, person_rules, fake_engine):
        """Test the conditional hook can attach rules."""
        def add_rules(session):
            session.sometimes("nickname", "max:10", lambda data: "first_name" in data)

        validator = ContextualValidator(
            person_input,
            rules=person_rules,
            engine=fake_engine,
            conditional_rules=add_rules,
        )
        validator.passes()

        assert fake_engine.last_session.conditional == [("nickname", "max:10")]

    def test_subclass_override(self, person_input, fake_engine):
        """Test subclasses can override add_conditional_rules."""
        class FlaggingValidator(PersonValidator):
            def add_conditional_rules(self, session):
                session.after(lambda s: s.add_error("website", "Website is blocked."))

        validator = FlaggingValidator(person_input, engine=fake_engine)

        assert validator.fails()
        assert validator.errors()["website"] == ["Website is blocked."]


class TestWithVoluptuousEngine:
    """Test end to end with the default engine."""

    def test_create_context_passes(self, person_input):
        """Test valid input passes in the create context."""
        assert PersonValidator(person_input, "create").passes()

    def test_create_context_fails(self):
        """Test the create overlay replaces default rules."""
        validator = PersonValidator(
            {"first_name": "x" * 300, "website": "not a url"}, "create"
        )

        assert validator.fails()
        errors = validator.errors()
        assert errors["first_name"] == [
            "The first name may not be greater than 255 characters."
        ]
        assert errors["last_name"] == ["The last name field is required."]
        assert errors["website"] == ["The website format is invalid."]

    def test_custom_message(self):
        """Test custom messages are used by the engine."""
        validator = PersonValidator({"last_name": "Hayes", "website": "http://a.ca"})

        assert validator.errors()["first_name"] == ["Tell us your first name."]

    def test_conditional_rules_with_engine(self):
        """Test conditional rules run on the real engine."""
        def guardian_for_minors(session):
            session.sometimes("guardian", "required", lambda data: data.get("age", 0) < 18)

        validator = ContextualValidator(
            {"age": 16},
            rules={"age": "required|integer"},
            conditional_rules=guardian_for_minors,
        )

        assert validator.fails()
        assert validator.errors()["guardian"] == ["The guardian field is required."]

        validator.set_attributes({"age": 30})
        assert validator.passes()
