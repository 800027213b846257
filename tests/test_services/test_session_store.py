"""Unit tests for the session store."""
import itertools

import pytest

from chat_assistant.models.messages import ERROR_MARKER, Role
from chat_assistant.models.params import GenerationParams, ParamsPatch, ReasoningEffort
from chat_assistant.services.session_store import SessionStore


class TestHistory:
    """Tests for append/get_all/clear."""

    def test_starts_empty(self, store):
        assert store.get_all() == ()
        assert len(store) == 0
        assert store.pending is False

    def test_append_keeps_creation_order(self, store):
        first = store.new_message(Role.USER, "one")
        second = store.new_message(Role.ASSISTANT, "two")
        store.append(first)
        store.append(second)
        assert [m.content for m in store.get_all()] == ["one", "two"]

    def test_get_all_is_a_snapshot(self, store):
        snapshot = store.get_all()
        store.append(store.new_message(Role.USER, "later"))
        assert snapshot == ()
        assert len(store.get_all()) == 1

    def test_clear_keeps_params(self, store):
        store.update_params(ParamsPatch(top_k=5, temperature=0.3))
        params_before = store.params
        store.append(store.new_message(Role.USER, "hello"))

        store.clear()

        assert store.get_all() == ()
        assert store.params == params_before


class TestNewMessage:
    """Tests for message id and content construction."""

    def test_ids_unique_and_increasing(self, store):
        messages = [store.new_message(Role.USER, str(i)) for i in range(50)]
        stamps = [int(m.id) for m in messages]
        assert stamps == sorted(stamps)
        assert len(set(stamps)) == 50

    def test_role_suffixes(self, store):
        assert not store.new_message(Role.USER, "x").id.endswith(("-bot", "-error"))
        assert store.new_message(Role.ASSISTANT, "x").id.endswith("-bot")
        assert store.new_message(Role.ASSISTANT, "x", error=True).id.endswith("-error")

    def test_error_message_content(self, store):
        message = store.new_message(Role.ASSISTANT, "send failed", error=True)
        assert message.content == f"{ERROR_MARKER}send failed"
        assert message.is_error
        assert message.role is Role.ASSISTANT

    def test_message_is_immutable(self, store):
        message = store.new_message(Role.USER, "x")
        with pytest.raises(AttributeError):
            message.content = "y"

    def test_timestamp_is_timezone_aware(self, store):
        assert store.new_message(Role.USER, "x").timestamp.tzinfo is not None


class TestUpdateParams:
    """Tests for update_params and top_p/top_k exclusivity."""

    def test_top_p_then_top_k(self, store):
        store.update_params(ParamsPatch(top_p=0.9))
        params = store.update_params(ParamsPatch(top_k=10))
        assert params.top_p is None
        assert params.top_k == 10
        assert params.temperature == 1.0

    def test_top_k_then_top_p(self, store):
        store.update_params(ParamsPatch(top_k=10))
        params = store.update_params(ParamsPatch(top_p=0.5))
        assert params.top_k is None
        assert params.top_p == 0.5

    def test_unsetting_one_leaves_other_alone(self, store):
        store.update_params(ParamsPatch(top_k=10))
        params = store.update_params(ParamsPatch(top_p=None))
        assert params.top_k == 10
        assert params.top_p is None

    def test_patch_setting_both_keeps_top_k(self, store):
        params = store.update_params(ParamsPatch(top_p=0.3, top_k=4))
        assert params.top_p is None
        assert params.top_k == 4

    def test_other_fields_independent(self, store):
        store.update_params(ParamsPatch(top_p=0.8))
        params = store.update_params(
            ParamsPatch(temperature=0, reasoning_effort=ReasoningEffort.HIGH)
        )
        assert params.top_p == 0.8
        assert params.temperature == 0
        assert params.reasoning_effort is ReasoningEffort.HIGH

    def test_empty_patch_is_noop(self, store):
        before = store.params
        assert store.update_params(ParamsPatch()) is before

    def test_never_both_defined(self):
        store = SessionStore()
        patches = [
            ParamsPatch(top_p=0.9),
            ParamsPatch(top_k=3),
            ParamsPatch(top_p=None),
            ParamsPatch(top_k=None),
            ParamsPatch(temperature=1.5),
        ]
        for sequence in itertools.product(patches, repeat=3):
            for patch in sequence:
                params = store.update_params(patch)
                assert params.top_p is None or params.top_k is None

    def test_initial_params_override(self):
        store = SessionStore(GenerationParams(temperature=0.2))
        assert store.params.temperature == 0.2
