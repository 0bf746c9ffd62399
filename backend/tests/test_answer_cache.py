"""
Tests for the static answer cache
"""

from core.answer_cache import (
    CHAT_CACHE,
    EXPLANATION_CACHE,
    PREDICTION_CACHE,
    lookup_chat_reply,
    lookup_explanation,
    lookup_predictions,
)
from core.properties import EXAMPLE_MOLECULES, PANELS, get_property_by_id
from models import ChatRole, ChatTurn, PredictionStatus

ASPIRIN = "CC(=O)Oc1ccccc1C(=O)O"
OPENING_PROMPT = "I need a non-drowsy antihistamine"


class TestPredictionCache:

    def test_every_example_molecule_is_cached(self):
        assert set(PREDICTION_CACHE) == {m["smiles"] for m in EXAMPLE_MOLECULES}
        assert set(EXPLANATION_CACHE) == set(PREDICTION_CACHE)

    def test_entries_cover_the_admet_panel(self):
        for smiles, results in PREDICTION_CACHE.items():
            assert [r.property_id for r in results] == PANELS["admet"], smiles

    def test_cached_entries_match_property_kind(self):
        for results in PREDICTION_CACHE.values():
            for result in results:
                prop = get_property_by_id(result.property_id)
                if prop.is_categorical:
                    assert result.label in ("A", "B")
                else:
                    assert result.numeric_value is not None

    def test_subset_in_request_order(self):
        results = lookup_predictions(ASPIRIN, ["logp", "bbb"])
        assert [r.property_id for r in results] == ["logp", "bbb"]

    def test_aspirin_values(self):
        bbb, logp = lookup_predictions(ASPIRIN, ["bbb", "logp"])
        assert bbb.value == "Does not cross"
        assert bbb.status == PredictionStatus.UNFAVORABLE
        assert logp.numeric_value == 1.19

    def test_key_is_trimmed(self):
        assert lookup_predictions(f"  {ASPIRIN}\n", ["bbb"]) is not None

    def test_key_is_case_sensitive(self):
        assert lookup_predictions(ASPIRIN.lower(), ["bbb"]) is None

    def test_partial_coverage_is_a_miss(self):
        assert lookup_predictions(ASPIRIN, ["bbb", "ic50"]) is None

    def test_empty_request_is_a_miss(self):
        assert lookup_predictions(ASPIRIN, []) is None

    def test_unknown_molecule_is_a_miss(self):
        assert lookup_predictions("CCO", ["bbb"]) is None


class TestExplanationCache:

    def test_hit(self):
        assert "carboxylic acid" in lookup_explanation(ASPIRIN, "bbb")

    def test_misses(self):
        assert lookup_explanation(ASPIRIN, "ic50") is None
        assert lookup_explanation("CCO", "bbb") is None


class TestChatCache:

    def test_three_starter_prompts(self):
        assert len(CHAT_CACHE) == 3

    def test_single_user_turn_hit(self):
        reply = lookup_chat_reply([{"role": "user", "content": OPENING_PROMPT}])
        assert reply is not None
        assert reply.structured is not None

    def test_padded_prompt_hit(self):
        assert lookup_chat_reply([{"role": "user", "content": f"  {OPENING_PROMPT}  "}]) is not None

    def test_chat_turn_objects(self):
        assert lookup_chat_reply([ChatTurn(role=ChatRole.USER, content=OPENING_PROMPT)]) is not None

    def test_second_turn_never_hits(self):
        history = [
            {"role": "user", "content": "hello"},
            {"role": "assistant", "content": "Hi, how can I help?"},
            {"role": "user", "content": OPENING_PROMPT},
        ]
        assert lookup_chat_reply(history) is None

    def test_assistant_turn_never_hits(self):
        assert lookup_chat_reply([{"role": "assistant", "content": OPENING_PROMPT}]) is None

    def test_unknown_prompt_misses(self):
        assert lookup_chat_reply([{"role": "user", "content": "Something else"}]) is None

    def test_returned_reply_is_a_copy(self):
        first = lookup_chat_reply([{"role": "user", "content": OPENING_PROMPT}])
        first.structured.suggestions.clear()
        second = lookup_chat_reply([{"role": "user", "content": OPENING_PROMPT}])
        assert second.structured.suggestions
