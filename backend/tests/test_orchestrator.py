"""
Tests for the request orchestrator: cache policy, fan-out and failure isolation
"""

import pytest

from conftest import ASPIRIN, CAFFEINE, UNCACHED, FakeGateway
from core.errors import GatewayError, InvalidRequestError, UnknownPropertyError
from models import ChatTurn, PredictionResult, PredictionStatus
from services.orchestrator import PredictionOrchestrator

OPENING_PROMPT = "I need a non-drowsy antihistamine"

SCORES = {
    "crosses the BBB": "(B)",
    "lipophilicity from": "500",
    "is mutagenic": "(A)",
    "blocks hERG": "(B)",
}


@pytest.fixture
def gateway():
    return FakeGateway(score_replies=dict(SCORES))


@pytest.fixture
def orchestrator(gateway):
    return PredictionOrchestrator(gateway)


class TestEvaluate:

    @pytest.mark.asyncio
    async def test_cached_molecule_skips_gateway(self, orchestrator, gateway):
        results = await orchestrator.evaluate(ASPIRIN, ["bbb", "logp"])

        assert gateway.call_count == 0
        bbb, logp = results
        assert bbb.status == PredictionStatus.UNFAVORABLE
        assert bbb.value == "Does not cross"
        assert logp.numeric_value == 1.19

    @pytest.mark.asyncio
    async def test_one_uncached_property_bypasses_cache(self, orchestrator, gateway):
        results = await orchestrator.evaluate(ASPIRIN, ["bbb", "logp", "ic50"])

        assert len(gateway.score_calls) == 3
        assert [r.property_id for r in results] == ["bbb", "logp", "ic50"]
        # live values, not the cached ones
        assert results[0].value == "Crosses BBB"
        assert results[1].value == "3.00"

    @pytest.mark.asyncio
    async def test_cache_can_be_disabled(self, gateway):
        orchestrator = PredictionOrchestrator(gateway, cache_enabled=False)
        await orchestrator.evaluate(ASPIRIN, ["bbb"])
        assert len(gateway.score_calls) == 1

    @pytest.mark.asyncio
    async def test_live_results_follow_input_order(self, orchestrator):
        ids = ["herg", "logp", "bbb", "ames"]
        results = await orchestrator.evaluate(UNCACHED, ids)

        assert [r.property_id for r in results] == ids
        herg, logp, bbb, ames = results
        assert herg.status == PredictionStatus.UNFAVORABLE
        assert logp.numeric_value == pytest.approx(3.0)
        assert bbb.status == PredictionStatus.FAVORABLE
        assert ames.status == PredictionStatus.FAVORABLE

    @pytest.mark.asyncio
    async def test_unknown_property_is_isolated(self, orchestrator, gateway):
        results = await orchestrator.evaluate(UNCACHED, ["bbb", "foo", "logp"])

        assert len(results) == 3
        assert [r.property_id for r in results] == ["bbb", "foo", "logp"]
        foo = results[1]
        assert foo.value == "Error"
        assert foo.status == PredictionStatus.NEUTRAL
        assert foo.error == "Unknown property: foo"
        assert not results[0].failed and not results[2].failed
        assert len(gateway.score_calls) == 2

    @pytest.mark.asyncio
    async def test_gateway_failure_is_isolated(self, gateway, orchestrator):
        gateway.score_replies["lipophilicity from"] = GatewayError(500, "boom")

        results = await orchestrator.evaluate(UNCACHED, ["bbb", "logp"])

        assert results[0].value == "Crosses BBB"
        assert results[1].failed
        assert "500" in results[1].error

    @pytest.mark.asyncio
    async def test_every_property_failing_still_returns_results(self):
        gateway = FakeGateway(score_replies={"SMILES": RuntimeError("down")})
        results = await PredictionOrchestrator(gateway).evaluate(UNCACHED, ["bbb", "ames"])
        assert [r.error for r in results] == ["down", "down"]

    @pytest.mark.asyncio
    async def test_target_reaches_binding_prompt(self, orchestrator, gateway):
        await orchestrator.evaluate(UNCACHED, ["kd"], target="MKTAYIAKQR")
        assert "Target amino acid sequence: MKTAYIAKQR" in gateway.score_calls[0]

    @pytest.mark.asyncio
    async def test_molecule_is_trimmed(self, orchestrator, gateway):
        results = await orchestrator.evaluate(f"  {ASPIRIN} ", ["bbb"])
        assert gateway.call_count == 0
        assert results[0].value == "Does not cross"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("smiles,ids", [("", ["bbb"]), ("   ", ["bbb"]), (ASPIRIN, [])])
    async def test_invalid_requests(self, orchestrator, gateway, smiles, ids):
        with pytest.raises(InvalidRequestError):
            await orchestrator.evaluate(smiles, ids)
        assert gateway.call_count == 0


class TestBatch:

    @pytest.mark.asyncio
    async def test_batch_preserves_order(self, orchestrator):
        results = await orchestrator.evaluate_batch([
            (UNCACHED, ["logp"]),
            (ASPIRIN, ["logp"]),
            (CAFFEINE, ["bbb", "logp"]),
        ])

        assert len(results) == 3
        assert results[0][0].value == "3.00"
        assert results[1][0].value == "1.19"
        assert [r.property_id for r in results[2]] == ["bbb", "logp"]

    @pytest.mark.asyncio
    async def test_batch_rejects_empty_items(self, orchestrator, gateway):
        with pytest.raises(InvalidRequestError):
            await orchestrator.evaluate_batch([(UNCACHED, ["bbb"]), ("", ["bbb"])])
        assert gateway.call_count == 0

    @pytest.mark.asyncio
    async def test_library(self, orchestrator):
        entries = await orchestrator.evaluate_library(
            "c1cc([R1])ncc1[R2]", {"R1": ["F", "[H]"], "R2": ["C"]}, ["logp"], scaffold_name="Pyridine"
        )

        assert [e.smiles for e in entries] == ["c1cc(F)ncc1(C)", "c1ccncc1(C)"]
        assert entries[0].r_groups == {"R1": "F", "R2": "C"}
        assert entries[0].scaffold_name == "Pyridine"
        assert len({e.id for e in entries}) == 2
        assert all(e.predictions[0].property_id == "logp" for e in entries)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("r_groups,properties,message", [
        ({}, ["logp"], "rGroups"),
        ({"R1": [], "R2": ["C"]}, ["logp"], "No R-group options for: R1"),
        ({"R1": ["F"]}, ["logp"], r"\[R2\]"),
        ({"R1": ["F"], "R2": ["C"]}, [], "properties"),
    ])
    async def test_library_rejected_before_any_call(self, orchestrator, gateway, r_groups, properties, message):
        with pytest.raises(InvalidRequestError, match=message):
            await orchestrator.evaluate_library("c1cc([R1])ncc1[R2]", r_groups, properties)
        assert gateway.call_count == 0


class TestExplain:

    @pytest.mark.asyncio
    async def test_cached_explanation(self, orchestrator, gateway):
        text = await orchestrator.explain(ASPIRIN, "bbb", "Does not cross")
        assert "carboxylic acid" in text
        assert gateway.call_count == 0

    @pytest.mark.asyncio
    async def test_live_explanation(self, gateway, orchestrator):
        gateway.chat_reply = "Its hydroxyl group limits diffusion."
        text = await orchestrator.explain(UNCACHED, "bbb", "Does not cross")

        assert text == "Its hydroxyl group limits diffusion."
        (turns,) = gateway.chat_calls
        assert len(turns) == 1
        assert turns[0]["role"] == "user"
        assert UNCACHED in turns[0]["content"]

    @pytest.mark.asyncio
    async def test_unknown_property(self, orchestrator):
        with pytest.raises(UnknownPropertyError):
            await orchestrator.explain(UNCACHED, "foo", "x")

    @pytest.mark.asyncio
    async def test_gateway_error_propagates(self, gateway, orchestrator):
        gateway.chat_error = GatewayError(502, "bad gateway")
        with pytest.raises(GatewayError):
            await orchestrator.explain(UNCACHED, "bbb", "Crosses BBB")

    @pytest.mark.asyncio
    async def test_missing_fields(self, orchestrator):
        with pytest.raises(InvalidRequestError):
            await orchestrator.explain(UNCACHED, "bbb", "")


class TestChat:

    @pytest.mark.asyncio
    async def test_opening_prompt_is_cached(self, orchestrator, gateway):
        reply = await orchestrator.chat([ChatTurn(role="user", content=OPENING_PROMPT)])
        assert reply.structured is not None
        assert gateway.call_count == 0

    @pytest.mark.asyncio
    async def test_padded_opening_prompt_is_cached(self, orchestrator, gateway):
        await orchestrator.chat([{"role": "user", "content": f"\n{OPENING_PROMPT}   "}])
        assert gateway.call_count == 0

    @pytest.mark.asyncio
    async def test_later_turn_goes_live(self, orchestrator, gateway):
        gateway.chat_reply = "Plain answer."
        history = [
            {"role": "user", "content": "Hello"},
            {"role": "assistant", "content": "Hi!"},
            {"role": "user", "content": OPENING_PROMPT},
        ]
        reply = await orchestrator.chat(history)

        assert reply.text == "Plain answer."
        assert reply.structured is None
        (turns,) = gateway.chat_calls
        assert [t["role"] for t in turns] == ["system", "user", "assistant", "user"]

    @pytest.mark.asyncio
    async def test_molecule_in_focus_reaches_system_turn(self, orchestrator, gateway):
        gateway.chat_reply = 'Try these {"startingMolecules":[{"name":"Ethanol","smiles":"CCO"}]}'
        predictions = [PredictionResult(property_id="logp", value="3.00", numeric_value=3.0)]

        reply = await orchestrator.chat(
            [ChatTurn(role="user", content="What next?")], current_smiles=UNCACHED, current_predictions=predictions
        )

        system = gateway.chat_calls[0][0]["content"]
        assert UNCACHED in system
        assert "3.00" in system
        assert reply.text == "Try these"
        assert reply.structured.molecules[0].smiles == "CCO"

    @pytest.mark.asyncio
    async def test_cache_disabled(self, gateway):
        gateway.chat_reply = "live"
        reply = await PredictionOrchestrator(gateway, cache_enabled=False).chat(
            [{"role": "user", "content": OPENING_PROMPT}]
        )
        assert reply.text == "live"

    @pytest.mark.asyncio
    async def test_empty_history(self, orchestrator):
        with pytest.raises(InvalidRequestError):
            await orchestrator.chat([])


class TestDesignGuidance:

    @pytest.mark.asyncio
    async def test_guidance(self, gateway, orchestrator):
        gateway.chat_reply = '{"summary":"Lower logP.","suggestions":[{"text":"Add COOH","type":"add"}],"startingMolecules":[]}'
        guidance = await orchestrator.design_guidance("  non-sedating antihistamine ")

        assert guidance.summary == "Lower logP."
        assert guidance.query == "non-sedating antihistamine"
        assert "non-sedating antihistamine" in gateway.chat_calls[0][0]["content"]

    @pytest.mark.asyncio
    async def test_empty_goal(self, orchestrator):
        with pytest.raises(InvalidRequestError):
            await orchestrator.design_guidance(" ")
