"""
Request orchestrator for the prediction pipeline.
Fans evaluation requests out to the model gateway and merges the results.
"""
import asyncio
import uuid
from typing import Dict, List, Optional, Sequence, Tuple, Union

from loguru import logger

from models import ChatReply, ChatTurn, DesignGuidance, PredictionResult, SAREntry
from core.answer_cache import lookup_chat_reply, lookup_explanation, lookup_predictions
from core.errors import InvalidRequestError
from core.parsing import extract_structured_reply, parse_design_guidance, parse_prediction
from core.properties import require_property
from core.prompts import (
    build_chat_system_prompt,
    build_design_guidance_prompt,
    build_explanation_prompt,
    build_prediction_prompt,
)
from core.smiles import generate_library, unfilled_placeholders

Turn = Union[ChatTurn, Dict[str, str]]


def _error_message(error: BaseException) -> str:
    return str(error) or error.__class__.__name__


def _turn_dict(turn: Turn) -> Dict[str, str]:
    if isinstance(turn, dict):
        return {"role": str(turn.get("role", "user")), "content": turn.get("content") or ""}
    role = turn.role.value if hasattr(turn.role, "value") else str(turn.role)
    return {"role": role, "content": turn.content}


class PredictionOrchestrator:
    """
    Coordinates cache lookups, prompt building, gateway calls and parsing.

    The gateway is injected; anything with async ``score(prompt)`` and
    ``chat(turns)`` methods will do.
    """

    def __init__(self, gateway, cache_enabled: bool = True):
        self.gateway = gateway
        self.cache_enabled = cache_enabled

    async def evaluate(
        self,
        smiles: str,
        property_ids: Sequence[str],
        target: Optional[str] = None,
    ) -> List[PredictionResult]:
        """
        Predict every requested property for one molecule.

        Always returns one result per requested id, in request order. A
        property that fails yields a placeholder carrying the error message;
        only an empty molecule or an empty property list rejects the request.
        """
        if not smiles or not smiles.strip():
            raise InvalidRequestError("Missing required field: smiles")
        if not property_ids:
            raise InvalidRequestError("Missing required field: properties")

        smiles = smiles.strip()
        property_ids = list(property_ids)

        if self.cache_enabled:
            cached = lookup_predictions(smiles, property_ids)
            if cached is not None:
                logger.info(f"Answer cache hit for {smiles} ({len(cached)} properties)")
                return cached

        outcomes = await asyncio.gather(
            *(self.predict_property(smiles, property_id, target) for property_id in property_ids),
            return_exceptions=True,
        )

        results = []
        for property_id, outcome in zip(property_ids, outcomes):
            if isinstance(outcome, Exception):
                logger.warning(f"Prediction failed for {property_id} on {smiles}: {outcome}")
                results.append(PredictionResult.failure(property_id, _error_message(outcome)))
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                results.append(outcome)
        return results

    async def predict_property(self, smiles: str, property_id: str, target: Optional[str] = None) -> PredictionResult:
        """One prompt -> gateway -> parser round trip."""
        prop = require_property(property_id)
        prompt = build_prediction_prompt(property_id, smiles, target)
        raw = await self.gateway.score(prompt)
        return parse_prediction(raw, prop)

    async def evaluate_batch(
        self,
        items: Sequence[Tuple[str, Sequence[str]]],
        target: Optional[str] = None,
    ) -> List[List[PredictionResult]]:
        """Evaluate several (smiles, property_ids) pairs concurrently, in input order."""
        for smiles, property_ids in items:
            if not smiles or not smiles.strip() or not property_ids:
                raise InvalidRequestError("Every batch item needs a molecule and at least one property")

        return list(await asyncio.gather(
            *(self.evaluate(smiles, property_ids, target) for smiles, property_ids in items)
        ))

    async def evaluate_library(
        self,
        scaffold: str,
        r_group_options: Dict[str, List[str]],
        property_ids: Sequence[str],
        scaffold_name: Optional[str] = None,
    ) -> List[SAREntry]:
        """
        Enumerate a scaffold's R-group combinations and evaluate each member.

        The whole library is checked before any model call: every option list
        must be non-empty and every member must have all placeholders filled.
        """
        if not scaffold or not scaffold.strip():
            raise InvalidRequestError("Missing required field: scaffold")
        if not property_ids:
            raise InvalidRequestError("Missing required field: properties")
        if not r_group_options:
            raise InvalidRequestError("Missing required field: rGroups")

        empty = [key for key, options in r_group_options.items() if not options]
        if empty:
            raise InvalidRequestError(f"No R-group options for: {', '.join(empty)}")

        library = generate_library(scaffold.strip(), r_group_options)
        for member in library:
            unfilled = unfilled_placeholders(member["smiles"])
            if unfilled:
                raise InvalidRequestError(f"Scaffold placeholders without R-group options: {', '.join(unfilled)}")

        logger.info(f"Evaluating SAR library of {len(library)} members on {len(property_ids)} properties")

        predictions = await self.evaluate_batch([(member["smiles"], property_ids) for member in library])
        return [
            SAREntry(
                id=uuid.uuid4().hex[:12],
                smiles=member["smiles"],
                scaffold_name=scaffold_name,
                r_groups=member["r_groups"],
                predictions=member_predictions,
            )
            for member, member_predictions in zip(library, predictions)
        ]

    async def explain(self, smiles: str, property_id: str, prediction: str) -> str:
        """
        Structural rationale for an already computed prediction.

        Gateway failures propagate; the caller shows its own fallback text.
        """
        if not smiles or not smiles.strip() or not property_id or not prediction:
            raise InvalidRequestError("Missing required fields: smiles, propertyId, prediction")

        if self.cache_enabled:
            cached = lookup_explanation(smiles, property_id)
            if cached:
                logger.info(f"Answer cache hit for {property_id} explanation of {smiles.strip()}")
                return cached

        prop = require_property(property_id)
        prompt = build_explanation_prompt(prop, smiles.strip(), prediction)
        return await self.gateway.chat([{"role": "user", "content": prompt}])

    async def chat(
        self,
        history: Sequence[Turn],
        current_smiles: Optional[str] = None,
        current_predictions: Optional[Sequence[Union[PredictionResult, Dict]]] = None,
    ) -> ChatReply:
        """
        Reply to a conversation, with the molecule in focus injected as a system turn.

        The answer cache only applies to a conversation's opening message.
        """
        if not history:
            raise InvalidRequestError("Missing required field: messages")

        if self.cache_enabled:
            cached = lookup_chat_reply(history)
            if cached is not None:
                logger.info("Answer cache hit for opening chat prompt")
                return cached

        system_turn = {"role": "system", "content": build_chat_system_prompt(current_smiles, current_predictions)}
        turns = [system_turn] + [_turn_dict(turn) for turn in history]
        raw = await self.gateway.chat(turns)
        return extract_structured_reply(raw)

    async def design_guidance(self, goal: str) -> DesignGuidance:
        if not goal or not goal.strip():
            raise InvalidRequestError("Missing required field: goal")

        prompt = build_design_guidance_prompt(goal.strip())
        raw = await self.gateway.chat([{"role": "user", "content": prompt}])
        return parse_design_guidance(raw, goal.strip())
