"""
Response Parser

Turns raw TxGemma text into typed results. Every function here is total:
ambiguous or malformed model output degrades to a default interpretation
(label A, score 0, plain text without structure) and never raises.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from models import (
    ChatReply,
    DesignGuidance,
    DesignSuggestion,
    PredictionResult,
    PredictionStatus,
    StartingMolecule,
    StructuredContent,
)

from .properties import SCORE_MAX, SCORE_MIN, Polarity, PropertyDefinition

logger = logging.getLogger(__name__)

LABEL_A = "A"
LABEL_B = "B"

# TxGemma does not report confidence; these are the fixed values shown in the UI
CATEGORICAL_CONFIDENCE = 0.85
CONTINUOUS_CONFIDENCE = 0.80

_DIGITS = re.compile(r"\d+")


@dataclass(frozen=True)
class CategoricalDecoding:
    """
    Result of reading an (A)/(B) answer.

    matched is False when no marker was recognized and the label fell back
    to A; callers can log or surface that, the label is still usable.
    """
    label: str
    matched: bool


@dataclass(frozen=True)
class ContinuousDecoding:
    raw_score: int
    matched: bool


def decode_categorical(raw: str) -> CategoricalDecoding:
    normalized = (raw or "").upper().strip()

    if "(B)" in normalized or normalized.startswith("B"):
        return CategoricalDecoding(LABEL_B, matched=True)
    if "(A)" in normalized or normalized.startswith("A"):
        return CategoricalDecoding(LABEL_A, matched=True)
    return CategoricalDecoding(LABEL_A, matched=False)


def assign_status(prop: PropertyDefinition, label: str) -> PredictionStatus:
    """Combine a decoded label with the property's polarity."""
    if prop.polarity == Polarity.SECOND_FAVORABLE:
        return PredictionStatus.FAVORABLE if label == LABEL_B else PredictionStatus.UNFAVORABLE
    if prop.polarity == Polarity.SECOND_UNFAVORABLE:
        return PredictionStatus.UNFAVORABLE if label == LABEL_B else PredictionStatus.FAVORABLE
    return PredictionStatus.NEUTRAL


def parse_categorical(raw: str, prop: PropertyDefinition) -> PredictionResult:
    decoded = decode_categorical(raw)
    if not decoded.matched:
        logger.debug(f"No (A)/(B) marker for {prop.id} in {(raw or '')[:80]!r}, defaulting to A")

    return PredictionResult(
        property_id=prop.id,
        value=prop.label_phrase(decoded.label),
        label=decoded.label,
        confidence=CATEGORICAL_CONFIDENCE,
        status=assign_status(prop, decoded.label),
    )


def decode_continuous(raw: str) -> ContinuousDecoding:
    """First run of digits, clamped to the model's 0-1000 score range."""
    match = _DIGITS.search(raw or "")
    if not match:
        return ContinuousDecoding(0, matched=False)
    score = int(match.group(0))
    return ContinuousDecoding(max(SCORE_MIN, min(SCORE_MAX, score)), matched=True)


def format_value(value: float, unit: str) -> str:
    suffix = f" {unit}" if unit else ""
    return f"{value:.2f}{suffix}"


def parse_continuous(raw: str, prop: PropertyDefinition) -> PredictionResult:
    decoded = decode_continuous(raw)
    if not decoded.matched:
        logger.debug(f"No score for {prop.id} in {(raw or '')[:80]!r}, defaulting to 0")

    numeric_value = prop.rescaling.apply(decoded.raw_score)
    return PredictionResult(
        property_id=prop.id,
        value=format_value(numeric_value, prop.unit),
        numeric_value=numeric_value,
        confidence=CONTINUOUS_CONFIDENCE,
        status=PredictionStatus.NEUTRAL,
    )


def parse_prediction(raw: str, prop: PropertyDefinition) -> PredictionResult:
    if prop.is_categorical:
        return parse_categorical(raw, prop)
    return parse_continuous(raw, prop)


# ============= Embedded JSON =============

def find_json_object(text: str) -> Optional[Tuple[int, int]]:
    """
    Span of the first balanced-brace substring, or None.

    Braces inside JSON string literals do not count towards the balance.
    """
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for i in range(start, len(text)):
            ch = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return start, i + 1
        start = text.find("{", start + 1)
    return None


def _load_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        parsed = json.loads(text)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def _suggestions(items: Any) -> list:
    suggestions = []
    for item in items:
        if isinstance(item, dict) and item.get("text"):
            suggestions.append(DesignSuggestion(text=str(item["text"]), type=str(item.get("type") or "general")))
        elif isinstance(item, str):
            suggestions.append(DesignSuggestion(text=item))
    return suggestions


def _molecules(items: Any) -> list:
    molecules = []
    for item in items:
        if isinstance(item, dict) and item.get("smiles"):
            molecules.append(StartingMolecule(name=str(item.get("name") or item["smiles"]), smiles=str(item["smiles"])))
    return molecules


def extract_structured_reply(reply: str) -> ChatReply:
    """
    Split a chat reply into text and an optional embedded payload.

    The payload is accepted only if it carries a suggestions list or a
    molecules list (under "startingMolecules" or "molecules"). The returned
    text is the reply with the JSON removed; when nothing is accepted the
    reply comes back unchanged.
    """
    span = find_json_object(reply)
    if span is None:
        return ChatReply(text=reply, structured=None)

    start, end = span
    parsed = _load_object(reply[start:end])
    if parsed is None:
        return ChatReply(text=reply, structured=None)

    suggestions = parsed.get("suggestions")
    molecules = parsed.get("startingMolecules")
    if not isinstance(molecules, list):
        molecules = parsed.get("molecules")

    has_suggestions = isinstance(suggestions, list)
    has_molecules = isinstance(molecules, list)
    if not (has_suggestions or has_molecules):
        return ChatReply(text=reply, structured=None)

    structured = StructuredContent(
        suggestions=_suggestions(suggestions) if has_suggestions else None,
        molecules=_molecules(molecules) if has_molecules else None,
    )
    text = (reply[:start] + reply[end:]).strip()
    return ChatReply(text=text, structured=structured)


def parse_design_guidance(reply: str, goal: str = "") -> DesignGuidance:
    """Read the strict-JSON guidance answer; fall back to the raw reply as summary."""
    span = find_json_object(reply)
    parsed = _load_object(reply[span[0]:span[1]]) if span else None
    if parsed is None:
        logger.warning("Design guidance reply contained no JSON object")
        return DesignGuidance(summary=reply, query=goal)

    suggestions = parsed.get("suggestions")
    molecules = parsed.get("startingMolecules")
    return DesignGuidance(
        summary=parsed.get("summary") or "No summary available.",
        suggestions=_suggestions(suggestions) if isinstance(suggestions, list) else [],
        starting_molecules=_molecules(molecules) if isinstance(molecules, list) else [],
        query=goal,
    )
