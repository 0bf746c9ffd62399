"""
TxGemma prompt templates.

Scoring prompts follow the TDC instruction format TxGemma was tuned on
(Instructions / Context / Question / Drug SMILES / Answer). Conversational
prompts target the chat-tuned model.
"""

from typing import Callable, Dict, Iterable, Optional

from .errors import MissingTemplateError
from .properties import PropertyDefinition, get_property_by_id

UNKNOWN_TARGET = "Unknown"

_INSTRUCTIONS = "Instructions: Answer the following question about drug properties."
_BINDING_INSTRUCTIONS = "Instructions: Answer the following question about drug-target interactions."
_CLINICAL_INSTRUCTIONS = "Instructions: Answer the following question about clinical trials."


def _question(instructions: str, context: str, question: str, smiles: str) -> str:
    return (
        f"{instructions}\n"
        f"Context: {context}\n"
        f"Question: {question}\n"
        f"Drug SMILES: {smiles}\n"
        f"Answer:"
    )


def _binding_question(context: str, question: str, smiles: str, target: str) -> str:
    return (
        f"{_BINDING_INSTRUCTIONS}\n"
        f"Context: {context}\n"
        f"Question: {question}\n"
        f"Drug SMILES: {smiles}\n"
        f"Target amino acid sequence: {target}\n"
        f"Answer:"
    )


_BBB_CONTEXT = (
    "As a membrane separating circulating blood and brain extracellular fluid, the blood-brain barrier (BBB) "
    "is the protection layer that blocks most foreign drugs. Thus the ability of a drug to penetrate the barrier "
    "to deliver to the site of action forms a crucial challenge in development of drugs for central nervous system."
)
_CACO2_CONTEXT = (
    "The human colon epithelial cancer cell line, Caco-2, is used as an in vitro model to simulate the human "
    "intestinal tissue. The experimental result on the rate of drug passing through the Caco-2 cells can "
    "approximate the rate at which the drug permeates through the human intestinal tissue."
)
_PPBR_CONTEXT = (
    "The human plasma protein binding rate (PPBR) is expressed as the percentage of a drug bound to plasma "
    "proteins in the blood. This rate strongly affect a drug's efficiency of delivery. The less bound a drug is, "
    "the more efficiently it can traverse and diffuse to the site of actions."
)
_LOGP_CONTEXT = (
    "Lipophilicity measures the ability of a drug to dissolve in a lipid (e.g. fats, oils) environment. High "
    "lipophilicity often leads to high rate of metabolism, poor solubility, high turn-over, and low absorption."
)
_AMES_CONTEXT = (
    "Mutagenicity means the ability of a drug to induce genetic alterations. Drugs that can cause damage to the "
    "DNA can result in cell death or other severe adverse effects. Nowadays, the most widely used assay for "
    "testing the mutagenicity of compounds is the Ames experiment which was invented by a professor named Ames. "
    "The Ames test is a short-term bacterial reverse mutation assay detecting a large number of compounds which "
    "can induce genetic damage and frameshift mutations."
)
_DILI_CONTEXT = (
    "Drug-induced liver injury (DILI) is fatal liver disease caused by drugs and it has been the single most "
    "frequent cause of safety-related drug marketing withdrawals for the past 50 years (e.g. iproniazid, "
    "ticrynafen, benoxaprofen)."
)
_HERG_CONTEXT = (
    "Human ether-à-go-go related gene (hERG) is crucial for the coordination of the heart's beating. Thus, if a "
    "drug blocks the hERG, it could lead to severe adverse effects. Therefore, reliable prediction of hERG "
    "liability in the early stages of drug design is quite important to reduce the risk of cardiotoxicity-related "
    "attritions in the later development stages."
)
_LD50_CONTEXT = (
    "Acute toxicity LD50 measures the most conservative dose that can lead to lethal adverse effects. The lower "
    "the dose, the more lethal of a drug."
)
_IC50_CONTEXT = (
    "The half-maximal inhibitory concentration (IC50) measures how much of a drug is needed to inhibit a "
    "biological target by half. A lower IC50 indicates a more potent binder."
)
_KD_CONTEXT = (
    "The dissociation constant (Kd) is the equilibrium constant of a drug-target complex dissociating into its "
    "components. A lower Kd indicates tighter binding between the drug and its target."
)
_CLINICAL_CONTEXT = {
    1: (
        "Phase 1 of a clinical trial explores the safety of a drug in a small group of healthy volunteers, "
        "establishing the dose range and identifying side effects."
    ),
    2: (
        "Phase 2 of a clinical trial explores the efficacy of a drug in a larger group of patients with the "
        "target disease while continuing to monitor safety."
    ),
    3: (
        "Phase 3 of a clinical trial confirms the efficacy of a drug in a large patient population, compares it "
        "with standard treatments and collects the safety data needed for approval."
    ),
}


def _clinical_template(phase: int) -> Callable[[str, str], str]:
    def build(smiles: str, target: str) -> str:
        return _question(
            _CLINICAL_INSTRUCTIONS,
            _CLINICAL_CONTEXT[phase],
            f"Given a drug SMILES string, predict whether it\n"
            f"(A) would not be approved in a phase {phase} trial (B) would be approved in a phase {phase} trial",
            smiles,
        )
    return build


# Each template takes (smiles, target); only binding templates use the target
PROMPT_TEMPLATES: Dict[str, Callable[[str, str], str]] = {
    "bbb": lambda smiles, target: _question(
        _INSTRUCTIONS, _BBB_CONTEXT,
        "Given a drug SMILES string, predict whether it\n(A) does not cross the BBB (B) crosses the BBB",
        smiles,
    ),
    "caco2": lambda smiles, target: _question(
        _INSTRUCTIONS, _CACO2_CONTEXT,
        "Given a drug SMILES string, predict its normalized Caco-2 cell effective permeability from 000 to 1000, "
        "where 000 is minimum permeability and 1000 is maximum permeability.",
        smiles,
    ),
    "ppbr": lambda smiles, target: _question(
        _INSTRUCTIONS, _PPBR_CONTEXT,
        "Given a drug SMILES string, predict its normalized rate of PPBR from 000 to 1000, "
        "where 000 is minimum PPBR rate and 1000 is maximum PPBR rate.",
        smiles,
    ),
    "logp": lambda smiles, target: _question(
        _INSTRUCTIONS, _LOGP_CONTEXT,
        "Given a drug SMILES string, predict its normalized lipophilicity from 000 to 1000, "
        "where 000 is minimum lipophilicity and 1000 is maximum lipophilicity.",
        smiles,
    ),
    "ames": lambda smiles, target: _question(
        _INSTRUCTIONS, _AMES_CONTEXT,
        "Given a drug SMILES string, predict whether it\n(A) is not mutagenic (B) is mutagenic",
        smiles,
    ),
    "dili": lambda smiles, target: _question(
        _INSTRUCTIONS, _DILI_CONTEXT,
        "Given a drug SMILES string, predict whether it\n(A) cannot cause DILI (B) can cause DILI",
        smiles,
    ),
    "herg": lambda smiles, target: _question(
        _INSTRUCTIONS, _HERG_CONTEXT,
        "Given a drug SMILES string, predict whether it\n(A) does not block hERG (B) blocks hERG",
        smiles,
    ),
    "ld50": lambda smiles, target: _question(
        _INSTRUCTIONS, _LD50_CONTEXT,
        "Given a drug SMILES string, predict its normalized LD50 from 000 to 1000, "
        "where 000 is minimum LD50 and 1000 is maximum LD50.",
        smiles,
    ),
    "ic50": lambda smiles, target: _binding_question(
        _IC50_CONTEXT,
        "Given the target amino acid sequence and compound SMILES string, predict their normalized binding "
        "affinity (IC50) from 000 to 1000, where 000 is minimum IC50 and 1000 is maximum IC50.",
        smiles, target,
    ),
    "kd": lambda smiles, target: _binding_question(
        _KD_CONTEXT,
        "Given the target amino acid sequence and compound SMILES string, predict their normalized binding "
        "affinity (Kd) from 000 to 1000, where 000 is minimum Kd and 1000 is maximum Kd.",
        smiles, target,
    ),
    "clinical_phase1": _clinical_template(1),
    "clinical_phase2": _clinical_template(2),
    "clinical_phase3": _clinical_template(3),
}


def build_prediction_prompt(property_id: str, smiles: str, target: Optional[str] = None) -> str:
    """Scoring prompt for one property; a missing target becomes "Unknown"."""
    template = PROMPT_TEMPLATES.get(property_id)
    if template is None:
        raise MissingTemplateError(property_id)
    return template(smiles, target or UNKNOWN_TARGET)


def build_explanation_prompt(property: PropertyDefinition, smiles: str, prediction: str) -> str:
    return f"""You are TxGemma, a therapeutic AI model. A molecule with SMILES "{smiles}" was predicted to have the following result for {property.name}: {prediction}.

In 2-3 sentences, explain why this molecule shows this property. Focus on the most relevant structural features (e.g. functional groups, MW, H-bond donors/acceptors, logP, charge). Be direct and scientifically precise. Do not add caveats, disclaimers, or closing remarks."""


CHAT_SYSTEM_PROMPT = """You are TxGemma, a therapeutic AI assistant specialized in drug discovery and molecular design. You help medicinal chemists design better drug candidates through conversational guidance.

You can:
- Suggest molecular modifications and design strategies
- Explain molecular properties and prediction results
- Recommend starting scaffolds and lead compounds
- Answer questions about ADMET, toxicity, binding affinity, and clinical trial outcomes

Be scientifically rigorous, cite specific structural features, and provide actionable insights. Keep responses concise but informative.

When suggesting molecules, include a JSON block in your response like this:
{"startingMolecules":[{"name":"Drug Name","smiles":"VALID_SMILES"}]}
Only include this JSON block when you are actively suggesting specific molecules. For general discussion, respond in plain text."""


def _prediction_fields(pred):
    if isinstance(pred, dict):
        return pred.get("property_id") or pred.get("propertyId"), pred.get("value")
    return pred.property_id, pred.value


def build_chat_system_prompt(current_smiles: Optional[str] = None, current_predictions: Optional[Iterable] = None) -> str:
    """
    System turn for open-ended chat.

    current_predictions holds PredictionResult objects or their JSON dicts
    (``propertyId`` or ``property_id`` plus ``value``); entries for properties
    missing from the catalog are left out.
    """
    prompt = CHAT_SYSTEM_PROMPT

    if current_smiles:
        prompt += f"\n\nThe user is currently working with this molecule: {current_smiles}"

        predictions = list(current_predictions or [])
        if predictions:
            prompt += "\nCurrent predictions for this molecule:"
            for pred in predictions:
                property_id, value = _prediction_fields(pred)
                prop = get_property_by_id(property_id) if property_id else None
                if prop:
                    prompt += f"\n- {prop.name}: {value}"

    return prompt


def build_design_guidance_prompt(therapeutic_goal: str) -> str:
    return f"""You are TxGemma, a therapeutic AI model specialized in drug design. A medicinal chemist has the following therapeutic goal:

"{therapeutic_goal}"

Provide structured design guidance in the following JSON format. Be concise and scientifically rigorous.

{{
  "summary": "A 2-3 sentence paragraph summarizing the recommended design strategy.",
  "suggestions": [
    {{"text": "Specific actionable suggestion", "type": "modify|add|remove|general"}}
  ],
  "startingMolecules": [
    {{"name": "Human-readable name", "smiles": "Valid SMILES string"}}
  ]
}}

Rules:
- Include 3-5 actionable suggestions. Use type "modify" for structural changes, "add" for new groups, "remove" for groups to avoid, "general" for strategy advice.
- Include 1-3 starting molecules with valid SMILES strings and descriptive names.
- Focus on practical medicinal chemistry modifications.
- Return ONLY the JSON object, no other text."""
