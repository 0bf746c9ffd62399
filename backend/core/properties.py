"""
Property Registry

Static catalog of the properties TxGemma can predict, grouped into
evaluation panels.

Design Philosophy:
- Every property declares how its answer is read: categorical properties
  carry their two label phrases and a polarity, continuous properties carry
  their unit and the formula that maps the model's 0-1000 score to real units
- Panels are ordered lists of property ids; order is display/export order
- Nothing here is mutated after import

Example usage:
    prop = get_property_by_id("logp")
    prop.rescaling.apply(500)            # 3.0

    [p.id for p in get_properties_for_panel("toxicity")]
    # ["ames", "dili", "herg", "ld50"]
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .errors import UnknownPropertyError

logger = logging.getLogger(__name__)


class PropertyKind(str, Enum):
    """How the model answers: a two-way choice or a bounded integer score."""
    CATEGORICAL = "categorical"
    CONTINUOUS = "continuous"


class PropertyCategory(str, Enum):
    PHARMACOKINETICS = "pharmacokinetics"
    TOXICITY = "toxicity"
    BINDING = "binding"
    CLINICAL = "clinical"


class Polarity(str, Enum):
    """
    Which categorical outcome is good news for a drug candidate.

    - SECOND_FAVORABLE: label B is favorable (e.g. crosses the BBB, passes a trial)
    - SECOND_UNFAVORABLE: label B is unfavorable (e.g. a toxicity flag)
    - NONE: no intrinsic direction, always neutral
    """
    SECOND_FAVORABLE = "second_favorable"
    SECOND_UNFAVORABLE = "second_unfavorable"
    NONE = "none"


# TxGemma regression tasks answer with an integer in this closed range
SCORE_MIN = 0
SCORE_MAX = 1000


@dataclass(frozen=True)
class Rescaling:
    """
    Maps the model's normalized score to physical units.

    Linear form: ``slope * raw + intercept``.
    With ``power_of_ten`` set: ``10 ** (slope * raw + intercept)``.
    """
    slope: float = 1.0
    intercept: float = 0.0
    power_of_ten: bool = False

    def apply(self, raw: int) -> float:
        value = self.slope * raw + self.intercept
        if self.power_of_ten:
            return 10 ** value
        return value


IDENTITY = Rescaling()


@dataclass(frozen=True)
class PropertyDefinition:
    """
    Catalog entry for one predictable property.

    Attributes:
        id: Stable identifier used by prompts, cache keys and the API
        name: Display name
        short_name: Compact label for tables and cards
        category: Pharmacokinetics, toxicity, binding or clinical
        kind: Categorical or continuous
        description: One-line human description
        unit: Unit suffix for continuous values ("" for unitless)
        labels: Categorical only, phrase for each of the labels "A" and "B"
        polarity: Categorical only, which label is favorable
        rescaling: Continuous only, score-to-units formula
        requires_target: Prompt embeds a protein target
    """
    id: str
    name: str
    short_name: str
    category: PropertyCategory
    kind: PropertyKind
    description: str
    unit: str = ""
    labels: Dict[str, str] = field(default_factory=dict)
    polarity: Polarity = Polarity.NONE
    rescaling: Rescaling = IDENTITY
    requires_target: bool = False

    @property
    def is_categorical(self) -> bool:
        return self.kind == PropertyKind.CATEGORICAL

    @property
    def is_continuous(self) -> bool:
        return self.kind == PropertyKind.CONTINUOUS

    def label_phrase(self, label: str) -> str:
        """Human phrase for a categorical label, or the label itself."""
        return self.labels.get(label, label)

    def to_dict(self) -> Dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        data = {
            "id": self.id,
            "name": self.name,
            "shortName": self.short_name,
            "category": self.category.value,
            "type": self.kind.value,
            "description": self.description,
        }
        if self.is_continuous:
            data["unit"] = self.unit
        if self.labels:
            data["labels"] = dict(self.labels)
        return data


PROPERTY_DEFINITIONS: Tuple[PropertyDefinition, ...] = (
    PropertyDefinition(
        id="bbb",
        name="Blood-Brain Barrier Penetration",
        short_name="BBB",
        category=PropertyCategory.PHARMACOKINETICS,
        kind=PropertyKind.CATEGORICAL,
        description="Whether the drug can cross the blood-brain barrier",
        labels={"A": "Does not cross", "B": "Crosses BBB"},
        polarity=Polarity.SECOND_FAVORABLE,
    ),
    PropertyDefinition(
        id="caco2",
        name="Caco-2 Permeability",
        short_name="Caco-2",
        category=PropertyCategory.PHARMACOKINETICS,
        kind=PropertyKind.CONTINUOUS,
        unit="cm/s (log)",
        description="Intestinal permeability measured via Caco-2 cell assay",
        rescaling=Rescaling(slope=1 / 200, intercept=-3),
    ),
    PropertyDefinition(
        id="ppbr",
        name="Plasma Protein Binding Rate",
        short_name="PPBR",
        category=PropertyCategory.PHARMACOKINETICS,
        kind=PropertyKind.CONTINUOUS,
        unit="%",
        description="Percentage of drug bound to plasma proteins",
        rescaling=Rescaling(slope=1 / 10),
    ),
    PropertyDefinition(
        id="logp",
        name="Lipophilicity (logP)",
        short_name="logP",
        category=PropertyCategory.PHARMACOKINETICS,
        kind=PropertyKind.CONTINUOUS,
        unit="",
        description="Octanol-water partition coefficient measuring lipophilicity",
        rescaling=Rescaling(slope=1 / 100, intercept=-2),
    ),
    PropertyDefinition(
        id="ames",
        name="AMES Mutagenicity",
        short_name="AMES",
        category=PropertyCategory.TOXICITY,
        kind=PropertyKind.CATEGORICAL,
        description="Whether the drug is mutagenic in the Ames bacterial reverse mutation assay",
        labels={"A": "Not mutagenic", "B": "Mutagenic"},
        polarity=Polarity.SECOND_UNFAVORABLE,
    ),
    PropertyDefinition(
        id="dili",
        name="Drug-Induced Liver Injury",
        short_name="DILI",
        category=PropertyCategory.TOXICITY,
        kind=PropertyKind.CATEGORICAL,
        description="Risk of drug-induced hepatotoxicity",
        labels={"A": "No DILI risk", "B": "DILI risk"},
        polarity=Polarity.SECOND_UNFAVORABLE,
    ),
    PropertyDefinition(
        id="herg",
        name="hERG Channel Inhibition",
        short_name="hERG",
        category=PropertyCategory.TOXICITY,
        kind=PropertyKind.CATEGORICAL,
        description="Cardiotoxicity risk from hERG potassium channel blockade",
        labels={"A": "No inhibition", "B": "Inhibits hERG"},
        polarity=Polarity.SECOND_UNFAVORABLE,
    ),
    PropertyDefinition(
        id="ld50",
        name="Acute Toxicity (LD50)",
        short_name="LD50",
        category=PropertyCategory.TOXICITY,
        kind=PropertyKind.CONTINUOUS,
        unit="mg/kg",
        description="Lethal dose for 50% of test population",
        rescaling=Rescaling(slope=1 / 100, intercept=-1, power_of_ten=True),
    ),
    PropertyDefinition(
        id="ic50",
        name="IC50 Binding Affinity",
        short_name="IC50",
        category=PropertyCategory.BINDING,
        kind=PropertyKind.CONTINUOUS,
        unit="nM (log)",
        description="Half-maximal inhibitory concentration for target binding",
        rescaling=IDENTITY,
        requires_target=True,
    ),
    PropertyDefinition(
        id="kd",
        name="Dissociation Constant (Kd)",
        short_name="Kd",
        category=PropertyCategory.BINDING,
        kind=PropertyKind.CONTINUOUS,
        unit="nM (log)",
        description="Equilibrium dissociation constant for drug-target binding",
        rescaling=IDENTITY,
        requires_target=True,
    ),
    PropertyDefinition(
        id="clinical_phase1",
        name="Phase 1 Trial Approval",
        short_name="Phase 1",
        category=PropertyCategory.CLINICAL,
        kind=PropertyKind.CATEGORICAL,
        description="Predicted likelihood of passing Phase 1 clinical trial",
        labels={"A": "Fails", "B": "Passes"},
        polarity=Polarity.SECOND_FAVORABLE,
    ),
    PropertyDefinition(
        id="clinical_phase2",
        name="Phase 2 Trial Approval",
        short_name="Phase 2",
        category=PropertyCategory.CLINICAL,
        kind=PropertyKind.CATEGORICAL,
        description="Predicted likelihood of passing Phase 2 clinical trial",
        labels={"A": "Fails", "B": "Passes"},
        polarity=Polarity.SECOND_FAVORABLE,
    ),
    PropertyDefinition(
        id="clinical_phase3",
        name="Phase 3 Trial Approval",
        short_name="Phase 3",
        category=PropertyCategory.CLINICAL,
        kind=PropertyKind.CATEGORICAL,
        description="Predicted likelihood of passing Phase 3 clinical trial",
        labels={"A": "Fails", "B": "Passes"},
        polarity=Polarity.SECOND_FAVORABLE,
    ),
)

_PROPERTIES_BY_ID: Dict[str, PropertyDefinition] = {p.id: p for p in PROPERTY_DEFINITIONS}


# Evaluation panels: ordered property ids
PANELS: Dict[str, List[str]] = {
    "admet": ["bbb", "caco2", "ppbr", "logp", "ames", "dili", "herg", "ld50"],
    "bbb": ["bbb", "logp", "caco2", "ppbr"],
    "toxicity": ["ames", "dili", "herg", "ld50"],
    "binding": ["ic50", "kd"],
    "clinical": ["clinical_phase1", "clinical_phase2", "clinical_phase3"],
}

PANEL_LABELS: Dict[str, str] = {
    "admet": "General ADMET",
    "bbb": "BBB Penetration",
    "toxicity": "Toxicity Panel",
    "binding": "Binding Affinity",
    "clinical": "Clinical Trial",
}


EXAMPLE_MOLECULES: List[Dict[str, str]] = [
    {"name": "Aspirin", "smiles": "CC(=O)Oc1ccccc1C(=O)O"},
    {"name": "Caffeine", "smiles": "Cn1c(=O)c2c(ncn2C)n(c1=O)C"},
    {"name": "Ibuprofen", "smiles": "CC(C)Cc1ccc(cc1)[C@@H](C)C(=O)O"},
    {"name": "Diazepam", "smiles": "CN1C(=O)CN=C(c2ccccc21)c3ccccc3Cl"},
    {"name": "Metformin", "smiles": "CN(C)C(=N)NC(=N)N"},
    {"name": "Penicillin G", "smiles": "CC1([C@@H](N2[C@H](S1)[C@@H](C2=O)NC(=O)Cc3ccccc3)C(=O)O)C"},
]

# Scaffold templates for SAR enumeration; [R1].. are substitution points
SCAFFOLDS: List[Dict[str, object]] = [
    {"name": "Benzene", "smiles": "c1cc([R1])c([R2])cc1[R3]", "rCount": 3},
    {"name": "Pyridine", "smiles": "c1cc([R1])ncc1[R2]", "rCount": 2},
    {"name": "Pyrimidine", "smiles": "c1nc([R1])nc(c1)[R2]", "rCount": 2},
    {"name": "Piperidine", "smiles": "C1CC([R1])NCC1[R2]", "rCount": 2},
    {"name": "Indole", "smiles": "c1ccc2c(c1)[nH]c([R1])c2[R2]", "rCount": 2},
    {"name": "Naphthalene", "smiles": "c1cc2cc([R1])ccc2c([R2])c1", "rCount": 2},
    {"name": "Thiophene", "smiles": "c1cc([R1])sc1[R2]", "rCount": 2},
    {"name": "Imidazole", "smiles": "c1nc([R1])c[nH]1", "rCount": 1},
]

R_GROUPS: List[Dict[str, str]] = [
    {"name": "H (none)", "smiles": "[H]"},
    {"name": "F", "smiles": "F"},
    {"name": "Cl", "smiles": "Cl"},
    {"name": "Br", "smiles": "Br"},
    {"name": "OH", "smiles": "O"},
    {"name": "NH2", "smiles": "N"},
    {"name": "CH3", "smiles": "C"},
    {"name": "CF3", "smiles": "C(F)(F)F"},
    {"name": "OCH3", "smiles": "OC"},
    {"name": "CN", "smiles": "C#N"},
    {"name": "NO2", "smiles": "[N+](=O)[O-]"},
    {"name": "COOH", "smiles": "C(=O)O"},
    {"name": "COMe", "smiles": "C(=O)C"},
    {"name": "SO2Me", "smiles": "S(=O)(=O)C"},
    {"name": "NHAc", "smiles": "NC(=O)C"},
    {"name": "tBu", "smiles": "C(C)(C)C"},
    {"name": "Phenyl", "smiles": "c1ccccc1"},
]


def get_property_by_id(property_id: str) -> Optional[PropertyDefinition]:
    """Look up a property definition, or None if it is not in the catalog."""
    return _PROPERTIES_BY_ID.get(property_id)


def require_property(property_id: str) -> PropertyDefinition:
    """Look up a property definition for scoring; unknown ids are an error."""
    prop = _PROPERTIES_BY_ID.get(property_id)
    if prop is None:
        raise UnknownPropertyError(property_id)
    return prop


def get_properties_for_panel(panel_id: str) -> List[PropertyDefinition]:
    """
    Expand a panel into its ordered property definitions.

    Unknown panels yield an empty list; unknown ids inside a panel are dropped.
    """
    ids = PANELS.get(panel_id, [])
    properties = []
    for property_id in ids:
        prop = _PROPERTIES_BY_ID.get(property_id)
        if prop is None:
            logger.debug(f"Panel {panel_id} lists unknown property {property_id}")
            continue
        properties.append(prop)
    return properties


def list_properties() -> List[PropertyDefinition]:
    return list(PROPERTY_DEFINITIONS)
