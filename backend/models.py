"""
Pydantic models for the Elion API
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict
from enum import Enum
from datetime import datetime


class PredictionStatus(str, Enum):
    """Direction of a result for a drug candidate"""
    FAVORABLE = "positive"
    UNFAVORABLE = "negative"
    NEUTRAL = "neutral"


class PredictionResult(BaseModel):
    """Outcome of scoring one property for one molecule"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    property_id: str = Field(..., alias="propertyId")
    value: str = Field(..., description="Display value, e.g. 'Crosses BBB' or '1.19'")
    numeric_value: Optional[float] = Field(None, alias="numericValue", description="Continuous properties only")
    label: Optional[str] = Field(None, description="Categorical label, 'A' or 'B'")
    confidence: Optional[float] = Field(None, ge=0, le=1)
    status: PredictionStatus = PredictionStatus.NEUTRAL
    error: Optional[str] = Field(None, description="Set only on placeholder results for failed properties")

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def failure(cls, property_id: str, message: str) -> "PredictionResult":
        """Placeholder result for a property whose round trip failed"""
        return cls(
            property_id=property_id,
            value="Error",
            status=PredictionStatus.NEUTRAL,
            error=message or "Prediction failed",
        )


class ExplanationResult(BaseModel):
    """Structural rationale for one prediction"""
    model_config = ConfigDict(populate_by_name=True)

    property_id: str = Field(..., alias="propertyId")
    smiles: str
    explanation: str


class SuggestionType(str, Enum):
    MODIFY = "modify"
    ADD = "add"
    REMOVE = "remove"
    GENERAL = "general"


class DesignSuggestion(BaseModel):
    text: str
    type: str = SuggestionType.GENERAL.value


class StartingMolecule(BaseModel):
    name: str
    smiles: str


class StructuredContent(BaseModel):
    """Payload the assistant may embed in a chat reply"""
    suggestions: Optional[List[DesignSuggestion]] = None
    molecules: Optional[List[StartingMolecule]] = None


class ChatReply(BaseModel):
    """Decoded assistant reply: plain text plus an optional structured payload"""
    text: str
    structured: Optional[StructuredContent] = None


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ChatTurn(BaseModel):
    """One turn of a conversation"""
    model_config = ConfigDict(populate_by_name=True)

    role: ChatRole
    content: str
    timestamp: Optional[datetime] = None
    structured: Optional[StructuredContent] = Field(None, alias="structuredContent")


class DesignGuidance(BaseModel):
    """Structured design advice for a therapeutic goal"""
    model_config = ConfigDict(populate_by_name=True)

    summary: str
    suggestions: List[DesignSuggestion] = []
    starting_molecules: List[StartingMolecule] = Field(default_factory=list, alias="startingMolecules")
    query: str = ""


# ============= API request / response models =============

class PredictRequest(BaseModel):
    """Request for a panel of property predictions"""
    smiles: str = Field("", description="Molecule SMILES")
    properties: List[str] = Field(default_factory=list, description="Property ids in display order")
    target: Optional[str] = Field(None, description="Protein identifier or sequence for binding properties")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "smiles": "CC(=O)Oc1ccccc1C(=O)O",
                "properties": ["bbb", "logp"]
            }
        }
    )


class PredictResponse(BaseModel):
    predictions: List[PredictionResult]


class ExplainRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    smiles: str = ""
    property_id: str = Field("", alias="propertyId")
    prediction: str = ""


class ExplainResponse(BaseModel):
    explanation: str


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    messages: List[ChatTurn] = Field(default_factory=list)
    current_smiles: Optional[str] = Field(None, alias="currentSmiles")
    current_predictions: Optional[List[PredictionResult]] = Field(None, alias="currentPredictions")


class DesignGuidanceRequest(BaseModel):
    goal: str = Field("", description="Therapeutic goal in plain language")


class ValidateRequest(BaseModel):
    smiles: str = ""


class ValidateResponse(BaseModel):
    valid: bool
    error: Optional[str] = None


class SARRequest(BaseModel):
    """Enumerate a scaffold with R-group options and evaluate every member"""
    model_config = ConfigDict(populate_by_name=True)

    scaffold: str
    r_groups: Dict[str, List[str]] = Field(..., alias="rGroups")
    properties: List[str] = Field(default_factory=list)
    scaffold_name: Optional[str] = Field(None, alias="scaffoldName")


class SAREntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    smiles: str
    scaffold_name: Optional[str] = Field(None, alias="scaffoldName")
    r_groups: Dict[str, str] = Field(default_factory=dict, alias="rGroups")
    predictions: List[PredictionResult] = []


class SARResponse(BaseModel):
    entries: List[SAREntry]
