"""
Core building blocks for the Elion assistant.

Property catalog, prompt templates, response parsing, the static answer
cache and SMILES checks. Nothing in here performs I/O.
"""

from .errors import (
    ElionError,
    ConfigurationError,
    CredentialsError,
    GatewayError,
    UnknownPropertyError,
    MissingTemplateError,
    InvalidRequestError,
)

from .properties import (
    PropertyDefinition,
    PropertyKind,
    PropertyCategory,
    Polarity,
    Rescaling,
    PROPERTY_DEFINITIONS,
    PANELS,
    get_property_by_id,
    get_properties_for_panel,
    require_property,
)

from .prompts import (
    build_prediction_prompt,
    build_explanation_prompt,
    build_chat_system_prompt,
    build_design_guidance_prompt,
)

from .parsing import (
    CategoricalDecoding,
    ContinuousDecoding,
    decode_categorical,
    decode_continuous,
    parse_prediction,
    extract_structured_reply,
    parse_design_guidance,
)

from .answer_cache import (
    lookup_predictions,
    lookup_explanation,
    lookup_chat_reply,
)

from .smiles import (
    ValidationResult,
    validate_smiles,
    generate_library,
    unfilled_placeholders,
)

__all__ = [
    # Errors
    "ElionError",
    "ConfigurationError",
    "CredentialsError",
    "GatewayError",
    "UnknownPropertyError",
    "MissingTemplateError",
    "InvalidRequestError",
    # Property registry
    "PropertyDefinition",
    "PropertyKind",
    "PropertyCategory",
    "Polarity",
    "Rescaling",
    "PROPERTY_DEFINITIONS",
    "PANELS",
    "get_property_by_id",
    "get_properties_for_panel",
    "require_property",
    # Prompts
    "build_prediction_prompt",
    "build_explanation_prompt",
    "build_chat_system_prompt",
    "build_design_guidance_prompt",
    # Parsing
    "CategoricalDecoding",
    "ContinuousDecoding",
    "decode_categorical",
    "decode_continuous",
    "parse_prediction",
    "extract_structured_reply",
    "parse_design_guidance",
    # Answer cache
    "lookup_predictions",
    "lookup_explanation",
    "lookup_chat_reply",
    # SMILES
    "ValidationResult",
    "validate_smiles",
    "generate_library",
    "unfilled_placeholders",
]
