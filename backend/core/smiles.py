"""
SMILES syntax checks and scaffold library enumeration.

This is a superficial syntactic check (allowed characters, balanced
parentheses and brackets, paired ring closures), not a chemistry-aware
parser. Anything that passes still goes to the model as-is.
"""

import itertools
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

_SMILES_CHARS = re.compile(r"^[A-Za-z0-9@+\-\[\]()\\/=#%.*:~{}|,;]+$")
_HYDROGEN = "[H]"
_PLACEHOLDER = re.compile(r"\[R\d+\]")


@dataclass
class ValidationResult:
    valid: bool
    error: Optional[str] = None


def _balanced(text: str, opener: str, closer: str) -> bool:
    depth = 0
    for ch in text:
        if ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def _unpaired_ring_closures(text: str) -> List[str]:
    """Ring-closure labels opened but never closed; digits inside [...] are charges/isotopes."""
    open_rings = set()
    in_bracket = False
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "[":
            in_bracket = True
        elif ch == "]":
            in_bracket = False
        elif not in_bracket:
            label = None
            if ch == "%" and len(text[i + 1:i + 3]) == 2 and text[i + 1:i + 3].isdigit():
                label = text[i:i + 3]
                i += 2
            elif ch.isdigit():
                label = ch
            if label is not None:
                if label in open_rings:
                    open_rings.remove(label)
                else:
                    open_rings.add(label)
        i += 1
    return sorted(open_rings)


def validate_smiles(smiles: str) -> ValidationResult:
    if not smiles or not smiles.strip():
        return ValidationResult(False, "SMILES string is empty")

    trimmed = smiles.strip()

    if not _SMILES_CHARS.match(trimmed):
        return ValidationResult(False, "Contains invalid characters")
    if not _balanced(trimmed, "(", ")"):
        return ValidationResult(False, "Unbalanced parentheses")
    if not _balanced(trimmed, "[", "]"):
        return ValidationResult(False, "Unbalanced brackets")

    unpaired = _unpaired_ring_closures(trimmed)
    if unpaired:
        return ValidationResult(False, f"Unclosed ring bond(s): {', '.join(unpaired)}")

    return ValidationResult(True)


def generate_smiles_from_scaffold(scaffold_smiles: str, r_groups: Dict[str, str]) -> str:
    """
    Substitute R-group SMILES into a scaffold's [R1], [R2].. placeholders.

    "[H]" removes the placeholder; anything else is inserted as a branch.
    A placeholder already written as a branch, "([R1])", is replaced
    together with its parentheses.
    """
    result = scaffold_smiles
    for key, value in r_groups.items():
        placeholder = f"[{key}]"
        if f"({placeholder})" in result:
            placeholder = f"({placeholder})"
        substitute = "" if value == _HYDROGEN else f"({value})"
        result = result.replace(placeholder, substitute, 1)
    return result


def generate_library(scaffold_smiles: str, r_group_options: Dict[str, List[str]]) -> List[Dict[str, object]]:
    """Every combination of R-group choices, in option order."""
    keys = list(r_group_options.keys())
    library = []
    for combo in itertools.product(*(r_group_options[k] for k in keys)):
        r_groups = dict(zip(keys, combo))
        library.append({
            "smiles": generate_smiles_from_scaffold(scaffold_smiles, r_groups),
            "r_groups": r_groups,
        })
    return library


def unfilled_placeholders(smiles: str) -> List[str]:
    """[Rn] placeholders still present in a SMILES string."""
    return _PLACEHOLDER.findall(smiles)
