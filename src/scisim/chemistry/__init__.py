"""
Chemistry helpers.

- electron_configuration / parse_configuration: aufbau filling and notation
- period_of, stability_note, describe: periodic-table commentary
- Molecule: ball-and-stick builder with valence checks, formula and polarity
"""

from scisim.chemistry.electron_config import (
    ElectronConfiguration,
    Orbital,
    Shell,
    describe,
    electron_configuration,
    parse_configuration,
    period_of,
    stability_note,
)
from scisim.chemistry.molecule import (
    ELEMENTS,
    Atom,
    Bond,
    Element,
    Molecule,
    bond_type,
    electronegativity,
)

__all__ = [
    "ElectronConfiguration",
    "Orbital",
    "Shell",
    "describe",
    "electron_configuration",
    "parse_configuration",
    "period_of",
    "stability_note",
    "ELEMENTS",
    "Atom",
    "Bond",
    "Element",
    "Molecule",
    "bond_type",
    "electronegativity",
]
