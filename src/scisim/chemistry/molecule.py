"""
A small ball-and-stick molecule builder.

Atoms are placed at 3D positions (ångström-like units) and joined by bonds
whose type follows simple pair rules:
    O-O, N-N, C-O   double
    Na-Cl           ionic
    otherwise       single

A bond uses up valence equal to its order (double = 2); bonding past an
element's valence is rejected.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Element:
    symbol: str
    name: str
    color: int  # 0xRRGGBB
    radius: float
    mass: float  # g/mol
    valence: int

    @property
    def hex_color(self) -> str:
        return f"#{self.color:06X}"


ELEMENTS = {
    "H": Element("H", "水素", 0x88CCEE, 0.4, 1.008, 1),
    "C": Element("C", "炭素", 0x444444, 0.7, 12.011, 4),
    "N": Element("N", "窒素", 0x2255CC, 0.65, 14.007, 3),
    "O": Element("O", "酸素", 0xCC0000, 0.6, 15.999, 2),
    "F": Element("F", "フッ素", 0x77DD88, 0.5, 18.998, 1),
    "Na": Element("Na", "ナトリウム", 0x9955BB, 1.8, 22.990, 1),
    "Cl": Element("Cl", "塩素", 0x00CC44, 1.0, 35.453, 1),
}

# Pauling scale
ELECTRONEGATIVITY = {
    "H": 2.2,
    "C": 2.55,
    "N": 3.04,
    "O": 3.44,
    "F": 3.98,
    "Na": 0.93,
    "Cl": 3.16,
}
DEFAULT_ELECTRONEGATIVITY = 2.0

BOND_ORDERS = {"single": 1, "double": 2, "ionic": 1}

_DOUBLE_PAIRS = {frozenset(["O"]), frozenset(["N"]), frozenset(["C", "O"])}
_IONIC_PAIRS = {frozenset(["Na", "Cl"])}

# Electronegativity difference thresholds
POLAR_THRESHOLD = 0.4
IONIC_THRESHOLD = 1.7

_SUBSCRIPTS = str.maketrans("0123456789", "₀₁₂₃₄₅₆₇₈₉")


def electronegativity(symbol: str) -> float:
    return ELECTRONEGATIVITY.get(symbol, DEFAULT_ELECTRONEGATIVITY)


def bond_type(first: str, second: str) -> str:
    """'single', 'double' or 'ionic' for a pair of element symbols."""
    pair = frozenset([first, second])
    if pair in _DOUBLE_PAIRS:
        return "double"
    if pair in _IONIC_PAIRS:
        return "ionic"
    return "single"


@dataclass
class Atom:
    id: int
    symbol: str
    position: np.ndarray

    @property
    def element(self) -> Element:
        return ELEMENTS[self.symbol]


@dataclass(frozen=True)
class Bond:
    first: int
    second: int
    kind: str

    @property
    def order(self) -> int:
        return BOND_ORDERS[self.kind]

    def involves(self, atom_id: int) -> bool:
        return atom_id in (self.first, self.second)


@dataclass
class Molecule:
    """
    Mutable set of atoms and bonds.

    Atom ids are never reused within one molecule, even after removal.
    """

    atoms: dict[int, Atom] = field(default_factory=dict)
    bonds: list[Bond] = field(default_factory=list)
    _next_id: int = 0

    def add_atom(self, symbol: str, position=(0.0, 0.0, 0.0)) -> Atom:
        if symbol not in ELEMENTS:
            msg = f"Unknown element {symbol!r}; known: {', '.join(ELEMENTS)}"
            raise ValueError(msg)
        atom = Atom(self._next_id, symbol, np.array(position, dtype=np.float64))
        self.atoms[atom.id] = atom
        self._next_id += 1
        return atom

    def remove_atom(self, atom_id: int) -> Atom:
        """Remove an atom together with every bond it takes part in."""
        atom = self.atoms.pop(atom_id)
        self.bonds = [b for b in self.bonds if not b.involves(atom_id)]
        return atom

    def bonds_of(self, atom_id: int) -> list[Bond]:
        return [b for b in self.bonds if b.involves(atom_id)]

    def used_valence(self, atom_id: int) -> int:
        return sum(b.order for b in self.bonds_of(atom_id))

    def free_valence(self, atom_id: int) -> int:
        return self.atoms[atom_id].element.valence - self.used_valence(atom_id)

    def bonded(self, first: int, second: int) -> bool:
        return any(b.involves(first) and b.involves(second) for b in self.bonds)

    def bond(self, first: int, second: int) -> Bond:
        """
        Join two atoms with the bond type their elements call for.

        Raises:
            KeyError: Either atom does not exist
            ValueError: Same atom, already bonded, or valence exceeded
        """
        a, b = self.atoms[first], self.atoms[second]
        if first == second:
            msg = "Cannot bond an atom to itself"
            raise ValueError(msg)
        if self.bonded(first, second):
            msg = f"Atoms {first} and {second} are already bonded"
            raise ValueError(msg)
        new_bond = Bond(first, second, bond_type(a.symbol, b.symbol))
        for atom in (a, b):
            if self.free_valence(atom.id) < new_bond.order:
                msg = (
                    f"{atom.element.name} ({atom.symbol}) has valence {atom.element.valence}; "
                    f"cannot add a {new_bond.kind} bond"
                )
                raise ValueError(msg)
        self.bonds.append(new_bond)
        return new_bond

    def clear(self) -> None:
        self.atoms.clear()
        self.bonds.clear()

    def counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for atom in self.atoms.values():
            counts[atom.symbol] = counts.get(atom.symbol, 0) + 1
        return counts

    @property
    def formula(self) -> str:
        """Hill-order formula with subscript counts, e.g. 'CH₄', 'H₂O', 'ClNa'."""
        counts = self.counts()
        if "C" in counts:
            order = ["C"] + (["H"] if "H" in counts else [])
            order += sorted(s for s in counts if s not in ("C", "H"))
        else:
            order = sorted(counts)
        parts = []
        for symbol in order:
            n = counts[symbol]
            parts.append(symbol if n == 1 else symbol + str(n).translate(_SUBSCRIPTS))
        return "".join(parts)

    @property
    def molecular_weight(self) -> float:
        return sum(atom.element.mass for atom in self.atoms.values())

    @property
    def polarity(self) -> float:
        """Largest electronegativity difference across any bond (0 without bonds)."""
        differences = [
            abs(electronegativity(self.atoms[b.first].symbol) - electronegativity(self.atoms[b.second].symbol))
            for b in self.bonds
        ]
        return max(differences, default=0.0)

    @property
    def polarity_label(self) -> str:
        difference = self.polarity
        if difference < POLAR_THRESHOLD:
            return "無極性"
        if difference < IONIC_THRESHOLD:
            return "極性"
        return "イオン性"

    def center(self) -> np.ndarray:
        if not self.atoms:
            return np.zeros(3)
        return np.mean([atom.position for atom in self.atoms.values()], axis=0)

    @classmethod
    def from_template(cls, name: str) -> "Molecule":
        if name not in TEMPLATES:
            msg = f"Unknown template {name!r}; known: {', '.join(TEMPLATES)}"
            raise ValueError(msg)
        molecule = cls()
        TEMPLATES[name](molecule)
        logger.debug("Loaded template %s: %s", name, molecule.formula)
        return molecule


def _build_water(molecule: Molecule) -> None:
    oxygen = molecule.add_atom("O", (0.0, 0.0, 0.0))
    for x in (0.8, -0.8):
        hydrogen = molecule.add_atom("H", (x, 0.5, 0.0))
        molecule.bond(oxygen.id, hydrogen.id)


def _build_methane(molecule: Molecule) -> None:
    carbon = molecule.add_atom("C", (0.0, 0.0, 0.0))
    # Alternate cube corners form a tetrahedron
    for vertex in [(0.8, 0.8, 0.8), (-0.8, -0.8, 0.8), (0.8, -0.8, -0.8), (-0.8, 0.8, -0.8)]:
        hydrogen = molecule.add_atom("H", vertex)
        molecule.bond(carbon.id, hydrogen.id)


TEMPLATES: dict[str, Callable[[Molecule], None]] = {
    "H2O": _build_water,
    "CH4": _build_methane,
}
