"""
Ground-state electron configurations by the aufbau (Madelung) filling order.

Electrons fill sub-shells in the fixed order

    1s 2s 2p 3s 3p 4s 3d 4p 5s 4d 5p 6s 4f 5d 6p 7s 5f 6d 7p

with capacities s 2, p 6, d 10, f 14. This is the textbook simplification:
the known exceptions (Cr, Cu, ...) are not special-cased.

Shells are named by principal quantum number, K殻 (n=1) through Q殻 (n=7).
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field

MAX_ATOMIC_NUMBER = 118

FILLING_ORDER = [
    (1, "s"), (2, "s"), (2, "p"), (3, "s"), (3, "p"), (4, "s"), (3, "d"),
    (4, "p"), (5, "s"), (4, "d"), (5, "p"), (6, "s"), (4, "f"), (5, "d"),
    (6, "p"), (7, "s"), (5, "f"), (6, "d"), (7, "p"),
]

ORBITAL_CAPACITY = {"s": 2, "p": 6, "d": 10, "f": 14}

SHELL_LETTERS = "KLMNOPQ"

# Noble-gas cores usable in shorthand notation, e.g. "[Ne] 3s¹"
NOBLE_CORES = {"He": 2, "Ne": 10, "Ar": 18, "Kr": 36, "Xe": 54, "Rn": 86}
NOBLE_GASES = frozenset(NOBLE_CORES.values())

# Last atomic number of each period
PERIOD_ENDS = [2, 10, 18, 36, 54, 86]

SUPERSCRIPT_DIGITS = "⁰¹²³⁴⁵⁶⁷⁸⁹"
_FROM_SUPERSCRIPT = str.maketrans(SUPERSCRIPT_DIGITS, "0123456789")

_ORBITAL_PATTERN = re.compile(r"(\d+)([spdf])([0-9]+|[⁰¹²³⁴⁵⁶⁷⁸⁹]+)?")
_CORE_PATTERN = re.compile(r"\[([A-Z][a-z]?)\]")


def superscript(number: int) -> str:
    """Render a non-negative integer with Unicode superscript digits."""
    return "".join(SUPERSCRIPT_DIGITS[int(d)] for d in str(number))


def shell_name(n: int) -> str:
    """K殻 for n=1 through Q殻 for n=7."""
    if not 1 <= n <= len(SHELL_LETTERS):
        msg = f"Principal quantum number must be in 1..{len(SHELL_LETTERS)}, got {n}"
        raise ValueError(msg)
    return f"{SHELL_LETTERS[n - 1]}殻"


@dataclass(frozen=True)
class Orbital:
    """One occupied sub-shell such as 3d⁶."""

    n: int
    l: str  # "s", "p", "d" or "f"
    electrons: int

    @property
    def name(self) -> str:
        return f"{self.n}{self.l}"

    @property
    def capacity(self) -> int:
        return ORBITAL_CAPACITY[self.l]

    @property
    def fill_fraction(self) -> float:
        return self.electrons / self.capacity

    def __str__(self) -> str:
        return f"{self.name}{superscript(self.electrons)}"


@dataclass
class Shell:
    """All occupied sub-shells sharing a principal quantum number."""

    n: int
    orbitals: list[Orbital] = field(default_factory=list)

    @property
    def name(self) -> str:
        return shell_name(self.n)

    @property
    def electrons(self) -> int:
        return sum(orbital.electrons for orbital in self.orbitals)


@dataclass
class ElectronConfiguration:
    """
    Electron configuration of a neutral atom.

    Attributes:
        atomic_number: Z, equal to the electron count
        orbitals: Occupied sub-shells in filling order
    """

    atomic_number: int
    orbitals: list[Orbital]

    @property
    def total_electrons(self) -> int:
        return sum(orbital.electrons for orbital in self.orbitals)

    @property
    def shells(self) -> list[Shell]:
        """Sub-shells grouped by n, sorted by n."""
        by_n: dict[int, Shell] = {}
        for orbital in self.orbitals:
            by_n.setdefault(orbital.n, Shell(orbital.n)).orbitals.append(orbital)
        return [by_n[n] for n in sorted(by_n)]

    @property
    def electrons_per_shell(self) -> list[int]:
        return [shell.electrons for shell in self.shells]

    @property
    def notation(self) -> str:
        """Full notation in filling order, e.g. '1s² 2s² 2p⁶ 3s¹'."""
        return " ".join(str(orbital) for orbital in self.orbitals)


def _check_atomic_number(atomic_number: int) -> None:
    if not 1 <= atomic_number <= MAX_ATOMIC_NUMBER:
        msg = f"Atomic number must be in 1..{MAX_ATOMIC_NUMBER}, got {atomic_number}"
        raise ValueError(msg)


def electron_configuration(atomic_number: int) -> ElectronConfiguration:
    """
    Fill sub-shells in aufbau order until Z electrons are placed.

    Args:
        atomic_number: Z in 1..118

    Returns:
        ElectronConfiguration with orbitals in filling order

    Raises:
        ValueError: Z outside 1..118
    """
    _check_atomic_number(atomic_number)
    remaining = atomic_number
    orbitals = []
    for n, l in FILLING_ORDER:
        if remaining <= 0:
            break
        electrons = min(remaining, ORBITAL_CAPACITY[l])
        orbitals.append(Orbital(n, l, electrons))
        remaining -= electrons
    return ElectronConfiguration(atomic_number, orbitals)


def parse_configuration(text: str) -> ElectronConfiguration:
    """
    Parse notation such as '1s2 2s2 2p6', '1s² 2s²' or '[Ne] 3s¹'.

    A bracketed noble-gas core expands to that gas's full configuration.
    A sub-shell with no count holds one electron. The atomic number is taken
    to be the total electron count.

    Raises:
        ValueError: Unknown core, over-filled sub-shell, or nothing to parse
    """
    orbitals: list[Orbital] = []
    rest = text.strip()

    core = _CORE_PATTERN.match(rest)
    if core:
        symbol = core.group(1)
        if symbol not in NOBLE_CORES:
            msg = f"Unknown noble-gas core [{symbol}]"
            raise ValueError(msg)
        orbitals.extend(electron_configuration(NOBLE_CORES[symbol]).orbitals)
        rest = rest[core.end():]

    for match in _ORBITAL_PATTERN.finditer(rest):
        n, l, count = match.groups()
        electrons = int(count.translate(_FROM_SUPERSCRIPT)) if count else 1
        orbital = Orbital(int(n), l, electrons)
        if not 0 < electrons <= orbital.capacity:
            msg = f"{orbital.name} cannot hold {electrons} electrons"
            raise ValueError(msg)
        orbitals.append(orbital)

    if not orbitals:
        msg = f"No orbitals found in {text!r}"
        raise ValueError(msg)
    return ElectronConfiguration(sum(o.electrons for o in orbitals), orbitals)


def period_of(atomic_number: int) -> int:
    """Period (row) of the periodic table."""
    _check_atomic_number(atomic_number)
    for period, last in enumerate(PERIOD_ENDS, start=1):
        if atomic_number <= last:
            return period
    return len(PERIOD_ENDS) + 1


def outer_orbital_type(atomic_number: int) -> str:
    """Block (s, p, d or f) of the sub-shell being filled."""
    return electron_configuration(atomic_number).orbitals[-1].l


def stability_note(atomic_number: int) -> str:
    """Short remark on how stable the outer shell is, or '' if none applies."""
    _check_atomic_number(atomic_number)
    if atomic_number in NOBLE_GASES:
        return "完全に満たされた電子殻を持ち、非常に安定した電子配置です。"
    if (atomic_number - 1) % 8 == 0:
        return "外殻の電子が1つだけで、反応性が高い電子配置です。"
    if (atomic_number - 2) % 8 == 0:
        return "外殻に2つの電子を持ち、比較的安定した電子配置です。"
    if (atomic_number - 7) % 8 == 0:
        return "外殻に7つの電子を持ち、1つの電子を受け入れる傾向があります。"
    return ""


def describe(atomic_number: int) -> str:
    """One-paragraph explanation: period, outer block and stability."""
    return (
        f"この元素は周期表の第{period_of(atomic_number)}周期に位置し、"
        f"最外殻では主に{outer_orbital_type(atomic_number)}軌道に電子が配置されています。"
        f"{stability_note(atomic_number)}"
    )
