"""
Ball-and-stick view of a Molecule on a 3D matplotlib axes.

Atom markers are pooled by radius: removing an atom hides its marker and
returns it to the pool, adding a similar-sized atom later reuses it. New
atoms pop in by tweening their marker size with a BACK_OUT ease, and
highlight() fades back to normal after a few seconds. All effects run on
the Animator passed in, so they advance with the host's frame loop.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from scisim.chemistry.molecule import Molecule
from scisim.core.animation import Animator, Easing
from scisim.core.pool import ResourcePool
from scisim.errors import RenderBackendError

if TYPE_CHECKING:
    from matplotlib.figure import Figure
    from mpl_toolkits.mplot3d.art3d import Line3D

logger = logging.getLogger(__name__)

MARKER_SCALE = 20.0  # marker points per unit of atomic radius
POP_IN_DURATION = 0.3
HIGHLIGHT_COLOR = "#FFA500"
HIGHLIGHT_SCALE = 1.2
HIGHLIGHT_SECONDS = 5.0
BOND_WIDTHS = {"single": 2.0, "double": 4.0, "ionic": 1.0}
BOND_STYLES = {"single": "-", "double": "-", "ionic": ":"}
AXIS_LIMIT = 2.0


def create_3d_axes(fig: "Figure", rect: tuple[float, float, float, float]):
    """
    Add a 3D axes to fig.

    Raises:
        RenderBackendError: The 3D projection is unavailable
    """
    try:
        return fig.add_axes(rect, projection="3d")
    except Exception as exc:
        msg = f"3D表示を初期化できません: {exc}"
        raise RenderBackendError(msg) from exc


class MoleculeView:
    """
    Keeps a 3D axes in sync with a Molecule.

    Call sync() after changing the molecule; markers for new atoms are
    acquired and animated in, markers for removed atoms are released.
    """

    def __init__(self, ax, molecule: Molecule | None = None, animator: Animator | None = None):
        if getattr(ax, "name", None) != "3d":
            msg = "MoleculeView needs an axes with projection='3d'"
            raise RenderBackendError(msg)
        self.ax = ax
        self.molecule = molecule if molecule is not None else Molecule()
        self.animator = animator if animator is not None else Animator()
        self.pool: ResourcePool["Line3D"] = ResourcePool(self._create_marker, bucket_size=0.1)
        self.handles: dict[int, int] = {}  # atom id -> pool handle
        self.highlighted: set[int] = set()
        self._pop_ins: dict = {}  # atom id -> running pop-in tween
        self._restores: dict = {}  # atom id -> pending unhighlight
        self._bond_lines: list = []
        self._setup_axes()

    @classmethod
    def create(
        cls,
        fig: "Figure",
        rect: tuple[float, float, float, float],
        molecule: Molecule | None = None,
        animator: Animator | None = None,
    ) -> "MoleculeView":
        return cls(create_3d_axes(fig, rect), molecule, animator)

    def _setup_axes(self) -> None:
        for setter in (self.ax.set_xlim, self.ax.set_ylim, self.ax.set_zlim):
            setter(-AXIS_LIMIT, AXIS_LIMIT)
        self.ax.set_axis_off()

    def _create_marker(self, radius: float) -> "Line3D":
        (marker,) = self.ax.plot([0.0], [0.0], [0.0], marker="o", linestyle="none", markersize=0.0)
        marker.set_visible(False)
        return marker

    # ---- syncing -----------------------------------------------------------

    def marker_for(self, atom_id: int) -> "Line3D":
        return self.pool.get(self.handles[atom_id])

    def full_size(self, atom_id: int) -> float:
        return self.molecule.atoms[atom_id].element.radius * MARKER_SCALE

    def sync(self) -> None:
        """Match markers and bond lines to the molecule."""
        current = set(self.molecule.atoms)
        for atom_id in list(self.handles):
            if atom_id not in current:
                self._release(atom_id)
        for atom_id in sorted(current - set(self.handles)):
            self._acquire(atom_id)
        for atom_id in current:
            x, y, z = self.molecule.atoms[atom_id].position
            self.marker_for(atom_id).set_data_3d([x], [y], [z])
        self._draw_bonds()

    def _acquire(self, atom_id: int) -> None:
        atom = self.molecule.atoms[atom_id]
        handle = self.pool.acquire(atom.element.radius)
        self.handles[atom_id] = handle
        marker = self.pool.get(handle)
        marker.set_color(atom.element.hex_color)
        marker.set_markersize(0.0)
        marker.set_visible(True)
        self._pop_ins[atom_id] = self.animator.tween(
            0.0,
            self.full_size(atom_id),
            POP_IN_DURATION,
            marker.set_markersize,
            easing=Easing.BACK_OUT,
        )

    def _release(self, atom_id: int) -> None:
        handle = self.handles.pop(atom_id)
        task = self._pop_ins.pop(atom_id, None)
        if task is not None:
            self.animator.cancel(task)
        self._cancel_restore(atom_id)
        self.pool.get(handle).set_visible(False)
        self.pool.release(handle)
        self.highlighted.discard(atom_id)

    def _draw_bonds(self) -> None:
        for line in self._bond_lines:
            line.remove()
        self._bond_lines = []
        for bond in self.molecule.bonds:
            a = self.molecule.atoms[bond.first].position
            b = self.molecule.atoms[bond.second].position
            (line,) = self.ax.plot(
                [a[0], b[0]],
                [a[1], b[1]],
                [a[2], b[2]],
                color="#888888",
                linewidth=BOND_WIDTHS[bond.kind],
                linestyle=BOND_STYLES[bond.kind],
            )
            self._bond_lines.append(line)

    # ---- effects -----------------------------------------------------------

    def highlight(self, atom_id: int, seconds: float = HIGHLIGHT_SECONDS) -> None:
        """Enlarge and recolour an atom, restoring it after `seconds`."""
        marker = self.marker_for(atom_id)
        marker.set_color(HIGHLIGHT_COLOR)
        marker.set_markersize(self.full_size(atom_id) * HIGHLIGHT_SCALE)
        self.highlighted.add(atom_id)
        # A repeated highlight restarts the countdown
        self._cancel_restore(atom_id)
        self._restores[atom_id] = self.animator.call_later(seconds, lambda: self.unhighlight(atom_id))

    def _cancel_restore(self, atom_id: int) -> None:
        task = self._restores.pop(atom_id, None)
        if task is not None:
            self.animator.cancel(task)

    def unhighlight(self, atom_id: int) -> None:
        self._cancel_restore(atom_id)
        # The atom may have been removed while highlighted
        if atom_id not in self.highlighted or atom_id not in self.handles:
            return
        self.highlighted.discard(atom_id)
        marker = self.marker_for(atom_id)
        marker.set_color(self.molecule.atoms[atom_id].element.hex_color)
        marker.set_markersize(self.full_size(atom_id))

    def load_template(self, name: str) -> None:
        """Replace the molecule with a template and animate it in."""
        for atom_id in list(self.handles):
            self._release(atom_id)
        self.molecule = Molecule.from_template(name)
        self.sync()
        logger.info("Molecule view: %s (%s)", name, self.molecule.formula)

    def caption(self) -> str:
        m = self.molecule
        return f"{m.formula}  {m.molecular_weight:.3f} g/mol  {m.polarity_label}"
