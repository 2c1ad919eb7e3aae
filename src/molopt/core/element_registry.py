"""
Element registry supplying per-element force field parameters.

Force fields look up covalent and van der Waals radii here when they
assign parameters to the atoms of a molecule. Symbols that are not in the
table (dummy atoms, pseudoatoms) have no parameters.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class ElementData:
    """
    Immutable data for a chemical element.

    Attributes:
        symbol: Chemical symbol (e.g., "C", "Ar").
        name: Full element name.
        atomic_number: Atomic number Z.
        atomic_mass: Standard atomic mass in amu.
        covalent_radius: Covalent radius in Ångströms (optional).
        vdw_radius: Van der Waals radius in Ångströms (optional).
    """
    symbol: str
    name: str
    atomic_number: int
    atomic_mass: float
    covalent_radius: Optional[float] = None
    vdw_radius: Optional[float] = None


class ElementRegistry:
    """
    Registry of element data (Singleton pattern).

    Example:
        >>> from molopt.core import elements
        >>> elements["C"].covalent_radius
        0.76
        >>> "Xx" in elements
        False
    """

    _instance: Optional["ElementRegistry"] = None
    _initialized: bool = False

    def __new__(cls) -> "ElementRegistry":
        """Singleton: Only one registry instance exists."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if not ElementRegistry._initialized:
            self._elements: Dict[str, ElementData] = {}
            self._initialize_table()
            ElementRegistry._initialized = True

    def _initialize_table(self) -> None:
        """
        Populate the table.

        Radii: Cordero et al. (2008) covalent, Bondi / Alvarez van der Waals.
        """
        table = [
            ElementData("H", "Hydrogen", 1, 1.0080, 0.31, 1.10),
            ElementData("He", "Helium", 2, 4.0026, 0.28, 1.40),
            ElementData("Li", "Lithium", 3, 6.941, 1.28, 1.82),
            ElementData("B", "Boron", 5, 10.81, 0.84, 1.92),
            ElementData("C", "Carbon", 6, 12.011, 0.76, 1.70),
            ElementData("N", "Nitrogen", 7, 14.007, 0.71, 1.55),
            ElementData("O", "Oxygen", 8, 15.999, 0.66, 1.52),
            ElementData("F", "Fluorine", 9, 18.998, 0.57, 1.47),
            ElementData("Ne", "Neon", 10, 20.180, 0.58, 1.54),
            ElementData("Na", "Sodium", 11, 22.990, 1.66, 2.27),
            ElementData("Mg", "Magnesium", 12, 24.305, 1.41, 1.73),
            ElementData("Si", "Silicon", 14, 28.085, 1.11, 2.10),
            ElementData("P", "Phosphorus", 15, 30.974, 1.07, 1.80),
            ElementData("S", "Sulfur", 16, 32.06, 1.05, 1.80),
            ElementData("Cl", "Chlorine", 17, 35.45, 1.02, 1.75),
            ElementData("Ar", "Argon", 18, 39.948, 1.06, 1.88),
            ElementData("K", "Potassium", 19, 39.098, 2.03, 2.75),
            ElementData("Ca", "Calcium", 20, 40.078, 1.76, 2.31),
            ElementData("Fe", "Iron", 26, 55.845, 1.32, None),
            ElementData("Cu", "Copper", 29, 63.546, 1.32, 1.40),
            ElementData("Zn", "Zinc", 30, 65.38, 1.22, 1.39),
            ElementData("Br", "Bromine", 35, 79.904, 1.20, 1.85),
            ElementData("Kr", "Krypton", 36, 83.798, 1.16, 2.02),
            ElementData("I", "Iodine", 53, 126.90, 1.39, 1.98),
            ElementData("Xe", "Xenon", 54, 131.29, 1.40, 2.16),
        ]

        for element in table:
            self._elements[element.symbol] = element

    def get_element(self, symbol: str) -> Optional[ElementData]:
        """Return the data for *symbol*, or None if unknown."""
        return self._elements.get(symbol)

    def list_elements(self) -> List[str]:
        """Return the sorted list of known symbols."""
        return sorted(self._elements)

    def add_custom_element(self, element: ElementData) -> None:
        """
        Add a pseudoatom (united atom, coarse-grained bead) to the table.

        Raises:
            ValueError: If the symbol already exists.
        """
        if element.symbol in self._elements:
            raise ValueError(f"Element '{element.symbol}' already exists")
        self._elements[element.symbol] = element

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._elements

    def __getitem__(self, symbol: str) -> ElementData:
        element = self.get_element(symbol)
        if element is None:
            raise KeyError(f"Element '{symbol}' not found")
        return element

    def __len__(self) -> int:
        return len(self._elements)


# Module-level convenience instance (Singleton)
elements = ElementRegistry()
