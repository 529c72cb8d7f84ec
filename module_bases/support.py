import logging
import networkx as nx
import matplotlib.pyplot as plt
from typing import Any, Dict, Iterable, List, Optional

from . import config
from .family import LinearlyIndependentFamily

_logger = logging.getLogger(__name__)


def finite_union_of_supports(elements: Iterable[Any], basis) -> frozenset:
    """
    Union of the supports of finitely many elements.

    Args:
        elements: Finite collection of module elements
        basis: Basis to expand them in

    Returns:
        The labels used by at least one element; finite because every support is
    """
    union = set()
    for element in elements:
        union |= basis.support(element)
    return frozenset(union)


class SupportCover:
    """
    The result of taking the union of supports over a family.

    Attributes:
        union: Basis labels known to lie in some support
        covers_all: True if no basis label outside every support was found
        witness: A basis label outside every support, or None when covers_all holds
        exhaustive: True if covers_all was decided over the whole index set, False
            if only probe labels were inspected
        locations: Basis label -> a family label whose support contains it
        supports: Family label -> support, for the family members inspected
    """

    def __init__(self, union: frozenset, covers_all: bool, witness: Any = None, exhaustive: bool = True,
                 locations: Optional[Dict[Any, Any]] = None, supports: Optional[Dict[Any, frozenset]] = None):
        self.union = union
        self.covers_all = covers_all
        self.witness = witness
        self.exhaustive = exhaustive
        self.locations = locations or {}
        self.supports = supports or {}

    def incidence_graph(self) -> nx.Graph:
        """
        Bipartite graph between basis labels and family labels.

        An edge joins basis label i and family label k when i is in the support of v(k).
        """
        G = nx.Graph()
        for label in self.union:
            G.add_node(("basis", label), bipartite=0, label=repr(label))
        if self.witness is not None:
            G.add_node(("basis", self.witness), bipartite=0, label=repr(self.witness))
        for k, support in self.supports.items():
            G.add_node(("family", k), bipartite=1, label=repr(k))
            for label in support:
                G.add_edge(("basis", label), ("family", k))
        for label, k in self.locations.items():
            G.add_node(("family", k), bipartite=1, label=repr(k))
            G.add_edge(("basis", label), ("family", k))
        return G

    def visualize(self, figsize=(10, 8)) -> None:
        """
        Visualize the incidence graph using networkx and matplotlib.
        An uncovered witness label is drawn in red.

        Args:
            figsize: Figure size as a tuple (width, height)
        """
        G = self.incidence_graph()

        basis_nodes = [node for node, data in G.nodes(data=True) if data["bipartite"] == 0]

        plt.figure(figsize=figsize)
        pos = nx.bipartite_layout(G, basis_nodes) if basis_nodes else nx.spring_layout(G)

        colors = ["tomato" if node == ("basis", self.witness) else
                  ("skyblue" if node[0] == "basis" else "lightgreen") for node in G.nodes]
        nx.draw_networkx_nodes(G, pos, node_size=700, node_color=colors)
        nx.draw_networkx_edges(G, pos, edge_color="gray")

        labels = {node: data["label"] for node, data in G.nodes(data=True)}
        nx.draw_networkx_labels(G, pos, labels=labels, font_size=12)

        plt.axis("off")
        status = "covers all" if self.covers_all else f"misses {self.witness!r}"
        plt.title(f"Supports ({status})")
        plt.tight_layout()
        plt.show()

    def to_dict(self) -> Dict:
        """Convert the cover to a dictionary for serialization."""
        return {
            "union": sorted(repr(label) for label in self.union),
            "covers_all": self.covers_all,
            "witness": None if self.witness is None else repr(self.witness),
            "exhaustive": self.exhaustive,
            "locations": {repr(label): repr(k) for label, k in self.locations.items()},
        }

    def __str__(self) -> str:
        if self.covers_all:
            scope = "" if self.exhaustive else f" (on {len(self.locations)} probed labels)"
            return f"Supports cover all labels{scope}"
        return f"Supports miss label {self.witness!r}"

    def __repr__(self) -> str:
        return self.__str__()


def arbitrary_union_of_supports(family: LinearlyIndependentFamily, basis,
                                probes: Optional[Iterable[Any]] = None) -> SupportCover:
    """
    Union of the supports of a possibly infinite family, compared with the index set.

    A finite family is expanded in full. An infinite family is queried label by label
    through family.locate. When both the basis and the family are infinite only the
    probe labels can be inspected, and the result is marked non-exhaustive.

    Args:
        family: The family whose supports are collected
        basis: Basis to expand the family in
        probes: Basis labels to inspect when the index set is infinite
            (default: the first PROBE_COUNT labels)

    Returns:
        A SupportCover; when covers_all is False its witness is a label with
        basis.repr(v(k))[witness] = 0 for every k
    """
    index_set = basis.index_set

    if family.is_finite:
        supports = {k: basis.support(vector) for k, vector in family.members()}
        locations: Dict[Any, Any] = {}
        for k, support in supports.items():
            for label in support:
                locations.setdefault(label, k)
        union = frozenset(locations)

        # A finite union of finite supports leaves room in an infinite index set
        witness = index_set.pick_outside(union)
        _logger.debug("Union of %d supports has %d labels; uncovered label: %r", len(supports), len(union), witness)
        return SupportCover(union, witness is None, witness=witness, locations=locations, supports=supports)

    if index_set.is_finite:
        labels: List[Any] = list(index_set)
        exhaustive = True
    else:
        labels = list(probes) if probes is not None else index_set.sample(config.PROBE_COUNT)
        exhaustive = False

    locations = {}
    for label in labels:
        k = family.locate(label, basis)
        if k is None:
            _logger.debug("Basis label %r is in no support of %s", label, family)
            return SupportCover(frozenset(locations), False, witness=label, exhaustive=exhaustive,
                                locations=locations)
        locations[label] = k

    if not exhaustive:
        _logger.warning("Covering of %s by %s decided on %d probe labels only", index_set, family, len(labels))
    return SupportCover(frozenset(locations), True, exhaustive=exhaustive, locations=locations)
