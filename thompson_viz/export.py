import logging

from dataclasses import dataclass, field
from pathlib import Path

import networkx as nx
import pydot

from thompson_viz.errors import ExportError
from thompson_viz.graph import Automaton, StateTag
from thompson_viz.render import GraphSink, render_canonical, render_verbatim

logger = logging.getLogger(__name__)

EPSILON = "ε"
START_NODE = "start"
TAG_COLORS = {
    StateTag.CHAR: "black",
    StateTag.CONCAT_JOIN: "red",
    StateTag.ALTERNATION: "blue",
    StateTag.CLOSURE: "darkgreen",
}


class NetworkxSink(GraphSink):
    def __init__(self, colored: bool = True):
        self.colored = colored
        self.graph = nx.MultiDiGraph()
        self.graph.graph["graph"] = {"rankdir": "LR"}

    def mark_initial(self, state_id: int) -> None:
        self.graph.add_node(START_NODE, shape="point", label="")
        self.graph.add_edge(START_NODE, state_id)

    def draw_state(self, state_id: int, tag: StateTag | None) -> None:
        attributes = {"label": str(state_id), "shape": "circle"}
        if self.colored and tag is not None:
            attributes["color"] = TAG_COLORS[tag]
        self.graph.add_node(state_id, **attributes)

    def mark_accepting(self, state_id: int) -> None:
        self.graph.nodes[state_id]["shape"] = "doublecircle"

    def draw_edge(
        self, source: int, target: int, label: str | None, tag: StateTag
    ) -> None:
        attributes = {"label": EPSILON if label is None else label}
        if self.colored:
            attributes["color"] = TAG_COLORS[tag]
        self.graph.add_edge(source, target, **attributes)


def verbatim_graph(automaton: Automaton) -> nx.MultiDiGraph:
    sink = NetworkxSink(colored=True)
    render_verbatim(automaton, sink)
    return sink.graph


def canonical_graph(automaton: Automaton) -> nx.MultiDiGraph:
    sink = NetworkxSink(colored=False)
    render_canonical(automaton, sink)
    return sink.graph


def save_graph_as_dot(graph: nx.MultiDiGraph, path: Path):
    pdg = nx.drawing.nx_pydot.to_pydot(graph)
    pdg.write_raw(path, encoding="utf-8")
    logger.info("wrote %s", path)


def render_image(dot_path: Path, image_format: str = "png") -> Path:
    (pdg,) = pydot.graph_from_dot_file(dot_path, encoding="utf-8")
    image_path = Path(dot_path).with_suffix(f".{image_format}")
    try:
        pdg.write(image_path, format=image_format)
    # pydot reports a failing Graphviz run as AssertionError
    except (OSError, AssertionError) as e:
        raise ExportError(f"cannot render {dot_path}: {e}") from e
    logger.info("rendered %s", image_path)
    return image_path


@dataclass
class ExportConfig:
    output_dir: Path = Path(".")
    naive_name: str = "naive"
    smart_name: str = "smart"
    image_format: str = "png"
    render_images: bool = True


@dataclass
class ExportResult:
    dot_files: list[Path] = field(default_factory=list)
    images: list[Path] = field(default_factory=list)


def export_views(automaton: Automaton, config: ExportConfig) -> ExportResult:
    output_dir = Path(config.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    result = ExportResult()
    views = [
        (config.naive_name, verbatim_graph(automaton)),
        (config.smart_name, canonical_graph(automaton)),
    ]
    for name, graph in views:
        dot_path = output_dir / f"{name}.dot"
        save_graph_as_dot(graph, dot_path)
        result.dot_files.append(dot_path)
    if config.render_images:
        for dot_path in result.dot_files:
            result.images.append(render_image(dot_path, config.image_format))
    return result
