"""Static inspection and visualization of loaded programs."""
from __future__ import annotations

from pathlib import Path

import networkx as nx
import pydot

from .core import Command, Program

ROOT_NODE = "program"

DEPTH_COLORS = [
    "#8BC34A",
    "#FFEB3B",
    "#FF7043",
    "#9575CD",
    "#B0BEC5",
]


def loop_pairs(program: Program) -> list[tuple[int, int]]:
    """Return ``(start, end)`` for every loop, ordered by loop start."""

    return [
        (index, instr.target)
        for index, instr in enumerate(program)
        if instr.command is Command.LOOP_START
    ]


def loop_depths(program: Program) -> list[int]:
    """Nesting depth of each instruction; brackets sit outside their loop."""

    depths = []
    depth = 0
    for instr in program:
        if instr.command is Command.LOOP_END:
            depth -= 1
        depths.append(depth)
        if instr.command is Command.LOOP_START:
            depth += 1
    return depths


def _loop_node(start: int) -> str:
    return f"loop_{start}"


def build_loop_graph(program: Program) -> nx.DiGraph:
    """Build the loop nesting tree rooted at :data:`ROOT_NODE`."""

    graph = nx.DiGraph()
    graph.add_node(ROOT_NODE, label="program", depth=-1, size=len(program))

    depths = loop_depths(program)
    enclosing = [ROOT_NODE]
    for index, instr in enumerate(program):
        if instr.command is Command.LOOP_START:
            node = _loop_node(index)
            graph.add_node(
                node,
                label=f"[{index}..{instr.target}]",
                start=index,
                end=instr.target,
                depth=depths[index],
                body=instr.target - index - 1,
            )
            graph.add_edge(enclosing[-1], node)
            enclosing.append(node)
        elif instr.command is Command.LOOP_END:
            enclosing.pop()
    return graph


def build_graphviz(program: Program) -> pydot.Dot:
    """Return a pydot graph of the loop nesting tree."""

    loops = build_loop_graph(program)
    graph = pydot.Dot(
        "brnfk_loops",
        graph_type="digraph",
        rankdir="TB",
        fontname="Helvetica",
    )

    for name, data in loops.nodes(data=True):
        if name == ROOT_NODE:
            graph.add_node(
                pydot.Node(
                    name,
                    label=f"program\\n{data['size']} instrs",
                    shape="box",
                    style="rounded",
                    fontname="Helvetica",
                )
            )
            continue
        color = DEPTH_COLORS[data["depth"] % len(DEPTH_COLORS)]
        graph.add_node(
            pydot.Node(
                name,
                label=f"{data['label']}\\nbody={data['body']}",
                shape="box",
                style="filled",
                fillcolor=color,
                color="#34495e",
                fontname="Helvetica",
            )
        )

    for src, dst in loops.edges():
        graph.add_edge(pydot.Edge(src, dst, color="#7f8c8d"))

    return graph


def export_graphviz(program: Program, output_path):  # pragma: no cover
    """Write the loop nesting tree as an SVG file."""

    graph = build_graphviz(program)

    output_path = Path(output_path)
    if output_path.parent and not output_path.parent.exists():
        output_path.parent.mkdir(parents=True, exist_ok=True)

    graph.write_svg(str(output_path))
    return output_path


def visualize_program(program: Program, output=None):  # pragma: no cover
    """Draw the loop nesting tree with matplotlib; save it when *output* is set."""

    import matplotlib.pyplot as plt

    graph = build_loop_graph(program)
    pos = {}
    by_depth: dict[int, list[str]] = {}
    for name, data in graph.nodes(data=True):
        by_depth.setdefault(data["depth"], []).append(name)
    for depth, names in by_depth.items():
        for column, name in enumerate(names):
            pos[name] = (column - (len(names) - 1) / 2, -depth)

    colors = [
        "#ECEFF1" if name == ROOT_NODE else DEPTH_COLORS[data["depth"] % len(DEPTH_COLORS)]
        for name, data in graph.nodes(data=True)
    ]
    labels = {name: data["label"] for name, data in graph.nodes(data=True)}

    fig, ax = plt.subplots(figsize=(8, 6))
    nx.draw_networkx(
        graph,
        pos,
        ax=ax,
        labels=labels,
        node_color=colors,
        node_shape="s",
        node_size=1400,
        font_size=8,
        edge_color="#7f8c8d",
    )
    ax.set_title("Loop nesting")
    ax.axis("off")

    if output:
        fig.savefig(output)
        plt.close(fig)
    else:
        plt.show()
    return graph


def format_program(program: Program) -> str:
    """Return an indented listing of *program*, one instruction per line."""

    lines = []
    width = len(str(max(len(program) - 1, 0)))
    for index, (instr, depth) in enumerate(zip(program, loop_depths(program))):
        pad = "  " * depth
        line = f"{index:>{width}}  {pad}{instr.command.symbol}"
        if instr.target is not None:
            line += f" -> {instr.target}"
        lines.append(line)
    return "\n".join(lines)


def print_program(program: Program) -> None:
    listing = format_program(program)
    if listing:
        print(listing)


def hash_program(program: Program) -> str:
    """SHA-256 of the canonical program text."""

    return program.digest()


__all__ = [
    "DEPTH_COLORS",
    "ROOT_NODE",
    "build_graphviz",
    "build_loop_graph",
    "export_graphviz",
    "format_program",
    "hash_program",
    "loop_depths",
    "loop_pairs",
    "print_program",
    "visualize_program",
]
