from typing import List

from .bins import LoadBins


def to_dot(bins: LoadBins) -> str:
    """
    Render the loaded graph as a Graphviz "strict graph" for eyeballing.

    Each vertex is labelled "<vertex>:<load>"; every edge is listed once.
    The output is meant for humans and is never parsed back.
    """
    g = bins.graph
    lines: List[str] = ["strict graph {"]
    for v in g.vertices():
        name = g.label(v)
        lines.append(f'  "{name}" [label = "{name}:{bins[v]}"]')
        for u in g.neighbors(v):
            if v < u:
                lines.append(f'  "{name}" -- "{g.label(u)}"')
    lines.append("}")
    return "\n".join(lines) + "\n"
