"""Command line entry point: read triangles and segments, print intersections."""

from __future__ import annotations

import sys
from typing import Iterable, Sequence

from bsptri.geometry import Segment
from bsptri.io import InputError, read_input, validate_input, write_output
from bsptri.tree import BSPTree

_DEBUG_FLAGS = ("--debug", "-d")


def process_segment_queries(tree: BSPTree, segments: Iterable[Segment]) -> list[list[int]]:
    """Sorted triangle identifiers crossed by each segment, in input order."""
    return [sorted(tree.query_segment(segment)) for segment in segments]


def _fail(message: str, summary: str) -> int:
    print(f"erro: {message}", file=sys.stderr)
    print(f"erro: {summary}", file=sys.stderr)
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    debug = any(arg in _DEBUG_FLAGS for arg in args)

    try:
        data = read_input(sys.stdin)
    except InputError as error:
        return _fail(str(error), "falha na leitura dos dados de entrada")

    try:
        validate_input(data)
    except InputError as error:
        return _fail(str(error), "dados de entrada invalidos")

    tree = BSPTree()
    if debug:
        print(f"construindo arvore bsp com {len(data.triangles)} triangulos...")
    tree.build(data.triangles)
    if debug:
        print("arvore bsp construida com sucesso!")
        print(f"processando {len(data.segments)} consultas de segmentos...")

    results = process_segment_queries(tree, data.segments)
    if debug:
        print("consultas processadas com sucesso!")

    write_output(results, sys.stdout)

    if debug:
        print("=== informacoes de debug ===")
        print(f"pontos: {data.point_count()}")
        print(f"triangulos: {len(data.triangles)}")
        print(f"segmentos: {len(data.segments)}")
        print(f"nos da arvore: {tree.node_count()}")
        print(f"profundidade maxima: {tree.max_depth()}")
        print("============================")
    return 0


if __name__ == "__main__":
    sys.exit(main())