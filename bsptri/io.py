"""Reading the problem input and writing the query results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, Sequence, TextIO, TypeVar

from bsptri.geometry import Point3D, Segment, Triangle

_T = TypeVar("_T")

_MIN_COORDINATE = 1
_MAX_COORDINATE = 99


class InputError(ValueError):
    """Raised when the input cannot be read or does not meet its constraints."""


@dataclass
class BSPInput:
    """Points, triangles built from them, and the segments to query."""

    points: list[Point3D] = field(default_factory=list)
    triangles: list[Triangle] = field(default_factory=list)
    segments: list[Segment] = field(default_factory=list)

    def point_count(self) -> int:
        return len(self.points)


def _take(
    tokens: Iterator[str], count: int, convert: Callable[[str], _T], message: str
) -> list[_T]:
    values: list[_T] = []
    for _ in range(count):
        token = next(tokens, None)
        if token is None:
            raise InputError(message)
        try:
            values.append(convert(token))
        except ValueError:
            raise InputError(message) from None
    return values


def parse_input(text: str) -> BSPInput:
    """Parse the header "n t l", n points, t triangles and l segments."""
    tokens = iter(text.split())

    n, t, l = _take(tokens, 3, int, "falha ao ler parametros iniciais (n t l)")
    if n <= 0 or t <= 0 or l <= 0:
        raise InputError("parametros devem ser positivos")

    data = BSPInput()
    for i in range(1, n + 1):
        x, y, z = _take(tokens, 3, float, f"falha ao ler coordenadas do ponto {i}")
        data.points.append(Point3D(x, y, z))

    for i in range(1, t + 1):
        indices = _take(tokens, 3, int, f"falha ao ler vertices do triangulo {i}")
        if any(index < 1 or index > n for index in indices):
            raise InputError(f"indices de vertices invalidos no triangulo {i}")
        a, b, c = (data.points[index - 1] for index in indices)
        data.triangles.append(Triangle(a, b, c, i))

    for i in range(1, l + 1):
        xa, ya, za, xb, yb, zb = _take(
            tokens, 6, float, f"falha ao ler coordenadas do segmento {i}"
        )
        data.segments.append(Segment(Point3D(xa, ya, za), Point3D(xb, yb, zb)))

    return data


def read_input(stream: TextIO) -> BSPInput:
    """Read and parse the whole input from a text stream."""
    return parse_input(stream.read())


def validate_input(data: BSPInput) -> None:
    """Raise InputError unless there are triangles, segments and in-range points."""
    if not data.triangles:
        raise InputError("nenhum triangulo encontrado")
    if not data.segments:
        raise InputError("nenhum segmento encontrado")
    for number, point in enumerate(data.points, start=1):
        if any(
            coordinate < _MIN_COORDINATE or coordinate > _MAX_COORDINATE
            for coordinate in (point.x, point.y, point.z)
        ):
            raise InputError(
                f"coordenadas do ponto {number} fora do range "
                f"({_MIN_COORDINATE}-{_MAX_COORDINATE})"
            )


def format_result(triangle_ids: Sequence[int]) -> str:
    """The count of identifiers followed by the identifiers, space separated."""
    return " ".join(str(value) for value in (len(triangle_ids), *triangle_ids))


def write_output(results: Iterable[Sequence[int]], stream: TextIO) -> None:
    """Write one formatted line per query result."""
    for triangle_ids in results:
        stream.write(format_result(triangle_ids) + "\n")