"""Field kinds: converters from a JSON field value to a typed value.

Every kind has the signature ``kind(value, resolver, name)``. ``name`` is
the contextual name: the name of the closest enclosing named definition, or
of the alias itself when the field value is a string that refers to another
document.
"""

from typing import TYPE_CHECKING, Any, Callable, TypeVar

from pydantic import ValidationError

from ..density import Constant, DensityFunction, NoiseHolder, RarityValue, Spline
from ..exceptions import ConfigurationError, MissingFieldError
from ..noise import NoiseParameters

if TYPE_CHECKING:
    from .resolver import Resolver

T = TypeVar("T")
FieldKind = Callable[[Any, "Resolver", str | None], T]


def describe(value: Any) -> str:
    """Short description of a JSON value for error messages."""
    text = repr(value)
    if len(text) > 80:
        text = text[:77] + "..."
    return f"{type(value).__name__} {text}"


def require(obj: Any, key: str) -> Any:
    if not isinstance(obj, dict):
        raise ConfigurationError(f"Expected Object, but given: {describe(obj)}")
    if key not in obj:
        raise MissingFieldError(f"Map has no field named {key}")
    return obj[key]


def density(value: Any, resolver: "Resolver", name: str | None) -> DensityFunction:
    return resolver.resolve(value, name)


def number(value: Any, resolver: "Resolver", name: str | None) -> float:
    value, name = resolver.dereference(value, name)
    # bool is an int subclass but never a valid number here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"Expected Number, but given: {describe(value)}")
    return float(value)


def integer(value: Any, resolver: "Resolver", name: str | None) -> int:
    value, name = resolver.dereference(value, name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"Expected Number, but given: {describe(value)}")
    if isinstance(value, float) and not value.is_integer():
        raise ConfigurationError(f"Expected Integer, but given: {describe(value)}")
    return int(value)


def boolean(value: Any, resolver: "Resolver", name: str | None) -> bool:
    value, name = resolver.dereference(value, name)
    if not isinstance(value, bool):
        raise ConfigurationError(f"Expected Boolean, but given: {describe(value)}")
    return value


def text(value: Any, resolver: "Resolver", name: str | None) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"Expected String, but given: {describe(value)}")
    return value


def number_list(value: Any, resolver: "Resolver", name: str | None) -> list[float]:
    value, name = resolver.dereference(value, name)
    if not isinstance(value, list):
        raise ConfigurationError(f"Expected Array, but given: {describe(value)}")
    return [number(item, resolver, name) for item in value]


def noise(value: Any, resolver: "Resolver", name: str | None) -> NoiseHolder:
    """Unbound holder for a noise definition.

    An inline definition takes the name of the enclosing named value, which
    also decides its seed.
    """
    value, name = resolver.dereference(value, name)
    if name is None:
        raise ConfigurationError("Inline noise definition has no enclosing named value")
    first_octave = integer(require(value, "firstOctave"), resolver, name)
    amplitudes = number_list(require(value, "amplitudes"), resolver, name)
    try:
        parameters = NoiseParameters(first_octave=first_octave, amplitudes=tuple(amplitudes))
    except ValidationError as e:
        raise ConfigurationError(f'Invalid noise parameters for "{name}": {e}') from e
    return NoiseHolder(name, parameters)


def rarity(value: Any, resolver: "Resolver", name: str | None) -> RarityValue:
    if isinstance(value, str) and value in {r.value for r in RarityValue}:
        return RarityValue(value)
    raise ConfigurationError(
        f'Expected rarity value to be either "type_1" or "type_2", but "{value}" given'
    )


def spline(value: Any, resolver: "Resolver", name: str | None) -> DensityFunction:
    """A spline object, or a plain number for a constant spline.

    Point values may themselves be numbers or nested spline objects.
    """
    if isinstance(value, str):
        value, name = resolver.dereference(value, name)
    if isinstance(value, bool) or not isinstance(value, (int, float, dict)):
        raise ConfigurationError(
            f"Value must be either Number or Object, but given: {describe(value)}"
        )
    if not isinstance(value, dict):
        return Constant(float(value))

    coordinate = resolver.field(value, "coordinate", density, name)
    points = require(value, "points")
    if not isinstance(points, list):
        raise ConfigurationError(f"Expected Array, but given: {describe(points)}")

    locations: list[float] = []
    derivatives: list[float] = []
    values: list[DensityFunction] = []
    for point in points:
        locations.append(resolver.field(point, "location", number, name))
        derivatives.append(resolver.field(point, "derivative", number, name))
        values.append(resolver.field(point, "value", spline, name))
    return Spline(coordinate, locations, derivatives, values)
