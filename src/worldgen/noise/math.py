"""Interpolation helpers shared by noise and density code."""


def lerp(t: float, a: float, b: float) -> float:
    return a + t * (b - a)


def lerp2(tx: float, ty: float, a: float, b: float, c: float, d: float) -> float:
    """Bilinear interpolation between two x-edges."""
    return lerp(ty, lerp(tx, a, b), lerp(tx, c, d))


def lerp3(
    tx: float,
    ty: float,
    tz: float,
    v000: float,
    v100: float,
    v010: float,
    v110: float,
    v001: float,
    v101: float,
    v011: float,
    v111: float,
) -> float:
    """Trilinear interpolation of the eight corners of a unit cube."""
    return lerp(tz, lerp2(tx, ty, v000, v100, v010, v110), lerp2(tx, ty, v001, v101, v011, v111))


def clamped_lerp(a: float, b: float, t: float) -> float:
    if t < 0.0:
        return a
    if t > 1.0:
        return b
    return lerp(t, a, b)


def inverse_lerp(value: float, start: float, end: float) -> float:
    return (value - start) / (end - start)


def clamped_map(
    value: float, from_start: float, from_end: float, to_start: float, to_end: float
) -> float:
    """Map ``value`` from one range to another, clamping at the ends."""
    return clamped_lerp(to_start, to_end, inverse_lerp(value, from_start, from_end))


def smoothstep(t: float) -> float:
    """Improved-noise fade curve ``6t^5 - 15t^4 + 10t^3``."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def clamp(value: float, lo: float, hi: float) -> float:
    return lo if value < lo else hi if value > hi else value
