def clamp(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, int(v)))


def normalize_color(rgba) -> tuple[int, int, int, int]:
    """
    Coerce a 3- or 4-sequence into an RGBA tuple with every channel in 0..255.
    A missing alpha channel means fully opaque.
    """
    if len(rgba) == 3:
        rgba = (*rgba, 255)
    if len(rgba) != 4:
        raise ValueError(f"Expected an RGB or RGBA color, got {rgba!r}")
    return (
        clamp(rgba[0], 0, 255),
        clamp(rgba[1], 0, 255),
        clamp(rgba[2], 0, 255),
        clamp(rgba[3], 0, 255),
    )


def color_to_hex(rgba) -> str:
    return "#%02x%02x%02x" % tuple(rgba[:3])

