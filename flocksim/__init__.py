"""Building blocks for flocking simulations: vectors, geometry, phase spaces, placement, radio networks, interaction terms and INI parsing."""

__version__ = "0.1.0"
__all__ = [
    "curves",
    "geometry",
    "inifile",
    "interactions",
    "network",
    "numeric",
    "phase",
    "placement",
    "polygons",
    "randomness",
    "vectors",
]