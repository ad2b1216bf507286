__all__ = [
    "SimDSCEngine",
    "Position",
    "LiquidatedPosition",
]

from .sim_engine import LiquidatedPosition, Position, SimDSCEngine
