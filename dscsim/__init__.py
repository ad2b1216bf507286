"""Package to simulate a Decentralized StableCoin engine."""
__all__ = ["autosim", "__version__"]

from .sim import autosim
from .version import __version__
