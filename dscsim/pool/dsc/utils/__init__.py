__all__ = [
    "BlocktimestampMixins",
    "ERC20",
    "atomic",
    "nonreentrant",
]

from .ERC20 import ERC20
from .BlocktimestampMixins import BlocktimestampMixins
from .decorators import atomic, nonreentrant
