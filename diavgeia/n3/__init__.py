"""N3 serialization of decision records."""

from diavgeia.n3.document import N3Document, Triple, TripleBlock
from diavgeia.n3.generator import generate_n3

__all__ = [
    "N3Document",
    "Triple",
    "TripleBlock",
    "generate_n3",
]
