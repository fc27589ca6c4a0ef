# metarwx - METAR/SPECI report decoder
from .decoder import parse, parse_or_raise, to_snapshot

__version__ = "0.1.0"

__all__ = ["parse", "parse_or_raise", "to_snapshot", "__version__"]
