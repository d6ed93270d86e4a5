"""Resolution strategies used by PidResolver, in priority order."""

from .pattern_strategy import PatternStrategy
from .pidfile_strategy import PidFileStrategy
from .port_strategy import PortStrategy

__all__ = ["PatternStrategy", "PidFileStrategy", "PortStrategy"]
