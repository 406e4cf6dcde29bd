"""ICU message template parser.

Python 3.13+.
"""

from iculexengine.syntax.parser.core import MessageParser
from iculexengine.syntax.parser.rules import ParseContext

__all__ = ["MessageParser", "ParseContext"]
