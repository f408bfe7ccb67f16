__title__ = 'simplecmds'
__author__ = 'Simplecmds contributors'
__license__ = 'MIT'
__version__ = "1.0.0"

from .aliases import *
from .commands import *
from .faults import *
from .parsing import *
from .rules import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

version_info = VersionInfo(1, 0, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the aliases
__all__ += aliases.__all__  # type: ignore[attr-defined]
# Load the exposed API of the commands
__all__ += commands.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the parsing
__all__ += parsing.__all__  # type: ignore[attr-defined]
# Load the exposed API of the rules
__all__ += rules.__all__  # type: ignore[attr-defined]
