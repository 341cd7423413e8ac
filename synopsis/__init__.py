__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'synopsis'
__author__ = 'Eiko Reishin (影皇嶺臣)'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .binding import *
from .evaluation import *
from .faults import *
from .inputs import *
from .schema import *
from .utils import NoValue, NoValueType, Unset

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info",
    "NoValue",
    "NoValueType",
    "Unset",
)

# Load the exposed API of the schema compiler
__all__ += schema.__all__  # type: ignore[attr-defined]
# Load the exposed API of the input reader
__all__ += inputs.__all__  # type: ignore[attr-defined]
# Load the exposed API of the matcher/binder
__all__ += binding.__all__  # type: ignore[attr-defined]
# Load the exposed API of the entry point
__all__ += evaluation.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
