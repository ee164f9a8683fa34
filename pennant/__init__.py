__title__ = 'pennant'
__license__ = 'MIT'
__version__ = "0.1.0"

from .args import *
from .faults import *
from .options import *
from .traits import *
from .validations import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

version_info = VersionInfo(0, 1, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the session
__all__ += args.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the option model
__all__ += options.__all__  # type: ignore[attr-defined]
# Load the exposed API of the bindings
__all__ += traits.__all__  # type: ignore[attr-defined]
# Load the exposed API of the validations
__all__ += validations.__all__  # type: ignore[attr-defined]
