__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'argosy'
__license__ = 'MIT'
__version__ = "0.1.0"

from .binder import *
from .builder import *
from .faults import *
from .specs import *
from .utils import Unset
from .validator import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

version_info = VersionInfo(0, 1, 0, "final", 0, "")


def parse(spec, arguments=Unset, /, environ=Unset):
    """
    bind `arguments` (sys.argv[1:] by default) against `spec` and validate.

    returns the ParseResult; raises a BindingError subclass on structural
    failures and ConstraintError (carrying every violation) on semantic ones.
    """
    if arguments is Unset:
        arguments = __import__("sys").argv[1:]
    result = bind(spec, arguments, environ=environ)
    if violations := validate(result):
        raise ConstraintError(violations, result=result)
    return result


__all__ = (
    "__path__",
    "__title__",
    "__license__",
    "__version__",
    "version_info",
    "parse",
    "Unset",
)

# Load the exposed API of the binder
__all__ += binder.__all__  # type: ignore[attr-defined]
# Load the exposed API of the builder
__all__ += builder.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the specs
__all__ += specs.__all__  # type: ignore[attr-defined]
# Load the exposed API of the validator
__all__ += validator.__all__  # type: ignore[attr-defined]
