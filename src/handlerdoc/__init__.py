"""handlerdoc — command/query handler definitions for reference documentation."""

__version__ = "0.1.0"

from handlerdoc.domain.definition import DefinitionRecord  # noqa: E402
from handlerdoc.domain.types import DefinitionType  # noqa: E402
from handlerdoc.services.resolver import DefinitionResolver  # noqa: E402

__all__ = ["DefinitionRecord", "DefinitionResolver", "DefinitionType", "__version__"]
