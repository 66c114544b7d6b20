from .loaders import DEFAULT_CONFIG, load_submit_config
from .schema import (
    ARITY_ANY,
    ARITY_EACH,
    PARTS,
    DeliverablePart,
    FileRule,
    SubmitConfig,
    SubmitContext,
    get_part,
)

__all__ = [
    "ARITY_ANY",
    "ARITY_EACH",
    "DEFAULT_CONFIG",
    "PARTS",
    "DeliverablePart",
    "FileRule",
    "SubmitConfig",
    "SubmitContext",
    "get_part",
    "load_submit_config",
]
