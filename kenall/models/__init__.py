from kenall.models.registry import (
    MergedText,
    NormalizeResult,
    PostalRecord,
    RawRow,
    RegistryRowError,
    TownGroup,
)
from kenall.models.town import (
    BracketPayload,
    ClassifiedPayload,
    Exclusion,
    Item,
    ParseNode,
    PayloadKind,
    TownEntry,
)

__all__ = [
    "RawRow",
    "RegistryRowError",
    "TownGroup",
    "MergedText",
    "PostalRecord",
    "NormalizeResult",
    "Exclusion",
    "Item",
    "BracketPayload",
    "ParseNode",
    "PayloadKind",
    "ClassifiedPayload",
    "TownEntry",
]
