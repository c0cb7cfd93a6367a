"""tracklayout - rail track layout graph model and correctness checks."""

__version__ = "0.1.0"

from tracklayout.config import (
    CheckConfig,
    Config,
    LoggingConfig,
    OutputConfig,
    load_config,
)
from tracklayout.correctness import (
    SlotRole,
    classify_slots,
    incorrect_nodes,
    is_complete,
    is_correct,
    is_locally_correct,
)
from tracklayout.ids import (
    ID_INVALID,
    ID_NULL,
    IDENT_LENGTH,
    SLOT_INVALID,
    Identifier,
    SlotId,
    is_id,
    is_id_or_null,
)
from tracklayout.io import (
    IllegalModelError,
    InvalidFormatError,
    ModelFormatError,
    dumps_model,
    loads_model,
    model_from_data,
    model_to_data,
    read_model,
    write_model,
)
from tracklayout.model import (
    AddResult,
    LinkResult,
    Model,
    RemoveResult,
    UnlinkResult,
)
from tracklayout.nodes import (
    COMMON,
    CROSSING,
    DIVERGING,
    END,
    FIXED,
    MANUAL,
    MAX_SLOTS,
    MOTORIZED,
    NODE_TYPES,
    PASSIVE,
    STRAIGHT,
    THRU,
    Node,
    NodeTypeInfo,
    node_type_by_name,
)
from tracklayout.section import Destination, Directionality, Section
from tracklayout.validator import ValidationResult, validate_model

__all__ = [
    # Identifiers
    "ID_INVALID",
    "ID_NULL",
    "IDENT_LENGTH",
    "SLOT_INVALID",
    "Identifier",
    "SlotId",
    "is_id",
    "is_id_or_null",
    # Nodes
    "COMMON",
    "CROSSING",
    "DIVERGING",
    "END",
    "FIXED",
    "MANUAL",
    "MAX_SLOTS",
    "MOTORIZED",
    "NODE_TYPES",
    "PASSIVE",
    "STRAIGHT",
    "THRU",
    "Node",
    "NodeTypeInfo",
    "node_type_by_name",
    # Sections
    "Destination",
    "Directionality",
    "Section",
    # Model
    "AddResult",
    "LinkResult",
    "Model",
    "RemoveResult",
    "UnlinkResult",
    # Correctness
    "SlotRole",
    "classify_slots",
    "incorrect_nodes",
    "is_complete",
    "is_correct",
    "is_locally_correct",
    # Validator
    "ValidationResult",
    "validate_model",
    # I/O
    "IllegalModelError",
    "InvalidFormatError",
    "ModelFormatError",
    "dumps_model",
    "loads_model",
    "model_from_data",
    "model_to_data",
    "read_model",
    "write_model",
    # Config
    "CheckConfig",
    "Config",
    "LoggingConfig",
    "OutputConfig",
    "load_config",
]
