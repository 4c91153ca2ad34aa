"""Turn malformed, truncated or JSON-like text into valid JSON."""

from loguru import logger

from jsonmend.infra.errors import (
    ExpectedToken,
    InvalidExtensionType,
    InvalidNumber,
    MaxDepthExceeded,
    RepairError,
    UnexpectedCharacter,
    UnexpectedEndOfInput,
)
from jsonmend.infra.json_repair import Repairer, repair_json

# Library code stays silent until configure_logging() enables it
logger.disable("jsonmend")

__all__ = [
    "repair_json",
    "Repairer",
    "RepairError",
    "UnexpectedEndOfInput",
    "UnexpectedCharacter",
    "InvalidNumber",
    "ExpectedToken",
    "InvalidExtensionType",
    "MaxDepthExceeded",
]
