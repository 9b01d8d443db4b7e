from dataclasses import dataclass, field
from pathlib import Path

# Fixed ceilings, not configurable through JsonToolConfig.
MAX_INPUT_SIZE = 5 * 1024 * 1024
MAX_LOG_FILE_SIZE = 5 * 1024 * 1024
MAX_IMPORT_FILE_SIZE = 10 * 1024 * 1024


def _default_log_dir() -> Path:
    return Path.home() / ".jsontool" / "logs"


@dataclass
class JsonToolConfig:
    """
    Configuration for jsontool. This should be passed around explicitly.
    """
    # Directory holding operations.log and its rotated backup
    log_dir: Path = field(default_factory=_default_log_dir)
    logging_enabled: bool = True

    # Pretty-print defaults (indent must be 2 or 4)
    indent: int = 2
    trailing_newline: bool = True

    # How many records `jsontool logs` shows without --limit
    recent_log_limit: int = 50

    def as_dict(self):
        return self.__dict__
