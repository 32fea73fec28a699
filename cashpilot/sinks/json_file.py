"""JSON file sink for exporting records and reports to files."""

import json
from pathlib import Path
from typing import Any

from cashpilot.exceptions import SinkError
from cashpilot.logging import get_logger
from cashpilot.sinks.serialization import to_dict

logger = get_logger(__name__)


class JsonFileSink:
    """Output data to JSON files, one file per entity type or document."""

    def __init__(self, output_dir: str | Path, pretty: bool = False, camel_case: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.
        camel_case : bool
            Emit camelCase field names.
        """
        self.output_dir = Path(output_dir)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SinkError(f"Cannot create output directory {self.output_dir}: {exc}") from exc
        self.pretty = pretty
        self.camel_case = camel_case
        self._counts: dict[str, int] = {}

    def _write(self, file_path: Path, data: Any) -> None:
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False, default=str)
                else:
                    json.dump(data, f, ensure_ascii=False, default=str)
        except OSError as exc:
            raise SinkError(f"Failed to write {file_path}: {exc}") from exc
        logger.debug("Wrote %s", file_path)

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records to ``<entity_type>.json``."""
        self._write(
            self.output_dir / f"{entity_type}.json",
            [to_dict(record, self.camel_case) for record in records],
        )
        self._counts[entity_type] = len(records)

    def write_document(self, name: str, document: Any) -> Path:
        """Write a single object to ``<name>.json`` and return its path."""
        file_path = self.output_dir / f"{name}.json"
        self._write(file_path, to_dict(document, self.camel_case))
        self._counts[name] = 1
        return file_path

    def close(self) -> None:
        """Print summary."""
        print(f"JSON files written to: {self.output_dir}")
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records")
