"""File-based spread delivery."""

import json
import threading
from pathlib import Path
from typing import Any, Optional

from ..config.delivery import FileDeliveryConfig
from ..errors import DeliveryError
from .base import BaseSpreadDelivery, DeliveryResult, DeliveryStatus


class FileSpreadDelivery(BaseSpreadDelivery):
    """Append spread results to a JSON or JSONL file."""

    def __init__(self, name: str, config: FileDeliveryConfig,
                 instruments_filter: Optional[list[str]] = None):
        super().__init__(name, config, instruments_filter)
        self.config: FileDeliveryConfig = config
        self._write_lock = threading.Lock()

        self.output_path = Path(config.output_path)

        if config.create_dirs:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)

        if config.format not in ["json", "jsonl"]:
            raise DeliveryError(
                f"Unsupported format: {config.format}", delivery_method="file_output"
            )

    def deliver(self, events: list[dict[str, Any]]) -> list[DeliveryResult]:
        """Deliver events to file."""
        try:
            with self._write_lock:
                if self.config.format == "json":
                    self._write_json_format(events)
                else:  # jsonl
                    self._write_jsonl_format(events)

        except OSError as e:
            self.logger.warning(
                "Spread delivery file error",
                delivery_name=self.name,
                output_path=str(self.output_path),
                error=str(e)
            )
            return [DeliveryResult(
                status=DeliveryStatus.FAILED,
                message=f"File system error: {str(e)}",
                error=e
            ) for _ in events]

        except (TypeError, ValueError) as e:
            self.logger.error(
                "Spread delivery JSON error",
                delivery_name=self.name,
                error=str(e)
            )
            return [DeliveryResult(
                status=DeliveryStatus.FAILED,
                message=f"JSON encoding error: {str(e)}",
                error=e
            ) for _ in events]

        return [DeliveryResult(
            status=DeliveryStatus.SUCCESS,
            message=f"Written to {self.output_path}"
        ) for _ in events]

    def _write_json_format(self, events: list[dict[str, Any]]) -> None:
        """Write events in JSON format (array of objects)."""
        existing_data = []
        if self.config.append_mode and self.output_path.exists():
            try:
                with open(self.output_path) as f:
                    existing_data = json.load(f)
                    if not isinstance(existing_data, list):
                        existing_data = []
            except (OSError, json.JSONDecodeError):
                # If file is corrupted or empty, start fresh
                existing_data = []

        with open(self.output_path, 'w') as f:
            json.dump(existing_data + events, f, indent=2)

    def _write_jsonl_format(self, events: list[dict[str, Any]]) -> None:
        """Write events in JSONL format (one JSON object per line)."""
        mode = 'a' if self.config.append_mode else 'w'

        with open(self.output_path, mode) as f:
            for event in events:
                f.write(json.dumps(event))
                f.write('\n')

    def health_check(self) -> bool:
        """Check if the output directory is writable."""
        try:
            test_file = self.output_path.parent / ".health_check_test"
            test_file.write_text("test")
            test_file.unlink()
            return True

        except OSError as e:
            self.logger.warning(
                "Health check failed",
                delivery_name=self.name,
                error=str(e)
            )
            return False
