"""Recording of device status and reference PDOs to per-family log files.

Every device family has its own logger. Each logger holds one entry per
slave, named ``<entry type>_<esc id>``, and every entry keeps the rows
logged for that slave. When the logger is stopped each logger is written
to ``<logger dir>/<logger name>__<timestamp>.json[.gz]`` as a JSON object
that maps entry names to their rows.
"""

from __future__ import annotations

import gzip
import json
import tempfile
import threading
import time
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping

from ecat_client.pdo import (
    FT_RX,
    IMU_RX,
    MOTOR_RX,
    MOTOR_TX,
    POW_RX,
    PUMP_RX,
    PUMP_TX,
    VALVE_RX,
    VALVE_TX,
    PdoLayout,
)
from ecat_client.types import DeviceKind, device_kind

DEFAULT_BUFFER_SIZE = 10_000

# logger name, entry type and layout of every logger a device family gets
_FAMILY_LOGGERS: dict[DeviceKind, tuple[tuple[str, str, PdoLayout], ...]] = {
    DeviceKind.MOTOR: (
        ("motor_status_logger", "motor_sts_id", MOTOR_RX),
        ("motor_reference_logger", "motor_ref_id", MOTOR_TX),
    ),
    DeviceKind.FT: (("ft_status_logger", "ft_id", FT_RX),),
    DeviceKind.IMU: (("imu_status_logger", "imu_id", IMU_RX),),
    DeviceKind.POW: (("pow_status_logger", "pow_id", POW_RX),),
    DeviceKind.VALVE: (
        ("valve_status_logger", "valve_sts_id", VALVE_RX),
        ("valve_reference_logger", "valve_ref_id", VALVE_TX),
    ),
    DeviceKind.PUMP: (
        ("pump_status_logger", "pump_sts_id", PUMP_RX),
        ("pump_reference_logger", "pump_ref_id", PUMP_TX),
    ),
}


@dataclass
class _LoggerInfo:
    layout: PdoLayout
    entries: dict[int, str] = field(default_factory=dict)
    rows: dict[str, deque] = field(default_factory=dict)


class EcLogger:
    """Buffers PDO rows per slave and writes them out when stopped."""

    def __init__(
        self,
        logger_dir: str | Path | None = None,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        compression: bool = True,
    ) -> None:
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self.logger_dir = Path(tempfile.gettempdir() if logger_dir is None else logger_dir)
        self.buffer_size = buffer_size
        self.compression = compression
        self._slave_descr: list[tuple[Any, Any, Any]] = []
        self._loggers: dict[str, _LoggerInfo] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------ lifecycle

    def init_logger(self, slave_descr: Iterable[tuple[Any, Any, Any]]) -> None:
        """Set the slaves (esc id, board type, position) to log."""
        self._slave_descr = [tuple(entry) for entry in slave_descr]

    @property
    def logger_names(self) -> list[str]:
        with self._lock:
            return sorted(self._loggers)

    def rows(self, logger_name: str) -> dict[str, list[list[float]]]:
        """Return a copy of the rows buffered by one logger, by entry name."""
        with self._lock:
            info = self._loggers.get(logger_name)
            if info is None:
                raise KeyError(f"no logger named {logger_name!r}")
            return {entry: [list(row) for row in data] for entry, data in info.rows.items()}

    def _create_logger(
        self, logger_name: str, esc_id: int, entry_type: str, layout: PdoLayout
    ) -> None:
        info = self._loggers.setdefault(logger_name, _LoggerInfo(layout))
        if esc_id not in info.entries:
            entry = f"{entry_type}_{esc_id}"
            info.entries[esc_id] = entry
            info.rows[entry] = deque(maxlen=self.buffer_size)

    def start(self) -> None:
        """Discard any running loggers and create one per device family present."""
        self.stop()
        with self._lock:
            for esc_id, esc_type, _position in self._slave_descr:
                kind = device_kind(esc_type)
                for logger_name, entry_type, layout in _FAMILY_LOGGERS.get(kind, ()):
                    self._create_logger(logger_name, esc_id, entry_type, layout)

    def stop(self) -> list[Path]:
        """Write every logger to disk, drop them all and return the files written."""
        with self._lock:
            loggers, self._loggers = self._loggers, {}
        if not loggers:
            return []
        stamp = time.strftime("%Y_%m_%d__%H_%M_%S")
        self.logger_dir.mkdir(parents=True, exist_ok=True)
        written = []
        for logger_name, info in sorted(loggers.items()):
            payload = {entry: [list(row) for row in data] for entry, data in info.rows.items()}
            written.append(self._save(f"{logger_name}__{stamp}", payload))
        return written

    def _save(self, stem: str, payload: Mapping[str, Any]) -> Path:
        text = json.dumps(payload)
        if self.compression:
            path = self.logger_dir / f"{stem}.json.gz"
            with gzip.open(path, "wt", encoding="utf-8") as stream:
                stream.write(text)
        else:
            path = self.logger_dir / f"{stem}.json"
            path.write_text(text, encoding="utf-8")
        return path

    # -------------------------------------------------------------- logging

    def _log(self, logger_name: str, pdo_map: Mapping[int, tuple]) -> None:
        with self._lock:
            info = self._loggers.get(logger_name)
            if info is None:
                return
            for esc_id, pdo in pdo_map.items():
                entry = info.entries.get(esc_id)
                if entry is None:
                    continue
                try:
                    row = info.layout.to_vector(pdo)
                except ValueError:
                    continue
                info.rows[entry].append(row)

    def log_motor_status(self, status_map: Mapping[int, tuple]) -> None:
        self._log("motor_status_logger", status_map)

    def log_motor_reference(self, reference_map: Mapping[int, tuple]) -> None:
        self._log("motor_reference_logger", reference_map)

    def log_pow_status(self, status_map: Mapping[int, tuple]) -> None:
        self._log("pow_status_logger", status_map)

    def log_ft_status(self, status_map: Mapping[int, tuple]) -> None:
        self._log("ft_status_logger", status_map)

    def log_imu_status(self, status_map: Mapping[int, tuple]) -> None:
        self._log("imu_status_logger", status_map)

    def log_valve_status(self, status_map: Mapping[int, tuple]) -> None:
        self._log("valve_status_logger", status_map)

    def log_valve_reference(self, reference_map: Mapping[int, tuple]) -> None:
        self._log("valve_reference_logger", reference_map)

    def log_pump_status(self, status_map: Mapping[int, tuple]) -> None:
        self._log("pump_status_logger", status_map)

    def log_pump_reference(self, reference_map: Mapping[int, tuple]) -> None:
        self._log("pump_reference_logger", reference_map)