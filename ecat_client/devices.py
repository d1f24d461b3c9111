"""Device-specific process data objects and their protobuf field mappings.

Messages are plain mappings shaped like the slave PDO protobuf message:
the received message holds one sub-message per device family
(``motor_xt_rx_pdo``, ``ft6_rx_pdo``...), and ``set_to_pb`` builds the
transmitted message in the same shape.
"""

from __future__ import annotations

import copy
import time
from abc import abstractmethod
from enum import IntEnum
from typing import Any, Mapping, Sequence

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
    FieldType,
    PdoLayout,
    _to_f32,
)
from ecat_client.types import EscType

_UINT_MASKS = {
    FieldType.U8: 0xFF,
    FieldType.U16: 0xFFFF,
    FieldType.U32: 0xFFFFFFFF,
}

_IMU_QUAT = ("x_quat", "y_quat", "z_quat", "w_quat")


class GainsType(IntEnum):
    """Control types that select how motor gains are interpreted."""

    POSITION = 0x3B
    VELOCITY = 0x71
    IMPEDANCE = 0xD4


class AuxOp(IntEnum):
    """Operation carried by the auxiliary PDO channel."""

    NOP = 0
    SET = 1
    GET = 2


def _coerce(value: Any, kind: FieldType) -> float | int:
    if kind.is_float:
        return _to_f32(value)
    number = int(value)
    if kind is FieldType.I32:
        number &= 0xFFFFFFFF
        return number - (1 << 32) if number >= (1 << 31) else number
    return number & _UINT_MASKS[kind]


FieldMap = tuple[tuple[int, "str | None"], ...]


class DevicePdo:
    """Received and transmitted PDO state of one slave device."""

    ESC_NAME: str = ""
    RX_LAYOUT: PdoLayout = FT_RX
    TX_LAYOUT: PdoLayout | None = None
    RX_SUBMESSAGE: str = ""
    RX_FIELDS: FieldMap = ()

    def __init__(self, endpoint: str, esc_id: int, name: str | None = None) -> None:
        self.endpoint = endpoint
        self.esc_id = esc_id
        self.name = self.ESC_NAME if name is None else name
        self.rx_pdo: tuple = self.RX_LAYOUT.default()
        self.init_rx_pdo = False
        self._tx: tuple | None = (
            self.TX_LAYOUT.default() if self.TX_LAYOUT is not None else None
        )
        self.pb_tx: dict[str, Any] = {}
        self.set_to_pb()

    @property
    def tx_pdo(self) -> tuple:
        if self.TX_LAYOUT is None or self._tx is None:
            raise AttributeError(f"{type(self).__name__} has no transmitted PDO")
        return self._tx

    @tx_pdo.setter
    def tx_pdo(self, values: Sequence[Any]) -> None:
        if self.TX_LAYOUT is None:
            raise AttributeError(f"{type(self).__name__} has no transmitted PDO")
        if len(values) != self.TX_LAYOUT.pdo_size:
            raise ValueError(
                f"{self.TX_LAYOUT.name}: expected {self.TX_LAYOUT.pdo_size} "
                f"values, got {len(values)}"
            )
        self._tx = tuple(
            _coerce(value, kind) for value, kind in zip(values, self.TX_LAYOUT.types)
        )

    def _read(self, message: Mapping[str, Any], fields: FieldMap | None = None) -> tuple:
        sub = message.get(self.RX_SUBMESSAGE) or {}
        types = self.RX_LAYOUT.types
        values = list(self.rx_pdo)
        for index, field in self.RX_FIELDS if fields is None else fields:
            raw = 0 if field is None else sub.get(field, 0)
            values[index] = _coerce(raw, types[index])
        self.rx_pdo = tuple(values)
        self.init_rx_pdo = True
        return self.rx_pdo

    def get_from_pb(self, message: Mapping[str, Any]) -> tuple:
        """Update the received PDO from a slave message and return it."""
        return self._read(message)

    def _write(self, pdo_type: str, submessage: str, fields: Mapping[str, Any]) -> None:
        self.pb_tx["header"] = {"name": self.name}
        self.pb_tx["type"] = pdo_type
        self.pb_tx.setdefault(submessage, {}).update(fields)

    def set_to_pb(self) -> dict[str, Any]:
        """Store the transmitted PDO into the outgoing message and return a copy."""
        return copy.deepcopy(self.pb_tx)


class FtPdo(DevicePdo):
    """Six-axis force/torque sensor."""

    ESC_NAME = "Ft"
    RX_LAYOUT = FT_RX
    RX_SUBMESSAGE = "ft6_rx_pdo"
    RX_FIELDS = tuple(enumerate(FT_RX.names))


class PowPdo(DevicePdo):
    """Power board."""

    ESC_NAME = "PowBoard"
    RX_LAYOUT = POW_RX
    RX_SUBMESSAGE = "powf28m36_rx_pdo"
    RX_FIELDS = tuple(enumerate(POW_RX.names))


class ImuPdo(DevicePdo):
    """Inertial measurement unit; quaternion fields update only when present."""

    ESC_NAME = "Imu"
    RX_LAYOUT = IMU_RX
    RX_SUBMESSAGE = "imuvn_rx_pdo"
    _QUAT = _IMU_QUAT
    RX_FIELDS = tuple(
        (index, name)
        for index, name in enumerate(IMU_RX.names)
        if name not in _IMU_QUAT
    )

    def get_from_pb(self, message: Mapping[str, Any]) -> tuple:
        sub = message.get(self.RX_SUBMESSAGE) or {}
        fields = self.RX_FIELDS
        if "x_quat" in sub:
            fields = fields + tuple(
                (IMU_RX.field_index(name), name) for name in self._QUAT
            )
        return self._read(message, fields)


class ValvePdo(DevicePdo):
    """Hydraulic knee valve."""

    ESC_NAME = "HyQ_KneeESC"
    RX_LAYOUT = VALVE_RX
    TX_LAYOUT = VALVE_TX
    RX_SUBMESSAGE = "hyqknee_rx_pdo"
    RX_FIELDS = tuple(
        enumerate(
            name.replace("pressure1", "pressure_1").replace("pressure2", "pressure_2")
            for name in VALVE_RX.names
        )
    )

    def set_to_pb(self) -> dict[str, Any]:
        self._write(
            "TX_HYQ_KNEE", "hyqknee_tx_pdo", dict(zip(VALVE_TX.names, self.tx_pdo))
        )
        return super().set_to_pb()


class PumpPdo(DevicePdo):
    """Hydraulic power unit."""

    ESC_NAME = "HyQ_HpuESC"
    RX_LAYOUT = PUMP_RX
    TX_LAYOUT = PUMP_TX
    RX_SUBMESSAGE = "hyqhpu_rx_pdo"
    RX_FIELDS = tuple((index, name.lower()) for index, name in enumerate(PUMP_RX.names))

    def set_to_pb(self) -> dict[str, Any]:
        tx = self.tx_pdo
        self._write(
            "TX_HYQ_HPU",
            "hyqhpu_tx_pdo",
            {
                "demandpressure": tx[0],
                "singlepumphighlt": tx[1],
                "singlepumplowlt": tx[2],
                "hpudemandmode": tx[3],
                "vesc1mode": tx[4],
                "vesc2mode": tx[5],
                "fan1spd": tx[5],
                "fan2spd": tx[7],
                "sysstatecmd": tx[8],
            },
        )
        return super().set_to_pb()


class MotorPdo(DevicePdo):
    """Common state of a motor drive; concrete drives define the mapping."""

    ESC_NAME = "Motor"
    RX_LAYOUT = MOTOR_RX
    TX_LAYOUT = MOTOR_TX

    def __init__(
        self, endpoint: str, esc_id: int, esc_type: EscType | str | None = None
    ) -> None:
        name = None if esc_type is None else str(getattr(esc_type, "value", esc_type))
        self.esc_type = esc_type
        super().__init__(endpoint, esc_id, name)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._abstract = False

    _abstract = True

    def __new__(cls, *args: Any, **kwargs: Any) -> "MotorPdo":
        if cls.__dict__.get("_abstract", False) or cls is MotorPdo:
            raise TypeError("MotorPdo is abstract; use a concrete drive class")
        return super().__new__(cls)

    @abstractmethod
    def get_from_pb(self, message: Mapping[str, Any]) -> tuple:
        """Update the received PDO from a drive message."""

    @abstractmethod
    def set_to_pb(self) -> dict[str, Any]:
        """Build the drive message from the transmitted PDO."""


class AdvrfPdo(MotorPdo):
    """Motor drive of the in-house ADVR family."""

    RX_SUBMESSAGE = "motor_xt_rx_pdo"
    RX_FIELDS = (
        (0, None),
        (1, "link_pos"),
        (2, "motor_pos"),
        (3, "link_vel"),
        (4, "motor_vel"),
        (5, "torque"),
        (6, "aux"),
        (7, "motor_temp"),
        (8, "board_temp"),
        (9, "fault"),
        (10, "rtt"),
        (11, "pos_ref"),
        (12, "vel_ref"),
        (13, "tor_ref"),
        (14, None),
    )

    def get_from_pb(self, message: Mapping[str, Any]) -> tuple:
        return self._read(message)

    def set_to_pb(self) -> dict[str, Any]:
        tx = self.tx_pdo
        fields: dict[str, Any] = {
            "pos_ref": tx[1],
            "vel_ref": tx[2],
            "tor_ref": tx[3],
            "gain_0": tx[4],
            "gain_1": tx[5],
            "gain_2": tx[6],
            "gain_3": tx[7],
            "gain_4": tx[8],
        }
        if tx[0] in (GainsType.POSITION, GainsType.VELOCITY):
            fields.update(
                gain_0=tx[4], gain_1=tx[6], gain_2=0.0, gain_3=0.0, gain_4=tx[5]
            )
        fields["ts"] = (time.time_ns() // 1000) & 0xFFFFFFFF
        fields["fault_ack"] = 0
        try:
            op = AuxOp(tx[9])
        except ValueError:
            op = None
        if op is AuxOp.SET:
            fields["op_idx_aux"] = tx[10]
            fields["aux"] = tx[11]
        elif op is AuxOp.GET:
            fields["op_idx_aux"] = tx[10]
        self._write("TX_XT_MOTOR", "motor_xt_tx_pdo", fields)
        return DevicePdo.set_to_pb(self)


class SynapticonPdo(MotorPdo):
    """Synapticon motor drive."""

    RX_SUBMESSAGE = "circulo9_rx_pdo"
    RX_FIELDS = (
        (0, "statusword"),
        (1, "link_pos"),
        (2, "motor_pos"),
        (3, "link_vel"),
        (4, "motor_vel"),
        (5, "torque"),
        (6, "current"),
        (7, "motor_temp"),
        (9, "drive_temp"),
        (9, "error_code"),
        (10, None),
        (11, "demanded_pos"),
        (12, "demanded_vel"),
        (13, "demanded_torque"),
        (14, "demanded_current"),
    )

    def get_from_pb(self, message: Mapping[str, Any]) -> tuple:
        return self._read(message)

    def set_to_pb(self) -> dict[str, Any]:
        tx = self.tx_pdo
        self._write(
            "TX_CIRCULO9",
            "circulo9_tx_pdo",
            {
                "target_pos": tx[1],
                "target_vel": tx[2],
                "target_torque": tx[3],
                "target_current": tx[3],
                "gain_0": tx[4],
                "gain_1": tx[5],
                "gain_2": tx[6],
                "gain_3": tx[7],
                "gain_4": tx[8],
            },
        )
        return DevicePdo.set_to_pb(self)