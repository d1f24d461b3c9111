"""Layouts of the process data objects exchanged with each device family."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence


class FieldType(Enum):
    """Wire type of a single PDO field."""

    F32 = "f"
    U8 = "B"
    U16 = "H"
    U32 = "I"
    I32 = "i"

    @property
    def is_float(self) -> bool:
        return self is FieldType.F32


def _to_f32(value: Any) -> float:
    return struct.unpack("f", struct.pack("f", float(value)))[0]


@dataclass(frozen=True)
class PdoLayout:
    """Ordered, named and typed fields of one PDO direction of a device."""

    name: str
    fields: tuple[tuple[str, FieldType], ...]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.fields)

    @property
    def types(self) -> tuple[FieldType, ...]:
        return tuple(kind for _, kind in self.fields)

    @property
    def pdo_size(self) -> int:
        return len(self.fields)

    def to_vector(self, pdo: Sequence[Any]) -> list[float]:
        """Flatten a PDO tuple into single-precision floats."""
        if len(pdo) != self.pdo_size:
            raise ValueError(
                f"{self.name}: expected {self.pdo_size} values, got {len(pdo)}"
            )
        return [_to_f32(value) for value in pdo]

    def default(self) -> tuple:
        """Return a PDO with every field set to zero."""
        return tuple(0.0 if kind.is_float else 0 for kind in self.types)

    def field_index(self, name: str) -> int:
        """Return the position of a named field."""
        try:
            return self.names.index(name)
        except ValueError:
            raise KeyError(f"{self.name} has no field {name!r}") from None


def _layout(name: str, names: Sequence[str], types: Sequence[FieldType]) -> PdoLayout:
    if len(names) != len(types):
        raise ValueError(f"{name}: names and types differ in length")
    return PdoLayout(name, tuple(zip(names, types)))


F, B, H, I, S = FieldType.F32, FieldType.U8, FieldType.U16, FieldType.U32, FieldType.I32

MOTOR_RX = _layout(
    "MotorPdoRx",
    ["status_word", "link_pos", "motor_pos", "link_vel", "motor_vel", "torque",
     "current", "motor_temp", "board_temp", "fault", "rtt",
     "pos_ref_fb", "vel_ref_fb", "tor_ref_fb", "curr_ref_fb"],
    [I, F, F, F, F, F, F, F, F, I, I, F, F, F, F],
)

MOTOR_TX = _layout(
    "MotorPdoTx",
    ["ctrl_type", "pos_ref", "vel_ref", "tor_ref",
     "gains_0", "gains_1", "gains_2", "gains_3", "gains_4",
     "op", "idx", "aux"],
    [S, F, F, F, F, F, F, F, F, I, I, F],
)

FT_RX = _layout(
    "FtPdoRx",
    ["force_x", "force_y", "force_z", "torque_x", "torque_y", "torque_z",
     "fault", "rtt"],
    [F, F, F, F, F, F, H, H],
)

IMU_RX = _layout(
    "ImuPdoRx",
    ["x_rate", "y_rate", "z_rate", "x_acc", "y_acc", "z_acc",
     "x_quat", "y_quat", "z_quat", "w_quat", "imu_ts", "temperature",
     "digital_in", "fault", "rtt"],
    [F, F, F, F, F, F, F, F, F, F, I, H, H, H, H],
)

POW_RX = _layout(
    "PowPdoRx",
    ["v_batt", "v_load", "i_load", "temp_batt", "temp_heatsink", "temp_pcb",
     "status", "fault", "op_idx_ack", "aux"],
    [F, F, F, F, F, F, H, H, H, F],
)

VALVE_RX = _layout(
    "ValvePdoRx",
    ["encoder_position", "force", "pressure1", "pressure2", "current",
     "temperature", "fault", "rtt", "op_idx_ack", "aux",
     "current_ref_fb", "position_ref_fb", "force_ref_fb"],
    [F, F, F, F, F, F, H, H, H, F, F, F, F],
)

VALVE_TX = _layout(
    "ValvePdoTx",
    ["current_ref", "position_ref", "force_ref",
     "gain_0", "gain_1", "gain_2", "gain_3", "gain_4",
     "fault_ack", "ts", "op_idx_aux", "aux"],
    [F, F, F, F, F, F, F, F, H, H, H, F],
)

PUMP_RX = _layout(
    "PumpPdoRx",
    ["pressure", "statusWord", "vesc1BoardTemp", "vesc1MotTemp", "vesc2BoardTemp",
     "vesc2MotTemp", "vesc1ActCur", "vesc1ActSpd", "vesc1Status",
     "vesc2ActCur", "vesc2ActSpd", "vesc2Status", "temp1", "temp2", "temp3",
     "vesc1FBDutyCycle", "vesc2FBDutyCycle", "vesc1Demand", "vesc2Demand",
     "pwm1DutyCycle", "pwm2DutyCycle"],
    [B, H, B, B, B, B, F, H, H, F, H, H, B, B, B, I, I, F, F, I, I],
)

PUMP_TX = _layout(
    "PumpPdoTx",
    ["demandPressure", "singlePumpHighLt", "singlePumpLowLt", "HPUDemandMode",
     "vesc1Mode", "vesc2Mode", "fan1Spd", "fan2Spd", "sysStateCmd"],
    [B, B, B, H, B, B, B, B, B],
)

del F, B, H, I, S