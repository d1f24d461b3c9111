"""Shared enumerations and device classification for the EtherCAT client."""

from __future__ import annotations

from enum import Enum, IntEnum, IntFlag


class ClientStatus(IntEnum):
    """Lifecycle status of an EtherCAT client."""

    ERROR = 0
    NOT_ALIVE = 1 << 0
    IDLE = 1 << 1
    CONNECTED = 1 << 2
    DEVICES_MAPPED = 1 << 3
    DEVICES_STARTED = 1 << 4
    DEVICES_CTRL = 1 << 5
    DEVICES_STOPPED = 1 << 6


class RefFlags(IntFlag):
    """Flags attached to reference messages."""

    FLAG_NONE = 0x0
    FLAG_MULTI_REF = 1 << 0
    FLAG_LAST_REF = 1 << 1


class ClientCmdType(IntEnum):
    """Start/stop command for the client."""

    STOP = 0
    START = 1


class PdoAuxCmdType(IntEnum):
    """Auxiliary PDO commands for motors."""

    BRAKE_RELEASE = 1
    BRAKE_ENGAGE = 2
    LED_ON = 3
    LED_OFF = 4


class EscType(str, Enum):
    """Known EtherCAT slave board types, identified by name."""

    CENT_AC = "CENT_AC"
    LO_PWR_DC_MC = "LO_PWR_DC_MC"
    SYNAPTICON_V5_0 = "SYNAPTICON_v5_0"
    SYNAPTICON_V5_1 = "SYNAPTICON_v5_1"
    FT6_MSP432 = "FT6_MSP432"
    IMU_ANY = "IMU_ANY"
    POW_F28M36_BOARD = "POW_F28M36_BOARD"
    HYQ_KNEE = "HYQ_KNEE"
    HYQ_HPU = "HYQ_HPU"


class DeviceKind(Enum):
    """Family of device a slave belongs to."""

    MOTOR = "motor"
    FT = "ft"
    IMU = "imu"
    POW = "pow"
    VALVE = "valve"
    PUMP = "pump"


EC_MOTORS: dict[EscType, str] = {
    EscType.CENT_AC: "ADVRF_Motor",
    EscType.LO_PWR_DC_MC: "ADVRF_Motor",
    EscType.SYNAPTICON_V5_0: "Synapticon_Motor",
    EscType.SYNAPTICON_V5_1: "Synapticon_Motor",
}

EC_VALVES: dict[EscType, str] = {
    EscType.HYQ_KNEE: "ADVRF_Valve",
}

_KINDS: dict[EscType, DeviceKind] = {
    EscType.CENT_AC: DeviceKind.MOTOR,
    EscType.LO_PWR_DC_MC: DeviceKind.MOTOR,
    EscType.SYNAPTICON_V5_0: DeviceKind.MOTOR,
    EscType.SYNAPTICON_V5_1: DeviceKind.MOTOR,
    EscType.FT6_MSP432: DeviceKind.FT,
    EscType.IMU_ANY: DeviceKind.IMU,
    EscType.POW_F28M36_BOARD: DeviceKind.POW,
    EscType.HYQ_KNEE: DeviceKind.VALVE,
    EscType.HYQ_HPU: DeviceKind.PUMP,
}


def _as_esc_type(esc_type: EscType | str) -> EscType | None:
    if isinstance(esc_type, EscType):
        return esc_type
    if isinstance(esc_type, str):
        try:
            return EscType(esc_type)
        except ValueError:
            return EscType.__members__.get(esc_type)
    return None


def device_kind(esc_type: EscType | str) -> DeviceKind | None:
    """Return the device family of a board type, or None if it is not handled."""
    resolved = _as_esc_type(esc_type)
    if resolved is None:
        return None
    return _KINDS.get(resolved)