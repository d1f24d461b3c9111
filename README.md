# ecat_client

A pure-Python data model for an EtherCAT client. It describes the process
data objects (PDOs) exchanged with EtherCAT slaves: motors, force/torque
sensors, IMUs, power boards, hydraulic valves and pumps. It also provides a
filter for smoothing references, a logger that records PDO rows per slave,
and a worker thread for periodic loops.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `ecat_client.types`

- `ClientStatus`, `RefFlags`, `ClientCmdType` and `PdoAuxCmdType` are the client enumerations.
- `EscType` names the known slave board types, for example `EscType.CENT_AC` and `EscType.HYQ_HPU`.
- `DeviceKind` names the device families: motor, ft, imu, pow, valve and pump.
- `device_kind(esc_type)` maps a board type to its family. It accepts an `EscType`, its value or its member name. It returns `None` for a type it does not handle.
- `EC_MOTORS` and `EC_VALVES` map board types to drive names.

### `ecat_client.pdo`

`PdoLayout` describes one PDO direction of a device as ordered, named and typed fields (`FieldType`). The module holds these layouts:

- `MOTOR_RX` and `MOTOR_TX`
- `FT_RX`
- `IMU_RX`
- `POW_RX`
- `VALVE_RX` and `VALVE_TX`
- `PUMP_RX` and `PUMP_TX`

Each layout has the following members:

- `names`, `types` and `pdo_size` describe its fields.
- `to_vector(pdo)` turns a PDO tuple into a list of single-precision floats. It raises `ValueError` if the tuple has the wrong number of values.
- `default()` returns a tuple with every field set to zero.
- `field_index(name)` returns the position of a field. It raises `KeyError` for an unknown name.

### `ecat_client.filters`

- `SecondOrderFilter(omega=1.0, eps=0.8, ts=0.01, initial_state=None)` is a discrete second-order low-pass filter built with the bilinear transform.
  - `process(value)` feeds one sample and returns the filtered output.
  - `reset(initial_state)` sets the stored samples.
  - The `output` property gives the last output.
  - Setting `omega`, `damping` or `time_step` recomputes the coefficients.
- `dynamic_get(index, values)` returns an element by run-time index. It raises `IndexError` when the index is out of range.

### `ecat_client.devices`

Per-device PDO objects are built with an endpoint and an esc id. The classes are `FtPdo`, `ImuPdo`, `PowPdo`, `ValvePdo`, `PumpPdo`, `AdvrfPdo` and `SynapticonPdo`.

Messages are plain mappings shaped like the slave PDO message, with one sub-message per device family, such as `ft6_rx_pdo` or `motor_xt_rx_pdo`.

- `get_from_pb(message)` updates `rx_pdo` from a received message and returns it. It also sets `init_rx_pdo`.
- `tx_pdo` can be set on devices that transmit: valves, pumps and motors. The values are coerced to their field types.
- `set_to_pb()` builds the outgoing message from `tx_pdo` and returns a copy of it.
- `ImuPdo` updates the quaternion fields only when the message carries them.
- `MotorPdo` is the abstract base of the motor drives. `AdvrfPdo` remaps the gains for the `GainsType.POSITION` and `GainsType.VELOCITY` control types, and it handles the auxiliary channel by `AuxOp`.

### `ecat_client.logger`

`EcLogger(logger_dir=None, buffer_size=10000, compression=True)` records PDO rows per slave.

- `init_logger(slave_descr)` takes `(esc id, board type, position)` tuples.
- `start()` creates one logger per device family present, such as `motor_status_logger` and `motor_reference_logger`.
- `log_motor_status(...)`, `log_pump_reference(...)` and the other `log_*` methods append rows for the known slaves.
- `rows(logger_name)` and `logger_names` show what is buffered.
- `stop()` writes each logger to `<logger_dir>/<logger name>__<timestamp>.json`. The file name ends in `.json.gz` when compressed. The method returns the paths written.

### `ecat_client.thread`

`EcThread` is an abstract worker. Subclasses supply `th_init()` and `th_loop()`.

- `create(rt=True, cpu_nr=-1)` starts the thread. It applies the scheduling policy, the priority and the optional CPU affinity. It raises `RuntimeError` if these cannot be set.
- `stop()` ends the loop.
- `join()` waits for the thread to finish.
- The loop is paced by `period_usec`. A period of 0 s and 1 µs (`is_non_periodic()`) runs the loop back to back.
- Late iterations of `SCHED_FIFO` threads are counted in `overruns`.

## Example

```python
from ecat_client.pdo import MOTOR_RX
from ecat_client.filters import SecondOrderFilter

status = MOTOR_RX.default()
print(MOTOR_RX.to_vector(status))        # fifteen 0.0 values
print(MOTOR_RX.field_index("motor_pos"))  # 2

flt = SecondOrderFilter()
for _ in range(5):
    print(flt.process(1.0))
```

## What this package does not do

This package does not connect to an EtherCAT master. It has no network or IPC transport and no client object that reads status or sends references. It does not issue commands or read and write SDOs, and it does not encode or decode protobuf wire messages: device messages are plain mappings. It provides no command-line program and no graphical interface.