import gzip
import json

import pytest

from ecat_client.logger import EcLogger
from ecat_client.pdo import FT_RX, MOTOR_RX, MOTOR_TX, PUMP_TX
from ecat_client.types import EscType

SLAVES = [
    (1, EscType.CENT_AC, 0),
    (2, "FT6_MSP432", 1),
    (3, "HYQ_HPU", 2),
]


@pytest.fixture
def logger(tmp_path):
    ec_logger = EcLogger(logger_dir=tmp_path)
    ec_logger.init_logger(SLAVES)
    ec_logger.start()
    return ec_logger


def test_start_creates_loggers_per_family(logger):
    assert logger.logger_names == [
        "ft_status_logger",
        "motor_reference_logger",
        "motor_status_logger",
        "pump_reference_logger",
        "pump_status_logger",
    ]


def test_entries_are_named_after_esc_id(logger):
    assert list(logger.rows("motor_status_logger")) == ["motor_sts_id_1"]
    assert list(logger.rows("motor_reference_logger")) == ["motor_ref_id_1"]
    assert list(logger.rows("ft_status_logger")) == ["ft_id_2"]
    assert list(logger.rows("pump_reference_logger")) == ["pump_ref_id_3"]


def test_log_motor_status_appends_row(logger):
    pdo = MOTOR_RX.default()
    logger.log_motor_status({1: pdo})
    logger.log_motor_status({1: pdo})
    rows = logger.rows("motor_status_logger")["motor_sts_id_1"]
    assert rows == [MOTOR_RX.to_vector(pdo)] * 2


def test_unknown_esc_id_and_wrong_size_are_skipped(logger):
    logger.log_ft_status({99: FT_RX.default()})
    logger.log_ft_status({2: (1.0, 2.0)})
    assert logger.rows("ft_status_logger")["ft_id_2"] == []


def test_logging_family_without_logger_is_ignored(logger):
    logger.log_imu_status({1: (0,) * 15})
    with pytest.raises(KeyError):
        logger.rows("imu_status_logger")


def test_stop_writes_files_that_round_trip(logger, tmp_path):
    ref = (0x3B, 1.5, 0.25, 2.0, 10.0, 0.5, 1.0, 0.0, 0.0, 1, 2, 0.75)
    logger.log_motor_reference({1: ref})
    pump = (1, 2, 3, 4, 5, 6, 7, 8, 9)
    logger.log_pump_reference({3: pump})
    paths = logger.stop()
    assert len(paths) == 5
    assert all(path.parent == tmp_path for path in paths)
    contents = {}
    for path in paths:
        with gzip.open(path, "rt", encoding="utf-8") as stream:
            contents[path.name.split("__")[0]] = json.load(stream)
    assert contents["motor_reference_logger"] == {
        "motor_ref_id_1": [MOTOR_TX.to_vector(ref)]
    }
    assert contents["pump_reference_logger"] == {
        "pump_ref_id_3": [PUMP_TX.to_vector(pump)]
    }
    assert logger.logger_names == []


def test_uncompressed_files(tmp_path):
    ec_logger = EcLogger(logger_dir=tmp_path, compression=False)
    ec_logger.init_logger([(2, "FT6_MSP432", 0)])
    ec_logger.start()
    pdo = (1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7, 8)
    ec_logger.log_ft_status({2: pdo})
    (path,) = ec_logger.stop()
    assert path.suffix == ".json"
    assert json.loads(path.read_text()) == {"ft_id_2": [FT_RX.to_vector(pdo)]}


def test_buffer_keeps_newest_rows(tmp_path):
    ec_logger = EcLogger(logger_dir=tmp_path, buffer_size=2)
    ec_logger.init_logger([(2, "FT6_MSP432", 0)])
    ec_logger.start()
    samples = [tuple([float(n)] * 6 + [n, n]) for n in range(3)]
    for sample in samples:
        ec_logger.log_ft_status({2: sample})
    rows = ec_logger.rows("ft_status_logger")["ft_id_2"]
    assert rows == [FT_RX.to_vector(s) for s in samples[1:]]


def test_empty_description_logs_nothing(tmp_path):
    ec_logger = EcLogger(logger_dir=tmp_path)
    ec_logger.init_logger([])
    ec_logger.start()
    assert ec_logger.logger_names == []
    assert ec_logger.stop() == []


def test_restart_discards_previous_rows(logger):
    logger.log_motor_status({1: MOTOR_RX.default()})
    logger.start()
    assert logger.rows("motor_status_logger")["motor_sts_id_1"] == []


def test_invalid_buffer_size():
    with pytest.raises(ValueError):
        EcLogger(buffer_size=0)