# tests/unit/core/test_types.py
# Unit tests for cycle records, training config & session serialization

import pytest

from cyclewatch.core.exceptions import CycleRecordError
from cyclewatch.core.types import (
    UNLIMITED,
    CycleRecord,
    Phase,
    TrainingConfig,
    TrainingMode,
    TrainingSession,
)


class TestCycleRecord:

    # * Verify sealing w/o duration measures end - start
    def test_seal_measures(self):
        record = CycleRecord(cycle_number=1, start_time=100.0)
        record.seal(112.5)
        assert record.sealed
        assert record.duration == pytest.approx(12.5)

    # * Verify explicit duration re-anchors the start
    def test_seal_with_duration(self):
        record = CycleRecord(cycle_number=2, start_time=100.0)
        record.seal(150.0, 10.0)
        assert record.start_time == pytest.approx(140.0)
        assert record.end_time - record.start_time == pytest.approx(record.duration)

    # * Verify a record cannot be sealed twice
    def test_double_seal(self):
        record = CycleRecord(cycle_number=1, start_time=0.0)
        record.seal(1.0)
        with pytest.raises(CycleRecordError):
            record.seal(2.0)

    # * Verify negative durations are rejected
    def test_negative_duration(self):
        record = CycleRecord(cycle_number=1, start_time=10.0)
        with pytest.raises(CycleRecordError):
            record.seal(5.0)

    # * Verify construction checks
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"cycle_number": 0, "start_time": 0.0},
            {"cycle_number": 1, "start_time": 0.0, "end_time": 1.0},
            {"cycle_number": 1, "start_time": 0.0, "end_time": 1.0, "duration": 5.0},
        ],
    )
    def test_invalid_construction(self, kwargs):
        with pytest.raises(CycleRecordError):
            CycleRecord(**kwargs)

    # * Verify stored format uses epoch ms & seconds
    def test_to_dict(self):
        record = CycleRecord(cycle_number=1, start_time=1000.0)
        assert record.to_dict() == {"cycleNumber": 1, "startTime": 1_000_000}
        record.seal(1012.0)
        assert record.to_dict() == {
            "cycleNumber": 1,
            "startTime": 1_000_000,
            "endTime": 1_012_000,
            "duration": 12.0,
        }

    # * Verify records w/o endTime derive it from the duration
    def test_from_dict_without_end(self):
        record = CycleRecord.from_dict({"cycleNumber": 3, "startTime": 5000, "duration": 2})
        assert record.end_time == pytest.approx(7.0)


class TestTrainingConfig:

    # * Verify round permission under a fixed count
    def test_permits_round(self):
        config = TrainingConfig(cycle_duration=10, number_of_cycles=2)
        assert config.permits_round(2)
        assert not config.permits_round(3)

    # * Verify unlimited always permits
    def test_unlimited(self):
        config = TrainingConfig(cycle_duration=10)
        assert config.unlimited
        assert config.permits_round(10_000)

    # * Verify camelCase mapping
    def test_dict_keys(self):
        config = TrainingConfig(cycle_duration=60, rest_time=30, number_of_cycles=UNLIMITED, buffer_time=5)
        data = config.to_dict()
        assert data == {
            "cycleDuration": 60,
            "restTime": 30,
            "numberOfCycles": "unlimited",
            "bufferTime": 5,
        }
        assert TrainingConfig.from_dict(data) == config


class TestTrainingSession:

    def _session(self, mode=TrainingMode.MANUAL, config=None):
        first = CycleRecord(cycle_number=1, start_time=1000.0)
        first.seal(1010.0)
        second = CycleRecord(cycle_number=2, start_time=1010.0)
        second.seal(1025.0)
        return TrainingSession(
            id="session-1",
            mode=mode,
            start_time=1000.0,
            end_time=1025.0,
            total_duration=25.0,
            total_rounds=2,
            cycles=(first, second),
            config=config,
        )

    # * Verify manual sessions store an empty config object
    def test_manual_config_empty(self):
        data = self._session().to_dict()
        assert data["mode"] == "mode2"
        assert data["config"] == {}
        assert data["totalRounds"] == 2
        assert data["startTime"] == 1_000_000

    # * Verify stored sessions load back w/ equal content
    def test_from_dict(self):
        config = TrainingConfig(cycle_duration=10, rest_time=5, number_of_cycles=2)
        session = self._session(TrainingMode.AUTOMATIC, config)
        loaded = TrainingSession.from_dict(session.to_dict())
        assert loaded.mode is TrainingMode.AUTOMATIC
        assert loaded.config == config
        assert loaded.sealed_durations == pytest.approx([10, 15])

    # * Verify sessions hold their own copies of the records
    def test_records_detached(self):
        record = CycleRecord(cycle_number=1, start_time=0.0)
        session = TrainingSession(
            id="s", mode=TrainingMode.MANUAL, start_time=0.0, end_time=1.0,
            total_duration=1.0, total_rounds=0, cycles=(record,),
        )
        record.seal(1.0)
        assert not session.cycles[0].sealed


class TestPhase:

    # * Verify which phases count as an active run
    def test_active(self):
        assert not Phase.IDLE.active
        assert not Phase.FINISHED.active
        assert all(p.active for p in (Phase.BUFFER, Phase.CYCLE, Phase.REST, Phase.RUNNING, Phase.STOPPED))
