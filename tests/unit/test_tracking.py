import json

from tracking import flush, reset, snapshot, t
from tracking.runtime import TRACKING_FILE_ENV


def test_t_counts_calls():
    reset()
    t('tests.example.function')
    t('tests.example.function')
    t('')

    counts = snapshot()

    assert counts == {'tests.example.function': 2}


def test_flush_only_writes_when_configured(tmp_path, monkeypatch):
    reset()
    t('tests.example.flush')
    monkeypatch.delenv(TRACKING_FILE_ENV, raising=False)
    assert flush() is None

    target = tmp_path / "calls.json"
    monkeypatch.setenv(TRACKING_FILE_ENV, str(target))

    assert flush() == target
    assert json.loads(target.read_text(encoding="utf-8"))['tests.example.flush'] == 1
