"""Tests for the weekcal CLI command handlers and entry point."""

import json
import logging
import os
import subprocess
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / 'scripts'))

import weekcal
from week import Task

SCRIPT = Path(__file__).resolve().parent.parent / 'scripts' / 'weekcal.py'


def _run(args, data_dir):
    env = os.environ.copy()
    env['WEEKCAL_DIR'] = str(data_dir)
    env['NO_COLOR'] = '1'
    env.pop('FORCE_COLOR', None)
    env.pop('WEEKCAL_LOG_LEVEL', None)
    env['PYTHONIOENCODING'] = 'utf-8'
    return subprocess.run([sys.executable, str(SCRIPT), *args],
                          text=True, encoding='utf-8', capture_output=True, env=env, check=False)


def _add_args(day, item, location=None, recurring=False):
    return SimpleNamespace(day=day, item=item, location=location, recurring=recurring)


def test_cmd_add_persists_and_confirms(store, capsys):
    weekcal.cmd_add(_add_args('W', 'Dentist', 'Clinic'), store)
    out = capsys.readouterr().out
    assert out.strip() == "Added 'Dentist at Clinic' to Wednesday"
    assert store.load_calendar().days == {'wednesday': [Task('Dentist', 'Clinic')]}


def test_cmd_clear_confirms(store, capsys):
    for item in ('a', 'b', 'c'):
        weekcal.cmd_add(_add_args('sunday', item), store)
    capsys.readouterr()
    weekcal.cmd_clear(SimpleNamespace(day='su'), store)
    assert capsys.readouterr().out.strip() == 'Cleared all items from Sunday successfully'
    assert store.load_calendar().days == {'sunday': []}


def test_cmd_archive_week_carries_recurring(store, capsys):
    weekcal.cmd_add(_add_args('m', 'Weekly sync', recurring=True), store)
    weekcal.cmd_add(_add_args('m', 'One-off'), store)
    capsys.readouterr()

    weekcal.cmd_archive_week(SimpleNamespace(), store)
    out = capsys.readouterr().out
    assert 'Week archived and cleared successfully' in out
    assert 'Carried forward 1 recurring task' in out
    assert store.load_calendar().days == {'monday': [Task('Weekly sync', recurring=True)]}
    assert len(store.load_archive_log()) == 1


def test_cmd_archive_week_without_recurring(store, capsys):
    weekcal.cmd_add(_add_args('t', 'Errand'), store)
    capsys.readouterr()
    weekcal.cmd_archive_week(SimpleNamespace(), store)
    assert capsys.readouterr().out.strip() == 'Week archived and cleared successfully'
    assert store.load_calendar().days == {}


def test_cmd_history_lists_and_searches(store, capsys):
    weekcal.cmd_history(SimpleNamespace(search=None, json=False), store)
    assert 'No archived weeks yet.' in capsys.readouterr().out

    weekcal.cmd_add(_add_args('th', 'Dentist', 'Clinic'), store)
    weekcal.cmd_archive_week(SimpleNamespace(), store)
    capsys.readouterr()

    weekcal.cmd_history(SimpleNamespace(search=None, json=True), store)
    summary = json.loads(capsys.readouterr().out)
    assert len(summary) == 1
    assert summary[0]['total'] == 1

    weekcal.cmd_history(SimpleNamespace(search='clinic', json=False), store)
    assert 'Thursday: Dentist (at Clinic)' in capsys.readouterr().out

    weekcal.cmd_history(SimpleNamespace(search='clinic', json=True), store)
    hits = json.loads(capsys.readouterr().out)
    assert hits[0]['day'] == 'thursday'
    assert hits[0]['location'] == 'Clinic'


def test_parser_short_flags():
    args = weekcal.build_parser().parse_args(['add', '-d', 'f', '-i', 'Gym', '-l', 'Club', '-r'])
    assert (args.day, args.item, args.location, args.recurring) == ('f', 'Gym', 'Club', True)
    assert args.func is weekcal.cmd_add


def test_parser_requires_command():
    with pytest.raises(SystemExit) as exc:
        weekcal.build_parser().parse_args([])
    assert exc.value.code == 2


def test_end_to_end_add_show_clear(tmp_path):
    data_dir = tmp_path / 'cal'
    r = _run(['add', '--day', 'W', '--item', 'Dentist', '--location', 'Clinic'], data_dir)
    assert r.returncode == 0
    r = _run(['add', '--day', 'su', '--item', 'Brunch', '--recurring'], data_dir)
    assert r.returncode == 0

    r = _run(['show'], data_dir)
    assert r.returncode == 0
    assert '• Dentist (at Clinic)' in r.stdout
    assert '• Brunch ↻' in r.stdout

    r = _run(['clear', '--day', 'su'], data_dir)
    assert r.returncode == 0
    r = _run(['show'], data_dir)
    sunday = r.stdout.split('Sunday:')[1]
    assert '(no items)' in sunday
    assert 'Brunch' not in sunday

    saved = json.loads((data_dir / 'calendar.json').read_text())
    assert saved['days']['wednesday'][0]['description'] == 'Dentist'


def test_end_to_end_archive_week(tmp_path):
    data_dir = tmp_path / 'cal'
    _run(['add', '-d', 'm', '-i', 'Standup', '-r'], data_dir)
    _run(['add', '-d', 'm', '-i', 'Dentist'], data_dir)
    r = _run(['archive-week'], data_dir)
    assert r.returncode == 0
    assert 'Week archived and cleared successfully' in r.stdout

    archive = json.loads((data_dir / 'archive.json').read_text())
    assert len(archive) == 1
    assert [t['description'] for t in archive[0]['week']['monday']] == ['Standup', 'Dentist']

    calendar = json.loads((data_dir / 'calendar.json').read_text())
    assert calendar == {'days': {'monday': [
        {'description': 'Standup', 'location': None, 'recurring': True},
    ]}}


def test_end_to_end_corrupt_calendar_is_replaced(tmp_path):
    data_dir = tmp_path / 'cal'
    data_dir.mkdir()
    (data_dir / 'calendar.json').write_text('{broken')
    r = _run(['add', '-d', 'f', '-i', 'Fresh start'], data_dir)
    assert r.returncode == 0
    assert 'WARNING' in r.stderr
    saved = json.loads((data_dir / 'calendar.json').read_text())
    assert list(saved['days']) == ['friday']


def test_invalid_command_line_exits_nonzero(tmp_path):
    r = _run(['add', '--day', 'm'], tmp_path / 'cal')
    assert r.returncode == 2
    assert 'usage' in r.stderr.lower()


def test_write_failure_still_reports_success(store, monkeypatch, capsys, caplog):
    import store as store_module

    def fail(path, content):
        raise OSError('read-only file system')

    monkeypatch.setattr(store_module, 'atomic_write', fail)
    with caplog.at_level(logging.WARNING):
        weekcal.cmd_add(_add_args('m', 'Standup', recurring=True), store)
        weekcal.cmd_archive_week(SimpleNamespace(), store)

    out = capsys.readouterr().out
    assert "Added 'Standup' to Monday" in out
    assert 'Week archived and cleared successfully' in out
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 3
    assert all('read-only file system' in r.getMessage() for r in warnings)
    assert not store.calendar_path.exists()


def test_non_utf8_argument_is_usage_error(tmp_path):
    data_dir = tmp_path / 'cal'
    env = os.environ.copy()
    env['WEEKCAL_DIR'] = str(data_dir)
    env['PYTHONIOENCODING'] = 'utf-8'
    r = subprocess.run([sys.executable, str(SCRIPT), 'add', '-d', 'm', '-i', b'caf\xff'],
                       capture_output=True, env=env, check=False)
    assert r.returncode == 2
    stderr = r.stderr.decode('utf-8', 'replace')
    assert 'usage' in stderr.lower()
    assert 'Traceback' not in stderr
    assert not (data_dir / 'calendar.json').exists()


def test_history_json_keeps_non_ascii(store, capsys):
    weekcal.cmd_add(_add_args('f', 'Café'), store)
    weekcal.cmd_archive_week(SimpleNamespace(), store)
    capsys.readouterr()
    weekcal.cmd_history(SimpleNamespace(search='café', json=True), store)
    out = capsys.readouterr().out
    assert '"description": "Café"' in out
