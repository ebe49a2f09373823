import json
from datetime import date

import pytest

from workforce_analytics.core.exceptions import DataSourceError
from workforce_analytics.data.json_source import JsonSnapshotDataSource


def test_reads_every_section(snapshot_path):
    source = JsonSnapshotDataSource(snapshot_path)

    assert len(source.list_members()) == 5
    assert len(source.list_tasks()) == 5
    assert len(source.list_ratings()) == 2
    assert source.get_settings().late_grace_minutes == 10


def test_attendance_range_is_inclusive(snapshot_path):
    source = JsonSnapshotDataSource(snapshot_path)

    day = date(2024, 1, 15)
    assert len(source.list_attendance(start=day, end=day)) == 3
    assert len(source.list_attendance(end=date(2024, 1, 14))) == 2
    assert len(source.list_attendance()) == 5


def test_score_scale_is_applied(tmp_path):
    path = tmp_path / "snap.json"
    path.write_text(json.dumps({"tasks": [{"taskId": "T1", "qualityScore": 3}]}), encoding="utf-8")

    source = JsonSnapshotDataSource(path, score_scale=5)
    assert source.list_tasks()[0].quality_score == pytest.approx(60.0)


def test_missing_sections_are_empty(tmp_path):
    path = tmp_path / "snap.json"
    path.write_text("{}", encoding="utf-8")

    source = JsonSnapshotDataSource(path)
    assert source.list_members() == []
    assert source.list_attendance() == []
    assert source.get_settings().start_time.hour == 9


def test_reload_picks_up_new_export(tmp_path):
    path = tmp_path / "snap.json"
    path.write_text(json.dumps({"members": []}), encoding="utf-8")
    source = JsonSnapshotDataSource(path)
    assert source.list_members() == []

    path.write_text(json.dumps({"members": [{"memberId": "M1", "name": "A"}]}), encoding="utf-8")
    assert source.list_members() == []
    source.reload()
    assert len(source.list_members()) == 1


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]", '{"members": {"a": 1}}'])
def test_unreadable_snapshots_raise(tmp_path, content):
    path = tmp_path / "snap.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(DataSourceError):
        JsonSnapshotDataSource(path).list_members()


def test_missing_file_raises(tmp_path):
    with pytest.raises(DataSourceError):
        JsonSnapshotDataSource(tmp_path / "nope.json").list_tasks()


def test_rows_without_ids_are_dropped(tmp_path):
    path = tmp_path / "snap.json"
    path.write_text(
        json.dumps(
            {
                "members": [{"memberId": "M1", "name": "A"}, {"name": "Ghost"}],
                "attendance": [
                    {"memberId": "M1", "date": "2024-01-15", "status": "Late"},
                    {"date": "2024-01-15", "status": "Late"},
                ],
                "tasks": [{"title": "No id"}],
                "ratings": [{"memberId": "M1", "quality": 7}, {"quality": 3}],
            }
        ),
        encoding="utf-8",
    )

    source = JsonSnapshotDataSource(path)
    assert [m.member_id for m in source.list_members()] == ["M1"]
    assert [r.member_id for r in source.list_attendance()] == ["M1"]
    assert source.list_tasks() == []
    assert len(source.list_ratings()) == 1
