"""Tests for cross-store reconciliation."""

import io
from unittest.mock import patch

from typer.testing import CliRunner

from vidhost.cli import app
from vidhost.db.models import VideoAnalyticsModel
from vidhost.services.reconcile import reconcile
from vidhost.services.videos import create_video, initialize_analytics

runner = CliRunner()


def _add_video(session, store, name: str, with_analytics: bool = True):
    stored = store.upload(io.BytesIO(b"data"), f"{name}.mp4")
    video = create_video(
        session,
        title=name,
        description=None,
        filename=f"{name}.mp4",
        bucket=stored.bucket,
        s3_key=stored.key,
    )
    if with_analytics:
        initialize_analytics(session, video.id)
    return video


def test_clean_state(db_session, object_store) -> None:
    _add_video(db_session, object_store, "a")

    report = reconcile(db_session, object_store)

    assert report.clean


def test_reports_without_changing(db_session, object_store) -> None:
    _add_video(db_session, object_store, "a")
    bare = _add_video(db_session, object_store, "b", with_analytics=False)
    orphan = object_store.upload(io.BytesIO(b"orphan"), "c.mp4")

    report = reconcile(db_session, object_store)

    assert report.orphaned_keys == [orphan.key]
    assert report.videos_missing_analytics == [bare.id]
    assert report.deleted_keys == []
    assert object_store.exists(orphan.key)
    assert db_session.get(VideoAnalyticsModel, bare.id) is None


def test_apply_repairs(db_session, object_store) -> None:
    bare = _add_video(db_session, object_store, "b", with_analytics=False)
    orphan = object_store.upload(io.BytesIO(b"orphan"), "c.mp4")

    report = reconcile(db_session, object_store, apply=True)

    assert report.deleted_keys == [orphan.key]
    assert report.created_analytics == [bare.id]
    assert not object_store.exists(orphan.key)
    assert db_session.get(VideoAnalyticsModel, bare.id).views_count == 0
    assert reconcile(db_session, object_store).clean


def test_reconcile_command(db_session, object_store) -> None:
    orphan = object_store.upload(io.BytesIO(b"orphan"), "c.mp4")

    with patch("vidhost.services.upload.get_object_store", return_value=object_store):
        result = runner.invoke(app, ["reconcile"])

    assert result.exit_code == 0
    assert "Run with --delete to repair." in result.stdout
    assert object_store.exists(orphan.key)

    with patch("vidhost.services.upload.get_object_store", return_value=object_store):
        result = runner.invoke(app, ["reconcile", "--delete"])

    assert result.exit_code == 0
    assert not object_store.exists(orphan.key)


def test_dashboard_command_rejects_unknown_sort() -> None:
    result = runner.invoke(app, ["dashboard", "--sort", "loudest"])

    assert result.exit_code == 1
    assert "Unknown sort order" in result.stdout
