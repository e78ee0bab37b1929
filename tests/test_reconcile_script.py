# tests/test_reconcile_script.py
"""Tests for the pending-comment reconciliation command."""

from datetime import timedelta
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.orm import sessionmaker

from comment_stage.models import COMMENT_STATUS_APPROVED, COMMENT_STATUS_PENDING, Comment
from comment_stage.scripts import reconcile_pending
from tests.helpers import make_comment


@pytest.mark.asyncio
async def test_reconcile_uses_its_own_session(engine, db_session, alice, oracle) -> None:
    stale = make_comment(db_session, alice, content="stuck", age=timedelta(hours=1))
    fresh = make_comment(db_session, alice, content="new")
    script_sessions = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    with patch.object(reconcile_pending, "SessionLocal", script_sessions):
        count = await reconcile_pending.reconcile(timedelta(minutes=5), oracle)

    assert count == 1
    assert oracle.calls == ["stuck"]
    db_session.expire_all()
    assert db_session.get(Comment, stale.id).status == COMMENT_STATUS_APPROVED
    assert db_session.get(Comment, fresh.id).status == COMMENT_STATUS_PENDING


def test_main_reports_count(capsys) -> None:
    with patch.object(reconcile_pending, "_run", AsyncMock(return_value=3)) as run:
        exit_code = reconcile_pending.main(["--older-than", "60"])

    assert exit_code == 0
    run.assert_awaited_once_with(timedelta(seconds=60))
    assert "Reconciled 3 pending comment(s)." in capsys.readouterr().out


def test_main_rejects_negative_age(capsys) -> None:
    with patch.object(reconcile_pending, "_run", AsyncMock()) as run:
        exit_code = reconcile_pending.main(["--older-than", "-1"])

    assert exit_code == 2
    run.assert_not_called()
    assert "--older-than" in capsys.readouterr().err
