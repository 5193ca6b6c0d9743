import pytest

from attendance_seeder.errors import StoreError, ValidationError
from attendance_seeder.seeder import run_seed

from conftest import FakeStore


def test_full_run_on_empty_store(ctx, store):
    summary = run_seed(ctx)

    assert summary.branches == 1
    assert summary.shifts == 3
    assert summary.users == 5
    assert summary.days == 7
    assert len(store.data["users"]) == 5
    assert summary.attendance_docs == len(store.data["attendance"])
    # 1 batch por usuario
    assert len(store.commits) == 5
    assert all(7 <= n <= 14 for n in store.commits)


def test_users_reference_existing_branches_and_shifts(make_ctx):
    st = FakeStore({"branches": {"b1": {"name": "Smouha"}}, "shifts": {"night": {"name": "Night"}}})
    run_seed(make_ctx(st=st))

    for user in st.data["users"].values():
        assert (user["branchId"], user["branchName"]) == ("b1", "Smouha")
        assert (user["shiftId"], user["shiftName"]) == ("night", "Night")
    for doc in st.data["attendance"].values():
        assert doc["branchId"] == "b1"
        assert doc["shiftId"] == "night"


def test_attendance_can_be_disabled(make_ctx, store):
    summary = run_seed(make_ctx(seed_attendance=False))

    assert summary.attendance_docs == 0
    assert summary.days == 0
    assert "attendance" not in store.data
    assert len(store.data["users"]) == 5


def test_month_mode_counts_only_past_days(make_ctx, store):
    summary = run_seed(make_ctx(seed_month="2025-02", present_prob=0.0))

    assert summary.days == 28
    assert summary.attendance_docs == 5 * 28


def test_current_month_counts_only_days_up_to_today(make_ctx, store):
    # NOW es 2025-03-10: del 11 al 31 no se siembran ni se cuentan
    summary = run_seed(make_ctx(seed_month="2025-03", present_prob=0.0))

    assert summary.days == 10
    assert summary.attendance_docs == 5 * 10
    assert {doc["localDay"] for doc in store.data["attendance"].values()} == {
        f"2025-03-{d:02d}" for d in range(1, 11)
    }


def test_malformed_month_fails_before_any_write(make_ctx, store):
    with pytest.raises(ValidationError):
        run_seed(make_ctx(seed_month="2025-13"))
    assert store.writes == 0


def test_store_failure_keeps_committed_batches(make_ctx, store):
    store.fail_commits_after = 2

    with pytest.raises(StoreError):
        run_seed(make_ctx(present_prob=1.0))

    assert store.commits == [14, 14]
    assert {doc["userId"] for doc in store.data["attendance"].values()} == {"EMP-001", "EMP-002"}


def test_same_seed_same_data(make_ctx):
    a, b = FakeStore(), FakeStore()
    run_seed(make_ctx(st=a, seed=42))
    run_seed(make_ctx(st=b, seed=42))
    assert a.data == b.data
