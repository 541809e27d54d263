"""Unit tests for maintenance_service module."""

from datetime import UTC, date, datetime, timedelta

import pytest
from pydantic import ValidationError

from carehub.core.config import settings
from carehub.core.db_client import RecordNotFoundError
from carehub.core.errors import InvalidStateTransitionError
from carehub.domain.create_models import MaintenanceTaskCreate
from carehub.domain.maintenance import CompletedState, DerivedState, MaintenanceStatus
from carehub.domain.update_models import MaintenanceTaskUpdate
from carehub.services import maintenance_service


@pytest.fixture
async def weekly_task(store, house, now, today):
    """Weekly task last done 30 days ago, so it fell due 23 days ago."""
    return await maintenance_service.create_task(
        store=store,
        data=MaintenanceTaskCreate(
            house_id=house.id,
            task_name="Smoke Detector Test",
            frequency="weekly",
            last_completed_date=now - timedelta(days=30),
        ),
        today=today,
    )


@pytest.mark.unit
class TestCreateTask:
    """Tests for create_task function."""

    async def test_derives_next_due_date(self, weekly_task, now):
        """The next due date is one period after the last completion."""
        assert weekly_task.next_due_date == now - timedelta(days=23)
        assert weekly_task.status == MaintenanceStatus.OVERDUE
        assert isinstance(weekly_task.state, DerivedState)

    async def test_persists_no_status(self, store, weekly_task):
        """Only the state variant is stored, never the derived status."""
        record = await store.get_record(collection="maintenance_tasks", record_id=weekly_task.id)

        assert "status" not in record
        assert record["state"] == {"kind": "derived"}

    async def test_month_end_clamps(self, store, house, today):
        """Jan 31 monthly comes due on the last day of February."""
        task = await maintenance_service.create_task(
            store=store,
            data=MaintenanceTaskCreate(
                house_id=house.id,
                task_name="HVAC Filter",
                frequency="monthly",
                last_completed_date=datetime(2024, 1, 31, 10, tzinfo=UTC),
            ),
            today=today,
        )

        assert task.next_due_date == datetime(2024, 2, 29, 10, tzinfo=UTC)

    async def test_requires_existing_house(self, store, now, today):
        """Unknown houses are rejected."""
        with pytest.raises(RecordNotFoundError):
            await maintenance_service.create_task(
                store=store,
                data=MaintenanceTaskCreate(house_id="missing", task_name="x", last_completed_date=now),
                today=today,
            )

    async def test_rejects_archived_house(self, store, archived_house, now, today):
        """Archived houses cannot get new tasks."""
        with pytest.raises(ValueError, match="archived"):
            await maintenance_service.create_task(
                store=store,
                data=MaintenanceTaskCreate(house_id=archived_house.id, task_name="x", last_completed_date=now),
                today=today,
            )

    def test_rejects_unknown_frequency(self, now):
        """Frequency is a closed set."""
        with pytest.raises(ValidationError):
            MaintenanceTaskCreate(house_id="h", task_name="x", frequency="daily", last_completed_date=now)

    def test_naive_date_taken_as_local_wall_time(self):
        """A bare form date is midnight in the configured timezone, here UTC."""
        data = MaintenanceTaskCreate(house_id="h", task_name="x", last_completed_date=datetime(2024, 5, 1))

        assert data.last_completed_date == datetime(2024, 5, 1, tzinfo=UTC)


@pytest.mark.unit
class TestCompletionLifecycle:
    """Tests for mark_complete and revert_completion."""

    async def test_weekly_end_to_end(self, store, weekly_task, now, today):
        """Overdue, then completed and sticky, then derived again after revert."""
        completed = await maintenance_service.mark_complete(store=store, task_id=weekly_task.id, now=now)

        assert completed.last_completed_date == now
        assert completed.next_due_date == now + timedelta(days=7)
        assert completed.status == MaintenanceStatus.COMPLETED
        assert isinstance(completed.state, CompletedState)

        # Sticky across reads, even once the new due date has passed
        later = today + timedelta(days=30)
        reread = await maintenance_service.get_task(store=store, task_id=weekly_task.id, today=later)
        assert reread.status == MaintenanceStatus.COMPLETED

        reverted = await maintenance_service.revert_completion(store=store, task_id=weekly_task.id, today=today)
        assert reverted.status == MaintenanceStatus.DUE_SOON
        assert reverted.next_due_date == now + timedelta(days=7)
        assert isinstance(reverted.state, DerivedState)

    async def test_revert_far_from_due_is_upcoming(self, store, house, now, today):
        """Reverting a monthly task completed today yields upcoming."""
        task = await maintenance_service.create_task(
            store=store,
            data=MaintenanceTaskCreate(house_id=house.id, task_name="Gutters", last_completed_date=now),
            today=today,
        )
        await maintenance_service.mark_complete(store=store, task_id=task.id, now=now)

        reverted = await maintenance_service.revert_completion(store=store, task_id=task.id, today=today)

        assert reverted.status == MaintenanceStatus.UPCOMING

    async def test_revert_requires_completed(self, store, weekly_task, today):
        """Only a completed task can be reverted."""
        with pytest.raises(InvalidStateTransitionError):
            await maintenance_service.revert_completion(store=store, task_id=weekly_task.id, today=today)

    async def test_recomplete_reschedules_from_new_now(self, store, weekly_task, now):
        """Completing again schedules from the latest completion."""
        await maintenance_service.mark_complete(store=store, task_id=weekly_task.id, now=now)
        later = now + timedelta(days=2)

        again = await maintenance_service.mark_complete(store=store, task_id=weekly_task.id, now=later)

        assert again.next_due_date == later + timedelta(days=7)
        assert again.state.completed_at == later

    async def test_complete_missing_task(self, store, now):
        """Completing an unknown task raises RecordNotFoundError."""
        with pytest.raises(RecordNotFoundError):
            await maintenance_service.mark_complete(store=store, task_id="missing", now=now)


@pytest.mark.unit
class TestUpdateTask:
    """Tests for update_task function."""

    async def test_frequency_change_recomputes_due_date(self, store, weekly_task, now, today):
        """Changing the frequency moves the next due date."""
        updated = await maintenance_service.update_task(
            store=store,
            task_id=weekly_task.id,
            changes=MaintenanceTaskUpdate(frequency="monthly"),
            today=today,
        )

        last = now - timedelta(days=30)
        assert updated.next_due_date == datetime(2024, 10, 20, 10, tzinfo=UTC)
        assert updated.last_completed_date == last
        assert updated.status == MaintenanceStatus.DUE_TODAY

    async def test_last_completed_change_recomputes_due_date(self, store, weekly_task, today):
        """Editing the last completion moves the next due date."""
        updated = await maintenance_service.update_task(
            store=store,
            task_id=weekly_task.id,
            changes=MaintenanceTaskUpdate(last_completed_date=datetime(2024, 10, 18, 9, tzinfo=UTC)),
            today=today,
        )

        assert updated.next_due_date == datetime(2024, 10, 25, 9, tzinfo=UTC)
        assert updated.status == MaintenanceStatus.DUE_SOON

    async def test_edit_keeps_completed_state(self, store, weekly_task, now, today):
        """Editing a completed task leaves it completed."""
        await maintenance_service.mark_complete(store=store, task_id=weekly_task.id, now=now)

        updated = await maintenance_service.update_task(
            store=store,
            task_id=weekly_task.id,
            changes=MaintenanceTaskUpdate(task_name="Smoke and CO Detector Test"),
            today=today,
        )

        assert updated.task_name == "Smoke and CO Detector Test"
        assert updated.status == MaintenanceStatus.COMPLETED

    async def test_empty_update_is_noop(self, store, weekly_task, today):
        """No changes returns the task as is."""
        updated = await maintenance_service.update_task(
            store=store,
            task_id=weekly_task.id,
            changes=MaintenanceTaskUpdate(),
            today=today,
        )

        assert updated == weekly_task

    async def test_empty_house_id_rejected(self, store, weekly_task, today):
        """A task cannot be detached from its house."""
        with pytest.raises(ValidationError):
            MaintenanceTaskUpdate(house_id="")

        unchanged = await maintenance_service.get_task(store=store, task_id=weekly_task.id, today=today)
        assert unchanged.house_id == weekly_task.house_id


@pytest.mark.unit
class TestListAndSummaries:
    """Tests for list_tasks and summarize_houses over the demo data."""

    async def test_statuses_recomputed_for_today(self, seeded_store, today):
        """Each demo task gets its status for the given day."""
        tasks = await maintenance_service.list_tasks(store=seeded_store, today=today)
        statuses = {t.id: t.status for t in tasks}

        assert statuses == {
            "mt-1": MaintenanceStatus.OVERDUE,
            "mt-2": MaintenanceStatus.DUE_TODAY,
            "mt-3": MaintenanceStatus.OVERDUE,
            "mt-4": MaintenanceStatus.UPCOMING,
            "mt-5": MaintenanceStatus.DUE_SOON,
            "mt-6": MaintenanceStatus.OVERDUE,
        }

    async def test_sorted_by_next_due_date(self, seeded_store, today):
        """Earliest due first."""
        tasks = await maintenance_service.list_tasks(store=seeded_store, today=today)

        assert [t.next_due_date for t in tasks] == sorted(t.next_due_date for t in tasks)

    async def test_statuses_move_with_today(self, seeded_store):
        """The same stored task classifies differently on another day."""
        task = await maintenance_service.get_task(store=seeded_store, task_id="mt-4", today=date(2025, 1, 5))

        assert task.status == MaintenanceStatus.DUE_SOON

    async def test_filter_by_house_and_search(self, seeded_store, today):
        """House and name filters narrow the list."""
        house_tasks = await maintenance_service.list_tasks(store=seeded_store, today=today, house_id="house-1")
        searched = await maintenance_service.list_tasks(store=seeded_store, today=today, search="SMOKE")

        assert {t.id for t in house_tasks} == {"mt-1", "mt-2", "mt-6"}
        assert [t.id for t in searched] == ["mt-2"]

    async def test_summarize_houses(self, seeded_store, today):
        """Per active house totals and attention counts."""
        summaries = await maintenance_service.summarize_houses(store=seeded_store, today=today)
        by_house = {s.house_id: (s.total_tasks, s.attention_count) for s in summaries}

        assert by_house == {"house-1": (3, 3), "house-2": (2, 1), "house-3": (1, 1)}

    async def test_summarize_houses_search(self, seeded_store, today):
        """Search narrows by house name."""
        summaries = await maintenance_service.summarize_houses(store=seeded_store, today=today, search="pine")

        assert [s.house_name for s in summaries] == ["Pine Ridge Place"]


@pytest.mark.unit
class TestLocalTimezone:
    """Calendar-day behavior when the configured timezone is not UTC."""

    @pytest.fixture(autouse=True)
    def new_york(self, monkeypatch, utc_timezone):
        monkeypatch.setattr(settings, "timezone", "America/New_York")

    async def _weekly_from(self, store, house, last_completed, today):
        return await maintenance_service.create_task(
            store=store,
            data=MaintenanceTaskCreate(
                house_id=house.id,
                task_name="Trash Night",
                frequency="weekly",
                last_completed_date=last_completed,
            ),
            today=today,
        )

    def test_bare_date_is_local_midnight(self):
        """Midnight on Oct 20 in New York (EDT) is 04:00 UTC."""
        data = MaintenanceTaskCreate(house_id="h", task_name="x", last_completed_date=datetime(2024, 10, 20))

        assert data.last_completed_date == datetime(2024, 10, 20, 4, tzinfo=UTC)

    async def test_due_today_on_its_local_due_day(self, store, house):
        """A weekly task entered as Oct 20 is due today on Oct 27, not overdue."""
        task = await self._weekly_from(store, house, datetime(2024, 10, 20), date(2024, 10, 27))

        assert task.next_due_date == datetime(2024, 10, 27, 4, tzinfo=UTC)
        assert task.status == MaintenanceStatus.DUE_TODAY

        day_before = await maintenance_service.get_task(store=store, task_id=task.id, today=date(2024, 10, 26))
        day_after = await maintenance_service.get_task(store=store, task_id=task.id, today=date(2024, 10, 28))
        assert day_before.status == MaintenanceStatus.DUE_SOON
        assert day_after.status == MaintenanceStatus.OVERDUE

    async def test_period_across_dst_end_keeps_local_midnight(self, store, house):
        """Clocks fall back on Nov 3; the next due date is still local midnight (now 05:00 UTC)."""
        task = await self._weekly_from(store, house, datetime(2024, 10, 30), date(2024, 11, 6))

        assert task.last_completed_date == datetime(2024, 10, 30, 4, tzinfo=UTC)
        assert task.next_due_date == datetime(2024, 11, 6, 5, tzinfo=UTC)
        assert task.status == MaintenanceStatus.DUE_TODAY

    async def test_late_evening_completion_counts_for_local_day(self, store, house):
        """02:30 UTC on Oct 21 is still the evening of Oct 20 in New York."""
        task = await self._weekly_from(store, house, datetime(2024, 10, 1), date(2024, 10, 20))
        completed_at = datetime(2024, 10, 21, 2, 30, tzinfo=UTC)

        await maintenance_service.mark_complete(store=store, task_id=task.id, now=completed_at)
        reverted = await maintenance_service.revert_completion(store=store, task_id=task.id, today=date(2024, 10, 27))

        assert reverted.next_due_date == completed_at + timedelta(days=7)
        assert reverted.status == MaintenanceStatus.DUE_TODAY
