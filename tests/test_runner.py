"""Tests for the batch audit runner."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from stale_auditor.context import ApiCallCounter
from stale_auditor.errors import MaintainerFetchError
from stale_auditor.runner import AuditSummary, IssueRunStats, chunked, run_audit


@pytest.fixture
def runner_client(mock_client):
    mock_client.counter = ApiCallCounter()
    return mock_client


@pytest.fixture
def agent_run():
    with patch(
        "stale_auditor.runner.stale_audit_agent.run", new_callable=AsyncMock
    ) as run:
        run.return_value = SimpleNamespace(output="no action")
        yield run


class TestChunked:
    def test_even_and_remainder(self) -> None:
        assert chunked([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]

    def test_empty(self) -> None:
        assert chunked([], 3) == []


class TestAuditSummary:
    def test_totals(self) -> None:
        summary = AuditSummary(
            search_api_calls=2,
            issues=[
                IssueRunStats(issue_number=1, duration=1.0, api_calls=3),
                IssueRunStats(issue_number=2, duration=3.0, api_calls=4, error="x"),
            ],
        )

        assert summary.processed == 2
        assert summary.failed == 1
        assert summary.total_api_calls == 9
        assert summary.average_seconds == 2.0

    def test_empty_average(self) -> None:
        assert AuditSummary().average_seconds == 0.0


class TestRunAudit:
    @pytest.mark.asyncio
    async def test_searches_and_chunks(
        self, settings, runner_client, agent_run
    ) -> None:
        """Test that candidates are processed in chunks with pauses between."""
        runner_client.find_old_open_issue_numbers.return_value = list(range(1, 8))
        sleep = AsyncMock()

        summary = await run_audit(settings, client=runner_client, sleep=sleep)

        runner_client.find_old_open_issue_numbers.assert_awaited_once_with(
            "test-org", "test-repo", 7.0
        )
        assert [stats.issue_number for stats in summary.issues] == list(
            range(1, 8)
        )
        assert agent_run.await_count == 7
        # Three chunks of at most three issues, no pause after the last
        assert sleep.await_count == 2
        sleep.assert_awaited_with(1.5)
        assert summary.failed == 0

    @pytest.mark.asyncio
    async def test_explicit_issue_numbers_skip_search(
        self, settings, runner_client, agent_run
    ) -> None:
        sleep = AsyncMock()

        summary = await run_audit(
            settings, issue_numbers=[42], client=runner_client, sleep=sleep
        )

        runner_client.find_old_open_issue_numbers.assert_not_awaited()
        assert summary.processed == 1
        assert summary.issues[0].decision == "no action"
        sleep.assert_not_awaited()

        prompt = agent_run.call_args.args[0]
        kwargs = agent_run.call_args.kwargs
        assert prompt == "Audit Issue #42."
        assert kwargs["model"] == settings.llm_model_name
        assert kwargs["deps"].settings is settings

    @pytest.mark.asyncio
    async def test_model_override(self, settings, runner_client, agent_run) -> None:
        await run_audit(
            settings,
            model="test",
            issue_numbers=[1],
            client=runner_client,
            sleep=AsyncMock(),
        )

        assert agent_run.call_args.kwargs["model"] == "test"

    @pytest.mark.asyncio
    async def test_no_candidates(self, settings, runner_client, agent_run) -> None:
        summary = await run_audit(settings, client=runner_client, sleep=AsyncMock())

        assert summary.processed == 0
        agent_run.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_issue_failure_is_isolated(
        self, settings, runner_client, agent_run
    ) -> None:
        agent_run.side_effect = [
            RuntimeError("model overloaded"),
            SimpleNamespace(output="no action"),
        ]

        summary = await run_audit(
            settings, issue_numbers=[1, 2], client=runner_client, sleep=AsyncMock()
        )

        assert summary.processed == 2
        assert summary.failed == 1
        assert summary.issues[0].error == "model overloaded"
        assert summary.issues[1].decision == "no action"

    @pytest.mark.asyncio
    async def test_maintainer_failure_aborts_run(
        self, settings, runner_client, agent_run
    ) -> None:
        agent_run.side_effect = MaintainerFetchError(
            "Maintainer verification failed. Processing aborted."
        )

        with pytest.raises(MaintainerFetchError):
            await run_audit(
                settings, issue_numbers=[1], client=runner_client, sleep=AsyncMock()
            )

    @pytest.mark.asyncio
    async def test_counts_api_calls_on_client_counter(
        self, settings, runner_client, agent_run
    ) -> None:
        async def search(*args):
            runner_client.counter.increment()
            return [1]

        async def audit(*args, **kwargs):
            runner_client.counter.increment()
            runner_client.counter.increment()
            return SimpleNamespace(output="done")

        runner_client.find_old_open_issue_numbers.side_effect = search
        agent_run.side_effect = audit

        summary = await run_audit(settings, client=runner_client, sleep=AsyncMock())

        assert summary.search_api_calls == 1
        assert summary.issues[0].api_calls == 2
        assert summary.total_api_calls == 3
