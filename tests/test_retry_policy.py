"""Tests for the bounded retry policy shared by every flow."""

import pytest

from realme.flows.retry import DEFAULT_POLICY, InvocationState, RetryPolicy, invoke_with_policy


def _failing(times, result="ok", errors=None):
    """Operation that fails `times` times before returning `result`."""
    state = {"calls": 0}
    errors = errors or [RuntimeError(f"boom {i + 1}") for i in range(times)]

    async def _op():
        state["calls"] += 1
        if state["calls"] <= times:
            raise errors[state["calls"] - 1]
        return result

    return _op, state


class TestRetryPolicy:

    def test_default_policy_is_three_attempts_one_second(self):
        assert DEFAULT_POLICY.max_attempts == 3
        assert DEFAULT_POLICY.base_delay == 1.0

    def test_delay_grows_linearly(self):
        policy = RetryPolicy(max_attempts=4, base_delay=1.0)
        assert [policy.delay_for(n) for n in (1, 2, 3)] == [1.0, 2.0, 3.0]

    @pytest.mark.parametrize("kwargs", [{"max_attempts": 0}, {"base_delay": -1.0}])
    def test_rejects_invalid_policy(self, kwargs):
        with pytest.raises(ValueError):
            RetryPolicy(**kwargs)


class TestInvokeWithPolicy:

    @pytest.mark.asyncio
    async def test_immediate_success_never_sleeps(self, sleep):
        op, state = _failing(0)
        assert await invoke_with_policy(op, sleep=sleep) == "ok"
        assert state["calls"] == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_succeeds_on_third_attempt(self, sleep):
        op, state = _failing(2)
        assert await invoke_with_policy(op, sleep=sleep) == "ok"
        assert state["calls"] == 3
        assert sleep.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_gives_up_after_exactly_three_attempts(self, sleep):
        op, state = _failing(5)
        with pytest.raises(RuntimeError, match="boom 3"):
            await invoke_with_policy(op, sleep=sleep)
        assert state["calls"] == 3
        assert sleep.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_last_error_is_reraised_unchanged(self, sleep):
        last = KeyError("third")
        op, _ = _failing(3, errors=[ValueError("first"), TypeError("second"), last])
        with pytest.raises(KeyError) as exc_info:
            await invoke_with_policy(op, sleep=sleep)
        assert exc_info.value is last

    @pytest.mark.asyncio
    async def test_single_attempt_policy_does_not_wait(self, sleep):
        op, state = _failing(1)
        with pytest.raises(RuntimeError):
            await invoke_with_policy(op, RetryPolicy(max_attempts=1), sleep=sleep)
        assert state["calls"] == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_state_transitions_on_recovery(self, sleep):
        seen = []
        op, _ = _failing(1)
        await invoke_with_policy(op, sleep=sleep, on_transition=lambda s, n: seen.append((s, n)))
        assert seen == [
            (InvocationState.IDLE, 0),
            (InvocationState.ATTEMPTING, 1),
            (InvocationState.RETRY_WAIT, 1),
            (InvocationState.ATTEMPTING, 2),
            (InvocationState.SUCCESS, 2),
        ]

    @pytest.mark.asyncio
    async def test_state_transitions_on_failure(self, sleep):
        seen = []
        op, _ = _failing(3)
        with pytest.raises(RuntimeError):
            await invoke_with_policy(op, sleep=sleep, on_transition=lambda s, n: seen.append(s))
        assert seen[-1] == InvocationState.FAILED
        assert seen.count(InvocationState.ATTEMPTING) == 3
        assert seen.count(InvocationState.RETRY_WAIT) == 2
        assert InvocationState.SUCCESS not in seen
