import asyncio

import pytest
from faker import Faker

from fast_rules import SR, DataTypeError, Schema

fake = Faker()


async def _report(schema, data):
    try:
        await schema.validate(data)
    except DataTypeError as exc:
        return exc.report
    return None


@pytest.mark.asyncio
async def test_concurrent_calls_do_not_share_names_or_params():
    async def slow_at_least(value, limit):
        await asyncio.sleep(0.01 if limit > 50 else 0)
        return value >= limit

    schema = Schema({
        "limit": SR.number(),
        "first": SR.custom(slow_at_least, SR.ref("limit")).error("{name} below {1}"),
        "second": SR.custom(slow_at_least, SR.ref("limit")).error("{name} below {1}"),
    })

    high, low = await asyncio.gather(
        _report(schema, {"limit": 100, "first": 1, "second": 2}),
        _report(schema, {"limit": 10, "first": 1, "second": 20}),
    )

    assert high == {"first": ["first below 100"], "second": ["second below 100"]}
    assert low == {"first": ["first below 10"]}


@pytest.mark.asyncio
async def test_concurrent_transforms_stay_isolated():
    async def delayed_double(value):
        await asyncio.sleep(0.001 * (value % 3))
        return value * 2

    schema = Schema({"n": SR.transform(delayed_double).custom(lambda value, data: value == data["n"] * 2)})
    payloads = [{"n": fake.random_int(min=0, max=1000)} for _ in range(25)]

    reports = await asyncio.gather(*(_report(schema, payload) for payload in payloads))

    assert reports == [None] * len(payloads)


@pytest.mark.asyncio
async def test_abort_early_skips_later_async_rules():
    calls = []

    async def later(value):
        calls.append(value)
        return True

    schema = Schema({"name": SR.string().min(10).custom(later)})

    with pytest.raises(DataTypeError):
        await schema.validate({"name": "short"}, abort_early=True)
    assert calls == []

    with pytest.raises(DataTypeError):
        await schema.validate({"name": "short"}, abort_early=False)
    assert calls == ["short"]


@pytest.mark.asyncio
async def test_abort_early_runs_later_rule_exactly_once_per_field():
    calls = []

    async def counted(value):
        calls.append(value)
        return False

    schema = Schema({"a": SR.custom(counted).custom(counted), "b": SR.string().custom(counted)})

    with pytest.raises(DataTypeError) as exc_info:
        await schema.validate({"a": 1, "b": 2}, abort_early=True)

    assert calls == [1]
    assert set(exc_info.value.report) == {"a", "b"}


@pytest.mark.asyncio
async def test_async_rule_exception_propagates():
    async def failing(value):
        await asyncio.sleep(0)
        raise ConnectionError("lookup failed")

    schema = Schema({"email": SR.email().custom(failing)})

    with pytest.raises(ConnectionError, match="lookup failed"):
        await schema.validate({"email": fake.email()})
