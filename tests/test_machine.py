import asyncio

import pytest

from app.flow.commit import ProfileCommitProtocol
from app.flow.machine import OnboardingStateMachine, SubmitStatus
from app.flow.navigation import Destination
from app.flow.states import OnboardingPhase
from app.models.service_provider import VerificationStatus
from utils.constants import (
    MESSAGE_INVALID_CATEGORY,
    MESSAGE_INVALID_HOURLY_RATE,
    MESSAGE_MISSING_FIELDS,
)


@pytest.fixture
def build_machine(directory, provider_store, make_profile_store, navigator):
    def _build(user, profile_error=None, category_directory=None):
        profile_store = make_profile_store(user, error=profile_error)
        machine = OnboardingStateMachine(
            user=user,
            category_directory=category_directory or directory,
            commit_protocol=ProfileCommitProtocol(profile_store, provider_store),
            navigator=navigator,
        )
        machine.profile_store = profile_store
        return machine
    return _build


def _fill_provider(machine, categories, hourly_rate="500"):
    machine.set_full_name("Asha Rao")
    machine.set_phone("9123456780")
    machine.select_category(categories[1].id)
    machine.set_experience_years("5")
    machine.set_hourly_rate(hourly_rate)


@pytest.mark.asyncio
async def test_load_moves_to_editing_with_categories(build_machine, customer, categories):
    machine = build_machine(customer)
    assert machine.phase is OnboardingPhase.LOADING

    await machine.load()

    assert machine.phase is OnboardingPhase.EDITING
    assert machine.form.categories == tuple(categories)
    assert machine.fetch_error is None


@pytest.mark.asyncio
async def test_category_fetch_failure_is_not_fatal(build_machine, customer, broken_directory):
    machine = build_machine(customer, category_directory=broken_directory)

    await machine.load()

    assert machine.phase is OnboardingPhase.EDITING
    assert machine.form.categories == ()
    assert machine.fetch_error is not None
    assert machine.fetch_error.details == {"reason": "directory down"}

    machine.set_full_name("Ravi")
    machine.set_phone("9876543210")
    outcome = await machine.submit()
    assert outcome.status is SubmitStatus.SUCCEEDED


@pytest.mark.asyncio
async def test_provider_cannot_pick_category_when_fetch_failed(
    build_machine, provider, categories, broken_directory, navigator, calls
):
    machine = build_machine(provider, category_directory=broken_directory)
    await machine.load()
    _fill_provider(machine, categories)

    outcome = await machine.submit()

    assert outcome.status is SubmitStatus.INVALID
    assert outcome.field == "category_id"
    assert outcome.message == MESSAGE_INVALID_CATEGORY
    assert machine.phase is OnboardingPhase.EDITING
    assert calls == []
    assert navigator.routes == []


@pytest.mark.asyncio
async def test_categories_fetched_once(build_machine, customer, directory):
    machine = build_machine(customer)
    await machine.load()
    await machine.load()
    assert directory.fetches == 1


@pytest.mark.asyncio
async def test_edits_ignored_while_loading(build_machine, customer):
    machine = build_machine(customer)
    assert machine.set_full_name("Ravi") is False
    assert machine.form.full_name == ""


@pytest.mark.asyncio
async def test_provider_end_to_end(build_machine, provider, categories, provider_store, navigator, calls):
    machine = build_machine(provider)
    await machine.load()
    _fill_provider(machine, categories)

    outcome = await machine.submit()

    assert outcome.status is SubmitStatus.SUCCEEDED
    assert machine.phase is OnboardingPhase.SUCCEEDED
    assert machine.last_error is None
    assert calls == ["update_profile", "create_service_provider"]

    record = provider_store.records[provider.id]
    assert record.experience_years == 5
    assert record.hourly_rate == 500.0
    assert record.verification_status is VerificationStatus.PENDING
    assert record.category_id == categories[1].id

    assert outcome.route.destination is Destination.PROVIDER_HOME
    assert navigator.routes == [outcome.route]


@pytest.mark.asyncio
async def test_out_of_range_rate_blocks_before_any_store_call(build_machine, provider, categories, navigator, calls):
    machine = build_machine(provider)
    await machine.load()
    _fill_provider(machine, categories, hourly_rate="15000")

    outcome = await machine.submit()

    assert outcome.status is SubmitStatus.INVALID
    assert outcome.message == MESSAGE_INVALID_HOURLY_RATE
    assert machine.phase is OnboardingPhase.EDITING
    assert machine.last_error == MESSAGE_INVALID_HOURLY_RATE
    assert calls == []
    assert navigator.routes == []


@pytest.mark.asyncio
async def test_customer_never_reaches_phase_two(build_machine, customer, categories, navigator, calls):
    machine = build_machine(customer)
    await machine.load()
    _fill_provider(machine, categories, hourly_rate="not a number")

    outcome = await machine.submit()

    assert outcome.status is SubmitStatus.SUCCEEDED
    assert calls == ["update_profile"]
    assert outcome.provider_profile is None
    assert navigator.routes[0].destination is Destination.HOME


@pytest.mark.asyncio
async def test_phase_one_failure_returns_to_editing(build_machine, provider, categories, calls):
    machine = build_machine(provider, profile_error=RuntimeError("Network request failed"))
    await machine.load()
    _fill_provider(machine, categories)

    outcome = await machine.submit()

    assert outcome.status is SubmitStatus.FAILED
    assert outcome.commit_phase == 1
    assert machine.phase is OnboardingPhase.EDITING
    assert machine.last_error == "Network request failed"
    assert calls == ["update_profile"]
    assert (OnboardingPhase.SUBMITTING, OnboardingPhase.FAILED) in machine.history
    # Inputs preserved for retry
    assert machine.form.full_name == "Asha Rao"
    assert machine.form.hourly_rate == "500"


@pytest.mark.asyncio
async def test_retry_after_phase_two_failure(build_machine, provider, categories, provider_store, calls):
    provider_store.errors.append(RuntimeError("Permission denied"))
    machine = build_machine(provider)
    await machine.load()
    _fill_provider(machine, categories)

    first = await machine.submit()
    assert first.status is SubmitStatus.FAILED
    assert first.commit_phase == 2
    assert machine.last_error == "Permission denied"

    second = await machine.submit()
    assert second.status is SubmitStatus.SUCCEEDED
    assert calls == ["update_profile", "create_service_provider"] * 2
    assert provider.id in provider_store.records


@pytest.mark.asyncio
async def test_double_submit_commits_once(build_machine, provider, categories, calls):
    machine = build_machine(provider)
    await machine.load()
    _fill_provider(machine, categories)

    gate = asyncio.Event()
    machine.profile_store.gate = gate

    first = asyncio.create_task(machine.submit())
    await asyncio.sleep(0)
    assert machine.phase is OnboardingPhase.SUBMITTING

    second = await machine.submit()
    assert second.status is SubmitStatus.IGNORED
    assert machine.set_phone("0000000000") is False

    gate.set()
    outcome = await first

    assert outcome.status is SubmitStatus.SUCCEEDED
    assert calls.count("update_profile") == 1
    assert calls.count("create_service_provider") == 1


@pytest.mark.asyncio
async def test_submit_after_success_is_ignored(build_machine, customer, calls):
    machine = build_machine(customer)
    await machine.load()
    machine.set_full_name("Ravi")
    machine.set_phone("9876543210")

    await machine.submit()
    outcome = await machine.submit()

    assert outcome.status is SubmitStatus.IGNORED
    assert calls == ["update_profile"]


@pytest.mark.asyncio
async def test_validation_error_then_fix(build_machine, customer):
    machine = build_machine(customer)
    await machine.load()

    outcome = await machine.submit()
    assert outcome.status is SubmitStatus.INVALID
    assert outcome.message == MESSAGE_MISSING_FIELDS

    machine.set_full_name("Ravi")
    machine.set_phone("9876543210")
    outcome = await machine.submit()
    assert outcome.status is SubmitStatus.SUCCEEDED
    assert machine.last_error is None


@pytest.mark.asyncio
async def test_existing_provider_record_is_reported_not_rebuilt(build_machine, provider, categories, provider_store):
    first = build_machine(provider)
    await first.load()
    _fill_provider(first, categories)
    await first.submit()

    retry = build_machine(provider)
    await retry.load()
    _fill_provider(retry, categories, hourly_rate="900")
    outcome = await retry.submit()

    assert outcome.status is SubmitStatus.SUCCEEDED
    assert outcome.provider_already_existed
    assert outcome.provider_profile is None
    assert provider_store.records[provider.id].hourly_rate == 500.0
