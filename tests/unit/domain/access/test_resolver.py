"""Tests for AccessLevelResolver: rule order, short-circuiting, failing closed."""

import logging

import pytest

from netaccess.domain.access.model.facts import AppOpMode
from netaccess.domain.access.model.identity import CallerIdentity
from netaccess.domain.access.model.level import AccessLevel
from netaccess.domain.access.model.uid import UidScheme
from netaccess.domain.access.service.resolver import AccessLevelResolver, resolve_access_level
from netaccess.domain.shared.error import ExternalServiceError


class _RecordingProvider:
    """Provider answering from keyword facts and recording every call.

    A fact set to an Exception instance is raised instead of returned.
    """

    def __init__(self, **facts: object) -> None:
        self.facts: dict[str, object] = {
            "is_system_uid": False,
            "has_carrier_privileges": False,
            "is_device_owner": False,
            "is_profile_owner": False,
            "has_network_stack_permission": False,
            "usage_stats_app_op": AppOpMode.DENIED,
            "has_usage_stats_permission": False,
            "has_read_history_permission": False,
        }
        self.facts.update(facts)
        self.calls: list[str] = []

    def _answer(self, name: str) -> object:
        self.calls.append(name)
        answer = self.facts[name]
        if isinstance(answer, Exception):
            raise answer
        return answer

    def is_system_uid(self, uid: int) -> bool:
        return self._answer("is_system_uid")  # type: ignore[return-value]

    def has_carrier_privileges(self, package: str) -> bool:
        return self._answer("has_carrier_privileges")  # type: ignore[return-value]

    def is_device_owner(self, package: str) -> bool:
        return self._answer("is_device_owner")  # type: ignore[return-value]

    def is_profile_owner(self, package: str) -> bool:
        return self._answer("is_profile_owner")  # type: ignore[return-value]

    def has_network_stack_permission(self, pid: int, uid: int) -> bool:
        return self._answer("has_network_stack_permission")  # type: ignore[return-value]

    def usage_stats_app_op(self, uid: int, package: str) -> AppOpMode:
        return self._answer("usage_stats_app_op")  # type: ignore[return-value]

    def has_usage_stats_permission(self, uid: int) -> bool:
        return self._answer("has_usage_stats_permission")  # type: ignore[return-value]

    def has_read_history_permission(self, uid: int) -> bool:
        return self._answer("has_read_history_permission")  # type: ignore[return-value]

    def user_of(self, uid: int) -> int:
        self.calls.append("user_of")
        return UidScheme().user_of(uid)


def _resolver(provider: _RecordingProvider) -> AccessLevelResolver:
    return AccessLevelResolver(_provider=provider)


_APP = CallerIdentity(pid=4242, uid=10050, package="com.example")


class TestSystemUid:
    def test_system_uid_is_device_without_provider_calls(self) -> None:
        provider = _RecordingProvider()

        level = _resolver(provider).resolve(CallerIdentity(pid=1, uid=1000, package="android"))

        assert level is AccessLevel.DEVICE
        assert provider.calls == []

    def test_system_uid_of_secondary_user_is_device(self) -> None:
        provider = _RecordingProvider()

        level = _resolver(provider).resolve(CallerIdentity(pid=1, uid=1001000))

        assert level is AccessLevel.DEVICE
        assert provider.calls == []

    def test_system_uid_is_device_even_if_provider_is_broken(self) -> None:
        broken = ExternalServiceError("services not started")
        provider = _RecordingProvider(**{name: broken for name in _RecordingProvider().facts})

        level = _resolver(provider).resolve(CallerIdentity(pid=1, uid=1000))

        assert level is AccessLevel.DEVICE


class TestDeviceLevel:
    @pytest.mark.parametrize(
        "fact",
        ["has_carrier_privileges", "is_device_owner", "has_network_stack_permission"],
    )
    def test_each_device_fact_grants_device(self, fact: str) -> None:
        provider = _RecordingProvider(**{fact: True})

        assert _resolver(provider).resolve(_APP) is AccessLevel.DEVICE

    def test_short_circuits_after_carrier_privileges(self) -> None:
        provider = _RecordingProvider(has_carrier_privileges=True, is_device_owner=True)

        _resolver(provider).resolve(_APP)

        assert provider.calls == ["has_carrier_privileges"]

    def test_device_checks_run_in_order(self) -> None:
        provider = _RecordingProvider(has_network_stack_permission=True)

        _resolver(provider).resolve(_APP)

        assert provider.calls == [
            "has_carrier_privileges",
            "is_device_owner",
            "has_network_stack_permission",
        ]

    def test_device_beats_profile_owner(self) -> None:
        provider = _RecordingProvider(is_device_owner=True, is_profile_owner=True)

        assert _resolver(provider).resolve(_APP) is AccessLevel.DEVICE
        assert "is_profile_owner" not in provider.calls


class TestDeviceSummaryLevel:
    def test_app_op_allowed(self) -> None:
        provider = _RecordingProvider(usage_stats_app_op=AppOpMode.ALLOWED)

        assert _resolver(provider).resolve(_APP) is AccessLevel.DEVICESUMMARY
        assert "has_usage_stats_permission" not in provider.calls

    def test_app_op_default_with_permission(self) -> None:
        provider = _RecordingProvider(
            usage_stats_app_op=AppOpMode.DEFAULT,
            has_usage_stats_permission=True,
        )

        assert _resolver(provider).resolve(_APP) is AccessLevel.DEVICESUMMARY

    def test_app_op_default_without_permission_is_default(self) -> None:
        provider = _RecordingProvider(usage_stats_app_op=AppOpMode.DEFAULT)

        assert _resolver(provider).resolve(_APP) is AccessLevel.DEFAULT

    def test_app_op_denied_skips_static_permission(self) -> None:
        provider = _RecordingProvider(
            usage_stats_app_op=AppOpMode.DENIED,
            has_usage_stats_permission=True,
        )

        assert _resolver(provider).resolve(_APP) is AccessLevel.DEFAULT
        assert "has_usage_stats_permission" not in provider.calls

    def test_read_history_permission(self) -> None:
        provider = _RecordingProvider(has_read_history_permission=True)

        assert _resolver(provider).resolve(_APP) is AccessLevel.DEVICESUMMARY

    def test_app_op_mode_given_as_string(self) -> None:
        provider = _RecordingProvider(usage_stats_app_op="allowed")

        assert _resolver(provider).resolve(_APP) is AccessLevel.DEVICESUMMARY

    def test_unknown_app_op_mode_is_denied(self) -> None:
        provider = _RecordingProvider(usage_stats_app_op="ignored")

        assert _resolver(provider).resolve(_APP) is AccessLevel.DEFAULT


class TestUserLevel:
    def test_profile_owner(self) -> None:
        provider = _RecordingProvider(is_profile_owner=True)

        assert _resolver(provider).resolve(_APP) is AccessLevel.USER

    def test_profile_owner_checked_last(self) -> None:
        provider = _RecordingProvider(is_profile_owner=True)

        _resolver(provider).resolve(_APP)

        assert provider.calls[-1] == "is_profile_owner"


class TestMissingPackage:
    @pytest.mark.parametrize("package", [None, ""])
    def test_package_scoped_facts_not_queried(self, package: str | None) -> None:
        provider = _RecordingProvider(
            has_carrier_privileges=True,
            is_device_owner=True,
            is_profile_owner=True,
            usage_stats_app_op=AppOpMode.ALLOWED,
        )

        level = _resolver(provider).resolve(CallerIdentity(pid=1, uid=10050, package=package))

        assert level is AccessLevel.DEFAULT
        assert provider.calls == ["has_network_stack_permission", "has_read_history_permission"]

    def test_uid_scoped_facts_still_apply(self) -> None:
        provider = _RecordingProvider(has_read_history_permission=True)

        level = _resolver(provider).resolve(CallerIdentity(pid=1, uid=10050))

        assert level is AccessLevel.DEVICESUMMARY


class TestFailClosed:
    def test_failing_fact_is_not_granted(self) -> None:
        provider = _RecordingProvider(
            has_carrier_privileges=ExternalServiceError("telephony down"),
            is_profile_owner=True,
        )

        assert _resolver(provider).resolve(_APP) is AccessLevel.USER

    def test_failing_app_op_is_denied(self) -> None:
        provider = _RecordingProvider(
            usage_stats_app_op=RuntimeError("app-ops unavailable"),
            has_usage_stats_permission=True,
        )

        assert _resolver(provider).resolve(_APP) is AccessLevel.DEFAULT

    def test_everything_failing_is_default(self) -> None:
        broken = RuntimeError("boom")
        provider = _RecordingProvider(**{name: broken for name in _RecordingProvider().facts})

        assert _resolver(provider).resolve(_APP) is AccessLevel.DEFAULT

    def test_non_boolean_answer_is_not_a_grant(self) -> None:
        provider = _RecordingProvider(is_device_owner="yes", is_profile_owner=1)

        assert _resolver(provider).resolve(_APP) is AccessLevel.DEFAULT

    def test_failure_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        provider = _RecordingProvider(is_device_owner=ExternalServiceError("dpm down"))

        with caplog.at_level(logging.WARNING, logger="netaccess.domain.access.service.resolver"):
            _resolver(provider).resolve(_APP)

        messages = [r.getMessage() for r in caplog.records]
        assert any("is_device_owner" in m and "failing closed" in m for m in messages)


class TestGatherFacts:
    def test_collects_every_fact(self) -> None:
        provider = _RecordingProvider(
            has_carrier_privileges=True,
            usage_stats_app_op=AppOpMode.DEFAULT,
            has_usage_stats_permission=True,
            is_profile_owner=True,
        )

        facts = _resolver(provider).gather_facts(_APP)

        assert facts.has_carrier_privileges is True
        assert facts.is_device_owner is False
        assert facts.usage_stats_app_op is AppOpMode.DEFAULT
        assert facts.has_usage_stats_permission is True
        assert facts.is_profile_owner is True

    @pytest.mark.parametrize(
        "facts",
        [
            {},
            {"is_device_owner": True},
            {"usage_stats_app_op": AppOpMode.DEFAULT, "has_usage_stats_permission": True},
            {"usage_stats_app_op": AppOpMode.DENIED, "has_read_history_permission": True},
            {"is_profile_owner": True},
            {"has_carrier_privileges": RuntimeError("boom"), "is_profile_owner": True},
        ],
    )
    def test_level_agrees_with_resolve(self, facts: dict[str, object]) -> None:
        resolver = _resolver(_RecordingProvider(**facts))

        assert resolver.gather_facts(_APP).level() is resolver.resolve(_APP)

    def test_system_uid_fact_comes_from_uid_layout(self) -> None:
        provider = _RecordingProvider(is_system_uid=False)

        facts = _resolver(provider).gather_facts(CallerIdentity(pid=1, uid=1000))

        assert facts.is_system_uid is True
        assert "is_system_uid" not in provider.calls


class TestResolveAccessLevel:
    def test_one_off_resolution(self) -> None:
        provider = _RecordingProvider(is_profile_owner=True)

        assert resolve_access_level(_APP, provider) is AccessLevel.USER

    def test_custom_uid_layout(self) -> None:
        provider = _RecordingProvider()
        uids = UidScheme(per_user_range=10000)

        # 11000 is app id 1000 under user 1 in a 10000-wide layout
        assert resolve_access_level(CallerIdentity(pid=1, uid=11000), provider, uids) is (
            AccessLevel.DEVICE
        )
        assert provider.calls == []
