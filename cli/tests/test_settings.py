from __future__ import annotations

from synology_client import ConnectionSettings
from synology_client.settings import SettingsHolder

FULL = ConnectionSettings(base_url="http://h", account="a", passwd="p", session="S")


def test_identical_update_is_a_noop() -> None:
    holder = SettingsHolder(FULL)
    calls = []
    holder.on_change(lambda: calls.append(1))

    assert holder.update(ConnectionSettings(base_url="http://h", account="a", passwd="p", session="S")) is False
    assert holder.version == 0
    assert calls == []


def test_changed_update_bumps_version_once_and_notifies() -> None:
    holder = SettingsHolder(FULL)
    calls = []
    holder.on_change(lambda: calls.append(holder.version))

    new = ConnectionSettings(base_url="http://other", account="a", passwd="p", session="S")
    assert holder.update(new) is True
    assert holder.version == 1
    assert holder.current is new
    assert calls == [1]


def test_update_replaces_settings_wholesale() -> None:
    holder = SettingsHolder(FULL)
    holder.update(ConnectionSettings(base_url="http://h"))
    assert holder.current.account is None
    assert holder.get_validated() is None


def test_get_validated_requires_every_field_non_empty() -> None:
    assert SettingsHolder(FULL).get_validated() == FULL
    assert SettingsHolder(ConnectionSettings(base_url="http://h", account="a", passwd="", session="S")).get_validated() is None
    assert SettingsHolder().get_validated() is None


def test_unsubscribe_is_idempotent() -> None:
    holder = SettingsHolder(FULL)
    calls = []
    unsubscribe = holder.on_change(lambda: calls.append("a"))
    holder.on_change(lambda: calls.append("b"))

    unsubscribe()
    unsubscribe()
    holder.update(ConnectionSettings(base_url="http://other"))

    assert calls == ["b"]


def test_failing_listener_does_not_block_others() -> None:
    holder = SettingsHolder(FULL)
    calls = []

    def _boom() -> None:
        raise RuntimeError("boom")

    holder.on_change(_boom)
    holder.on_change(lambda: calls.append("ok"))

    assert holder.update(ConnectionSettings(base_url="http://other")) is True
    assert calls == ["ok"]


def test_from_mapping_ignores_unknown_keys() -> None:
    settings = ConnectionSettings.from_mapping({"base_url": "http://h", "hostname": "x"})
    assert settings == ConnectionSettings(base_url="http://h")
