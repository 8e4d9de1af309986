"""Tests for Apprise notification forwarding."""

from unittest.mock import patch

import pytest

from qbt_autopilot.constants import MessageCategory
from qbt_autopilot.notifier import Notifier


@pytest.fixture
def mock_apprise():
    with patch("qbt_autopilot.notifier.apprise") as apprise_module:
        instance = apprise_module.Apprise.return_value
        instance.__len__.return_value = 1
        instance.notify.return_value = True
        yield apprise_module


def test_inactive_without_urls(mock_apprise) -> None:
    notifier = Notifier(enabled=True, urls=[])

    assert not notifier.is_active
    assert notifier.send_message("hi", MessageCategory.ERROR) == 0
    mock_apprise.Apprise.assert_not_called()


def test_disabled_sends_nothing(mock_apprise) -> None:
    notifier = Notifier(enabled=False, urls=["json://localhost"])

    assert notifier.send_message("hi", MessageCategory.ERROR) == 0


def test_forwards_remove_message(mock_apprise) -> None:
    notifier = Notifier(enabled=True, urls=["json://localhost"])

    assert notifier.send_message("Removed X.", MessageCategory.REMOVE, "Qbittorrent") == 1

    instance = mock_apprise.Apprise.return_value
    instance.add.assert_called_once_with("json://localhost")
    instance.notify.assert_called_once_with(
        title="Qbittorrent: Remove",
        body="Removed X.",
        notify_type=mock_apprise.NotifyType.INFO,
    )


def test_errors_use_failure_type(mock_apprise) -> None:
    notifier = Notifier(enabled=True, urls=["json://localhost"])

    notifier.send_message("Error adding a.torrent", MessageCategory.ERROR)

    _, kwargs = mock_apprise.Apprise.return_value.notify.call_args
    assert kwargs["notify_type"] == mock_apprise.NotifyType.FAILURE


def test_category_filter(mock_apprise) -> None:
    notifier = Notifier(enabled=True, urls=["json://localhost"], on_add=False)

    assert notifier.send_message("Added a.torrent", MessageCategory.ADD) == 0
    mock_apprise.Apprise.return_value.notify.assert_not_called()


def test_download_complete(mock_apprise, make_torrent) -> None:
    notifier = Notifier(enabled=True, urls=["json://localhost"])

    assert notifier.notify_download_complete(make_torrent(name="Some.Show.S01")) == 1

    _, kwargs = mock_apprise.Apprise.return_value.notify.call_args
    assert kwargs["body"] == "Finished downloading Some Show S01"


def test_send_failure_returns_zero(mock_apprise) -> None:
    mock_apprise.Apprise.return_value.notify.return_value = False
    notifier = Notifier(enabled=True, urls=["json://localhost"])

    assert notifier.send_message("Removed X.", MessageCategory.REMOVE) == 0
