"""Tests for the seed reaper loop."""

import dataclasses
import logging

from qbt_autopilot.constants import MessageCategory, RemovalReason
from qbt_autopilot.reaper import SeedReaper, removal_message, seed_info
from qbt_autopilot.scheduler import PeriodicTask

from .conftest import DAY


def test_seed_info(make_torrent) -> None:
    torrent = make_torrent(uploaded=1_500_000_000, ratio=2.5)
    assert seed_info(torrent) == "[UL: 1.50 GB RATIO: 2.50]"


def test_removal_messages(make_torrent) -> None:
    torrent = make_torrent(name="Some.Show.S01.torrent", uploaded=1_500_000_000, ratio=2.5)

    assert removal_message(RemovalReason.PUBLIC_TRACKER, torrent) == (
        "Removed Some Show S01 because it was on a public tracker."
    )
    assert removal_message(RemovalReason.SEEDED_DAYS, torrent) == (
        "Removed Some Show S01 because it has been seeded long enough. [UL: 1.50 GB RATIO: 2.50]"
    )
    assert removal_message(RemovalReason.SEEDED_RATIO, torrent) == (
        "Removed Some Show S01 because the ratio was enough. [UL: 1.50 GB RATIO: 2.50]"
    )
    assert removal_message(RemovalReason.NONE, torrent) == (
        "Removed Some Show S01. [UL: 1.50 GB RATIO: 2.50]"
    )


def test_removes_torrents_that_seeded_enough(client, config, events, messages, make_torrent) -> None:
    seeded = make_torrent(hash="done", ratio=3.0)
    fresh = make_torrent(hash="fresh", ratio=0.1)
    downloading = make_torrent(hash="dl", progress=0.4, ratio=5.0, amount_left=100)
    client.list_torrents.return_value = [seeded, fresh, downloading]
    reaper = SeedReaper(client, config.seed, config.behavior, events)

    assert reaper.check_seed() == 1

    client.delete_torrent.assert_called_once_with("done", False)
    assert messages == [(
        "Removed Some Show S01 because the ratio was enough. [UL: 1.50 GB RATIO: 3.00]",
        MessageCategory.REMOVE,
        "Qbittorrent",
    )]


def test_listing_failure_skips_cycle_and_next_tick_still_runs(client, config, events, make_torrent) -> None:
    reaper = SeedReaper(client, config.seed, config.behavior, events)
    task = PeriodicTask("seed-reaper", 300, reaper.check_seed)

    client.list_torrents.return_value = None
    assert task.run_cycle() is True
    client.delete_torrent.assert_not_called()

    client.list_torrents.return_value = [make_torrent(hash="done", ratio=3.0)]
    assert task.run_cycle() is True
    client.delete_torrent.assert_called_once_with("done", False)
    assert task.cycles == 2


def test_delete_failure_reports_error(client, config, events, messages, make_torrent) -> None:
    client.list_torrents.return_value = [make_torrent(name="Broken", ratio=3.0)]
    client.delete_torrent.return_value = False
    reaper = SeedReaper(client, config.seed, config.behavior, events)

    assert reaper.check_seed() == 0

    client.delete_torrent.assert_called_once()
    assert messages == [("Error removing Broken", MessageCategory.ERROR, "Qbittorrent")]


def test_one_failed_delete_does_not_stop_the_others(client, config, events, messages, make_torrent) -> None:
    client.list_torrents.return_value = [
        make_torrent(hash="a", ratio=3.0),
        make_torrent(hash="b", ratio=3.0),
    ]
    client.delete_torrent.side_effect = [False, True]
    reaper = SeedReaper(client, config.seed, config.behavior, events)

    assert reaper.check_seed() == 1
    assert client.delete_torrent.call_count == 2
    assert [category for _, category, _ in messages] == [MessageCategory.ERROR, MessageCategory.REMOVE]


def test_dry_run_deletes_nothing(client, config, events, messages, make_torrent) -> None:
    client.list_torrents.return_value = [make_torrent(ratio=3.0)]
    behavior = dataclasses.replace(config.behavior, dry_run=True)
    reaper = SeedReaper(client, config.seed, behavior, events)

    assert reaper.check_seed() == 0
    client.delete_torrent.assert_not_called()
    assert messages == []


def test_delete_files_is_passed_through(client, config, events, make_torrent) -> None:
    client.list_torrents.return_value = [make_torrent(hash="old", completion_on=1_000_000_000)]
    behavior = dataclasses.replace(config.behavior, delete_files=True)
    reaper = SeedReaper(client, config.seed, behavior, events)

    reaper.check_seed()

    client.delete_torrent.assert_called_once_with("old", True)


def test_find_candidates_pairs_reasons(client, config, events, make_torrent) -> None:
    now = 1_700_000_000.0
    public = make_torrent(hash="p", category="public", ratio=0.1, completion_on=int(now) - DAY)
    aged = make_torrent(hash="d", ratio=0.1, completion_on=int(now) - 30 * DAY)
    reaper = SeedReaper(client, config.seed, config.behavior, events)

    candidates = reaper.find_candidates([public, aged], now=now)

    assert [(t.hash, reason) for t, reason in candidates] == [
        ("p", RemovalReason.PUBLIC_TRACKER),
        ("d", RemovalReason.SEEDED_DAYS),
    ]


def test_removal_is_announced_only_on_the_bus(client, config, events, messages, make_torrent, caplog) -> None:
    client.list_torrents.return_value = [make_torrent(hash="done", ratio=3.0)]
    reaper = SeedReaper(client, config.seed, config.behavior, events)

    with caplog.at_level(logging.INFO, logger="qbt_autopilot.reaper"):
        reaper.check_seed()

    assert len(messages) == 1
    assert not [r for r in caplog.records if r.levelno >= logging.INFO and "because" in r.getMessage()]
