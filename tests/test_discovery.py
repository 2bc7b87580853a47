"""Tests for concurrent theme discovery and desktop prioritisation."""

from __future__ import annotations

from pathlib import Path
import time

import pytest

from doseer.errors import ErrorCode
from doseer.icons import discovery as discovery_module
from doseer.icons.discovery import DiscoveryCancelled, ThemeDiscovery
from doseer.icons.index import load_theme_index

MIME_DIRS = {"48x48/mimetypes": {"Size": 48}}


def _no_desktop(timeout: float) -> str | None:
    return None


@pytest.fixture
def roots(tmp_path: Path, make_theme) -> list[Path]:
    home_icons = tmp_path / "home" / ".icons"
    data_icons = tmp_path / "data" / "icons"
    system_icons = tmp_path / "usr" / "share" / "icons"
    make_theme(home_icons, "Zebra", directories=MIME_DIRS)
    make_theme(home_icons, "Apple", directories=MIME_DIRS)
    make_theme(data_icons, "Papirus", directories=MIME_DIRS)
    make_theme(system_icons, "hicolor", directories=MIME_DIRS)
    make_theme(system_icons, "Adwaita", directories=MIME_DIRS)
    make_theme(system_icons, "breeze", directories=MIME_DIRS)
    return [home_icons, data_icons, system_icons]


def test_discovery_orders_by_root_then_directory_name(roots: list[Path]) -> None:
    discovery = ThemeDiscovery(roots, detect_desktop=False)

    registry = discovery.discover()

    assert registry.names() == ["Apple", "Zebra", "Papirus", "Adwaita", "breeze", "hicolor"]
    assert discovery.load_errors() == []


def test_completion_order_does_not_change_result(
    roots: list[Path], monkeypatch: pytest.MonkeyPatch
) -> None:
    delays = {"Apple": 0.2, "Zebra": 0.1, "Papirus": 0.05}

    def slow_load(theme_dir: Path):
        time.sleep(delays.get(theme_dir.name, 0.0))
        return load_theme_index(theme_dir)

    monkeypatch.setattr(discovery_module, "load_theme_index", slow_load)
    discovery = ThemeDiscovery(roots, detect_desktop=False, max_workers=6)

    registry = discovery.discover()

    assert registry.names() == ["Apple", "Zebra", "Papirus", "Adwaita", "breeze", "hicolor"]


def test_broken_candidates_are_dropped_and_recorded(
    tmp_path: Path, make_theme, roots: list[Path]
) -> None:
    system_icons = roots[2]
    (system_icons / "no-index").mkdir()
    make_theme(system_icons, "apps-only", directories={"48x48/apps": {"Size": 48}})
    (system_icons / "stray-file.txt").write_text("not a theme", encoding="utf-8")
    discovery = ThemeDiscovery(roots, detect_desktop=False)

    registry = discovery.discover()

    assert "apps-only" not in registry.names()
    assert len(registry) == 6
    codes = sorted(error.code.name for error in discovery.load_errors())
    assert codes == [ErrorCode.THEME_EMPTY.name, ErrorCode.THEME_INDEX_MISSING.name]


def test_missing_roots_are_skipped(tmp_path: Path, make_theme) -> None:
    present = tmp_path / "present"
    make_theme(present, "Only", directories=MIME_DIRS)
    discovery = ThemeDiscovery([tmp_path / "absent", present], detect_desktop=False)

    registry = discovery.discover()

    assert registry.names() == ["Only"]
    assert discovery.load_errors() == []


def test_no_roots_gives_empty_registry(tmp_path: Path) -> None:
    registry = ThemeDiscovery([tmp_path / "nothing"], detect_desktop=False).discover()

    assert len(registry) == 0


def test_preferred_theme_moves_to_front(roots: list[Path]) -> None:
    discovery = ThemeDiscovery(roots, preferred_theme="ADWAITA", detectors=[_no_desktop])

    registry = discovery.discover()

    assert registry.names() == ["Adwaita", "Apple", "Zebra", "Papirus", "breeze", "hicolor"]


def test_desktop_detector_result_moves_to_front(roots: list[Path]) -> None:
    calls: list[float] = []

    def fake_detector(timeout: float) -> str | None:
        calls.append(timeout)
        return "Breeze"

    discovery = ThemeDiscovery(roots, detectors=[_no_desktop, fake_detector], query_timeout=0.5)

    registry = discovery.discover()

    assert registry.names()[0] == "breeze"
    assert registry.names()[1:] == ["Apple", "Zebra", "Papirus", "Adwaita", "hicolor"]
    assert calls == [0.5]


def test_unknown_desktop_theme_leaves_order(roots: list[Path]) -> None:
    discovery = ThemeDiscovery(roots, detectors=[lambda timeout: "Yaru"])

    registry = discovery.discover()

    assert registry.names() == ["Apple", "Zebra", "Papirus", "Adwaita", "breeze", "hicolor"]


def test_detection_disabled_does_not_query(roots: list[Path]) -> None:
    def exploding_detector(timeout: float) -> str | None:
        raise AssertionError("detector should not run")

    registry = ThemeDiscovery(
        roots,
        detect_desktop=False,
        detectors=[exploding_detector],
    ).discover()

    assert registry.names()[0] == "Apple"


def test_progress_reports_every_candidate(roots: list[Path]) -> None:
    events: list[tuple[int, int, str]] = []

    ThemeDiscovery(roots, detect_desktop=False).discover(
        progress=lambda done, total, name: events.append((done, total, name))
    )

    assert [done for done, _total, _name in events] == [1, 2, 3, 4, 5, 6]
    assert {total for _done, total, _name in events} == {6}
    assert events[0][2] == "Apple"


def test_cancel_aborts_discovery(roots: list[Path]) -> None:
    discovery = ThemeDiscovery(roots, detect_desktop=False)

    with pytest.raises(DiscoveryCancelled):
        discovery.discover(should_cancel=lambda: True)


def test_user_theme_shadows_system_theme_of_same_name(tmp_path: Path, make_theme) -> None:
    user_root = tmp_path / "user"
    system_root = tmp_path / "system"
    user_theme = make_theme(user_root, "Adwaita", directories=MIME_DIRS)
    make_theme(system_root, "Adwaita", directories=MIME_DIRS)

    registry = ThemeDiscovery([user_root, system_root], detect_desktop=False).discover()

    assert len(registry) == 2
    assert registry.get("adwaita").root == user_theme.resolve()
