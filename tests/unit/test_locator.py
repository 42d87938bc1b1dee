"""Unit tests for installation lookup order, caching, and override hints."""

from __future__ import annotations

from pathlib import Path

from idebridge.discovery.cache import DiscoveryCache
from idebridge.discovery.locator import InstallationLocator
from idebridge.platforms.base import UnsupportedPlatform
from idebridge.platforms.macos import MacOSPlatform


def test_locate_caches_probe_hit_and_reuses_it(
    tmp_path: Path, stub_platform, fresh_cache: DiscoveryCache, log_capture
) -> None:
    """Once found, later lookups should come from the cache even if probes now fail."""

    record = tmp_path / "TCSAS-Devtools.app"
    record.mkdir()
    platform = stub_platform(found=record)
    locator = InstallationLocator(platform, cache=fresh_cache, logger=log_capture.logger)

    assert locator.locate("TCSAS-Devtools") == record
    platform.found = None

    assert locator.locate("TCSAS-Devtools") == record
    assert platform.locate_calls == ["TCSAS-Devtools"]


def test_locate_evicts_stale_cache_entry_when_revalidating(
    tmp_path: Path, stub_platform, fresh_cache: DiscoveryCache, log_capture
) -> None:
    """A cached record that no longer exists should be dropped and re-probed."""

    fresh_cache.put("Tool", tmp_path / "uninstalled")
    platform = stub_platform(found=None)
    locator = InstallationLocator(platform, cache=fresh_cache, logger=log_capture.logger)

    assert locator.locate("Tool") is None
    assert "Tool" not in fresh_cache
    assert platform.locate_calls == ["Tool"]
    assert any("event=cache_stale" in line for line in log_capture.lines)


def test_locate_trusts_stale_cache_entry_without_revalidation(
    tmp_path: Path, stub_platform, fresh_cache: DiscoveryCache, log_capture
) -> None:
    """With re-validation disabled the cached value is returned as-is."""

    stale = tmp_path / "uninstalled"
    fresh_cache.put("Tool", stale)
    locator = InstallationLocator(
        stub_platform(found=None),
        cache=fresh_cache,
        logger=log_capture.logger,
        revalidate_cache=False,
    )

    assert locator.locate("Tool") == stale


def test_locate_override_children_win_over_cache(
    tmp_path: Path, stub_platform, fresh_cache: DiscoveryCache, log_capture
) -> None:
    """An override directory is consulted before the cache and updates it."""

    cached = tmp_path / "cached" / "Tool.app"
    cached.mkdir(parents=True)
    fresh_cache.put("Tool", cached)
    override = tmp_path / "custom"
    hinted = override / "Tool.app"
    hinted.mkdir(parents=True)
    locator = InstallationLocator(stub_platform(), cache=fresh_cache, logger=log_capture.logger)

    assert locator.locate("Tool", override) == hinted
    assert fresh_cache.get("Tool") == hinted


def test_locate_override_matches_parent_children(
    tmp_path: Path, stub_platform, fresh_cache: DiscoveryCache, log_capture
) -> None:
    """A hint pointing inside the install should resolve through its parent listing."""

    install = tmp_path / "TCSAS-Devtools"
    hint = tmp_path / "elsewhere"
    install.mkdir()
    hint.mkdir()
    locator = InstallationLocator(stub_platform(), cache=fresh_cache, logger=log_capture.logger)

    assert locator.locate("TCSAS-Devtools", hint) == install


def test_locate_override_miss_falls_through_to_probes(
    tmp_path: Path, stub_platform, fresh_cache: DiscoveryCache, log_capture
) -> None:
    """A non-matching or missing override is a hint, not a constraint."""

    probed = tmp_path / "probed"
    probed.mkdir()
    platform = stub_platform(found=probed)
    locator = InstallationLocator(platform, cache=fresh_cache, logger=log_capture.logger)

    assert locator.locate("Zeta", tmp_path / "missing") == probed
    assert platform.locate_calls == ["Zeta"]


def test_locate_finds_bundle_in_application_dirs(
    tmp_path: Path, fresh_cache: DiscoveryCache, log_capture
) -> None:
    """macOS lookup should return a matching `.app` bundle from the application folders."""

    applications = tmp_path / "Applications"
    (applications / "TCSAS-Devtools.app").mkdir(parents=True)
    (applications / "Other.app").mkdir()
    platform = MacOSPlatform(logger=log_capture.logger, application_dirs=[applications])
    locator = InstallationLocator(platform, cache=fresh_cache, logger=log_capture.logger)

    assert locator.locate("TCSAS-Devtools") == applications / "TCSAS-Devtools.app"
    assert fresh_cache.get("TCSAS-Devtools") == applications / "TCSAS-Devtools.app"


def test_locate_on_unsupported_platform_warns_and_reports_nothing(
    fresh_cache: DiscoveryCache, log_capture
) -> None:
    """Unsupported operating systems should warn and never raise."""

    locator = InstallationLocator(
        UnsupportedPlatform("Linux", logger=log_capture.logger),
        cache=fresh_cache,
        logger=log_capture.logger,
    )

    assert locator.locate("Tool") is None
    assert any(
        "level=WARNING" in line and "event=unsupported_platform" in line
        for line in log_capture.lines
    )


def test_locate_blank_name_returns_none(stub_platform, fresh_cache, log_capture) -> None:
    """Blank target names should never reach the probes."""

    platform = stub_platform(found=Path("/anything"))
    locator = InstallationLocator(platform, cache=fresh_cache, logger=log_capture.logger)

    assert locator.locate("  ") is None
    assert platform.locate_calls == []


def test_locate_maps_probe_os_error_to_none(stub_platform, fresh_cache, log_capture) -> None:
    """Probe I/O failures should be logged and reported as not found."""

    platform = stub_platform()

    def _failing_locate(app_name: str) -> Path | None:
        raise PermissionError("denied")

    platform.locate = _failing_locate
    locator = InstallationLocator(platform, cache=fresh_cache, logger=log_capture.logger)

    assert locator.locate("Tool") is None
    assert any("error_type=PermissionError" in line for line in log_capture.lines)


def test_locate_maps_value_error_to_none(stub_platform, fresh_cache, log_capture) -> None:
    """Decoding failures raised by a platform chain are reported as not found."""

    platform = stub_platform()

    def _failing_locate(app_name: str) -> Path | None:
        raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

    platform.locate = _failing_locate
    locator = InstallationLocator(platform, cache=fresh_cache, logger=log_capture.logger)

    assert locator.locate("Tool") is None
    assert any("error_type=UnicodeDecodeError" in line for line in log_capture.lines)
