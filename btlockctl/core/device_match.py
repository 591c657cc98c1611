"""Paired-device resolution by name substring."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from btlockctl.backends.base import BluetoothService, DeviceHandle
from btlockctl.core.errors import BackendUnavailableError

LOGGER = logging.getLogger(__name__)


def name_matches(device_name: str | None, patterns: Iterable[str]) -> bool:
    name = device_name or ""
    return any(pattern in name for pattern in patterns)


def resolve(patterns: Iterable[str], devices: Sequence[DeviceHandle]) -> tuple[DeviceHandle, ...]:
    """Return the devices whose name contains at least one pattern.

    Matching is case-sensitive. Devices are deduplicated by address and keep the
    order of `devices`, so the result does not depend on pattern order.
    """
    wanted = tuple(p for p in patterns if p)
    if not wanted:
        return ()

    seen: set[str] = set()
    matched: list[DeviceHandle] = []
    for device in devices:
        if device.address in seen:
            continue
        if name_matches(device.name, wanted):
            seen.add(device.address)
            matched.append(device)
    return tuple(matched)


def resolve_matched_devices(
    service: BluetoothService,
    patterns: Iterable[str],
) -> tuple[DeviceHandle, ...]:
    """Query the pairing registry once and resolve the matched device set.

    A failed or empty registry query yields an empty set; it is logged, not raised.
    """
    wanted = tuple(p for p in patterns if p)
    if not wanted:
        LOGGER.info("No device name patterns configured; nothing to control")
        return ()

    try:
        devices = service.paired_devices()
    except BackendUnavailableError:
        raise
    except Exception as exc:
        LOGGER.warning("Paired device query failed: %s", exc)
        return ()

    if not devices:
        LOGGER.warning("No paired Bluetooth devices found")
        return ()

    matched = resolve(wanted, devices)
    if not matched:
        LOGGER.warning("No paired device name contains any of: %s", ", ".join(wanted))
    for device in matched:
        LOGGER.info("Controlling %s (%s)", device.name or "<unnamed>", device.address)
    return matched
