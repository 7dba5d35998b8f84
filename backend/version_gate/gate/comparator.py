from __future__ import annotations

from version_gate.models.descriptor import VersionDescriptor
from version_gate.models.status import (
    EndOfLife,
    GateStatus,
    RecommendedUpdate,
    RequiredUpdate,
    UpToDate,
)


def derive_status(descriptor: VersionDescriptor, local_version: str) -> GateStatus:
    """Classify ``local_version`` against the thresholds in ``descriptor``.

    Checks run in priority order: end-of-life, then required, then
    recommended. Both version comparisons are strict and ordinal (plain
    ``str`` ordering), so a version equal to a threshold meets it.

    No semantic-version parsing is done: ``"10.0.0" < "9.0.0"`` holds here.
    Publishers must keep version strings ordinally comparable (for example by
    zero-padding segments).
    """
    if descriptor.end_of_life:
        return EndOfLife(message=descriptor.message)
    if local_version < descriptor.required_version:
        return RequiredUpdate(url=descriptor.update_url)
    if local_version < descriptor.recommended_version:
        return RecommendedUpdate(url=descriptor.update_url)
    return UpToDate()
