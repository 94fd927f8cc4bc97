"""Release history store.

Records the last released version of each application in a JSON file so
that version codes stay strictly increasing across releases.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel
from pydantic import Field

from ..errors import OrderingViolation
from ..models import BuildProfile
from ..storage.paths import get_history_path

logger = logging.getLogger(__name__)


class ReleaseRecord(BaseModel):
    """Last recorded release of one application."""

    application_id: str = Field(description="Application identifier")
    version_code: int = Field(gt=0, description="Released version code")
    version_name: str = Field(description="Released version name")
    recorded_at: datetime = Field(description="When the release was recorded")


class ReleaseHistory:
    """JSON-based store of the latest release per application."""

    def __init__(self, path: Path | None = None) -> None:
        """Initialize release history.

        Args:
            path: History file. Defaults to $BUILDPROFILE_HOME/state/releases.json
        """
        self.path = path or get_history_path()

    def _load(self) -> dict[str, ReleaseRecord]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise RuntimeError(f"Release history {self.path} is corrupted: {e}") from e
        return {app_id: ReleaseRecord.model_validate(record) for app_id, record in data.items()}

    def _save(self, records: dict[str, ReleaseRecord]) -> None:
        """Save records atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        temp_path = self.path.with_suffix(".tmp")
        data = {app_id: record.model_dump(mode="json") for app_id, record in records.items()}
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self.path)
            logger.debug(f"Saved release history to {self.path}")
        except Exception as e:
            if temp_path.exists():
                temp_path.unlink()
            raise RuntimeError(f"Failed to save release history to {self.path}: {e}") from e

    def get(self, application_id: str) -> ReleaseRecord | None:
        """Get the last recorded release of an application."""
        return self._load().get(application_id)

    def last_version_code(self, application_id: str) -> int | None:
        """Get the last released version code, or None if never released."""
        record = self.get(application_id)
        return record.version_code if record else None

    def record(self, profile: BuildProfile) -> ReleaseRecord:
        """Record a resolved release profile.

        Args:
            profile: Resolved release profile

        Returns:
            The stored record

        Raises:
            ValueError: If the profile is not a release build
            OrderingViolation: If the version code does not exceed the last release
        """
        if not profile.is_release:
            raise ValueError(f"Only release builds are recorded, got {profile.build_type.value}")

        records = self._load()
        previous = records.get(profile.application_id)
        if previous is not None and profile.version_code <= previous.version_code:
            raise OrderingViolation(
                "versionCode",
                f"versionCode {profile.version_code} must exceed last released versionCode {previous.version_code}",
            )

        record = ReleaseRecord(
            application_id=profile.application_id,
            version_code=profile.version_code,
            version_name=profile.version_name,
            recorded_at=datetime.now(UTC),
        )
        records[profile.application_id] = record
        self._save(records)

        logger.info(f"Recorded release {profile.application_id} {profile.version_name} ({profile.version_code})")
        return record
