"""Lint run options."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from flowlint.settings import settings

# Nominal node footprint used for overlap warnings.
NODE_WIDTH = 100
NODE_HEIGHT = 50

# Wire handles may be "<node>:<field>"; the second segment names the field.
HANDLE_SEPARATOR = ":"


class LintMode(str, Enum):
    FLOW = "flow"
    NODE = "node"


class LintOptions(BaseModel):
    """Switches for one lint run.

    ``mode=node`` restricts the run to per-node structural checks. ``strict``
    requires a boolean ``isDeleted`` on every output and treats blank strings
    and empty containers as missing values for required inputs.
    ``require_versions`` warns about nodes without a version tag.
    """

    model_config = ConfigDict(frozen=True)

    mode: LintMode = LintMode.FLOW
    strict: bool = False
    require_versions: bool = False

    @classmethod
    def from_settings(cls) -> "LintOptions":
        return cls(
            mode=LintMode(settings.default_mode),
            strict=settings.strict,
            require_versions=settings.require_versions,
        )

    @property
    def checks_whole_flow(self) -> bool:
        return self.mode is LintMode.FLOW
