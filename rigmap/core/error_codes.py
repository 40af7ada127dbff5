"""
Structured error codes for placement and run failures.
Use these keys in PlacementFailure.reason; map to operator-facing messages in reports.
"""

# Known error keys (returned in PlacementFailure.reason)
PLACEMENT_EXHAUSTED = "placement_exhausted"
INVALID_CONFIG = "invalid_config"
INVALID_ANCHOR = "invalid_anchor"
RUN_FAILED = "run_failed"

# Failures that a wider search cannot fix
TERMINAL_REASONS: frozenset[str] = frozenset({INVALID_CONFIG, INVALID_ANCHOR})

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    PLACEMENT_EXHAUSTED: "No free bubble slot near this rig. Rig is drawn without its label.",
    INVALID_CONFIG: "Placement settings are invalid (step size and ring count must be positive).",
    INVALID_ANCHOR: "Rig has no usable coordinates.",
    RUN_FAILED: "Run failed. Check the rig file and settings.",
}


class ConfigurationError(ValueError):
    """Raised for non-positive step sizes, ring counts or inverted bounds."""


def user_message(error_key: str | None) -> str:
    """Operator-facing message for a failure reason; unknown keys are named in the text."""
    if not error_key:
        return USER_MESSAGES[RUN_FAILED]
    return USER_MESSAGES.get(error_key, f"Rig could not be labelled ({error_key}).")
