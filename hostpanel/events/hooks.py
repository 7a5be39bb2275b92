"""
Setup Event Names

Centralised list of the events fired during a setup run. Plugins and
components register listeners on these names through the EventManager.

Phase events are built from the phase and component category, e.g.
``beforePreInstallServers`` or ``afterInstallPackages``.
"""

from __future__ import annotations

# ── Setup task sequence ────────────────────────────────────────────────────────
BEFORE_SETUP_TASKS = "beforeSetupTasks"
AFTER_SETUP_TASKS = "afterSetupTasks"

# ── Plugin listener registration ──────────────────────────────────────────────
BEFORE_REGISTER_PLUGIN_LISTENERS = "beforeSetupRegisterPluginListeners"
AFTER_REGISTER_PLUGIN_LISTENERS = "afterSetupRegisterPluginListeners"

# ── DB tasks ──────────────────────────────────────────────────────────────────
BEFORE_SETUP_DB_TASKS = "beforeSetupDbTasks"
AFTER_SETUP_DB_TASKS = "afterSetupDbTasks"

# ── Service restarts ──────────────────────────────────────────────────────────
BEFORE_RESTART_SERVICES = "beforeSetupRestartServices"
AFTER_RESTART_SERVICES = "afterSetupRestartServices"


def phase_event(when: str, phase: str, category: str) -> str:
    """
    Build a phase bracketing event name.

    Args:
        when:     "before" or "after".
        phase:    Phase label, e.g. "PreInstall".
        category: "Servers" or "Packages".
    """
    if when not in ("before", "after"):
        raise ValueError(f"Unknown event position: {when}")
    return f"{when}{phase}{category}"
