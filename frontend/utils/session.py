"""
Session-state transitions for the scan and feedback widgets.
Kept free of Streamlit calls so they work on ``st.session_state`` or a plain dict.
"""
from typing import Any, Callable, MutableMapping

LOADING_MESSAGES = [
    "Reading file content...",
    "Analyzing legal jargon...",
    "Checking for red flags...",
    "Drafting final report...",
]

LOADING_INTERVAL_SECONDS = 3.0

EMPTY_FEEDBACK_WARNING = "⚠️ Please type something before sending!"


def loading_message(elapsed: float, interval: float = LOADING_INTERVAL_SECONDS) -> str:
    """The message to show after ``elapsed`` seconds; cycles through LOADING_MESSAGES."""
    step = int(max(elapsed, 0) // interval)
    return LOADING_MESSAGES[step % len(LOADING_MESSAGES)]


def finish_scan(state: MutableMapping[str, Any], success: bool, result: dict) -> None:
    """Leave scanning mode and keep either the result or the error for the next run."""
    state["scanning"] = False
    if success:
        state["scan_result"] = result
        state["scan_error"] = None
    else:
        state["scan_result"] = None
        state["scan_error"] = result.get("error", "Unknown error")


def submit_feedback(state: MutableMapping[str, Any], send: Callable[[str], tuple[bool, Any]]) -> None:
    """
    on_click handler for the feedback button.

    ``send`` posts the suggestion and returns ``(success, body)`` like ``call_api``.
    The box is cleared only once the suggestion was delivered; the outcome is
    stored under ``feedback_notice`` as ``(kind, message)``.
    """
    suggestion = state.get("suggestion") or ""
    if not suggestion.strip():
        state["feedback_notice"] = ("warning", EMPTY_FEEDBACK_WARNING)
        return

    success, result = send(suggestion)
    if success:
        state["suggestion"] = ""
        state["feedback_notice"] = ("success", result.get("message", "Thanks!"))
    else:
        state["feedback_notice"] = ("error", f"❌ {result.get('error', 'Unknown error')}")
