"""
Legal-Lens Pro - Streamlit UI
Upload contracts or paste text, run the AI scan and review the highlighted report.
"""
import os
import mimetypes
import time
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any

import requests
import streamlit as st

# Import custom components and utilities
from utils.session import LOADING_MESSAGES, finish_scan, loading_message, submit_feedback
from utils.styling import inject_custom_css, render_card, render_error_banner, render_gauge, render_report_line
from components.header import render_consent_gate, render_footer, render_header


# Configuration
_raw_api_url = os.getenv("API_BASE_URL", "http://localhost:8000")

# Bare host names get a scheme
if _raw_api_url and not _raw_api_url.startswith(("http://", "https://")):
    API_BASE_URL = f"https://{_raw_api_url}"
else:
    API_BASE_URL = _raw_api_url

REPORT_FILENAME = "legal-lens-report.txt"
UPLOAD_TYPES = ["jpg", "jpeg", "png", "webp", "heic", "heif", "pdf"]
FALLBACK_LANGUAGES = ["English"]

EXT_TO_TYPE = {
    'jpg': 'image/jpeg',
    'jpeg': 'image/jpeg',
    'png': 'image/png',
    'webp': 'image/webp',
    'heic': 'image/heic',
    'heif': 'image/heif',
    'pdf': 'application/pdf',
}


def normalize_file_content_type(file, content_type: str | None) -> str:
    """Normalize content type for file uploads."""
    if content_type:
        content_lower = content_type.lower()
        if content_lower == "image/jpg":
            return "image/jpeg"
        if content_lower in EXT_TO_TYPE.values():
            return content_lower

    name = getattr(file, "name", None)
    if name:
        guessed_type, _ = mimetypes.guess_type(name)
        if guessed_type:
            if guessed_type.lower() == "image/jpg":
                return "image/jpeg"
            return guessed_type.lower()

        ext = name.lower().rsplit('.', 1)[-1] if '.' in name else ''
        if ext in EXT_TO_TYPE:
            return EXT_TO_TYPE[ext]

    return content_type or "application/octet-stream"


def short_name(name: str, limit: int = 10) -> str:
    """Truncated file name for preview tiles."""
    return name if len(name) <= limit else f"{name[:limit]}..."


def call_api(method: str, endpoint: str, **kwargs) -> tuple[bool, Any]:
    """Make API call and return (success, data/error)."""
    url = f"{API_BASE_URL}{endpoint}"
    api_timeout = int(os.getenv("API_TIMEOUT_SECONDS", "180"))

    if "timeout" not in kwargs:
        kwargs["timeout"] = api_timeout

    try:
        resp = requests.request(method, url, **kwargs)
        if resp.status_code < 400:
            return True, resp.json()
        else:
            # Try to parse JSON error response, fallback to text
            try:
                error_data = resp.json()
                error_message = error_data.get("error", resp.text)
            except (ValueError, KeyError, AttributeError):
                error_message = resp.text
            return False, {"error": error_message, "status_code": resp.status_code}
    except requests.exceptions.Timeout:
        return False, {"error": f"Request timeout after {api_timeout}s. The API may be starting up. Please try again."}
    except requests.exceptions.ConnectionError as e:
        error_msg = str(e)
        if "Name or service not known" in error_msg or "Failed to resolve" in error_msg:
            return False, {"error": f"Cannot connect to API at {url}. Please check API_BASE_URL is set correctly."}
        return False, {"error": f"Connection error: {error_msg}"}
    except requests.exceptions.RequestException as e:
        return False, {"error": str(e)}


def reset_scan_state():
    st.session_state["scan_result"] = None
    st.session_state["scanning"] = False
    st.session_state["scan_error"] = None
    st.session_state["pasted_text"] = ""
    st.session_state["upload_counter"] += 1


def main():
    st.set_page_config(
        page_title="Legal-Lens Pro",
        page_icon="⚖️",
        layout="centered",
        initial_sidebar_state="collapsed"
    )

    if "initialized" not in st.session_state:
        st.session_state["initialized"] = True
        st.session_state["has_agreed"] = False
        st.session_state["scan_result"] = None
        st.session_state["scanning"] = False
        st.session_state["scan_error"] = None
        st.session_state["pasted_text"] = ""
        st.session_state["upload_counter"] = 0
        st.session_state["model_status"] = None

    inject_custom_css()

    if not render_consent_gate():
        st.stop()
        return

    render_header()
    show_model_status()
    show_scan_form()

    if st.session_state.get("scan_result") and not st.session_state.get("scanning"):
        show_report(st.session_state["scan_result"])
        show_feedback_box()

    render_footer()


def show_model_status():
    """Only shows when the model check failed."""
    if st.session_state.get("model_status") is None:
        success, data = call_api("GET", "/api/models", timeout=15)
        st.session_state["model_status"] = data if success else {"error": data.get("error")}

    error = st.session_state["model_status"].get("error")
    if error:
        st.markdown(render_error_banner(error), unsafe_allow_html=True)


def choose_language() -> str:
    query = st.text_input("Search report language", placeholder="Type a language name...")
    success, data = call_api("GET", "/api/languages", params={"q": query}, timeout=15)
    options = data.get("languages") if success else None
    if not options:
        if query:
            st.caption("No matching language, using the default.")
        options = FALLBACK_LANGUAGES
    return st.selectbox("Report language", options)


def show_previews(uploaded_files):
    cols = st.columns(min(len(uploaded_files), 4))
    for i, uploaded in enumerate(uploaded_files):
        with cols[i % 4]:
            if uploaded.type and uploaded.type.startswith("image") and not uploaded.type.endswith(("heic", "heif")):
                st.image(uploaded, width=80)
            else:
                st.markdown(f"📄 <span style='font-size: 9px;'>{short_name(uploaded.name)}</span>", unsafe_allow_html=True)


def show_scan_form():
    """Uploader, pasted text, language picker and the scan/reset buttons."""
    uploaded_files = st.file_uploader(
        "Upload contracts",
        type=UPLOAD_TYPES,
        accept_multiple_files=True,
        key=f"uploader_{st.session_state['upload_counter']}",
    )
    st.caption("(Supports: JPG, PNG, WEBP, HEIC, PDF)")

    if uploaded_files:
        show_previews(uploaded_files)

    st.text_area(
        "...or paste the contract text",
        key="pasted_text",
        height=150,
        placeholder="Paste clauses or a whole agreement here",
    )
    language = choose_language()

    scanning = st.session_state.get("scanning", False)
    col1, col2 = st.columns(2)
    with col1:
        label = f"⏳ {LOADING_MESSAGES[0]}" if scanning else "🔍 SCAN FILES"
        if st.button(label, type="primary", use_container_width=True, disabled=scanning):
            if not uploaded_files and not st.session_state["pasted_text"].strip():
                st.warning("⚠️ SYSTEM ALERT: Upload at least one file or paste some text!")
            else:
                st.session_state["scanning"] = True
                st.session_state["scan_result"] = None
                st.session_state["scan_error"] = None
                st.rerun()
    with col2:
        st.button("🗑️ RESET", use_container_width=True, disabled=scanning, on_click=reset_scan_state)

    if scanning:
        run_scan(uploaded_files or [], st.session_state["pasted_text"], language)
    elif st.session_state.get("scan_error"):
        st.error(f"❌ {st.session_state['scan_error']}")


def run_scan(uploaded_files, text: str, language: str):
    """Post the scan and keep the outcome in session state. One scan at a time."""
    files = [
        ("files", (f.name, f.getvalue(), normalize_file_content_type(f, f.type)))
        for f in uploaded_files
    ]
    data = {"text": text, "language": language}

    with st.status(f"Analyzing {len(files) or 1} document(s)... Please wait...", expanded=True) as status:
        progress = st.empty()
        started = time.monotonic()
        # The request runs off the script thread so the message can rotate while waiting
        with ThreadPoolExecutor(max_workers=1) as pool:
            pending = pool.submit(call_api, "POST", "/api/scan", files=files or None, data=data)
            while not pending.done():
                progress.write(f"⏳ {loading_message(time.monotonic() - started)}")
                time.sleep(0.5)
            success, result = pending.result()
        progress.empty()
        status.update(label="Scan complete" if success else "Scan failed", state="complete" if success else "error")

    finish_scan(st.session_state, success, result)
    st.rerun()


def show_report(result: dict):
    """Gauge, then either the clean-scan notice or the line-by-line breakdown."""
    assessment = result.get("assessment", {})
    report = result.get("report", "")

    st.markdown("### 📋 DIAGNOSTIC REPORT:")
    if result.get("error"):
        st.error(f"The analysis service failed: {result['error']}")

    st.markdown(render_gauge(assessment.get("score", 0), assessment.get("gauge", "low")), unsafe_allow_html=True)

    if assessment.get("clean"):
        st.success("✅ No risk detected. The document looks standard.")
    else:
        lines_html = "".join(
            render_report_line(line.get("text", ""), line.get("severity", "neutral"))
            for line in assessment.get("lines", [])
        )
        st.markdown(render_card(lines_html), unsafe_allow_html=True)
        st.caption(f"{assessment.get('flagged_count', 0)} flagged line(s) · model {result.get('model', 'unknown')}")

    with st.expander("📋 COPY TEXT"):
        st.code(report, language=None)
    st.download_button(
        "💾 SAVE REPORT",
        data=report,
        file_name=REPORT_FILENAME,
        mime="text/plain",
    )


def send_feedback(suggestion: str) -> tuple[bool, Any]:
    return call_api("POST", "/api/feedback", json={"suggestion": suggestion}, timeout=15)


def show_feedback_box():
    st.markdown("#### 💡 Have a suggestion?")
    st.text_area(
        "Feedback",
        placeholder="Type your feedback or feature ideas here...",
        height=80,
        label_visibility="collapsed",
        key="suggestion",
    )
    # Widget keys can only be reset from a callback, before the widget is drawn
    st.button("SEND FEEDBACK", on_click=partial(submit_feedback, st.session_state, send_feedback))

    notice = st.session_state.pop("feedback_notice", None)
    if notice:
        kind, message = notice
        getattr(st, kind)(message)


if __name__ == "__main__":
    main()
