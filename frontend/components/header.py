"""
Header, consent gate and footer components for Legal-Lens UI.
"""
import streamlit as st

CONSENT_POINTS = [
    "This tool is provided for educational purposes only.",
    "<strong>NOT LEGAL ADVICE:</strong> AI analysis can be wrong. Never rely on this for real legal decisions.",
    "<strong>USER RESPONSIBILITY:</strong> All risks, outcomes, and liabilities from using this tool are strictly your own.",
    "<strong>PRIVACY:</strong> Do not upload documents containing sensitive personal data.",
]


def render_header():
    """Render the title block."""
    st.markdown('''
    <div class="lens-header" style="text-align: center;">
        <h1>⚡ Legal-Lens Pro ⚡</h1>
        <p>AI-Powered Contract Analysis</p>
    </div>
    ''', unsafe_allow_html=True)


def render_consent_gate() -> bool:
    """
    Show the user agreement until it is accepted.
    Returns True once the user has agreed.
    """
    if st.session_state.get("has_agreed"):
        return True

    if st.session_state.get("has_declined"):
        st.error("You declined the user agreement. Close this tab or reload the page to start over.")
        return False

    points_html = "".join(f"<li>{point}</li>" for point in CONSENT_POINTS)
    st.markdown(f'''
    <div style="background-color: #1a1a1a; padding: 40px; border-radius: 20px; max-width: 600px;
                margin: 40px auto; border: 2px solid #ffcc00; color: #ddd;">
        <h2 style="color: #ffcc00; text-align: center;">⚖️ LEGAL-LENS PRO: USER AGREEMENT</h2>
        <p>Welcome to <strong>Legal-Lens Pro</strong>. Before you proceed, please understand:</p>
        <ul>{points_html}</ul>
    </div>
    ''', unsafe_allow_html=True)

    col1, col2 = st.columns(2)
    with col1:
        if st.button("I AGREE & CONTINUE", type="primary", use_container_width=True, key="consent_agree"):
            st.session_state["has_agreed"] = True
            st.rerun()
    with col2:
        if st.button("I DISAGREE (EXIT)", use_container_width=True, key="consent_decline"):
            st.session_state["has_declined"] = True
            st.rerun()
    return False


def render_footer():
    """Render the legal disclaimer footer."""
    st.markdown('''
    <footer style="margin-top: 50px; padding: 20px; border-top: 1px solid #333; font-size: 11px;
                   color: #666; text-align: center; line-height: 1.5;">
        <p>⚠️ <strong>DISCLAIMER:</strong> Legal-Lens Pro is an AI-powered tool for educational purposes only.
        It is not a substitute for professional legal advice.</p>
    </footer>
    ''', unsafe_allow_html=True)
