"""
Styling utilities for Legal-Lens UI.
Handles CSS injection and the HTML snippets for report lines and the gauge.
"""
import html
import os

import streamlit as st

SEVERITY_COLORS = {
    "flagged": "#ff4444",
    "neutral": "#e0e0e0",
}

GAUGE_COLORS = {
    "low": "#00c853",
    "medium": "#ffab00",
    "high": "#ff1744",
}

GAUGE_LABELS = {
    "low": "LOW RISK",
    "medium": "MODERATE RISK",
    "high": "HIGH RISK",
}


def inject_custom_css(css_file_path: str = "assets/style.css"):
    """Inject custom CSS into Streamlit app."""
    current_dir = os.path.dirname(os.path.abspath(__file__))
    app_dir = os.path.dirname(current_dir)
    css_path = os.path.join(app_dir, css_file_path)

    if os.path.exists(css_path):
        with open(css_path, 'r') as f:
            css = f.read()
        st.markdown(f'<style>{css}</style>', unsafe_allow_html=True)
    else:
        # Fallback: basic styles
        st.markdown("""
        <style>
        :root {
            --lens-accent: #ffcc00;
            --lens-dark: #1a1a1a;
        }
        </style>
        """, unsafe_allow_html=True)


def render_report_line(text: str, severity: str) -> str:
    """Render one classified report line. Blank lines keep their vertical space."""
    if not text.strip():
        return '<div class="lens-line lens-line-blank">&nbsp;</div>'

    color = SEVERITY_COLORS.get(severity, SEVERITY_COLORS["neutral"])
    weight = "bold" if severity == "flagged" else "normal"
    return (
        f'<div class="lens-line lens-line-{severity}" '
        f'style="color: {color}; font-weight: {weight};">{html.escape(text)}</div>'
    )


def render_gauge(score: int, gauge: str) -> str:
    """Render the 0-10 risk gauge as a filled bar."""
    color = GAUGE_COLORS.get(gauge, GAUGE_COLORS["low"])
    label = GAUGE_LABELS.get(gauge, GAUGE_LABELS["low"])
    percent = max(0, min(10, score)) * 10
    return f'''
    <div class="lens-gauge">
        <div style="font-size: 12px; color: #888; text-transform: uppercase;">Risk Score</div>
        <div style="font-size: 36px; font-weight: bold; color: {color};">{score}/10</div>
        <div style="background: #333; border-radius: 8px; height: 14px; overflow: hidden;">
            <div style="width: {percent}%; background: {color}; height: 14px;"></div>
        </div>
        <div style="margin-top: 6px; font-weight: 600; color: {color};">{label}</div>
    </div>
    '''


def render_card(html_content: str, title: str = None) -> str:
    """Render content in a card container."""
    title_html = f'<div class="lens-card-header"><h3 class="lens-card-title">{title}</h3></div>' if title else ''
    return f'''
    <div class="lens-card">
        {title_html}
        {html_content}
    </div>
    '''


def render_error_banner(error: str) -> str:
    """Red system-error strip shown above the form. The message comes from the API, so it is escaped."""
    return f'''
    <div style="background-color: #2d0a0a; padding: 10px; margin: 10px auto; border-radius: 5px;
                font-size: 12px; border: 1px solid #ff4444; color: #ff8888;">
        <strong>🚨 SYSTEM ERROR:</strong> {html.escape(str(error))}
    </div>
    '''
