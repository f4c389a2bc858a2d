"""
ui/theme.py

Dragon Chase shared theme helper.
Call apply_dragon_theme() immediately after st.set_page_config() in any
page to inject the board styling and render the header bar.

Palette tokens:
    blood red:    #B3202A
    night black:  #111014
    parchment:    #F3EBDD
    ash gray:     #6B6670
    safe green:   #3C8D5A
    warning gold: #D9A21B
"""

from __future__ import annotations

import base64
from pathlib import Path

import streamlit as st

# ---------------------------------------------------------------------------
# Palette tokens
# ---------------------------------------------------------------------------
_BLOOD_RED    = "#B3202A"
_NIGHT_BLACK  = "#111014"
_PARCHMENT    = "#F3EBDD"
_ASH_GRAY     = "#6B6670"
_SAFE_GREEN   = "#3C8D5A"
_WARNING_GOLD = "#D9A21B"

ASSETS_DIR = Path(__file__).resolve().parent / "assets"
_DRAGON_BASE_PATH   = ASSETS_DIR / "dragon_base.png"
_DRAGON_ATTACK_PATH = ASSETS_DIR / "dragon_attack.png"

STATE_BADGES: dict[str, str] = {
    "finished": "🏁 Finished",
    "safe":     "🟢 Safe",
    "at_risk":  "😱 At risk",
    "caught":   "🔥 Caught",
}

# ---------------------------------------------------------------------------
# CSS — injected once per page render.
# Double braces {{ }} produce literal CSS braces in the f-string.
# ---------------------------------------------------------------------------
_CSS = f"""
<style>
.block-container {{
    padding-top: 0.75rem !important;
    padding-bottom: 2rem !important;
}}

#MainMenu {{ visibility: hidden; }}
footer {{ visibility: hidden; }}

/* Race track */
.race-track {{
    position: relative;
    height: 2.4rem;
    border-radius: 10px;
    background: {_PARCHMENT};
    overflow: hidden;
    margin-bottom: 0.35rem;
}}
.race-track .danger-zone {{
    position: absolute; left: 0; top: 0; bottom: 0;
    background: rgba(179, 32, 42, 0.25);
}}
.race-track .marker {{
    position: absolute; top: 0.3rem;
    transform: translateX(-50%);
    font-size: 1.3rem;
    white-space: nowrap;
}}
.race-label {{ color: {_ASH_GRAY}; font-size: 0.85rem; }}

/* Buttons */
.stButton > button[kind="primary"] {{
    background-color: {_BLOOD_RED} !important;
    color: white !important;
    border: none !important;
    border-radius: 10px !important;
}}
.stButton > button {{
    border-radius: 10px !important;
}}

div[data-testid="metric-container"] {{
    border: 1px solid #E4E4E4;
    border-radius: 12px;
    padding: 0.55rem 0.85rem;
}}
</style>
"""


def _image_data_url(path: Path) -> str | None:
    """Return a base64 data URL for a PNG asset, or None if missing."""
    if not path.exists():
        return None
    b64 = base64.b64encode(path.read_bytes()).decode("utf-8")
    return f"data:image/png;base64,{b64}"


def dragon_sprite(attacking: bool) -> str:
    """Return an <img> tag for the dragon sprite, or an emoji when assets are absent."""
    url = _image_data_url(_DRAGON_ATTACK_PATH if attacking else _DRAGON_BASE_PATH)
    if url is None:
        return "🐉"
    return f"<img src='{url}' style='height:1.6rem;' alt='Dragon' />"


def apply_dragon_theme(
    title: str,
    subtitle: str | None = None,
) -> None:
    """Inject the board CSS and render the shared top bar.

    Must be called immediately after st.set_page_config() in each page.
    """
    st.markdown(_CSS, unsafe_allow_html=True)

    subtitle_html = (
        f"<div style='color:{_PARCHMENT}; font-size:0.85rem; margin-top:0.15rem;'>{subtitle}</div>"
        if subtitle else
        ""
    )

    st.markdown(
        f"""
        <div style="
            background: {_NIGHT_BLACK};
            border-bottom: 3px solid {_BLOOD_RED};
            padding: 0.65rem 1.25rem;
            margin: -0.75rem -1rem 1.0rem -1rem;
            display: flex;
            align-items: center;
            gap: 1rem;
        ">
            <div style="font-size:1.8rem;">🐉</div>
            <div style="display:flex; flex-direction:column; line-height:1.1;">
                <div style="color:white; font-size:1.25rem; font-weight:650;">
                    {title}
                </div>
                {subtitle_html}
            </div>
            <div style="margin-left:auto; font-size:0.85rem;">
                <span style="color:{_SAFE_GREEN};">● safe</span>
                &nbsp;<span style="color:{_WARNING_GOLD};">● at risk</span>
                &nbsp;<span style="color:{_BLOOD_RED};">● caught</span>
            </div>
        </div>
        """,
        unsafe_allow_html=True,
    )
