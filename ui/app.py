"""Streamlit chat UI for the course PDF portal.

Run with: streamlit run ui/app.py
"""

# Add project root to sys.path for imports to work when run via streamlit
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import httpx  # noqa: E402
import streamlit as st  # noqa: E402

from ui.helpers import (  # noqa: E402
    build_bot_messages,
    call_find_pdf,
    call_login,
    describe_pdf,
    log_activity,
)

# Configuration
BACKEND_URL = "http://localhost:8000"

# Page config
st.set_page_config(
    page_title="Course PDF Assistant",
    page_icon="📄",
    layout="centered",
)

# Initialize session state
if "profile" not in st.session_state:
    st.session_state.profile = None
if "messages" not in st.session_state:
    st.session_state.messages = []
if "error" not in st.session_state:
    st.session_state.error = None

st.title("📄 Course PDF Assistant")
st.markdown("*Ask for a document, e.g. \"physics r23 first year\"*")
st.divider()

# =============================================================================
# LOGIN
# =============================================================================
if st.session_state.profile is None:
    with st.form("login_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Log in", type="primary")

        if submitted:
            try:
                result = call_login(BACKEND_URL, username.strip(), password)
            except httpx.HTTPError as e:
                st.session_state.error = f"Connection error: {e}"
            else:
                if result.get("ok") is False:
                    st.session_state.error = result.get("error", "Login failed")
                else:
                    st.session_state.profile = result
                    st.session_state.error = None
                    st.rerun()

    if st.session_state.error:
        st.error(st.session_state.error)
    st.stop()

profile = st.session_state.profile

with st.sidebar:
    st.markdown(f"**{profile['username']}** ({profile['role']})")
    st.caption(f"Branch: {profile['branch']} | Year: {profile['year']}")
    if st.button("Log out"):
        st.session_state.profile = None
        st.session_state.messages = []
        st.rerun()

# =============================================================================
# CHAT
# =============================================================================
for index, msg in enumerate(st.session_state.messages):
    with st.chat_message(msg["sender"]):
        if msg["text"]:
            st.markdown(msg["text"])

        pdf = msg.get("pdf")
        if pdf:
            st.markdown(f"🗂️ **{describe_pdf(pdf)}**")
            if st.button("View", key=f"view-{index}"):
                log_activity(BACKEND_URL, profile["username"], pdf["pdf_id"], "view")
            st.link_button("Download", pdf["pdf_url"])

        for pos, suggestion in enumerate(msg.get("suggestions", [])):
            col_label, col_open = st.columns([3, 1])
            with col_label:
                st.markdown(f"- {describe_pdf(suggestion)}")
            with col_open:
                if st.button("Open", key=f"open-{index}-{pos}"):
                    log_activity(
                        BACKEND_URL, profile["username"], suggestion["pdf_id"], "view"
                    )

prompt = st.chat_input("Which PDF do you need?")
if prompt:
    st.session_state.messages.append(
        {"sender": "user", "text": prompt, "pdf": None, "suggestions": []}
    )
    try:
        response = call_find_pdf(BACKEND_URL, prompt, profile["username"])
    except httpx.HTTPError as e:
        bot_messages = [{"text": f"Connection error: {e}", "pdf": None, "suggestions": []}]
    else:
        bot_messages = build_bot_messages(response)

    for bot_msg in bot_messages:
        st.session_state.messages.append({"sender": "assistant", **bot_msg})
    st.rerun()
