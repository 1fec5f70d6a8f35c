"""
School Portal — Streamlit UI entry point.
"""

import streamlit as st

# Load .env first so SCHOOL_SERVER_URL and friends are picked up
from school_client.utils.config import load_config, log_file, log_level, server_url
load_config()

from school_client.ui.common import get_session
from school_client.ui.dashboard import render_dashboard
from school_client.ui.login import render_login
from school_client.utils.logger import setup_logger, get_logger

setup_logger("school_client", level=log_level(), log_file=log_file())
log = get_logger()

st.set_page_config(page_title="School Portal", layout="wide")
st.title("School Portal")

session = get_session()

if "screen" not in st.session_state:
    st.session_state.screen = "home"

if not session.is_authenticated:
    st.caption(f"Server: `{server_url()}`")
    render_login(session)
else:
    render_dashboard(session)
