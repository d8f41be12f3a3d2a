"""ABOUTME: Entry point for Streamlit Community Cloud deployment.
ABOUTME: Delegates to the main app module."""

import traceback

import streamlit as st

try:
    from letsgodex.app.main import main
except Exception:
    st.error("Unhandled exception while loading the app.")
    st.code(traceback.format_exc())
    st.stop()

main()
