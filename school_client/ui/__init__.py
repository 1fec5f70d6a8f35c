"""Streamlit rendering for the dashboards and module screens."""
