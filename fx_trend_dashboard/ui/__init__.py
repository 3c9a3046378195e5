"""Presentation layer: Streamlit dashboard and its helpers."""
