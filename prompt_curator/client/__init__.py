"""Prompt Curator client: RPC proxy, list controller and Streamlit page."""
