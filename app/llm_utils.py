"""Credential lookup for the narrative service.

The Streamlit server makes every inference call, so the key stays on the
server and is never sent to the browser.

API Key Priority:
1. st.secrets["OPENAI_API_KEY"] (Streamlit secrets.toml)
2. os.environ["OPENAI_API_KEY"]
"""
import os
from typing import Optional

import streamlit as st


def _secret(name: str) -> Optional[str]:
    try:
        if name in st.secrets:
            return st.secrets[name]
    except FileNotFoundError:
        # No secrets.toml configured.
        return None
    return None


def get_openai_api_key() -> Optional[str]:
    """
    Get the OpenAI API key, Streamlit secrets first.

    Returns:
        API key string or None if not configured.
    """
    return _secret("OPENAI_API_KEY") or os.environ.get("OPENAI_API_KEY")


def get_openai_base_url() -> Optional[str]:
    """Get OpenAI base URL if configured."""
    return _secret("OPENAI_BASE_URL") or os.environ.get("OPENAI_BASE_URL")


def render_missing_key_notice():
    """Explain how to configure the key when it is absent."""
    st.warning("""
**OpenAI API key not configured**

Risk scores and charts still work, but AI recommendations will be marked as unavailable.
To enable them, set `OPENAI_API_KEY` in `.streamlit/secrets.toml` or the server environment.
    """)
