import logging
import streamlit as st
from contextlib import contextmanager

logger = logging.getLogger(__name__)


@contextmanager
def net_action(text: str):
    with st.spinner(text, show_time=True):
        try:
            yield
        except Exception:
            logger.exception("Failed: %s", text)
            raise
