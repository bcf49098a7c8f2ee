#!/usr/bin/env python3
"""Supabase and OpenAI client configuration."""

from __future__ import annotations

import logging
import os

import streamlit as st
from supabase import create_client

logger = logging.getLogger(__name__)


def _secret(name: str) -> str:
    try:
        value = st.secrets.get(name, "")
    except FileNotFoundError:
        value = ""
    if not value:
        value = os.getenv(name, "")
    return str(value or "").strip()


def get_supabase_client():
    url = _secret("SUPABASE_URL")
    key = _secret("SUPABASE_KEY")
    if not url or not key:
        logger.warning("Supabase not configured. Missing SUPABASE_URL or SUPABASE_KEY.")
        return None
    return create_client(url, key)


def get_openai_api_key() -> str:
    return _secret("OPENAI_API_KEY")
