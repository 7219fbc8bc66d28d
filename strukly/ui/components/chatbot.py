"""
Strukly AI chat panel.
"""

import streamlit as st

from strukly.api import StruklyApiClient
from strukly.exceptions import AssistantError
from strukly.models import ChatTurn
from strukly.utils.translations import translate


def render_chatbot(client: StruklyApiClient, locale: str):
    if 'chat_history' not in st.session_state:
        st.session_state.chat_history = []

    st.markdown(f"### 🤖 {translate(locale, 'chat_title')}")
    for turn in st.session_state.chat_history:
        with st.chat_message("user" if turn.sender == "user" else "assistant"):
            st.markdown(turn.text)

    message = st.chat_input(translate(locale, "chat_placeholder"))
    if not message:
        return

    history = list(st.session_state.chat_history)
    with st.chat_message("user"):
        st.markdown(message)

    try:
        reply = client.chat(message, history)
    except AssistantError:
        reply = translate(locale, "chat_system_error")

    with st.chat_message("assistant"):
        st.markdown(reply)

    st.session_state.chat_history = history + [
        ChatTurn(sender="user", text=message),
        ChatTurn(sender="bot", text=reply),
    ]
