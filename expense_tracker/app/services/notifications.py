import streamlit as st

from typing import Protocol


class Notifier(Protocol):
    """Something that can show short messages to the user"""
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ToastNotifier:
    """Show notifications as streamlit toasts"""
    def success(self, message: str) -> None:
        st.toast(message, icon="✅")

    def error(self, message: str) -> None:
        st.toast(message, icon="❌")
