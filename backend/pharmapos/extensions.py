# Overview: Registration and lookup of the per-app in-memory state.

from flask import Flask, current_app

from .state import AppState

EXTENSION_KEY = "pharmapos"


def init_state(app: Flask, state: AppState) -> AppState:
    app.extensions[EXTENSION_KEY] = state
    return state


def get_state() -> AppState:
    """State of the app handling the current request or CLI command."""
    return current_app.extensions[EXTENSION_KEY]
