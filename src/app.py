"""Application composition root.

This module wires together configuration and the loaded models for the interpreter runtime.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.config.settings import Settings
from src.interpreter.models import Models, load_models


@dataclass(frozen=True)
class App:
    """Shared application dependencies for the line handler."""

    settings: Settings
    models: Models


def create_app(settings: Settings) -> App:
    """Create the application container.

    Raises:
        ClassificationError: If a model artifact cannot be loaded; startup must abort.
    """

    models = load_models(settings.intent_model_path, settings.token_model_path)
    return App(settings=settings, models=models)
