"""Wiring for hosts that embed the analyzer."""

from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv

from recruitmaxxing.clients.gemini_client import ModelGateway
from recruitmaxxing.config import AppConfig, load_config
from recruitmaxxing.pipeline.orchestrator import AnalysisOrchestrator
from recruitmaxxing.storage.analysis_store import AnalysisStore, SQLiteAnalysisStore

logger = logging.getLogger(__name__)


def create_orchestrator(
    config: AppConfig | None = None,
    *,
    config_path: str | Path | None = None,
    store: AnalysisStore | None = None,
) -> AnalysisOrchestrator:
    """Build an orchestrator from config.yaml and the environment (.env included)."""
    load_dotenv()
    if config is None:
        config = load_config(config_path)
    gateway = ModelGateway.from_config(config.llm)
    if store is None:
        store = SQLiteAnalysisStore(config.storage.resolved_db_path)
    logger.debug("Orchestrator ready: model=%s", config.llm.model)
    return AnalysisOrchestrator(gateway, store)
