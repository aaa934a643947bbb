#!/usr/bin/env python3
from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Config:
    """Application configuration"""
    # Delivery tiers (milliseconds)
    agent_timeout_ms: int = int(os.getenv("PAGESCRAPE_AGENT_TIMEOUT_MS", "3000"))
    inject_timeout_ms: int = int(os.getenv("PAGESCRAPE_INJECT_TIMEOUT_MS", "5000"))
    settle_delay_ms: int = int(os.getenv("PAGESCRAPE_SETTLE_DELAY_MS", "500"))

    # Browser
    headless: bool = os.getenv("PAGESCRAPE_HEADLESS", "true").lower() == "true"
    navigation_timeout_ms: int = int(os.getenv("PAGESCRAPE_NAVIGATION_TIMEOUT_MS", "30000"))
    wait_until: str = os.getenv("PAGESCRAPE_WAIT_UNTIL", "domcontentloaded")
    user_agent: Optional[str] = os.getenv("PAGESCRAPE_USER_AGENT") or None
    fetch_timeout_s: int = int(os.getenv("PAGESCRAPE_FETCH_TIMEOUT", "30"))

    # API server
    api_host: str = os.getenv("PAGESCRAPE_API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("PAGESCRAPE_API_PORT", os.getenv("API_PORT", "8000")))

    # Results
    export_dir: Path = Path(os.getenv("PAGESCRAPE_EXPORT_DIR", "."))
    preview_limit: int = int(os.getenv("PAGESCRAPE_PREVIEW_LIMIT", "10"))
    preview_chars: int = int(os.getenv("PAGESCRAPE_PREVIEW_CHARS", "100"))

    # Status messages auto-dismiss after these durations
    status_success_ms: int = int(os.getenv("PAGESCRAPE_STATUS_SUCCESS_MS", "3000"))
    status_error_ms: int = int(os.getenv("PAGESCRAPE_STATUS_ERROR_MS", "5000"))
    status_history_size: int = int(os.getenv("PAGESCRAPE_STATUS_HISTORY", "50"))

    log_level: str = os.getenv("PAGESCRAPE_LOG_LEVEL", "INFO").upper()
    enable_debug: bool = os.getenv("PAGESCRAPE_DEBUG", "false").lower() == "true"

config = Config()
