"""Configuration from environment variables (.env)."""

import os
from pathlib import Path
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

DEFAULT_ERROR_MESSAGE = "Không thể tìm kiếm. Vui lòng thử lại sau."


@dataclass
class Config:
    project_root: Path
    logs_dir: Path
    portal_base_url: str
    session_cookie_name: str
    session_token: str
    debounce_ms: int
    page_limit: int
    timeout_seconds: float
    error_message: str

    @classmethod
    def load(cls) -> "Config":
        project_root = Path(__file__).parent.parent.parent
        logs_dir = os.getenv("PORTAL_LOGS_DIR", "")
        return cls(
            project_root=project_root,
            logs_dir=Path(logs_dir) if logs_dir else project_root / "logs",
            portal_base_url=os.getenv("PORTAL_BASE_URL", "http://localhost:3000/api"),
            session_cookie_name=os.getenv("PORTAL_SESSION_COOKIE_NAME", "next-auth.session-token"),
            session_token=os.getenv("PORTAL_SESSION_TOKEN", ""),
            debounce_ms=int(os.getenv("SEARCH_DEBOUNCE_MS", "300")),
            page_limit=int(os.getenv("SEARCH_PAGE_LIMIT", "10")),
            timeout_seconds=float(os.getenv("SEARCH_TIMEOUT_SECONDS", "10")),
            error_message=os.getenv("SEARCH_ERROR_MESSAGE", DEFAULT_ERROR_MESSAGE),
        )

    def validate(self) -> list[str]:
        errors = []
        if not self.portal_base_url.startswith(("http://", "https://")):
            errors.append(f"PORTAL_BASE_URL must be an http(s) URL: {self.portal_base_url!r}")
        if self.debounce_ms < 0:
            errors.append(f"SEARCH_DEBOUNCE_MS must be >= 0, got {self.debounce_ms}")
        if self.page_limit < 1:
            errors.append(f"SEARCH_PAGE_LIMIT must be >= 1, got {self.page_limit}")
        if self.timeout_seconds <= 0:
            errors.append(f"SEARCH_TIMEOUT_SECONDS must be > 0, got {self.timeout_seconds}")
        return errors


config = Config.load()
