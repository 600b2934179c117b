import os

from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def model_post_init(self, __context: Any) -> None:
        """Pick up the key names the browser build used."""

        super().model_post_init(__context)

        if not self.openrouter_api_key:
            fallback = os.getenv("VITE_OPENROUTER_API_KEY") or os.getenv("OPENROUTER_KEY")
            if fallback:
                object.__setattr__(self, "openrouter_api_key", fallback)

        if not self.openrouter_model:
            fallback_model = os.getenv("VITE_OPENROUTER_MODEL")
            object.__setattr__(self, "openrouter_model", fallback_model or self.resolve_default_model())

    # Server Settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="auto", description="json, console, or auto (console at DEBUG)")

    # OpenRouter
    openrouter_api_key: str = Field(
        default="",
        description="OpenRouter API key",
        validation_alias=AliasChoices("openrouter_api_key", "OPENROUTER_API_KEY"),
    )
    openrouter_model: str = Field(
        default="",
        description="Model tried first for every chat completion",
        validation_alias=AliasChoices("openrouter_model", "OPENROUTER_MODEL"),
    )
    openrouter_base_url: str = Field(
        default="https://openrouter.ai/api/v1",
        description="Base URL of the chat completion API",
    )
    app_title: str = Field(default="Stacks Chat Assistant", description="Sent as X-Title to OpenRouter")
    app_referer: str = Field(default="", description="Sent as HTTP-Referer to OpenRouter when set")

    candidate_models: List[Dict[str, Any]] = Field(
        default_factory=lambda: [
            {
                "id": "alibaba/tongyi-deepresearch-30b-a3b:free",
                "label": "Tongyi DeepResearch 30B",
                "default": True,
            },
            {
                "id": "meituan/longcat-flash-chat:free",
                "label": "LongCat Flash Chat",
            },
            {
                "id": "nvidia/nemotron-nano-9b-v2:free",
                "label": "Nemotron Nano 9B v2",
            },
            {
                "id": "anthropic/claude-3.5-sonnet",
                "label": "Claude 3.5 Sonnet",
            },
        ],
        description="Ordered catalog of models the assistant may fall back to",
    )

    # Completion parameters
    request_timeout_seconds: float = Field(default=30.0, gt=0, description="Hard timeout per model attempt")
    temperature: float = Field(default=0.3, description="LLM temperature setting")
    max_tokens: int = Field(default=150, description="Maximum tokens for LLM response")
    top_p: float = Field(default=0.9, description="Nucleus sampling setting")

    # Conversation
    history_window: int = Field(default=6, ge=0, description="Prior turns forwarded to the model")
    context_scan_window: int = Field(default=4, ge=0, description="Assistant turns scanned for pending questions")

    # Circuit breaker
    breaker_max_failures: int = Field(default=5, ge=1, description="Exhausted calls before the breaker opens")
    breaker_cooldown_seconds: float = Field(default=300.0, ge=0, description="Seconds the breaker stays open")

    # Wallet
    default_network: str = Field(default="testnet", description="Network assumed when the caller sends none")
    transfer_memo: str = Field(default="Sent via Stacks Chat Assistant", description="Memo attached to transfer actions")

    @property
    def has_openrouter_key(self) -> bool:
        return bool(self.openrouter_api_key)

    @property
    def model_ids(self) -> List[str]:
        return [option["id"] for option in self.candidate_models if option.get("id")]

    def resolve_default_model(self) -> str:
        for option in self.candidate_models:
            default_flag = option.get("default")
            if isinstance(default_flag, str):
                is_default = default_flag.lower() in {"true", "1", "yes"}
            else:
                is_default = bool(default_flag)
            if is_default and option.get("id"):
                return option["id"]
        ids = self.model_ids
        return ids[0] if ids else ""

    def describe_model(self, model_id: str) -> Optional[Dict[str, Any]]:
        target = (model_id or "").strip().lower()
        for option in self.candidate_models:
            if (option.get("id") or "").lower() == target:
                return option
        return None


# Global settings instance
settings = Settings()
