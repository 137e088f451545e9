"""
Settings - Pydantic models for type-safe configuration.

This module defines all configuration settings as Pydantic models,
providing validation, type hints, and automatic environment variable loading.

Example:
    >>> from llm_web_inspector.config import Settings, load_config
    >>> settings = load_config()  # Loads from env, yaml, and defaults
    >>> print(settings.inspector.position_miss_policy)
    'synthesize'
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseModel):
    """
    LLM provider settings.
    
    Attributes:
        provider: LLM provider to use
        model: Model name/identifier
        api_key: API key (loaded from environment if not set)
        base_url: Custom API endpoint URL
        temperature: Sampling temperature
        max_tokens: Maximum tokens in response
        timeout: Request timeout in seconds
        supports_vision: Whether the model accepts screenshots
    """
    provider: Literal["openai", "custom"] = "openai"
    model: Optional[str] = None
    api_key: Optional[SecretStr] = None
    base_url: Optional[str] = None
    temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    max_tokens: int = Field(default=4096, ge=1, le=128000)
    timeout: int = Field(default=60, ge=5, le=300)
    supports_vision: bool = True


class InspectorSettings(BaseModel):
    """
    Element resolution settings.
    
    Attributes:
        match_by_position: The model answers with coordinates, so the
            element tree is left out of the page description
        truncate_text_length: Cut element content to this many characters
            in the page description
        filter_non_text_content: Only describe text nodes
        position_miss_policy: What to do when the model points at a spot
            no element covers - insert a synthetic element or raise
    """
    match_by_position: bool = False
    truncate_text_length: Optional[int] = Field(default=None, ge=1)
    filter_non_text_content: bool = False
    position_miss_policy: Literal["synthesize", "raise"] = "synthesize"


class LoggingSettings(BaseModel):
    """
    Logging configuration.
    
    Attributes:
        level: Log level
        file: Log file path (None for console only)
        json_format: Use JSON format for logs
    """
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: Optional[str] = None
    json_format: bool = False


class DumpSettings(BaseModel):
    """
    Insight dump settings.
    
    Attributes:
        enabled: Record a dump for every locate call
        log_dir: Directory dumps are flushed to (None keeps them in memory)
    """
    enabled: bool = True
    log_dir: Optional[str] = None


class Settings(BaseSettings):
    """
    Root settings container - single source of truth for all configuration.
    
    Settings are loaded in this priority order (highest to lowest):
    1. Explicit values passed to constructor
    2. Environment variables (prefixed with LLM_WEB_INSPECTOR__)
    3. Config file (YAML)
    4. Default values
    
    Example:
        >>> settings = Settings()  # Load from env vars
        >>> settings = Settings(inspector=InspectorSettings(match_by_position=True))
    """
    
    model_config = SettingsConfigDict(
        env_prefix="LLM_WEB_INSPECTOR__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )
    
    llm: LLMSettings = Field(default_factory=LLMSettings)
    inspector: InspectorSettings = Field(default_factory=InspectorSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    dump: DumpSettings = Field(default_factory=DumpSettings)
    
    debug: bool = False
    
    def merge_with(self, overrides: dict) -> "Settings":
        """
        Create a new Settings instance with overrides applied.
        
        Args:
            overrides: Dictionary of values to override
            
        Returns:
            New Settings instance with overrides applied
        """
        current = self.model_dump()
        
        def deep_merge(base: dict, updates: dict) -> dict:
            for key, value in updates.items():
                if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                    deep_merge(base[key], value)
                else:
                    base[key] = value
            return base
        
        merged = deep_merge(current, overrides)
        return Settings(**merged)
