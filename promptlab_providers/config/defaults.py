"""promptlab_providers.config.defaults
====================================

Central place for the stable default values used by the request builders,
the reasoning mapper and the CLI. Everything here can be overridden through
the configuration layer; this module performs no I/O and imports nothing from
the rest of the package.
"""

from __future__ import annotations

# ---- Sampling fallbacks ----
# Applied when a request leaves the field unset.
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 4096
# Gemini maxOutputTokens fallback.
GEMINI_DEFAULT_MAX_OUTPUT_TOKENS = 8192

# ---- Vendor endpoints ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com"
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"

# ---- Vendor headers ----
ANTHROPIC_VERSION = "2023-06-01"
ANTHROPIC_BETA = "pdfs-2024-09-25,interleaved-thinking-2025-05-14"
# OpenRouter attributes traffic to the calling application via HTTP-Referer.
OPENROUTER_DEFAULT_REFERER = "http://localhost:5173"
OPENROUTER_DEFAULT_APP_TITLE = "Prompt Lab"

# ---- Reasoning budgets ----
# Effort → fraction of the model's thinking range.
REASONING_EFFORT_RATIOS = {"low": 0.05, "medium": 0.5, "high": 0.8}
ANTHROPIC_THINKING_MIN = 1024
ANTHROPIC_THINKING_MAX = 64000
GEMINI_PRO_THINKING_MIN = 128
GEMINI_PRO_THINKING_MAX = 32768
GEMINI_FLASH_THINKING_MAX = 24576
# Room left for visible output when max_tokens is raised above a thinking budget.
ANTHROPIC_THINKING_OUTPUT_HEADROOM = 1024

# ---- CLI ----
PROVIDER_CLI_DEFAULT_PROVIDER = "openrouter"


__all__ = [
    "DEFAULT_TEMPERATURE",
    "DEFAULT_MAX_TOKENS",
    "GEMINI_DEFAULT_MAX_OUTPUT_TOKENS",
    "OPENAI_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "GEMINI_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_BASE_URL",
    "ANTHROPIC_VERSION",
    "ANTHROPIC_BETA",
    "OPENROUTER_DEFAULT_REFERER",
    "OPENROUTER_DEFAULT_APP_TITLE",
    "REASONING_EFFORT_RATIOS",
    "ANTHROPIC_THINKING_MIN",
    "ANTHROPIC_THINKING_MAX",
    "GEMINI_PRO_THINKING_MIN",
    "GEMINI_PRO_THINKING_MAX",
    "GEMINI_FLASH_THINKING_MAX",
    "ANTHROPIC_THINKING_OUTPUT_HEADROOM",
    "PROVIDER_CLI_DEFAULT_PROVIDER",
]
